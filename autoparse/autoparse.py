"""
autoparse Main Module.

This module serves as the command-line entry point for autoparse, a tag
substitution engine that replaces `<source:path/>` tags in rendered text
with values from request stores, session state, a local registry and
named globals.

Features:
- Renders a file or stdin through the tag engine
- Loads request/session stores and globals from a JSON context file
- Writes the substituted text to stdout

Usage:
    Run this module as a standalone script or through the `autoparse`
    console script.

Examples:
    Render a page with an empty context:
        $ autoparse page.html

    Render with stores and globals from a JSON document:
        $ autoparse page.html --context context.json

    Render stdin:
        $ cat page.html | autoparse --context context.json
"""

from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from pathlib import Path
from typing import Final, Optional
import sys
from rich.markup import escape
from autoparse.config.settings import console
from autoparse.lib.context import RenderContext, context_load
from autoparse.lib.log import LOG
from autoparse.lib.parser import resolve_buffer

__version__: Final[str] = "0.1.0"

# Define the argument parser
parser: Final[ArgumentParser] = ArgumentParser(
    prog="autoparse",
    description="Substitute <source:path/> tags in rendered text.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "input", nargs="?", type=str, help="File to render (reads stdin when omitted)"
)
parser.add_argument(
    "--context", type=str, help="JSON file with get/post/cookie/server/session/globals"
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def context_setup(options: Namespace) -> RenderContext:
    """Build the render context from command-line options.

    Args:
        options: Parsed command-line arguments

    Returns:
        RenderContext from the --context file, or an empty one
    """
    if not options.context:
        return RenderContext()
    return context_load(Path(options.context))


def input_read(options: Namespace) -> str:
    if options.input:
        return Path(options.input).read_text(encoding="utf-8")
    return sys.stdin.read()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments, defaults to sys.argv

    Returns:
        Process exit code
    """
    options: Namespace = parser.parse_args(argv)
    try:
        context: RenderContext = context_setup(options)
        text: str = input_read(options)
    except (OSError, ValueError) as e:
        LOG(f"Setup failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
        return 1

    sys.stdout.write(resolve_buffer(text, context))
    return 0


if __name__ == "__main__":
    sys.exit(main())
