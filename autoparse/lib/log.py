"""
Debug logging for tag resolution, built on Loguru.

Tag resolution is fail-soft: a tag whose path cannot be followed, whose
post-processor is unknown or whose host call raises simply substitutes to an
empty string. `LOG` is where the reason goes, so an empty spot in a page can
be traced back to the segment that failed.

Output goes to stderr at DEBUG level, one line per event, tagged
`app="AUTOPARSE"`. It is silenced when `appsettings.beQuiet` is set
(environment: `AUTOPARSE_BEQUIET=True`).

Example:
    from autoparse.lib.log import LOG
    LOG("Lookup failed: No key or property 'email'")
"""

from loguru import logger
from typing import Any
import sys

app_logger = logger.bind(app="AUTOPARSE")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Report a resolution event unless `beQuiet` is set.

    The record is attributed to the caller, so the module/function/line
    columns point at the resolver step that failed.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from autoparse.config.settings import appsettings  # read at call time

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}", file=sys.stderr)
