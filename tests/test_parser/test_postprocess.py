"""Tests for terminal post-processors."""

import math
from types import MappingProxyType
import pytest
from autoparse.lib.context import RequestStores
from autoparse.lib.parser.postprocess import (
    ProcessContext,
    json_encode,
    postprocessors_default,
)
from autoparse.models.dataModel import ValueSource
from autoparse.models.value import HostObject


@pytest.fixture
def table():
    return postprocessors_default()


@pytest.fixture
def stores():
    return RequestStores(session={"token": "abc", "user": {"name": "Ada"}})


def process_context(stores, source=ValueSource.GLOBAL, parts=None):
    return ProcessContext(source=source, parts=parts or [], stores=stores)


def test_no_processor_passes_value_through(table, stores):
    value = [1, 2]
    assert table.apply(None, value, process_context(stores)) is value


def test_count(table, stores):
    assert table.apply("count", [1, 2, 3, 4], process_context(stores)) == 4
    assert table.apply("count", {"a": 1}, process_context(stores)) == 1
    assert table.apply("count", "abcd", process_context(stores)) == ""
    assert table.apply("count", None, process_context(stores)) == ""


def test_count_object_handle(table, stores, cookie):
    assert table.apply("count", cookie, process_context(stores)) == ""


def test_length(table, stores):
    assert table.apply("length", "hello", process_context(stores)) == 5
    assert table.apply("length", 12345, process_context(stores)) == ""


def test_case_folding(table, stores):
    assert table.apply("upper", "Ada", process_context(stores)) == "ADA"
    assert table.apply("lower", "Ada", process_context(stores)) == "ada"
    assert table.apply("upper", ["a"], process_context(stores)) == ""


def test_json_compact_keeps_unicode_and_slashes(table, stores):
    value = {"name": "Zoë", "path": "a/b", "n": [1, None, True]}
    assert (
        table.apply("json", value, process_context(stores))
        == '{"name":"Zoë","path":"a/b","n":[1,null,true]}'
    )


@pytest.mark.parametrize(
    "name", ["pjson", "jsonp", "prettyjson", "json-p", "pretty-json"]
)
def test_json_pretty_variants(table, stores, name):
    assert table.apply(name, {"a": 1}, process_context(stores)) == '{\n    "a": 1\n}'


def test_json_object_handle_exports_properties(cookie):
    encoded = json_encode(cookie)
    assert '"type":"Chocolate Chip"' in encoded
    assert "secret" not in encoded


def test_json_unencodable_value_is_empty():
    assert json_encode(object()) == ""


def test_unset_removes_session_key(table, stores):
    ctx = process_context(stores, ValueSource.SESSION, ["token"])
    assert table.apply("unset", "abc", ctx) == ""
    assert "token" not in stores.session


def test_unset_ignores_nested_paths(table, stores):
    ctx = process_context(stores, ValueSource.SESSION, ["user", "name"])
    assert table.apply("unset", "Ada", ctx) == ""
    assert stores.session["user"] == {"name": "Ada"}


def test_unset_ignores_other_sources(table, stores):
    stores.query["token"] = "q"
    ctx = process_context(stores, ValueSource.QUERY, ["token"])
    assert table.apply("unset", "q", ctx) == ""
    assert stores.query["token"] == "q"
    assert stores.session["token"] == "abc"


def test_unknown_processor_is_empty(table, stores):
    assert table.apply("reverse", "abc", process_context(stores)) == ""


def test_duplicate_registration(table):
    with pytest.raises(ValueError):
        table.register("json", lambda value, ctx: value)


@pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf])
def test_json_non_finite_float_is_empty(table, stores, number):
    assert table.apply("json", {"v": number}, process_context(stores)) == ""
    assert table.apply("pjson", [number], process_context(stores)) == ""


def test_json_read_only_mapping():
    assert json_encode(MappingProxyType({"a": (1, 2)})) == '{"a":[1,2]}'


def test_count_mapping_like_values(table, stores):
    assert table.apply("count", MappingProxyType({"a": 1}), process_context(stores)) == 1
    assert table.apply("count", (1, 2, 3), process_context(stores)) == 3


def test_count_wrapped_host_values(table, stores):
    assert table.apply("count", HostObject("abc"), process_context(stores)) == ""
    assert table.apply("count", HostObject([1, 2]), process_context(stores)) == 2
