"""Tests for the path walker."""

from collections import UserDict
from types import MappingProxyType
import pytest
from unittest.mock import Mock
from autoparse.lib.context import FunctionTable
from autoparse.lib.parser.arguments import ArgumentTokenizer
from autoparse.lib.parser.walker import PathWalker, key_lookup
from autoparse.models.dataModel import CallAccessor, KeyAccessor
from autoparse.models.value import MISSING, HostObject


@pytest.fixture
def functions():
    table = FunctionTable()
    table.register("add", lambda a, b: a + b)
    return table


@pytest.fixture
def walker(functions):
    return PathWalker(functions, ArgumentTokenizer(reference_resolve=lambda s, p: None))


def test_mapping_keys(walker):
    result = walker.walk({"a": {"b": 1}}, [KeyAccessor("a"), KeyAccessor("b")])
    assert result.success
    assert result.value == 1


def test_mapping_key_holding_none_succeeds(walker):
    result = walker.walk({"a": None}, [KeyAccessor("a")])
    assert result.success
    assert result.value is None


def test_missing_key_fails(walker):
    result = walker.walk({"a": 1}, [KeyAccessor("x")])
    assert not result.success
    assert "x" in result.error


def test_sequence_index(walker):
    assert walker.walk([10, 20, 30], [KeyAccessor("1")]).value == 20
    assert not walker.walk([10, 20, 30], [KeyAccessor("3")]).success
    assert not walker.walk([10, 20, 30], [KeyAccessor("first")]).success


def test_integer_keyed_mapping():
    assert key_lookup({0: "zero"}, "0") == "zero"


def test_scalar_has_no_keys():
    assert key_lookup("text", "0") is MISSING
    assert key_lookup(None, "a") is MISSING


def test_object_properties(walker, cookie):
    result = walker.walk(cookie, [KeyAccessor("ingredients"), KeyAccessor("0")])
    assert result.value == "Flour"


def test_unexposed_property_fails(walker, cookie):
    assert not walker.walk(cookie, [KeyAccessor("secret")]).success


def test_method_call(walker, cookie):
    result = walker.walk(cookie, [CallAccessor("describe", "'A '")])
    assert result.success
    assert result.value == "A Chocolate Chip"


def test_unexposed_method_fails(walker):
    wrapped = HostObject("text", methods=("upper",))
    assert walker.walk(wrapped, [CallAccessor("upper", "")]).value == "TEXT"
    assert not walker.walk(wrapped, [CallAccessor("lower", "")]).success


def test_free_function_without_object_context(walker):
    result = walker.walk(None, [CallAccessor("add", "1, 2")])
    assert result.success
    assert result.value == 3


def test_free_function_requires_null_context(walker):
    assert not walker.walk({"a": 1}, [CallAccessor("add", "1, 2")]).success


def test_unregistered_function_fails(walker):
    assert not walker.walk(None, [CallAccessor("system", "'ls'")]).success


def test_raising_method_fails_soft(walker, cookie):
    result = walker.walk(cookie, [CallAccessor("crumble", "")])
    assert not result.success
    assert "raised RuntimeError" in result.error


def test_failure_short_circuits(functions):
    spy = Mock(return_value="never")
    functions.register("spy", spy)
    walker = PathWalker(functions, ArgumentTokenizer(reference_resolve=lambda s, p: None))
    result = walker.walk({}, [KeyAccessor("missing"), CallAccessor("spy", "")])
    assert not result.success
    spy.assert_not_called()


def test_read_only_and_user_mappings(walker):
    assert walker.walk(MappingProxyType({"a": 1}), [KeyAccessor("a")]).value == 1
    assert walker.walk(UserDict({"a": 2}), [KeyAccessor("a")]).value == 2
    assert not walker.walk(MappingProxyType({}), [KeyAccessor("a")]).success


def test_string_is_not_indexable(walker):
    assert not walker.walk({"s": "abc"}, [KeyAccessor("s"), KeyAccessor("0")]).success
