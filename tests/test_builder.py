"""Tests for form_yaml.builder."""

import pytest

from form_yaml.block import BlockScalar
from form_yaml.builder import consume, finalize
from form_yaml.context import ContextStack
from form_yaml.model import NodeRecord, Scalar, StartMapping, StartSequence


def _record(depth=0, name=None, value=None, **kw):
    return NodeRecord(
        depth=depth, line=1, column=depth + 1, name=name,
        is_array_slot=name is None, value=value, **kw,
    )


# ---------------------------------------------------------------------------
# finalize
# ---------------------------------------------------------------------------

class TestFinalize:
    def test_coerced(self):
        assert finalize(_record(name="a", value=Scalar("12"))) == 12.0

    def test_quoted_not_coerced(self):
        assert finalize(_record(name="a", value=Scalar("12", quoted=True))) == "12"

    def test_block(self):
        block = BlockScalar("|-")
        block.add_line(2, "  yes")
        assert finalize(_record(name="a", block=block)) == "yes"

    def test_opening_has_no_scalar(self):
        with pytest.raises(TypeError):
            finalize(_record(name="a", value=StartMapping()))


# ---------------------------------------------------------------------------
# consume
# ---------------------------------------------------------------------------

class TestConsume:
    def test_store_in_mapping(self):
        stack = ContextStack()
        consume(_record(name="a", value=Scalar("on")), stack)
        assert stack.root == {"a": True}

    def test_last_write_wins(self):
        stack = ContextStack()
        consume(_record(name="a", value=Scalar("1")), stack)
        consume(_record(name="a", value=Scalar("2")), stack)
        assert stack.root == {"a": 2.0}

    def test_append_to_sequence(self):
        stack = ContextStack()
        consume(_record(value=Scalar("x")), stack)
        consume(_record(value=Scalar("y")), stack)
        assert stack.root == ["x", "y"]

    def test_open_mapping(self):
        stack = ContextStack()
        consume(_record(name="a", value=StartMapping()), stack)
        assert stack.root == {"a": {}}
        assert len(stack) == 2
        assert stack.top.depth is None
        assert stack.top.selector == "a"
        assert stack.top.collector is stack.root["a"]

    def test_open_sequence_in_sequence(self):
        stack = ContextStack()
        consume(_record(value=Scalar("x")), stack)
        consume(_record(value=StartSequence()), stack)
        assert stack.root == ["x", []]
        assert stack.top.selector == 1

    def test_nested_values(self):
        stack = ContextStack()
        consume(_record(name="a", value=StartMapping()), stack)
        consume(_record(depth=2, name="b", value=Scalar("1")), stack)
        consume(_record(depth=0, name="c", value=Scalar("2")), stack)
        assert stack.root == {"a": {"b": 1.0}, "c": 2.0}

    def test_opened_mapping_turns_into_sequence(self):
        stack = ContextStack()
        consume(_record(name="list", value=StartMapping()), stack)
        consume(_record(depth=2, value=Scalar("1")), stack)
        consume(_record(depth=2, value=Scalar("2")), stack)
        assert stack.root == {"list": [1.0, 2.0]}
