"""Tests for reading and writing log fields on a context."""

from __future__ import annotations

import threading

import pytest

from ctxlog.context import background
from ctxlog.propagation import _FIELDS_KEY, attach_field, attach_fields, read_fields


class TestReadFields:
    def test_empty_when_nothing_attached(self):
        assert dict(read_fields(background())) == {}

    def test_unrelated_values_are_ignored(self):
        ctx = background().with_value("fields", {"not": "ours"})
        assert dict(read_fields(ctx)) == {}

    def test_malformed_store_reads_as_empty(self):
        ctx = background().with_value(_FIELDS_KEY, ["not", "a", "mapping"])
        assert dict(read_fields(ctx)) == {}

    def test_read_only(self):
        ctx = attach_field(background(), "a", "1")
        with pytest.raises(TypeError):
            read_fields(ctx)["a"] = "2"  # type: ignore[index]

    def test_no_side_effects(self):
        ctx = attach_field(background(), "a", "1")
        first = dict(read_fields(ctx))
        second = dict(read_fields(ctx))
        assert first == second == {"a": "1"}


class TestAttachField:
    def test_attach_single(self):
        ctx = attach_field(background(), "k", "v")
        assert dict(read_fields(ctx)) == {"k": "v"}

    def test_accumulates(self):
        ctx = attach_field(background(), "a", "1")
        ctx = attach_field(ctx, "b", "2")
        assert dict(read_fields(ctx)) == {"a": "1", "b": "2"}

    def test_last_write_wins(self):
        ctx = attach_field(background(), "k", "1")
        ctx = attach_field(ctx, "k", "2")
        assert dict(read_fields(ctx)) == {"k": "2"}

    def test_original_unchanged(self):
        ctx0 = attach_field(background(), "a", "1")
        ctx1 = attach_field(ctx0, "b", "2")
        assert dict(read_fields(ctx0)) == {"a": "1"}
        assert dict(read_fields(ctx1)) == {"a": "1", "b": "2"}

    def test_siblings_isolated(self):
        ctx0 = background()
        ctx1 = attach_field(ctx0, "a", "1")
        ctx2 = attach_field(ctx0, "a", "2")

        assert read_fields(ctx1)["a"] == "1"
        assert read_fields(ctx2)["a"] == "2"
        assert dict(read_fields(ctx0)) == {}

    def test_siblings_isolated_below_shared_parent(self):
        parent = attach_field(background(), "p", "x")
        left = attach_field(parent, "a", "1")
        right = attach_field(parent, "a", "2")

        assert dict(read_fields(left)) == {"p": "x", "a": "1"}
        assert dict(read_fields(right)) == {"p": "x", "a": "2"}
        assert dict(read_fields(parent)) == {"p": "x"}

    def test_child_sees_parent_and_later_child_fields(self):
        parent = attach_field(background(), "p", "x")
        child = parent.with_value("unrelated", 1)
        child = attach_field(child, "c", "y")

        assert dict(read_fields(child)) == {"p": "x", "c": "y"}
        assert "c" not in read_fields(parent)


class TestAttachFields:
    def test_attach_many(self):
        ctx = attach_fields(background(), {"a": 1, "b": 2})
        assert dict(read_fields(ctx)) == {"a": 1, "b": 2}

    def test_overlay_wins(self):
        ctx = attach_fields(background(), {"k": "1", "a": "x"})
        ctx = attach_fields(ctx, {"k": "2"})
        assert dict(read_fields(ctx)) == {"k": "2", "a": "x"}

    def test_caller_mapping_not_aliased(self):
        source = {"a": "1"}
        ctx = attach_fields(background(), source)
        source["a"] = "changed"
        source["b"] = "added"
        assert dict(read_fields(ctx)) == {"a": "1"}

    def test_empty_fields(self):
        ctx = attach_fields(attach_field(background(), "a", "1"), {})
        assert dict(read_fields(ctx)) == {"a": "1"}

    def test_concurrent_derivation_from_shared_parent(self):
        parent = attach_fields(background(), {"shared": "yes"})
        results: dict[int, dict] = {}

        def derive(i: int) -> None:
            ctx = parent
            for j in range(50):
                ctx = attach_field(ctx, "n", f"{i}-{j}")
            results[i] = dict(read_fields(ctx))

        threads = [threading.Thread(target=derive, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for i, fields in results.items():
            assert fields == {"shared": "yes", "n": f"{i}-49"}
        assert dict(read_fields(parent)) == {"shared": "yes"}
