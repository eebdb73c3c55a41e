"""Tests for waypoint.context — RequestContext and shape-agnostic access."""

from types import SimpleNamespace

import pytest

from waypoint.context import RequestContext, get_value, set_value


class TestRequestContext:
    def test_attribute_and_item_access_share_storage(self) -> None:
        ctx = RequestContext(user="alice")
        ctx.params = {"id": "1"}
        ctx["request_id"] = "req_1"
        assert ctx["params"] == {"id": "1"}
        assert ctx.request_id == "req_1"
        assert ctx.user == "alice"

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError, match="no attribute 'missing'"):
            RequestContext().missing  # noqa: B018

    def test_delete(self) -> None:
        ctx = RequestContext(a=1, b=2)
        del ctx.a
        del ctx["b"]
        assert len(ctx) == 0
        with pytest.raises(AttributeError):
            del ctx.a

    def test_mapping_protocol(self) -> None:
        ctx = RequestContext(a=1)
        assert list(ctx) == ["a"]
        assert dict(ctx) == {"a": 1}
        assert ctx.get("b", 2) == 2


class TestSetGetValue:
    def test_mapping_context(self) -> None:
        ctx: dict[str, object] = {}
        set_value(ctx, "params", {"id": "1"})
        assert ctx == {"params": {"id": "1"}}
        assert get_value(ctx, "params") == {"id": "1"}

    def test_object_context(self) -> None:
        ctx = SimpleNamespace()
        set_value(ctx, "request_id", "req_1")
        assert ctx.request_id == "req_1"
        assert get_value(ctx, "request_id") == "req_1"

    def test_rejecting_context_is_left_alone(self) -> None:
        set_value(object(), "params", {})
        set_value(None, "params", {})

    def test_default(self) -> None:
        assert get_value(object(), "missing", "d") == "d"
        assert get_value({}, "missing") is None
