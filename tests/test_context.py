"""Tests for ajax_dispatch.context — RequestContext, ContextParams and build_context."""

import pytest

from ajax_dispatch.context import ContextParams, RequestContext, build_context
from ajax_dispatch.errors import BodyReadError, UnsupportedMethodError
from ajax_dispatch.http.request import Request


class TestRequestContext:
    def test_mapping_access(self) -> None:
        ctx = RequestContext("GET", {"action": "x", "a": "1"})
        assert ctx["action"] == "x"
        assert "a" in ctx
        assert len(ctx) == 2
        assert list(ctx) == ["action", "a"]

    def test_method(self) -> None:
        assert RequestContext("GET", {"token": "abc"}).method == "GET"

    def test_read_only(self) -> None:
        ctx = RequestContext("GET", {"a": "1"})
        with pytest.raises(AttributeError):
            ctx.a = "2"
        with pytest.raises(TypeError):
            ctx["a"] = "2"  # type: ignore[index]

    def test_copies_source(self) -> None:
        source = {"a": "1"}
        ctx = RequestContext("GET", source)
        source["a"] = "2"
        assert ctx["a"] == "1"

    def test_values_except_excludes_by_name(self) -> None:
        ctx = RequestContext("GET", {"action": "x", "a": "1", "b": "2"})
        assert ctx.values_except("action") == ["1", "2"]

    def test_values_except_when_key_not_first(self) -> None:
        ctx = RequestContext("GET", {"a": "1", "action": "x", "b": "2"})
        assert ctx.values_except("action") == ["1", "2"]


class TestContextParams:
    def test_attribute_and_item_access(self) -> None:
        params = RequestContext("GET", {"token": "abc"}).params()
        assert params.token == "abc"
        assert params["token"] == "abc"
        assert "token" in params
        assert list(params) == ["token"]

    def test_missing_attribute(self) -> None:
        params = ContextParams({})
        with pytest.raises(AttributeError, match="token"):
            params.token

    @pytest.mark.parametrize("name", ["method", "get", "keys", "items", "values"])
    def test_parameter_names_are_not_shadowed(self, name: str) -> None:
        params = RequestContext("GET", {name: "card"}).params()
        assert getattr(params, name) == "card"

    def test_read_only(self) -> None:
        params = ContextParams({"a": "1"})
        with pytest.raises(AttributeError):
            params.a = "2"


class TestBuildContext:
    def test_get_uses_query(self) -> None:
        req = Request.build("GET", query="action=bar&id=7")
        ctx = build_context(req)
        assert dict(ctx) == {"action": "bar", "id": "7"}
        assert ctx.method == "GET"

    def test_get_ignores_body(self) -> None:
        req = Request.build("GET", query="a=1", body=b"b=2")
        assert dict(build_context(req)) == {"a": "1"}

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
    def test_other_methods_parse_body(self, method: str) -> None:
        req = Request.build(method, query="ignored=1", body=b"action=save&title=Hi+there")
        ctx = build_context(req)
        assert dict(ctx) == {"action": "save", "title": "Hi there"}

    def test_utf8_body(self) -> None:
        req = Request.build("POST", body="action=x&name=José".encode())
        assert build_context(req)["name"] == "José"

    def test_str_body(self) -> None:
        req = Request.build("POST", body="action=x&name=José")
        assert build_context(req)["name"] == "José"

    def test_non_latin1_query(self) -> None:
        req = Request.build("GET", query="action=x&name=Şule")
        assert build_context(req)["name"] == "Şule"

    def test_empty_body_fails(self) -> None:
        with pytest.raises(BodyReadError):
            build_context(Request.build("POST", body=b""))

    def test_unsupported_method(self) -> None:
        with pytest.raises(UnsupportedMethodError):
            build_context(Request.build("OPTIONS"))
