"""Tests for ajax_dispatch.registry — descriptor shapes and validation."""

import pytest

from ajax_dispatch.errors import (
    ConfigurationError,
    HandlerNotFoundError,
    RegistryMethodError,
    UnsupportedMethodError,
)
from ajax_dispatch.registry import (
    DirectCallable,
    HandlerRegistry,
    MethodRef,
    MethodRefWithArgs,
    parse_descriptor,
    parse_reference,
)


def _ping() -> str:
    return "pong"


class TestParseReference:
    def test_splits(self) -> None:
        assert parse_reference("x", "Foo@bar") == ("Foo", "bar")

    @pytest.mark.parametrize("value", ["Foo", "@bar", "Foo@", "Foo@bar@baz", ""])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(ConfigurationError, match="Controller@method"):
            parse_reference("x", value)


class TestParseDescriptor:
    def test_string(self) -> None:
        assert parse_descriptor("bar", "Foo@bar") == MethodRef("Foo", "bar")

    def test_list(self) -> None:
        descriptor = parse_descriptor("greet", ["Foo@greet", "name", "age"])
        assert descriptor == MethodRefWithArgs("Foo", "greet", ("name", "age"))

    def test_tuple(self) -> None:
        descriptor = parse_descriptor("greet", ("Foo@greet",))
        assert descriptor == MethodRefWithArgs("Foo", "greet", ())

    def test_callable(self) -> None:
        assert parse_descriptor("ping", _ping) == DirectCallable(_ping)

    def test_lambda(self) -> None:
        fn = lambda: 1  # noqa: E731
        assert isinstance(parse_descriptor("x", fn), DirectCallable)

    @pytest.mark.parametrize("value", [42, None, 1.5, {"a": 1}])
    def test_rejects_other_types(self, value: object) -> None:
        with pytest.raises(ConfigurationError, match="string/array/callable"):
            parse_descriptor("bad", value)

    def test_rejects_empty_list(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_descriptor("bad", [])

    def test_rejects_non_string_head(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_descriptor("bad", [_ping, "a"])

    def test_rejects_non_string_argument(self) -> None:
        with pytest.raises(ConfigurationError, match="argument"):
            parse_descriptor("bad", ["Foo@bar", 1])

    def test_reference(self) -> None:
        assert parse_descriptor("bar", "Foo@bar").reference == "Foo@bar"
        assert parse_descriptor("bar", ["Foo@bar", "a"]).reference == "Foo@bar"
        assert parse_descriptor("ping", _ping).reference == "_ping"


class TestValidate:
    def test_valid_registry(self) -> None:
        registry = HandlerRegistry.validate(
            {
                "GET": {"bar": "Foo@bar", "ping": _ping},
                "POST": {"save": ["Foo@save", "title"]},
            }
        )
        assert len(registry) == 3
        assert registry.methods == ("GET", "POST")

    @pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "get", "CONNECT", ""])
    def test_unsupported_key_is_configuration_error(self, method: str) -> None:
        with pytest.raises(ConfigurationError):
            HandlerRegistry.validate({method: {}})

    def test_unsupported_key_is_unsupported_method_error(self) -> None:
        with pytest.raises(UnsupportedMethodError) as exc_info:
            HandlerRegistry.validate({"GET": {}, "TRACE": {}})
        assert isinstance(exc_info.value, RegistryMethodError)
        assert exc_info.value.method == "TRACE"

    def test_all_supported_methods(self) -> None:
        raw = {m: {"x": "Foo@bar"} for m in ("GET", "POST", "PUT", "DELETE", "PATCH")}
        assert len(HandlerRegistry.validate(raw)) == 5

    def test_bad_entry(self) -> None:
        with pytest.raises(ConfigurationError, match="'broken'"):
            HandlerRegistry.validate({"GET": {"broken": 3}})

    def test_non_mapping_registry(self) -> None:
        with pytest.raises(ConfigurationError):
            HandlerRegistry.validate(["GET"])  # type: ignore[arg-type]

    def test_non_mapping_method_table(self) -> None:
        with pytest.raises(ConfigurationError):
            HandlerRegistry.validate({"GET": "Foo@bar"})

    def test_does_not_check_controllers(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"x": "Nobody@nothing"}})
        assert registry.lookup("GET", "x") == MethodRef("Nobody", "nothing")

    def test_immutable_after_validation(self) -> None:
        raw = {"GET": {"bar": "Foo@bar"}}
        registry = HandlerRegistry.validate(raw)
        raw["GET"]["baz"] = "Foo@baz"
        with pytest.raises(HandlerNotFoundError):
            registry.lookup("GET", "baz")


class TestLookup:
    def test_found(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"bar": "Foo@bar"}})
        assert registry.lookup("GET", "bar") == MethodRef("Foo", "bar")

    def test_unknown_value(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"bar": "Foo@bar"}})
        with pytest.raises(HandlerNotFoundError) as exc_info:
            registry.lookup("GET", "baz")
        assert exc_info.value.value == "baz"

    def test_not_tried_across_methods(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"bar": "Foo@bar"}, "POST": {}})
        with pytest.raises(HandlerNotFoundError):
            registry.lookup("POST", "bar")

    def test_method_without_table(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"bar": "Foo@bar"}})
        with pytest.raises(HandlerNotFoundError):
            registry.lookup("DELETE", "bar")

    def test_entries(self) -> None:
        registry = HandlerRegistry.validate({"GET": {"a": "Foo@a"}, "PUT": {"b": "Foo@b"}})
        assert list(registry.entries()) == [
            ("GET", "a", MethodRef("Foo", "a")),
            ("PUT", "b", MethodRef("Foo", "b")),
        ]
