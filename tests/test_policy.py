"""Tests for ajax_dispatch.policy — ExceptionPolicy.guard."""

import logging

import pytest

from ajax_dispatch.outcome import Ok, Suppressed
from ajax_dispatch.policy import ExceptionPolicy


def _boom() -> None:
    raise ValueError("boom")


class TestGuard:
    def test_success_returns_ok(self) -> None:
        result = ExceptionPolicy().guard(lambda: "ok")
        assert result == Ok("ok")
        assert result.value == "ok"

    def test_genuine_false_is_ok(self) -> None:
        result = ExceptionPolicy(interceptor=lambda e: None).guard(lambda: False)
        assert isinstance(result, Ok)
        assert result.value is False

    def test_without_interceptor_reraises_same_error(self) -> None:
        with pytest.raises(ValueError, match="^boom$"):
            ExceptionPolicy().guard(_boom)

    def test_interceptor_receives_error_once(self) -> None:
        seen: list[Exception] = []
        result = ExceptionPolicy(interceptor=seen.append).guard(_boom)

        assert isinstance(result, Suppressed)
        assert result.value is False
        assert len(seen) == 1
        assert isinstance(seen[0], ValueError)
        assert result.error is seen[0]

    def test_interceptor_error_propagates(self) -> None:
        def interceptor(exc: Exception) -> None:
            raise RuntimeError("interceptor failed")

        with pytest.raises(RuntimeError, match="interceptor failed"):
            ExceptionPolicy(interceptor=interceptor).guard(_boom)

    def test_base_exceptions_not_intercepted(self) -> None:
        def interrupt() -> None:
            raise KeyboardInterrupt

        seen: list[Exception] = []
        with pytest.raises(KeyboardInterrupt):
            ExceptionPolicy(interceptor=seen.append).guard(interrupt)
        assert seen == []

    def test_suppression_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="ajax_dispatch.policy"):
            ExceptionPolicy(interceptor=lambda e: None).guard(_boom)
        assert "ValueError" in caplog.text
        assert "boom" in caplog.text
