"""Test LogFormatter field assembly and rendering helpers."""

import logging

from outcome_log.formatter import (
    EXCEPTION_KEY,
    LogFormatter,
    build_arguments,
    build_format_string,
    exception_text,
    flatten,
)
from outcome_log.outcome import operation
from outcome_log.parameters import Deferred
from tests.helpers import RecordingBackend


class TestHelpers:
    def test_format_string(self):
        assert build_format_string({"a": 1, "b": 2}) == "a={} b={}"

    def test_format_string_empty(self):
        assert build_format_string({}) == ""

    def test_arguments_follow_key_order(self):
        assert build_arguments({"b": 2, "a": 1}) == (2, 1)

    def test_flatten_renders_deferred(self):
        assert flatten({"a": 1, "b": Deferred("two")}) == "a=1 b=two"

    def test_exception_text(self):
        assert exception_text(ValueError("bad value")) == "ValueError: bad value"

    def test_exception_text_without_message(self):
        assert exception_text(KeyboardInterrupt()) == "KeyboardInterrupt"

    def test_exception_text_ignores_notes(self):
        error = ValueError("boom")
        error.__notes__ = ["while parsing row 7"]
        assert exception_text(error) == "ValueError: boom"

    def test_exception_text_qualifies_non_builtin_types(self):
        from outcome_log.core.errors import UnterminatedOperation

        assert exception_text(UnterminatedOperation("op")) == (
            "outcome_log.core.errors.UnterminatedOperation: operation auto-closed: op"
        )


class TestFieldAssembly:
    def test_success_fields(self):
        op = operation("op").with_("a", 1)
        yield_ = op.was_successful().yielding("c", 3)
        fields = LogFormatter(RecordingBackend()).success_fields(op, yield_)
        assert list(fields.items()) == [
            ("operation", "op"),
            ("a", 1),
            ("outcome", "success"),
            ("c", 3),
        ]

    def test_failure_fields_exception_last(self):
        op = operation("op").with_("a", 1)
        failure = op.was_failure().throwing_exception(OSError("disk")).with_detail("z", 2)
        fields = LogFormatter(RecordingBackend()).failure_fields(op, failure)
        assert list(fields) == ["operation", "a", "outcome", "z", EXCEPTION_KEY]
        assert str(fields[EXCEPTION_KEY]) == "OSError: disk"

    def test_building_fields_does_not_terminate(self):
        op = operation("op")
        LogFormatter(RecordingBackend()).failure_fields(op, op.was_failure())
        assert op.terminated is False


class TestEmission:
    def test_started_uses_context_only(self):
        backend = RecordingBackend()
        LogFormatter(backend).log_started(operation("op").with_("k", 1))
        assert backend.calls == [("info", "operation={} k={}", ("op", 1))]

    def test_success_at_error_level(self):
        backend = RecordingBackend()
        op = operation("op")
        LogFormatter(backend).log_success(op, op.was_successful(), logging.ERROR)
        assert backend.calls == [("error", "operation={} outcome={}", ("op", "success"))]
        assert op.terminated is True

    def test_failure_guarded_by_error_level(self):
        backend = RecordingBackend(error_enabled=False)
        op = operation("op")
        LogFormatter(backend).log_failure(op, op.was_failure())
        assert backend.calls == []
        assert op.terminated is True

    def test_failure_info_guarded_by_info_level(self):
        backend = RecordingBackend(info_enabled=False)
        op = operation("op")
        LogFormatter(backend).log_failure(op, op.was_failure(), logging.INFO)
        assert backend.calls == []
