"""Tests for outcome classification and exit codes."""

import pytest

from cmdapp.exceptions import CmdAppError, FlagError, HelpRequested, UsageError
from cmdapp.outcome import Outcome, OutcomeKind, exit_code


class TestFromError:
    """Tests for Outcome.from_error()."""

    def test_usage_error(self):
        outcome = Outcome.from_error(UsageError())
        assert outcome.kind is OutcomeKind.USAGE_ERROR
        assert outcome.message == ""

    def test_help_requested(self):
        assert Outcome.from_error(HelpRequested()).kind is OutcomeKind.HELP_REQUESTED

    def test_plain_exception(self):
        """Foreign exceptions are OTHER outcomes carrying their text."""
        err = ValueError("internal error")
        outcome = Outcome.from_error(err)
        assert outcome.kind is OutcomeKind.OTHER
        assert outcome.message == "internal error"
        assert outcome.error is err

    def test_empty_message_uses_type(self):
        """An exception without text is reported by type name."""
        assert Outcome.from_error(RuntimeError()).message == "RuntimeError"

    def test_flag_error_is_other(self):
        outcome = Outcome.from_error(FlagError("bad flag"))
        assert outcome.kind is OutcomeKind.OTHER
        assert outcome.message == "bad flag"

    def test_matches_kind_not_identity(self):
        """Any exception declaring a kind is classified by it."""

        class Custom(Exception):
            kind = OutcomeKind.USAGE_ERROR

        assert Outcome.from_error(Custom()).kind is OutcomeKind.USAGE_ERROR

    def test_unrelated_kind_attribute(self):
        """A ``kind`` attribute of another type is ignored."""

        class Odd(Exception):
            kind = "usage"

        assert Outcome.from_error(Odd("x")).kind is OutcomeKind.OTHER


class TestFromResult:
    """Tests for Outcome.from_result()."""

    def test_none_is_success(self):
        assert Outcome.from_result(None).ok

    def test_outcome_passthrough(self):
        outcome = Outcome.usage()
        assert Outcome.from_result(outcome) is outcome

    def test_exception_instance(self):
        assert Outcome.from_result(UsageError()).kind is OutcomeKind.USAGE_ERROR

    def test_other_values_rejected(self):
        with pytest.raises(TypeError):
            Outcome.from_result("ok")


class TestExitCode:
    """Tests for exit_code()."""

    @pytest.mark.parametrize(
        "outcome, code",
        [
            (Outcome.success(), 0),
            (Outcome.usage(), 2),
            (Outcome.help(), 2),
            (Outcome.from_error(CmdAppError("failed")), 1),
        ],
    )
    def test_exit_codes(self, outcome, code):
        assert exit_code(outcome) == code
