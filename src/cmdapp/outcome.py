"""Result of dispatching a command and its mapping to process exit codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(Enum):
    """How a command invocation ended."""

    SUCCESS = "success"
    USAGE_ERROR = "usage_error"
    HELP_REQUESTED = "help_requested"
    OTHER = "other"


# Process exit code for each outcome kind
EXIT_CODES = {
    OutcomeKind.SUCCESS: 0,
    OutcomeKind.USAGE_ERROR: 2,
    OutcomeKind.HELP_REQUESTED: 2,
    OutcomeKind.OTHER: 1,
}


@dataclass(frozen=True)
class Outcome:
    """Tagged result of a command action.

    Attributes:
        kind: Which of the outcome variants this is
        message: Error message for OTHER outcomes (empty otherwise)
        error: The exception the outcome was built from, if any
    """

    kind: OutcomeKind
    message: str = ""
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls) -> "Outcome":
        return cls(OutcomeKind.SUCCESS)

    @classmethod
    def usage(cls) -> "Outcome":
        return cls(OutcomeKind.USAGE_ERROR)

    @classmethod
    def help(cls) -> "Outcome":
        return cls(OutcomeKind.HELP_REQUESTED)

    @classmethod
    def from_error(cls, error: BaseException) -> "Outcome":
        """Classify an exception by its ``kind`` attribute.

        cmdapp exceptions declare their kind; anything else is an OTHER
        outcome carrying the exception text.
        """
        kind = getattr(error, "kind", OutcomeKind.OTHER)
        if not isinstance(kind, OutcomeKind):
            kind = OutcomeKind.OTHER
        if kind is OutcomeKind.OTHER:
            message = str(error) or type(error).__name__
            return cls(kind, message=message, error=error)
        return cls(kind, error=error)

    @classmethod
    def from_result(cls, result: object) -> "Outcome":
        """Normalize whatever an action returned into an Outcome."""
        if result is None:
            return cls.success()
        if isinstance(result, Outcome):
            return result
        if isinstance(result, BaseException):
            return cls.from_error(result)
        raise TypeError(
            f"command action must return None, an Outcome or an exception, "
            f"got {type(result).__name__}"
        )


def exit_code(outcome: Outcome) -> int:
    """Return the process exit code for an outcome."""
    return EXIT_CODES[outcome.kind]


__all__ = ["OutcomeKind", "Outcome", "EXIT_CODES", "exit_code"]
