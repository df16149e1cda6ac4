"""Exceptions raised by the automata algebra."""

from typing import Iterable, Tuple


class AutomatonError(Exception):
    """Base exception for all automata-algebra errors."""

    pass


class ValidationError(AutomatonError, ValueError):
    """Raised when a raw automaton record is malformed.

    ``kind`` identifies which check failed, ``field`` the offending field.
    """

    kind = "invalid"

    def __init__(self, message: str, field: str = "") -> None:
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        if self.field:
            return f"{super().__str__()} (field: {self.field})"
        return super().__str__()


class MalformedInputError(ValidationError):
    """Raised when the input cannot be decoded at all."""

    kind = "malformed_input"


class MissingFieldError(ValidationError):
    kind = "missing_field"


class NotAListError(ValidationError):
    kind = "not_a_list"


class EmptyFieldError(ValidationError):
    kind = "empty_field"


class DuplicateEntryError(ValidationError):
    kind = "duplicate_entry"


class InvalidEntryError(ValidationError):
    """Raised when a state or symbol is not a non-empty string."""

    kind = "not_a_string"


class DanglingStateError(ValidationError):
    """Raised when a state is referenced but not declared."""

    kind = "dangling_state"


class UnknownSymbolError(ValidationError):
    """Raised when a transition uses a symbol outside the alphabet."""

    kind = "unknown_symbol"


class EmptyAlphabetIntersectionError(AutomatonError):
    """Raised when two automata share no input symbols."""

    pass


class NotDeterministicError(AutomatonError):
    """Raised when an operation requires a DFA and gets something else."""

    def __init__(self, pairs: Iterable[Tuple[str, str]]) -> None:
        self.pairs = list(pairs)
        shown = ", ".join(f"({s}, {a})" for s, a in self.pairs[:5])
        if len(self.pairs) > 5:
            shown += ", ..."
        super().__init__(
            f"automaton is not deterministic: several transitions for {shown}"
        )


class DuplicateSinkNameExhaustedError(AutomatonError):
    """Raised when no free name is found for a synthesized state."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"no free state name found after {attempts} attempts")
