"""
automata_algebra - Boolean operations over deterministic finite automata.

Example usage:
    >>> from automata_algebra import load_automaton, complement
    >>> a = load_automaton({
    ...     "states": ["q0", "q1"], "alphabet": ["0", "1"],
    ...     "transitions": [
    ...         {"from": "q0", "symbol": "0", "to": "q1"},
    ...         {"from": "q0", "symbol": "1", "to": "q0"},
    ...         {"from": "q1", "symbol": "0", "to": "q0"},
    ...         {"from": "q1", "symbol": "1", "to": "q1"},
    ...     ],
    ...     "initialState": "q0", "finalStates": ["q1"],
    ... })
    >>> complement(a).accepts("00")
    True
"""

from automata_algebra.automaton import EPSILON, Automaton, Transition
from automata_algebra.conversion import (
    complete,
    is_complete,
    is_deterministic,
    missing_transitions,
    nondeterministic_pairs,
    prune_unreachable,
    remove_unreachable_states,
)
from automata_algebra.errors import (
    AutomatonError,
    DanglingStateError,
    DuplicateEntryError,
    DuplicateSinkNameExhaustedError,
    EmptyAlphabetIntersectionError,
    EmptyFieldError,
    InvalidEntryError,
    MalformedInputError,
    MissingFieldError,
    NotAListError,
    NotDeterministicError,
    UnknownSymbolError,
    ValidationError,
)
from automata_algebra.export import automaton_stats, format_quintuple, render_model
from automata_algebra.operations import (
    UNION_STRATEGIES,
    complement,
    difference,
    intersect,
    union,
    union_choice,
    union_product,
)
from automata_algebra.parsing import (
    automaton_to_json_dict,
    load_and_validate,
    load_automaton,
    read_automaton,
    write_automaton,
)
from automata_algebra.validation import validate

__version__ = "0.1.0"

__all__ = [
    # Model
    "Automaton",
    "Transition",
    "EPSILON",
    # Validation and loading
    "validate",
    "load_automaton",
    "load_and_validate",
    "read_automaton",
    "write_automaton",
    "automaton_to_json_dict",
    # Structure
    "is_deterministic",
    "is_complete",
    "nondeterministic_pairs",
    "missing_transitions",
    "complete",
    "remove_unreachable_states",
    "prune_unreachable",
    # Operations
    "complement",
    "intersect",
    "union",
    "union_choice",
    "union_product",
    "difference",
    "UNION_STRATEGIES",
    # Export
    "format_quintuple",
    "automaton_stats",
    "render_model",
    # Exceptions
    "AutomatonError",
    "ValidationError",
    "MalformedInputError",
    "MissingFieldError",
    "NotAListError",
    "EmptyFieldError",
    "DuplicateEntryError",
    "InvalidEntryError",
    "DanglingStateError",
    "UnknownSymbolError",
    "EmptyAlphabetIntersectionError",
    "NotDeterministicError",
    "DuplicateSinkNameExhaustedError",
    # Version
    "__version__",
]
