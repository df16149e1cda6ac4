"""Validation of raw automaton records.

``validate`` turns a parsed JSON-like mapping using the canonical schema
(``states``, ``alphabet``, ``transitions`` with ``from``/``symbol``/``to``,
``initialState``, ``finalStates``) into an ``Automaton``. Checks run in a
fixed order and stop at the first failure.
"""

from typing import Any, List, Mapping

from .automaton import Automaton, Transition
from .errors import (
    DanglingStateError,
    DuplicateEntryError,
    EmptyFieldError,
    InvalidEntryError,
    MissingFieldError,
    NotAListError,
    UnknownSymbolError,
)

LIST_FIELDS = ("states", "alphabet", "transitions", "finalStates")
NAME_LIST_FIELDS = ("states", "alphabet", "finalStates")
TRANSITION_FIELDS = ("from", "symbol", "to")


def _require_list(raw: Mapping[str, Any], field: str) -> List[Any]:
    if field not in raw or raw[field] is None:
        raise MissingFieldError(f"missing required field '{field}'", field)
    value = raw[field]
    if not isinstance(value, list):
        raise NotAListError(f"field '{field}' must be a list", field)
    return value


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _check_names(values: List[Any], field: str) -> None:
    for i, value in enumerate(values):
        if not _is_name(value):
            raise InvalidEntryError(
                f"entry {value!r} in '{field}' must be a non-empty string", f"{field}[{i}]"
            )


def _check_unique(values: List[Any], field: str) -> None:
    seen = set()
    for value in values:
        if value in seen:
            raise DuplicateEntryError(f"duplicate entry {value!r} in '{field}'", field)
        seen.add(value)


def validate(raw: Mapping[str, Any], name: str = "automaton") -> Automaton:
    if not isinstance(raw, Mapping):
        raise MissingFieldError("automaton record must be an object", "")

    lists = {}
    for field in LIST_FIELDS:
        lists[field] = _require_list(raw, field)
        if field in NAME_LIST_FIELDS:
            _check_names(lists[field], field)
    states, alphabet, transitions, final_states = (lists[field] for field in LIST_FIELDS)

    initial_state = raw.get("initialState")
    if initial_state is None or initial_state == "":
        raise MissingFieldError("missing required field 'initialState'", "initialState")
    if not _is_name(initial_state):
        raise InvalidEntryError(
            f"initial state {initial_state!r} must be a non-empty string", "initialState"
        )

    if not states:
        raise EmptyFieldError("'states' must not be empty", "states")
    if not alphabet:
        raise EmptyFieldError("'alphabet' must not be empty", "alphabet")
    _check_unique(states, "states")
    _check_unique(alphabet, "alphabet")

    state_set = set(states)
    symbol_set = set(alphabet)

    if initial_state not in state_set:
        raise DanglingStateError(
            f"initial state {initial_state!r} is not a declared state", "initialState"
        )

    for i, state in enumerate(final_states):
        if state not in state_set:
            raise DanglingStateError(
                f"final state {state!r} is not a declared state", f"finalStates[{i}]"
            )

    parsed = []
    for i, t in enumerate(transitions):
        path = f"transitions[{i}]"
        if not isinstance(t, Mapping):
            raise MissingFieldError("transition must be an object", path)
        for key in TRANSITION_FIELDS:
            if key not in t or t[key] is None or t[key] == "":
                raise MissingFieldError(f"transition is missing '{key}'", f"{path}.{key}")
            if not isinstance(t[key], str):
                raise InvalidEntryError(
                    f"transition '{key}' {t[key]!r} must be a string", f"{path}.{key}"
                )
        if t["from"] not in state_set:
            raise DanglingStateError(
                f"transition source {t['from']!r} is not a declared state", f"{path}.from"
            )
        if t["to"] not in state_set:
            raise DanglingStateError(
                f"transition target {t['to']!r} is not a declared state", f"{path}.to"
            )
        if t["symbol"] not in symbol_set:
            raise UnknownSymbolError(
                f"symbol {t['symbol']!r} is not in the alphabet", f"{path}.symbol"
            )
        parsed.append(Transition(t["from"], t["symbol"], t["to"]))

    return Automaton(
        states=states,
        alphabet=alphabet,
        transitions=parsed,
        initial_state=initial_state,
        final_states=final_states,
        name=raw.get("name") or name,
    )
