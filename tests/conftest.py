import copy
import itertools

import pytest

from automata_algebra import Automaton, load_automaton


def canonical(states, alphabet, transitions, initial, finals, name="automaton"):
    return {
        "name": name,
        "states": states,
        "alphabet": alphabet,
        "transitions": [{"from": s, "symbol": a, "to": d} for s, a, d in transitions],
        "initialState": initial,
        "finalStates": finals,
    }


ODD_ZEROS = canonical(
    ["q0", "q1"],
    ["0", "1"],
    [("q0", "0", "q1"), ("q0", "1", "q0"), ("q1", "0", "q0"), ("q1", "1", "q1")],
    "q0",
    ["q1"],
    name="odd_zeros",
)

ENDS_IN_ONE = canonical(
    ["p0", "p1"],
    ["0", "1"],
    [("p0", "0", "p0"), ("p0", "1", "p1"), ("p1", "0", "p0"), ("p1", "1", "p1")],
    "p0",
    ["p1"],
    name="ends_in_one",
)

# q1 has no move on "1"
PARTIAL = canonical(
    ["q0", "q1"],
    ["0", "1"],
    [("q0", "0", "q1"), ("q0", "1", "q0"), ("q1", "0", "q0")],
    "q0",
    ["q1"],
    name="partial",
)

NONDETERMINISTIC = canonical(
    ["q0", "q1"],
    ["0", "1"],
    [("q0", "0", "q0"), ("q0", "0", "q1"), ("q0", "1", "q0"), ("q1", "0", "q1"), ("q1", "1", "q1")],
    "q0",
    ["q1"],
    name="nondet",
)


@pytest.fixture
def odd_zeros() -> Automaton:
    return load_automaton(ODD_ZEROS)


@pytest.fixture
def ends_in_one() -> Automaton:
    return load_automaton(ENDS_IN_ONE)


@pytest.fixture
def partial() -> Automaton:
    return load_automaton(PARTIAL)


@pytest.fixture
def nondeterministic() -> Automaton:
    return load_automaton(NONDETERMINISTIC)


@pytest.fixture
def words():
    """All words over ``alphabet`` up to ``max_len`` symbols, as tuples."""

    def generate(alphabet, max_len=6):
        for n in range(max_len + 1):
            yield from itertools.product(alphabet, repeat=n)

    return generate


@pytest.fixture
def odd_zeros_raw() -> dict:
    return copy.deepcopy(ODD_ZEROS)


@pytest.fixture
def ends_in_one_raw() -> dict:
    return copy.deepcopy(ENDS_IN_ONE)


@pytest.fixture
def partial_raw() -> dict:
    return copy.deepcopy(PARTIAL)
