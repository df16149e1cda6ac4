from typing import Iterable, Iterator, List, Optional, Tuple

from .automaton import Automaton, Transition
from .errors import DuplicateSinkNameExhaustedError, NotDeterministicError


DEFAULT_SINK_NAME = "sink"


def _pair_counts(a: Automaton) -> List[Tuple[str, str, int]]:
    table = a.transition_table()
    return [
        (state, symbol, len(table.get(state, {}).get(symbol, [])))
        for state in a.states
        for symbol in a.alphabet
    ]


def nondeterministic_pairs(a: Automaton) -> List[Tuple[str, str]]:
    return [(s, sym) for s, sym, n in _pair_counts(a) if n > 1]


def missing_transitions(a: Automaton) -> List[Tuple[str, str]]:
    return [(s, sym) for s, sym, n in _pair_counts(a) if n == 0]


def is_deterministic(a: Automaton) -> bool:
    """At most one transition per (state, symbol) pair."""
    return not nondeterministic_pairs(a)


def is_complete(a: Automaton) -> bool:
    """Exactly one transition per (state, symbol) pair."""
    return all(n == 1 for _, _, n in _pair_counts(a))


def require_deterministic(a: Automaton) -> None:
    pairs = nondeterministic_pairs(a)
    if pairs:
        raise NotDeterministicError(pairs)


def sink_name_candidates(base: str = DEFAULT_SINK_NAME) -> Iterator[str]:
    yield base
    i = 1
    while True:
        yield f"{base}{i}"
        i += 1


def fresh_state_name(
    taken: Iterable[str],
    candidates: Optional[Iterable[str]] = None,
) -> str:
    """First candidate not in ``taken``, probing at most len(taken) + 1 names."""
    taken = set(taken)
    candidates = iter(candidates if candidates is not None else sink_name_candidates())
    limit = len(taken) + 1

    for attempt, name in enumerate(candidates, start=1):
        if name not in taken:
            return name
        if attempt >= limit:
            break

    raise DuplicateSinkNameExhaustedError(limit)


def complete(
    a: Automaton,
    sink_names: Optional[Iterable[str]] = None,
    name_suffix: str = "",
) -> Automaton:
    """Make the transition function total by routing missing pairs to a sink."""
    missing = missing_transitions(a)
    result = a.copy()
    result.name = f"{a.name}{name_suffix}"

    if not missing:
        return result

    sink = fresh_state_name(a.states, sink_names)
    result.states.append(sink)
    for state, symbol in missing:
        result.transitions.append(Transition(state, symbol, sink))
    for symbol in a.alphabet:
        result.transitions.append(Transition(sink, symbol, sink))

    return result


def remove_unreachable_states(a: Automaton) -> Automaton:
    table = a.transition_table()
    reachable = set()
    stack = [a.initial_state]

    while stack:
        s = stack.pop()
        if s in reachable:
            continue

        reachable.add(s)
        for dests in table.get(s, {}).values():
            for d in dests:
                if d not in reachable:
                    stack.append(d)

    return Automaton(
        states=[s for s in a.states if s in reachable],
        alphabet=a.alphabet,
        transitions=[
            t for t in a.transitions if t.src in reachable and t.dst in reachable
        ],
        initial_state=a.initial_state,
        final_states=[s for s in a.final_states if s in reachable],
        name=a.name,
        state_composition={
            s: comp for s, comp in a.state_composition.items() if s in reachable
        },
    )


prune_unreachable = remove_unreachable_states
