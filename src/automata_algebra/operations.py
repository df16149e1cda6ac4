"""Boolean operations over finite automata.

All functions are pure: inputs are left untouched and every result is a new
``Automaton``. Binary operations that build product states name them
``(p,q)`` and record the component pair in ``state_composition``.
"""

from collections import deque
from typing import Dict, List, Optional, Tuple

from .automaton import EPSILON, Automaton, Transition
from .conversion import complete, is_complete, remove_unreachable_states, require_deterministic
from .errors import AutomatonError, EmptyAlphabetIntersectionError


UNION_PREFIXES = ("A_", "B_")
UNION_INITIAL_STATE = "q_union"
DEAD_STATE_LABEL = "∅"

Pair = Tuple[Optional[str], Optional[str]]


class _ProductNamer:
    """Maps state pairs to unique display names for one construction."""

    def __init__(self):
        self.names: Dict[Pair, str] = {}
        self.used = set()
        self.composition: Dict[str, Pair] = {}

    def __call__(self, pair: Pair) -> str:
        if pair in self.names:
            return self.names[pair]
        parts = [DEAD_STATE_LABEL if s is None else s for s in pair]
        name = f"({','.join(parts)})"
        while name in self.used:
            name += "'"
        self.names[pair] = name
        self.used.add(name)
        self.composition[name] = pair
        return name


def complement(a: Automaton, name_suffix: str = "__NOT") -> Automaton:
    require_deterministic(a)
    total = a if is_complete(a) else complete(a)
    finals = set(total.final_states)

    return Automaton(
        states=total.states,
        alphabet=total.alphabet,
        transitions=total.transitions,
        initial_state=total.initial_state,
        final_states=[s for s in total.states if s not in finals],
        name=f"{a.name}{name_suffix}",
        state_composition=total.state_composition,
    )


def intersect(a: Automaton, b: Automaton, prune: bool = True) -> Automaton:
    """Product construction accepting L(a) ∩ L(b).

    Transitions are the cross product of the matching transitions of each
    component, which is the usual product when both inputs are DFAs.
    """
    b_symbols = set(b.alphabet)
    alphabet = [sym for sym in a.alphabet if sym in b_symbols]
    if not alphabet:
        raise EmptyAlphabetIntersectionError(
            f"'{a.name}' and '{b.name}' have no symbols in common"
        )

    name_of = _ProductNamer()
    table_a = a.transition_table()
    table_b = b.transition_table()
    finals_a = set(a.final_states)
    finals_b = set(b.final_states)

    pairs = [(s1, s2) for s1 in a.states for s2 in b.states]
    states = [name_of(p) for p in pairs]
    final_states = [name_of(p) for p in pairs if p[0] in finals_a and p[1] in finals_b]

    transitions: List[Transition] = []
    for s1, s2 in pairs:
        for sym in alphabet:
            for t1 in table_a.get(s1, {}).get(sym, []):
                for t2 in table_b.get(s2, {}).get(sym, []):
                    transitions.append(Transition(name_of((s1, s2)), sym, name_of((t1, t2))))

    product = Automaton(
        states=states,
        alphabet=alphabet,
        transitions=transitions,
        initial_state=name_of((a.initial_state, b.initial_state)),
        final_states=final_states,
        name=f"{a.name}__AND__{b.name}",
        state_composition=name_of.composition,
    )

    return remove_unreachable_states(product) if prune else product


def union_choice(a: Automaton, b: Automaton) -> Automaton:
    """Disjoint union joined by a fresh initial state and two ε moves.

    The result is not deterministic; it is meant for display, not for
    further DFA operations.
    """
    if EPSILON in a.alphabet or EPSILON in b.alphabet:
        raise AutomatonError(f"'{EPSILON}' is reserved for the union choice transitions")

    pa, pb = UNION_PREFIXES
    alphabet = list(a.alphabet)
    a_symbols = set(a.alphabet)
    alphabet += [sym for sym in b.alphabet if sym not in a_symbols]
    alphabet.append(EPSILON)

    transitions = [
        Transition(UNION_INITIAL_STATE, EPSILON, pa + a.initial_state),
        Transition(UNION_INITIAL_STATE, EPSILON, pb + b.initial_state),
    ]
    transitions += [Transition(pa + t.src, t.symbol, pa + t.dst) for t in a.transitions]
    transitions += [Transition(pb + t.src, t.symbol, pb + t.dst) for t in b.transitions]

    return Automaton(
        states=[UNION_INITIAL_STATE]
        + [pa + s for s in a.states]
        + [pb + s for s in b.states],
        alphabet=alphabet,
        transitions=transitions,
        initial_state=UNION_INITIAL_STATE,
        final_states=[pa + s for s in a.final_states] + [pb + s for s in b.final_states],
        name=f"{a.name}__OR__{b.name}",
    )


def union_product(a: Automaton, b: Automaton) -> Automaton:
    """Synchronized product accepting L(a) ∪ L(b) as a complete DFA.

    A missing transition sends that component to a dead state, written
    ``∅`` in the product state names. Only reachable pairs are built.
    """
    require_deterministic(a)
    require_deterministic(b)

    alphabet = list(a.alphabet)
    a_symbols = set(a.alphabet)
    alphabet += [sym for sym in b.alphabet if sym not in a_symbols]
    table_a = a.transition_table()
    table_b = b.transition_table()
    finals_a = set(a.final_states)
    finals_b = set(b.final_states)

    def step(table, state, symbol):
        if state is None:
            return None
        dests = table.get(state, {}).get(symbol, [])
        return dests[0] if dests else None

    name_of = _ProductNamer()
    start = (a.initial_state, b.initial_state)
    queue = deque([start])
    seen = {start}
    states: List[str] = []
    final_states: List[str] = []
    transitions: List[Transition] = []

    while queue:
        pair = queue.popleft()
        current = name_of(pair)
        states.append(current)
        if pair[0] in finals_a or pair[1] in finals_b:
            final_states.append(current)

        for sym in alphabet:
            nxt = (step(table_a, pair[0], sym), step(table_b, pair[1], sym))
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
            transitions.append(Transition(current, sym, name_of(nxt)))

    return Automaton(
        states=states,
        alphabet=alphabet,
        transitions=transitions,
        initial_state=name_of(start),
        final_states=final_states,
        name=f"{a.name}__OR__{b.name}",
        state_composition=name_of.composition,
    )


UNION_STRATEGIES = {
    "choice": union_choice,
    "product": union_product,
}


def union(a: Automaton, b: Automaton, strategy: str = "product") -> Automaton:
    """Union of two automata.

    ``"product"`` yields a DFA usable by the other operations; ``"choice"``
    keeps both automata side by side behind an ε branch, for display.
    """
    try:
        build = UNION_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"unknown union strategy {strategy!r}, expected one of {sorted(UNION_STRATEGIES)}"
        ) from None
    return build(a, b)


def difference(a: Automaton, b: Automaton) -> Automaton:
    """Automaton for L(a) minus L(b), built as a ∩ complement(b)."""
    result = intersect(a, complement(b))
    result.name = f"{a.name}__MINUS__{b.name}"
    return result
