from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple, Union


EPSILON = "ε"


class Transition(NamedTuple):
    src: str
    symbol: str
    dst: str


class Automaton:
    """Finite automaton M = (Q, Σ, δ, q0, F).

    ``states``, ``alphabet`` and ``final_states`` keep their insertion order,
    which only matters for naming derived states. ``transitions`` is an
    ordered list of ``Transition`` triples; a DFA has at most one per
    (state, symbol) pair.
    """

    def __init__(
        self,
        states: Iterable[str],
        alphabet: Iterable[str],
        transitions: Iterable[Tuple[str, str, str]],
        initial_state: str,
        final_states: Iterable[str],
        name: str = "automaton",
        state_composition: Dict[str, Tuple[Optional[str], ...]] = None,
    ):
        self.states: List[str] = list(states)
        self.alphabet: List[str] = list(alphabet)
        self.transitions: List[Transition] = [Transition(*t) for t in transitions]
        self.initial_state = initial_state
        self.final_states: List[str] = list(final_states)
        self.name = name
        self.state_composition = dict(state_composition or {})

    def copy(self) -> "Automaton":
        return Automaton(
            states=self.states,
            alphabet=self.alphabet,
            transitions=self.transitions,
            initial_state=self.initial_state,
            final_states=self.final_states,
            name=self.name,
            state_composition=self.state_composition,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Automaton):
            return NotImplemented
        return (
            set(self.states) == set(other.states)
            and set(self.alphabet) == set(other.alphabet)
            and set(self.transitions) == set(other.transitions)
            and self.initial_state == other.initial_state
            and set(self.final_states) == set(other.final_states)
        )

    def __repr__(self) -> str:
        return (
            f"Automaton(name={self.name!r}, |Q|={len(self.states)}, "
            f"|Σ|={len(self.alphabet)}, |δ|={len(self.transitions)}, "
            f"q0={self.initial_state!r}, |F|={len(self.final_states)})"
        )

    def transition_table(self) -> Dict[str, Dict[str, List[str]]]:
        """Group transitions as state -> symbol -> [targets]."""
        table: Dict[str, Dict[str, List[str]]] = defaultdict(lambda: defaultdict(list))
        for t in self.transitions:
            table[t.src][t.symbol].append(t.dst)
        return table

    def targets(self, state: str, symbol: str) -> List[str]:
        return [t.dst for t in self.transitions if t.src == state and t.symbol == symbol]

    def get_readable_state_name(self, state: str) -> str:
        if state in self.state_composition:
            parts = ["∅" if s is None else s for s in self.state_composition[state]]
            return f"{state}<{','.join(parts)}>"

        return state

    def accepts(self, word: Union[str, Sequence[str]]) -> bool:
        """Run the automaton on ``word``.

        A plain string is read one character per symbol. Epsilon transitions
        are followed, so the structural union can be simulated as well.
        """
        table = self.transition_table()
        alphabet = set(self.alphabet)
        finals = set(self.final_states)

        def epsilon_closure(states: Set[str]) -> Set[str]:
            closure = set(states)
            stack = list(states)

            while stack:
                state = stack.pop()
                for next_state in table.get(state, {}).get(EPSILON, []):
                    if next_state not in closure:
                        closure.add(next_state)
                        stack.append(next_state)

            return closure

        current_states = epsilon_closure({self.initial_state})

        for symbol in word:
            if symbol not in alphabet or symbol == EPSILON:
                return False
            next_states = set()

            for state in current_states:
                next_states.update(table.get(state, {}).get(symbol, []))

            if not next_states:
                return False
            current_states = epsilon_closure(next_states)

        return any(state in finals for state in current_states)
