from automata_algebra import EPSILON, Automaton, Transition


class TestAccepts:
    def test_odd_number_of_zeros(self, odd_zeros):
        assert odd_zeros.accepts("0")
        assert odd_zeros.accepts("1011")
        assert not odd_zeros.accepts("")
        assert not odd_zeros.accepts("00")

    def test_symbol_sequences(self):
        a = Automaton(["s", "t"], ["ab", "c"], [("s", "ab", "t"), ("t", "c", "t")], "s", ["t"])
        assert a.accepts(["ab", "c", "c"])
        assert not a.accepts(["c"])

    def test_unknown_symbol_rejects(self, odd_zeros):
        assert not odd_zeros.accepts("012")

    def test_missing_transition_rejects(self, partial):
        assert partial.accepts("0")
        assert not partial.accepts("01")

    def test_epsilon_moves(self):
        a = Automaton(
            ["s", "t", "u"],
            ["x", EPSILON],
            [("s", EPSILON, "t"), ("t", "x", "u")],
            "s",
            ["u"],
        )
        assert a.accepts("x")
        assert not a.accepts("")
        assert not a.accepts([EPSILON, "x"])


class TestModel:
    def test_transitions_are_named_tuples(self, odd_zeros):
        t = odd_zeros.transitions[0]
        assert isinstance(t, Transition)
        assert (t.src, t.symbol, t.dst) == ("q0", "0", "q1")

    def test_copy_is_independent(self, odd_zeros):
        c = odd_zeros.copy()
        c.states.append("q2")
        c.final_states.clear()
        assert odd_zeros.states == ["q0", "q1"]
        assert odd_zeros.final_states == ["q1"]

    def test_equality_ignores_order(self, odd_zeros):
        shuffled = Automaton(
            states=list(reversed(odd_zeros.states)),
            alphabet=list(reversed(odd_zeros.alphabet)),
            transitions=list(reversed(odd_zeros.transitions)),
            initial_state="q0",
            final_states=["q1"],
            name="other",
        )
        assert shuffled == odd_zeros

    def test_transition_table(self, nondeterministic):
        table = nondeterministic.transition_table()
        assert table["q0"]["0"] == ["q0", "q1"]
        assert nondeterministic.targets("q1", "1") == ["q1"]
