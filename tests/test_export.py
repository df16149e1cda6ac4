import pytest
from matplotlib.figure import Figure

from automata_algebra import automaton_stats, complete, format_quintuple, render_model, union_choice
from automata_algebra.export import grouped_edge_labels
from automata_algebra.visualization import AutomatonVisualizer, save_png


class TestQuintuple:
    def test_list_style(self, odd_zeros):
        text = format_quintuple(odd_zeros)
        assert "1. CONJUNTO DE ESTADOS (Q):\n   q0, q1\n" in text
        assert "2. ALFABETO (Σ):\n   0, 1\n" in text
        assert "   δ(q0, 0) = q1\n" in text
        assert "   δ(q1, 1) = q1\n" in text
        assert "4. ESTADO INICIAL (q₀):\n   q0\n" in text
        assert "5. CONJUNTO DE ESTADOS DE ACEPTACIÓN (F):\n   q1\n" in text
        assert "• Número total de transiciones: 4" in text

    def test_table_style_marks_missing(self, partial):
        text = format_quintuple(partial, style="table")
        lines = text.splitlines()
        assert "Q = {q0, q1}" in lines
        assert "Estado\t| δ(q,0)\t| δ(q,1)" in lines
        assert "q1\t| q0\t| -" in lines
        assert "F = {q1}" in lines

    def test_unknown_style(self, odd_zeros):
        with pytest.raises(ValueError):
            format_quintuple(odd_zeros, style="html")


class TestStats:
    def test_partial(self, partial):
        stats = automaton_stats(partial)
        assert stats["states"] == 2
        assert stats["total_transitions"] == 3
        assert stats["is_deterministic"]
        assert not stats["is_complete"]

    def test_epsilon_transitions(self, odd_zeros, ends_in_one):
        stats = automaton_stats(union_choice(odd_zeros, ends_in_one))
        assert stats["epsilon_transitions"] == 2
        assert not stats["is_deterministic"]


class TestRenderModel:
    def test_groups_parallel_edges(self, partial):
        edges = grouped_edge_labels(complete(partial))
        assert edges[("sink", "sink")] == ["0", "1"]
        assert edges[("q0", "q1")] == ["0"]

    def test_nodes_and_edges(self, partial):
        model = render_model(complete(partial))
        nodes = {n["id"]: n for n in model["nodes"]}
        assert nodes["q0"]["initial"] and not nodes["q0"]["final"]
        assert nodes["q1"]["final"]
        assert not nodes["sink"]["final"]
        assert {"source": "sink", "target": "sink", "label": "0,1"} in model["edges"]


class TestVisualization:
    def test_plot(self, odd_zeros):
        fig = Figure()
        ax = fig.add_subplot(111)
        viz = AutomatonVisualizer(odd_zeros)
        viz.plot(ax, title="odd zeros")
        assert set(viz.graph.nodes) == {"q0", "q1"}
        assert viz.graph.edges["q0", "q1"]["label"] == "0"
        assert set(viz.positions) == {"q0", "q1"}
        assert ax.get_title() == "odd zeros"

    def test_save_png(self, tmp_path, partial):
        path = tmp_path / "partial.png"
        save_png(complete(partial), str(path))
        assert path.read_bytes()[:4] == b"\x89PNG"
