"""Formatting helpers handed to exporters and renderers.

Nothing here changes an automaton; these functions only describe one,
either as the formal quintuple M = (Q, Σ, δ, q0, F) in text, or as the
node/edge model a graph renderer consumes.
"""

from collections import OrderedDict
from typing import Dict, List, Tuple

from .automaton import EPSILON, Automaton
from .conversion import is_complete, is_deterministic

QUINTUPLE_STYLES = ("list", "table")


def automaton_stats(a: Automaton) -> Dict:
    return {
        "states": len(a.states),
        "alphabet_size": len(a.alphabet),
        "final_states": len(a.final_states),
        "total_transitions": len(a.transitions),
        "epsilon_transitions": sum(1 for t in a.transitions if t.symbol == EPSILON),
        "is_deterministic": is_deterministic(a),
        "is_complete": is_complete(a),
    }


def grouped_edge_labels(a: Automaton) -> "OrderedDict[Tuple[str, str], List[str]]":
    """Symbols of parallel transitions, keyed by (source, target)."""
    edges: "OrderedDict[Tuple[str, str], List[str]]" = OrderedDict()
    for t in a.transitions:
        symbols = edges.setdefault((t.src, t.dst), [])
        if t.symbol not in symbols:
            symbols.append(t.symbol)
    return edges


def render_model(a: Automaton, use_readable_names: bool = False) -> Dict:
    finals = set(a.final_states)
    nodes = [
        {
            "id": s,
            "label": a.get_readable_state_name(s) if use_readable_names else s,
            "initial": s == a.initial_state,
            "final": s in finals,
        }
        for s in a.states
    ]
    edges = [
        {"source": src, "target": dst, "label": ",".join(symbols)}
        for (src, dst), symbols in grouped_edge_labels(a).items()
    ]
    return {"nodes": nodes, "edges": edges}


def _braces(items: List[str]) -> str:
    return "{" + ", ".join(items) + "}"


def _quintuple_list(a: Automaton) -> str:
    lines = ["=== QUINTUPLA DEL AUTÓMATA FINITO ===", ""]
    lines += ["1. CONJUNTO DE ESTADOS (Q):", "   " + ", ".join(a.states), ""]
    lines += ["2. ALFABETO (Σ):", "   " + ", ".join(a.alphabet), ""]
    lines.append("3. FUNCIÓN DE TRANSICIÓN (δ: Q × Σ → Q):")
    table = a.transition_table()
    for state in a.states:
        for symbol, dests in table.get(state, {}).items():
            for dest in dests:
                lines.append(f"   δ({state}, {symbol}) = {dest}")
    lines.append("")
    lines += ["4. ESTADO INICIAL (q₀):", "   " + a.initial_state, ""]
    lines += ["5. CONJUNTO DE ESTADOS DE ACEPTACIÓN (F):", "   " + ", ".join(a.final_states), ""]

    stats = automaton_stats(a)
    lines += ["=== INFORMACIÓN ADICIONAL ===", ""]
    lines.append(f"• Número total de estados: {stats['states']}")
    lines.append(f"• Tamaño del alfabeto: {stats['alphabet_size']}")
    lines.append(f"• Número total de transiciones: {stats['total_transitions']}")
    lines.append(f"• Determinista: {'sí' if stats['is_deterministic'] else 'no'}")
    lines.append(f"• Completo: {'sí' if stats['is_complete'] else 'no'}")
    return "\n".join(lines) + "\n"


def _quintuple_table(a: Automaton) -> str:
    lines = ["M = (Q, Σ, δ, q0, F)", ""]
    lines += ["Q = " + _braces(a.states), ""]
    lines += ["Σ = " + _braces(a.alphabet), ""]
    lines.append("δ: Q × Σ → Q")
    header = ["Estado"] + [f"δ(q,{symbol})" for symbol in a.alphabet]
    lines.append("\t| ".join(header))
    lines.append("-" * 80)
    table = a.transition_table()
    for state in a.states:
        # nondeterministic cells list every target
        cells = [
            "/".join(table.get(state, {}).get(symbol, [])) or "-"
            for symbol in a.alphabet
        ]
        lines.append("\t| ".join([state] + cells))
    lines.append("")
    lines += ["q0 = " + a.initial_state, ""]
    lines.append("F = " + _braces(a.final_states))
    return "\n".join(lines) + "\n"


def format_quintuple(a: Automaton, style: str = "list") -> str:
    if style == "list":
        return _quintuple_list(a)
    if style == "table":
        return _quintuple_table(a)
    raise ValueError(f"Unknown quintuple style: {style}")
