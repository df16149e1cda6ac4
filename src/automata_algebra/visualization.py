import networkx as nx
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .automaton import Automaton
from .export import render_model

INITIAL_COLOR = "lightblue"
INITIAL_FINAL_COLOR = "lightgreen"
FINAL_COLOR = "lightcoral"
STATE_COLOR = "lightgray"


class AutomatonVisualizer:
    def __init__(self, automaton: Automaton):
        self.automaton = automaton
        self.graph = None
        self.positions = None

    def build_graph(self, use_readable_names: bool = True) -> nx.DiGraph:
        model = render_model(self.automaton, use_readable_names=use_readable_names)
        G = nx.DiGraph()
        for node in model["nodes"]:
            G.add_node(
                node["id"], label=node["label"], initial=node["initial"], final=node["final"]
            )
        for edge in model["edges"]:
            G.add_edge(edge["source"], edge["target"], label=edge["label"])
        return G

    def layout(self, G: nx.DiGraph) -> dict:
        if len(G.nodes) <= 6:
            return nx.spring_layout(G, k=2.5, iterations=100, seed=42)
        return nx.spring_layout(G, k=1.5, iterations=50, seed=42)

    @staticmethod
    def node_color(data: dict) -> str:
        if data["initial"]:
            return INITIAL_FINAL_COLOR if data["final"] else INITIAL_COLOR
        if data["final"]:
            return FINAL_COLOR
        return STATE_COLOR

    def plot(self, ax, title="Automaton", use_readable_names=True):
        G = self.build_graph(use_readable_names)
        self.graph = G

        if len(G.nodes) == 0:
            ax.text(0.5, 0.5, "Empty Automaton", ha="center", va="center", transform=ax.transAxes)
            ax.set_title(title)
            return

        pos = self.layout(G)
        self.positions = pos
        node_colors = []
        borders = []

        for _, data in G.nodes(data=True):
            color = self.node_color(data)
            node_colors.append(color)
            # final states get a thick border
            borders.append("black" if data["final"] else color)

        node_size = min(2000, max(800, 15000 // max(len(G.nodes), 1)))
        nx.draw_networkx_nodes(
            G, pos, node_color=node_colors, node_size=node_size, ax=ax, alpha=0.9,
            edgecolors=borders, linewidths=2.5,
        )

        for node, (x, y) in pos.items():
            ax.text(
                x,
                y,
                G.nodes[node]["label"],
                ha="center",
                va="center",
                fontsize=8,
                fontweight="bold",
                bbox=dict(boxstyle="round,pad=0.3", facecolor="white", edgecolor="black", alpha=0.9),
            )

        nx.draw_networkx_edges(
            G,
            pos,
            edge_color="gray",
            arrows=True,
            arrowsize=15,
            arrowstyle="->",
            width=1.2,
            ax=ax,
            alpha=0.7,
        )

        self._draw_edge_labels_smart(ax, pos, G)
        ax.set_title(title, fontsize=12, fontweight="bold")
        ax.axis("off")

    def _draw_edge_labels_smart(self, ax, pos, G):
        for from_node, to_node, data in G.edges(data=True):
            label = data["label"]
            x1, y1 = pos[from_node]
            x2, y2 = pos[to_node]

            if from_node == to_node:
                label_x, label_y = x1, y1 + 0.15
                bbox_color, edge_color = "yellow", "orange"
            else:
                mid_x, mid_y = (x1 + x2) / 2, (y1 + y2) / 2
                dx, dy = x2 - x1, y2 - y1
                length = (dx**2 + dy**2) ** 0.5

                if length > 0:
                    offset = 0.08
                    label_x = mid_x - dy / length * offset
                    label_y = mid_y + dx / length * offset
                else:
                    label_x, label_y = mid_x, mid_y
                if "," in label:
                    bbox_color, edge_color = "lightcyan", "blue"
                else:
                    bbox_color, edge_color = "lightyellow", "orange"
            ax.text(
                label_x,
                label_y,
                label,
                ha="center",
                va="center",
                fontsize=7,
                fontweight="bold",
                bbox=dict(boxstyle="round,pad=0.2", facecolor=bbox_color, alpha=0.9, edgecolor=edge_color),
            )


def save_png(a: Automaton, path: str, title: str = None, use_readable_names: bool = False) -> None:
    fig = Figure(figsize=(8, 6))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    AutomatonVisualizer(a).plot(ax, title=title or a.name, use_readable_names=use_readable_names)
    fig.savefig(path, format="png", bbox_inches="tight")
