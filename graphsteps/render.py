"""
Отрисовка на matplotlib-осях: граф, снимок BFS, раскраска, орграф классов.

Функции ничего не знают о tkinter — рисуют на переданном ax, поэтому их можно
вызывать и из GUI (FigureCanvasTkAgg), и с бэкендом Agg.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from matplotlib.axes import Axes
from matplotlib.colors import hsv_to_rgb, to_hex

from graphsteps.aux_digraph import LARGE, SMALL, AuxDigraph
from graphsteps.bfs_steps import BFSStep
from graphsteps.coloring import Coloring, conflict_edges
from graphsteps.graph_model import Edge, Graph

Pos = Dict[int, Tuple[float, float]]

NODE_COLOR = "lightblue"
VISITED_COLOR = "lightgreen"
QUEUE_COLOR = "gold"
CURRENT_COLOR = "blue"
PATH_COLOR = "red"
EDGE_COLOR = "gray"
CONFLICT_COLOR = "red"
ROLE_EDGE = {LARGE: "darkred", SMALL: "darkgreen"}
# степень 0, 1, 2, ...; последний цвет — для всех степеней от 5
DEGREE_RAMP = ["#10B981", "#3B82F6", "#8B5CF6", "#EC4899", "#F59E0B", "#EF4444"]


def circular_layout(ids: Sequence[int], radius: float = 1.0) -> Pos:
    n = len(ids)
    pos: Pos = {}
    for i, node in enumerate(ids):
        angle = 2 * math.pi * i / max(n, 1) + math.pi / 2
        pos[node] = (radius * math.cos(angle), radius * math.sin(angle))
    return pos


def class_palette(k: int) -> List[str]:
    """k различимых цветов по кругу оттенков."""
    return [to_hex(hsv_to_rgb((i / k, 0.55, 0.95))) for i in range(k)]


def degree_colors(graph: Graph) -> Dict[int, str]:
    """Цвет вершины по её степени. Пока ограничение r не задано, раскраски нет."""
    if graph.max_degree is None:
        return {}
    last = len(DEGREE_RAMP) - 1
    return {node: DEGREE_RAMP[min(d, last)] for node, d in graph.degrees().items()}


def draw_graph(
    ax: Axes,
    graph: Graph,
    pos: Optional[Pos] = None,
    node_colors: Optional[Dict[int, str]] = None,
    highlight_vertices: Optional[Set[int]] = None,
    highlight_edges: Iterable[Edge] = (),
    highlight_color: str = "orange",
    title: str = "",
) -> Pos:
    ax.clear()
    if not len(graph):
        ax.text(0.5, 0.5, "Граф не загружен", ha="center", va="center", transform=ax.transAxes)
        ax.set_axis_off()
        return {}

    if pos is None or any(node not in pos for node in graph.nodes):
        pos = circular_layout(graph.nodes)
    node_colors = node_colors or {}
    highlight_vertices = set(highlight_vertices or ())
    marked = {tuple(sorted(e)) for e in highlight_edges}

    # Все рёбра (серые), подсвеченные — поверх
    for a, b in graph.edges:
        (x1, y1), (x2, y2) = pos[a], pos[b]
        if (a, b) in marked:
            ax.plot([x1, x2], [y1, y2], highlight_color, linewidth=3)
        else:
            ax.plot([x1, x2], [y1, y2], EDGE_COLOR, alpha=0.5)

    for node in graph.nodes:
        x, y = pos[node]
        big = node in highlight_vertices
        ax.plot(x, y, "o", markersize=20 if big else 15,
                markerfacecolor=node_colors.get(node, NODE_COLOR),
                markeredgecolor="black", markeredgewidth=2 if big else 1)
        ax.text(x, y, str(node), ha="center", va="center",
                color="white" if big else "black", weight="bold" if big else "normal")

    ax.set_xlim(-1.3, 1.3)
    ax.set_ylim(-1.3, 1.3)
    ax.set_aspect("equal")
    ax.set_axis_off()
    if title:
        ax.set_title(title)
    return pos


def draw_bfs_step(ax: Axes, graph: Graph, step: BFSStep, pos: Optional[Pos] = None) -> Pos:
    """Посещённые — зелёные, в очереди — жёлтые, текущая — синяя, найденный путь — красный."""
    colors: Dict[int, str] = {}
    for node in step.visited:
        colors[node] = VISITED_COLOR
    for node in step.queue:
        colors[node] = QUEUE_COLOR
    for node in step.final_path:
        colors[node] = PATH_COLOR
    current = {step.current} if step.current is not None else set()
    for node in current:
        colors[node] = CURRENT_COLOR

    path_edges = list(zip(step.final_path, step.final_path[1:]))
    tree_edges = [(step.parent[v], v) for v in step.newly_discovered]
    return draw_graph(
        ax, graph, pos,
        node_colors=colors,
        highlight_vertices=current,
        highlight_edges=path_edges or tree_edges,
        highlight_color=PATH_COLOR if path_edges else "orange",
        title=f"Шаг {step.step_index}: {step.action}",
    )


def draw_coloring(ax: Axes, graph: Graph, coloring: Coloring, k: int, pos: Optional[Pos] = None) -> Pos:
    """Вершины окрашены по классам; рёбра внутри одного класса — красные."""
    palette = class_palette(k)
    colors = {node: palette[cls] for node, cls in coloring.items()}
    conflicts = conflict_edges(graph, coloring)
    title = f"k = {k}, конфликтов: {len(conflicts)}"
    return draw_graph(ax, graph, pos, node_colors=colors,
                      highlight_edges=conflicts, highlight_color=CONFLICT_COLOR, title=title)


def draw_aux(ax: Axes, aux: AuxDigraph, path: Sequence[int] = ()) -> None:
    """Орграф классов: подписи «класс (размер)», дуги пути — красные."""
    ax.clear()
    k = len(aux.class_nodes)
    pos = circular_layout(list(range(k)), radius=1.0)
    palette = class_palette(k) if k else []
    on_path = set(zip(path, path[1:]))

    for e in aux.edges:
        (x1, y1), (x2, y2) = pos[e.source], pos[e.target]
        hot = (e.source, e.target) in on_path
        ax.annotate(
            "", xy=(x2, y2), xytext=(x1, y1),
            arrowprops=dict(
                arrowstyle="-|>", color=PATH_COLOR if hot else EDGE_COLOR,
                linewidth=2.5 if hot else 1, shrinkA=14, shrinkB=14,
                connectionstyle="arc3,rad=0.12",
            ),
        )

    for cls in aux.class_nodes:
        x, y = pos[cls.id]
        ax.plot(x, y, "o", markersize=26, markerfacecolor=palette[cls.id],
                markeredgecolor=ROLE_EDGE.get(cls.role, "black"),
                markeredgewidth=3 if cls.role in ROLE_EDGE else 1)
        ax.text(x, y, f"{cls.id}\n({cls.size})", ha="center", va="center", fontsize=8)

    ax.set_xlim(-1.4, 1.4)
    ax.set_ylim(-1.4, 1.4)
    ax.set_aspect("equal")
    ax.set_axis_off()
    ax.set_title("Вспомогательный орграф классов")
