import matplotlib

matplotlib.use("Agg")

from matplotlib.figure import Figure  # noqa: E402

from graphsteps.aux_digraph import build_aux  # noqa: E402
from graphsteps.bfs_steps import run_bfs  # noqa: E402
from graphsteps.generators import example_graph  # noqa: E402
from graphsteps.graph_model import Graph  # noqa: E402
from graphsteps.render import (  # noqa: E402
    DEGREE_RAMP,
    circular_layout,
    class_palette,
    degree_colors,
    draw_aux,
    draw_bfs_step,
    draw_coloring,
    draw_graph,
)


def make_ax():
    return Figure().add_subplot(111)


def test_circular_layout_on_unit_circle():
    pos = circular_layout([3, 1, 2])
    assert set(pos) == {1, 2, 3}
    for x, y in pos.values():
        assert abs(x * x + y * y - 1.0) < 1e-9


def test_palette_distinct():
    palette = class_palette(5)
    assert len(set(palette)) == 5
    assert all(c.startswith("#") for c in palette)


def test_draw_empty_graph():
    ax = make_ax()
    assert draw_graph(ax, Graph()) == {}


def test_layout_recomputed_for_new_nodes():
    g = Graph.from_edges([1, 2], [(1, 2)])
    ax = make_ax()
    pos = draw_graph(ax, g)
    g.add_node()
    pos2 = draw_graph(ax, g, pos)
    assert set(pos2) == {1, 2, 3}
    # позиции сохраняются, пока все вершины на месте
    assert draw_graph(ax, g, pos2) is pos2


def test_draw_every_bfs_step():
    g, start, end = example_graph()
    ax = make_ax()
    pos = None
    for step in run_bfs(g, start, end):
        pos = draw_bfs_step(ax, g, step, pos)
    assert ax.get_title().endswith("found")


def test_draw_coloring_and_aux():
    g = Graph.from_edges([1, 2, 3], [(1, 2), (2, 3)])
    coloring = {1: 0, 2: 0, 3: 1}
    ax = make_ax()
    draw_coloring(ax, g, coloring, 3)
    assert "конфликтов: 1" in ax.get_title()

    aux_ax = make_ax()
    aux = build_aux(g, coloring, 3)
    draw_aux(aux_ax, aux, path=[0, 2])
    assert aux_ax.get_title() == "Вспомогательный орграф классов"


def test_degree_colors_ramp_is_capped():
    g = Graph.from_edges(range(1, 9), [(1, v) for v in range(2, 9)])
    assert degree_colors(g) == {}

    assert g.set_max_degree(7).ok
    colors = degree_colors(g)
    assert colors[1] == DEGREE_RAMP[-1]  # степень 7 > 5
    assert colors[2] == DEGREE_RAMP[1]
    g.add_node()
    assert degree_colors(g)[9] == DEGREE_RAMP[0]

    ax = make_ax()
    draw_graph(ax, g, node_colors=degree_colors(g))
