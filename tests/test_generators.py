import pytest

from graphsteps.coloring import conflict_edges, seed_coloring
from graphsteps.gen_big_tests import build_graph, write_graph
from graphsteps.generators import (
    EXAMPLE_EDGES,
    apply_bulk_edges,
    complete_graph,
    conflict_prone_edges,
    cycle_graph,
    example_graph,
    graph_to_matrix_text,
    parse_bulk_edges,
    parse_matrix_text,
    random_edges,
    simulate_edges,
    star_graph,
)
from graphsteps.graph_model import Graph


def make(n, r=None):
    return Graph.from_edges(range(1, n + 1), max_degree=r)


# ------------------------- Структурные графы -------------------------

def test_complete_graph():
    g = make(4)
    assert complete_graph(g).ok
    assert len(g.edges) == 6
    assert g.max_current_degree() == 3

    capped = make(4, r=2)
    result = complete_graph(capped)
    assert result.kind == "impossible"
    assert capped.edges == []
    assert complete_graph(make(1)).kind == "too_few_nodes"


def test_cycle_graph():
    g = make(5)
    assert cycle_graph(g).ok
    assert len(g.edges) == 5
    assert all(d == 2 for d in g.degrees().values())
    assert cycle_graph(make(2)).kind == "too_few_nodes"
    assert cycle_graph(make(4, r=1)).kind == "impossible"


def test_star_graph_centre_is_smallest_id():
    g = make(5)
    assert star_graph(g).ok
    assert g.edges == [(1, 2), (1, 3), (1, 4), (1, 5)]
    assert star_graph(make(5, r=3)).kind == "impossible"


def test_generator_replaces_existing_edges():
    g = Graph.from_edges([1, 2, 3], [(1, 3)])
    assert star_graph(g).ok
    assert g.edges == [(1, 2), (1, 3)]


# ------------------------- Случайные и связные -------------------------

def test_random_edges_respect_degree_and_seed():
    g1, g2 = make(10, r=3), make(10, r=3)
    assert random_edges(g1, 20, seed=7).ok
    assert random_edges(g2, 20, seed=7).ok
    assert g1.edges == g2.edges
    assert g1.max_current_degree() <= 3
    assert random_edges(g1, 0).kind == "invalid"


def test_random_edges_keep_existing():
    g = Graph.from_edges([1, 2, 3, 4], [(1, 2)])
    assert random_edges(g, 2, seed=1).ok
    assert (1, 2) in g.edges

    full = make(3)
    complete_graph(full)
    assert random_edges(full, 1).kind == "impossible"


def test_simulate_edges_connected():
    g = make(10, r=3)
    assert simulate_edges(g).ok
    assert g.connected_components() == 1
    assert g.max_current_degree() <= 3

    short = make(5, r=2)
    assert simulate_edges(short).ok
    assert short.edges == [(1, 2), (2, 3), (3, 4), (4, 5)]


@pytest.mark.parametrize(
    "n, r, kind",
    [
        (4, None, "invalid"),
        (1, 2, "too_few_nodes"),
        (3, 1, "impossible"),
        (2, 0, "impossible"),
    ],
)
def test_simulate_edges_rejections(n, r, kind):
    g = make(n, r)
    assert simulate_edges(g).kind == kind
    assert g.edges == []


def test_conflict_prone_edges():
    g = make(6, r=2)
    assert conflict_prone_edges(g).ok
    assert g.edges == [(1, 4), (2, 5), (3, 6), (1, 2), (3, 4), (5, 6)]
    assert g.max_current_degree() <= 2
    assert conflict_edges(g, seed_coloring(g, 3)) == [(1, 4), (2, 5), (3, 6)]
    assert conflict_prone_edges(make(4)).kind == "invalid"


# ------------------------- Список рёбер -------------------------

def test_parse_bulk_edges():
    assert parse_bulk_edges("1-2, 2:3\n3 - 4,") == [(1, 2), (2, 3), (3, 4)]
    with pytest.raises(ValueError):
        parse_bulk_edges("1x2")


def test_apply_bulk_edges():
    g = make(4)
    assert apply_bulk_edges(g, "1-2, 3-4, 2-1").ok
    assert g.edges == [(1, 2), (3, 4)]


@pytest.mark.parametrize(
    "text, r, kind",
    [
        ("", None, "invalid"),
        ("1-2", None, "impossible"),
        ("1-9, 2-3, 3-4", None, "unknown_node"),
        ("1-1, 2-3, 3-4", None, "self_loop"),
        ("a-b", None, "invalid"),
        ("1-2, 1-3, 2-4, 3-4", 1, "degree_limit"),
    ],
)
def test_apply_bulk_edges_rejections(text, r, kind):
    g = make(4, r)
    assert apply_bulk_edges(g, text).kind == kind
    assert g.edges == []


# ------------------------- Матричный формат -------------------------

def test_parse_matrix_text():
    g = parse_matrix_text("3\n- 1 -\n- - 1\n- - -\n")
    assert g.nodes == [1, 2, 3]
    assert g.edges == [(1, 2), (2, 3)]


def test_matrix_uses_either_cell_and_ignores_diagonal():
    g = parse_matrix_text("2\n5 -\n7 -")
    assert g.edges == [(1, 2)]


def test_matrix_text_renumbers_ids():
    g = Graph.from_edges([5, 9, 12], [(9, 5)])
    text = graph_to_matrix_text(g)
    assert text == "3\n- 1 -\n1 - -\n- - -"
    assert parse_matrix_text(text).edges == [(1, 2)]


@pytest.mark.parametrize(
    "text",
    ["", "x\n-", "0", "2\n- -", "2\n- -\n-", "2\n- 1 1\n- -"],
)
def test_parse_matrix_errors(text):
    with pytest.raises(ValueError):
        parse_matrix_text(text)


def test_matrix_respects_max_degree():
    with pytest.raises(ValueError):
        parse_matrix_text("3\n- 1 1\n- - -\n- - -", max_degree=1)


# ------------------------- Пример и большие тесты -------------------------

def test_example_graph():
    g, start, end = example_graph()
    assert len(g) == 16
    assert len(g.edges) == len(EXAMPLE_EDGES)
    assert start in g and end in g
    assert g.connected_components() == 1


@pytest.mark.parametrize("kind", ["simulate", "conflict", "random"])
def test_build_graph_kinds(kind):
    g = build_graph(30, 3, kind=kind, extras=5, seed=3)
    assert g.nodes == list(range(1, 31))
    assert g.max_current_degree() <= 3
    if kind == "simulate":
        assert g.connected_components() == 1


def test_build_graph_unknown_kind():
    with pytest.raises(ValueError):
        build_graph(5, 2, kind="grid")


def test_write_graph(tmp_path):
    path = tmp_path / "big.txt"
    g = write_graph(str(path), n=12, r=2, kind="simulate", seed=0)
    again = parse_matrix_text(path.read_text(encoding="utf-8"))
    assert again.edges == g.edges
