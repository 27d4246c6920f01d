import pytest

from graphsteps.aux_digraph import (
    LARGE,
    NORMAL,
    SMALL,
    build_aux,
    class_roles,
    extreme_classes,
    find_class_path,
)
from graphsteps.coloring import (
    ColoringState,
    class_counts,
    conflict_edges,
    greedy_coloring,
    is_equitable,
    is_proper,
    seed_coloring,
    target_sizes,
    validate_coloring,
)
from graphsteps.graph_model import Graph


@pytest.fixture
def blocked():
    """Класс 0 = {1,2,3,4} целиком смежен с классом 1 = {5,6}; класс 2 = {7,8} свободен."""
    g = Graph.from_edges(range(1, 9), [(1, 5), (2, 5), (3, 6), (4, 6)])
    coloring = {1: 0, 2: 0, 3: 0, 4: 0, 5: 1, 6: 1, 7: 2, 8: 2}
    return g, coloring


# ------------------------- Статистика классов -------------------------

def test_seed_coloring_is_id_mod_k():
    g = Graph.from_edges(range(1, 8))
    coloring = seed_coloring(g, 4)
    assert coloring == {1: 0, 2: 1, 3: 2, 4: 3, 5: 0, 6: 1, 7: 2}
    assert class_counts(coloring, 4) == [2, 2, 2, 1]
    assert is_equitable(coloring, 4)


@pytest.mark.parametrize(
    "counts, equitable",
    [
        ([4, 1, 1, 1], False),
        ([2, 2, 1, 1], True),
        ([3, 3, 3], True),
        ([0, 2], False),
    ],
)
def test_is_equitable(counts, equitable):
    coloring = {}
    node = 1
    for cls, size in enumerate(counts):
        for _ in range(size):
            coloring[node] = cls
            node += 1
    assert class_counts(coloring, len(counts)) == counts
    assert is_equitable(coloring, len(counts)) is equitable


def test_target_sizes():
    assert target_sizes(7, 4) == [2, 2, 2, 1]
    assert target_sizes(6, 4) == [2, 2, 1, 1]
    assert target_sizes(8, 4) == [2, 2, 2, 2]
    assert sum(target_sizes(23, 5)) == 23


def test_greedy_is_proper():
    g = Graph.from_edges([1, 2, 3, 4], [(1, 2), (2, 3), (3, 4), (4, 1)])
    coloring = greedy_coloring(g, 3)
    assert coloring == {1: 0, 2: 1, 3: 0, 4: 1}
    assert is_proper(g, coloring)


def test_greedy_fails_when_degree_too_high():
    triangle = Graph.from_edges([1, 2, 3], [(1, 2), (2, 3), (1, 3)])
    with pytest.raises(ValueError):
        greedy_coloring(triangle, 2)


def test_conflict_edges():
    g = Graph.from_edges([1, 2, 3], [(1, 2), (2, 3)])
    assert conflict_edges(g, {1: 0, 2: 0, 3: 1}) == [(1, 2)]
    assert not is_proper(g, {1: 0, 2: 0, 3: 1})


def test_validate_coloring():
    g = Graph.from_edges([1, 2])
    validate_coloring(g, {1: 0, 2: 1}, 2)
    with pytest.raises(ValueError):
        validate_coloring(g, {1: 0}, 2)
    with pytest.raises(ValueError):
        validate_coloring(g, {1: 0, 2: 2}, 2)
    with pytest.raises(ValueError):
        validate_coloring(g, {1: 0, 2: 1, 3: 0}, 2)


# ------------------------- Состояние раскраски -------------------------

def test_coloring_state_lifecycle():
    g = Graph.from_edges([1, 2, 3], [(1, 2)])
    state = ColoringState(g)
    assert state.k is None
    assert state.current_coloring() == {}

    assert state.set_max_degree(-1).kind == "invalid"
    assert state.set_max_degree(1).ok
    assert state.k == 2
    assert state.current_coloring() == {1: 0, 2: 1, 3: 0}
    assert not state.has_explicit

    assert state.set_coloring({1: 1, 2: 0, 3: 0}).ok
    g.add_node()
    # новая вершина получает затравочный класс
    assert state.current_coloring() == {1: 1, 2: 0, 3: 0, 4: 1}
    g.remove_node(1)
    assert state.current_coloring() == {2: 0, 3: 0, 4: 1}
    assert state.class_counts() == [2, 1]
    assert state.is_equitable()

    assert state.set_coloring({2: 5, 3: 0, 4: 1}).kind == "invalid"

    # другое k — явная раскраска сбрасывается
    assert state.set_max_degree(2).ok
    assert not state.has_explicit


def test_coloring_state_greedy():
    g = Graph.from_edges([1, 2, 3], [(1, 2), (2, 3)], max_degree=2)
    state = ColoringState(g)
    assert state.current_coloring() == {1: 0, 2: 1, 3: 2}
    assert state.apply_greedy().ok
    assert state.is_proper()
    assert state.current_coloring() == {1: 0, 2: 1, 3: 0}


# ------------------------- Вспомогательный орграф -------------------------

def test_build_aux(blocked):
    g, coloring = blocked
    aux = build_aux(g, coloring, 3)
    assert [(e.source, e.target, e.witness) for e in aux.edges] == [
        (0, 2, 1),
        (1, 2, 5),
        (2, 0, 7),
        (2, 1, 7),
    ]
    assert [c.size for c in aux.class_nodes] == [4, 2, 2]
    assert [c.role for c in aux.class_nodes] == [LARGE, SMALL, NORMAL]
    assert not aux.has_edge(0, 1)
    assert aux.successors(2) == [0, 1]
    assert find_class_path(aux, 0, 1) == [0, 2, 1]
    assert find_class_path(aux, 1, 0) == [1, 2, 0]


def test_aux_empty_target_class_is_always_reachable():
    g = Graph.from_edges([1, 2], [(1, 2)])
    aux = build_aux(g, {1: 0, 2: 1}, 3)
    assert aux.has_edge(0, 2) and aux.has_edge(1, 2)
    assert not aux.has_edge(2, 0)
    assert not aux.has_edge(0, 1)


def test_roles_and_extremes():
    assert extreme_classes([4, 1, 1, 1]) == (0, 1)
    assert extreme_classes([1, 3, 3]) == (1, 0)
    assert class_roles([1, 3, 3]) == [SMALL, LARGE, NORMAL]
    assert class_roles([2, 2]) == [NORMAL, NORMAL]
