from graphsteps.generators import (
    conflict_prone_edges,
    graph_to_matrix_text,
    random_edges,
    simulate_edges,
)
from graphsteps.graph_model import Graph


def build_graph(n, r, kind="simulate", extras=0, seed=42):
    """
    Строит граф на n вершинах (1..n) с максимальной степенью r.

    kind="simulate" -> связный: путь + локальные хорды.
    kind="conflict" -> рёбра внутри классов (id - 1) mod (r + 1): много конфликтов затравки.
    kind="random"   -> только случайные рёбра.
    extras — сколько случайных рёбер попытаться добавить сверху (степень не превышается).
    """
    graph = Graph(max_degree=r)
    result = graph.add_nodes(n)
    if not result.ok:
        raise ValueError(result.reason)

    if kind == "simulate":
        result = simulate_edges(graph)
    elif kind == "conflict":
        result = conflict_prone_edges(graph)
    elif kind == "random":
        result = random_edges(graph, max(extras, 1), seed=seed)
        extras = 0
    else:
        raise ValueError(f"Неизвестный вид графа: {kind}")
    if not result.ok:
        raise ValueError(result.reason)

    if extras:
        random_edges(graph, extras, seed=seed)
    return graph


def write_graph(filename, n, r, kind="simulate", extras=0, seed=42):
    graph = build_graph(n, r, kind=kind, extras=extras, seed=seed)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(graph_to_matrix_text(graph) + '\n')

    print(f"Wrote {filename}: N={n}, r={r}, kind={kind}, |E|={len(graph.edges)}")
    return graph


if __name__ == '__main__':
    write_graph('big_simulate_50.txt', n=50, r=4, kind="simulate", extras=10, seed=1)
    write_graph('big_conflict_50.txt', n=50, r=3, kind="conflict", seed=2)
