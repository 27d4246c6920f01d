"""
Построители графов и разбор текстовых форматов.

Генераторы работают по принципу «всё или ничего»: сначала собирают новый
набор рёбер и проверяют ограничения, и только потом заменяют рёбра графа.
При отказе граф не меняется, причина возвращается в MutationResult.

Форматы:
  матрица —  1-я строка N, далее N строк; '-' = нет ребра, любое другое
             значение = есть ребро. Вершины нумеруются 1..N. Все графы
             неориентированные, самопетли игнорируются.
  список рёбер — "1-2, 2-3" или "1:2" через запятую/перевод строки.
"""

from __future__ import annotations

import random
import re
from typing import Dict, List, Optional, Set, Tuple

from graphsteps.graph_model import (
    Edge,
    Graph,
    MutationResult,
    accepted,
    check_connectable,
    normalize_edge,
    rejected,
)

_PAIR_RE = re.compile(r"^(\d+)\s*[-:]\s*(\d+)$")


class _CappedEdges:
    """Набор рёбер с учётом степени ≤ r; add() молча отказывает при нарушении."""

    def __init__(self, ids: List[int], r: Optional[int]) -> None:
        self.r = r
        self.deg: Dict[int, int] = {node: 0 for node in ids}
        self.seen: Set[Edge] = set()
        self.out: List[Edge] = []

    def add(self, u: int, v: int) -> bool:
        if u == v:
            return False
        key = normalize_edge(u, v)
        if key in self.seen:
            return False
        if self.r is not None and (self.deg[u] >= self.r or self.deg[v] >= self.r):
            return False
        self.seen.add(key)
        self.out.append(key)
        self.deg[u] += 1
        self.deg[v] += 1
        return True


# ------------------------- Структурные графы -------------------------

def complete_graph(graph: Graph) -> MutationResult:
    ids = graph.nodes
    n = len(ids)
    if n < 2:
        return rejected("too_few_nodes", "Для полного графа нужно хотя бы 2 вершины")
    r = graph.max_degree
    if r is not None and r < n - 1:
        return rejected(
            "impossible",
            f"Нельзя построить полный граф: максимальная степень {r} меньше требуемой {n - 1}",
        )
    graph.replace_edges((ids[i], ids[j]) for i in range(n) for j in range(i + 1, n))
    return accepted(f"Построен полный граф: {len(graph.edges)} рёбер")


def cycle_graph(graph: Graph) -> MutationResult:
    ids = graph.nodes
    n = len(ids)
    if n < 3:
        return rejected("too_few_nodes", "Для цикла нужно хотя бы 3 вершины")
    r = graph.max_degree
    if r is not None and r < 2:
        return rejected(
            "impossible", f"Нельзя построить цикл: максимальная степень {r} меньше требуемой 2"
        )
    graph.replace_edges((ids[i], ids[(i + 1) % n]) for i in range(n))
    return accepted(f"Построен цикл: {len(graph.edges)} рёбер")


def star_graph(graph: Graph) -> MutationResult:
    ids = graph.nodes
    n = len(ids)
    if n < 2:
        return rejected("too_few_nodes", "Для звезды нужно хотя бы 2 вершины")
    r = graph.max_degree
    if r is not None and r < n - 1:
        return rejected(
            "impossible",
            f"Нельзя построить звезду: максимальная степень {r} меньше {n - 1} для центра",
        )
    center = ids[0]
    graph.replace_edges((center, other) for other in ids[1:])
    return accepted(f"Построена звезда: {n - 1} рёбер (центр — вершина {center})")


def random_edges(graph: Graph, count: int, seed: Optional[int] = None) -> MutationResult:
    """Добавляет до count случайных рёбер к существующим, соблюдая ограничение степени."""
    ids = graph.nodes
    n = len(ids)
    if n < 2:
        return rejected("too_few_nodes", "Для рёбер нужно хотя бы 2 вершины")
    if count <= 0:
        return rejected("invalid", "Введите положительное число рёбер")

    max_possible = n * (n - 1) // 2
    to_add = min(count, max_possible - len(graph.edges))
    if to_add <= 0:
        return rejected("impossible", "Граф уже полный — добавить рёбра нельзя")

    rng = random.Random(seed)
    edges = _CappedEdges(ids, graph.max_degree)
    for a, b in graph.edges:
        edges.seen.add((a, b))
        edges.out.append((a, b))
        edges.deg[a] += 1
        edges.deg[b] += 1

    added = 0
    attempts = 0
    while added < to_add and attempts < to_add * 20:
        attempts += 1
        u, v = rng.choice(ids), rng.choice(ids)
        if edges.add(u, v):
            added += 1

    graph.replace_edges(edges.out)
    suffix = f" (с учётом максимальной степени {graph.max_degree})" if graph.max_degree is not None else ""
    return accepted(f"Добавлено {added} случайных рёбер{suffix}")


def simulate_edges(graph: Graph) -> MutationResult:
    """Связный граф со степенью ≤ r: путь по возрастанию id + хорды i → i+s, s = 2..r."""
    r = graph.max_degree
    ids = graph.nodes
    n = len(ids)
    if r is None or r < 0:
        return rejected("invalid", "Введите неотрицательное целое r (максимальная степень).")
    if n < 2:
        return rejected("too_few_nodes", "Добавьте хотя бы 2 вершины, чтобы строить рёбра.")
    problem = check_connectable(r, n)
    if problem is not None:
        return problem

    edges = _CappedEdges(ids, r)
    for i in range(n - 1):
        edges.add(ids[i], ids[i + 1])
    for s in range(2, r + 1):
        for i in range(n - s):
            edges.add(ids[i], ids[i + s])

    graph.replace_edges(edges.out)
    return accepted(f"Построен связный граф со степенью ≤ {r} ({len(edges.out)} рёбер)")


def conflict_prone_edges(graph: Graph) -> MutationResult:
    """Рёбра, склонные к конфликтам затравочной раскраски (id - 1) mod k.

    Эвристика без гарантий: цепочки внутри классов, добор степени до 1,
    лёгкое уплотнение внутри классов и рёбра между соседними id.
    """
    r = graph.max_degree
    ids = graph.nodes
    if r is None or r < 1:
        return rejected("invalid", "Задайте r ≥ 1, чтобы строить конфликтные рёбра.")
    if len(ids) < 2:
        return rejected("too_few_nodes", "Добавьте хотя бы 2 вершины.")

    k = r + 1
    edges = _CappedEdges(ids, r)
    groups: List[List[int]] = [[] for _ in range(k)]
    for node in ids:
        groups[(node - 1) % k].append(node)

    # 1) цепочка внутри каждого класса
    for g in groups:
        for i in range(len(g) - 1):
            edges.add(g[i], g[i + 1])

    # 2) у каждой вершины степень хотя бы 1
    for node in ids:
        if edges.deg[node] >= 1:
            continue
        same = [v for v in groups[(node - 1) % k] if v != node]
        placed = any(edges.add(node, v) for v in same)
        if not placed:
            nearby = [v for v in (
                next((v for v in ids if v > node), None),
                next((v for v in reversed(ids) if v < node), None),
            ) if v is not None]
            placed = any(edges.add(node, v) for v in nearby)
        if not placed:
            return rejected(
                "impossible",
                f"Не удалось дать вершине {node} хотя бы одно ребро при r = {r}. Увеличьте r.",
            )

    # 3) уплотнение через одну вершину внутри класса
    for g in groups:
        for i in range(len(g) - 2):
            edges.add(g[i], g[i + 2])

    # 4) редкие рёбра между соседними id
    for i in range(len(ids) - 1):
        edges.add(ids[i], ids[i + 1])

    graph.replace_edges(edges.out)
    return accepted(f"Построено {len(edges.out)} конфликтных рёбер (степень ≤ {r})")


# ------------------------- Текстовые форматы -------------------------

def parse_bulk_edges(text: str) -> List[Tuple[int, int]]:
    pairs: List[Tuple[int, int]] = []
    for chunk in re.split(r"[,\n]+", text):
        chunk = chunk.strip()
        if not chunk:
            continue
        m = _PAIR_RE.match(chunk)
        if not m:
            raise ValueError(f'Некорректная пара: "{chunk}" (используйте "u-v")')
        pairs.append((int(m.group(1)), int(m.group(2))))
    return pairs


def apply_bulk_edges(graph: Graph, text: str) -> MutationResult:
    """Заменяет рёбра списком из текста; каждая вершина должна получить ребро."""
    ids = set(graph.nodes)
    if len(ids) < 2:
        return rejected("too_few_nodes", "Добавьте хотя бы 2 вершины перед добавлением рёбер.")
    if not text.strip():
        return rejected("invalid", "Вставьте рёбра в виде: 1-2, 2-3, 5-1")
    try:
        pairs = parse_bulk_edges(text)
    except ValueError as exc:
        return rejected("invalid", str(exc))

    unique: Dict[Edge, None] = {}
    for u, v in pairs:
        if u not in ids or v not in ids:
            return rejected("unknown_node", f"Ребро использует несуществующую вершину: {u}-{v}")
        if u == v:
            return rejected("self_loop", f"Петля недопустима: {u}-{v}")
        unique[normalize_edge(u, v)] = None

    deg = {node: 0 for node in ids}
    for a, b in unique:
        deg[a] += 1
        deg[b] += 1
    r = graph.max_degree
    for node in sorted(ids):
        if deg[node] == 0:
            return rejected("impossible", f"У каждой вершины должно быть ребро. У вершины {node} их 0.")
        if r is not None and deg[node] > r:
            return rejected("degree_limit", f"Нарушена максимальная степень r={r} у вершины {node} (deg={deg[node]}).")

    graph.replace_edges(unique)
    return accepted(f"Применено {len(unique)} заданных рёбер")


def parse_matrix_text(text: str, max_degree: Optional[int] = None) -> Graph:
    """Граф из матричного формата; ребро (i, j) есть, если хотя бы одна из ячеек не '-'."""
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise ValueError("Пустой ввод")
    if not lines[0].isdigit():
        raise ValueError("Первая строка должна содержать число вершин")
    n = int(lines[0])
    if n <= 0:
        raise ValueError("Число вершин должно быть положительным")
    if len(lines) - 1 < n:
        raise ValueError(f"Ожидается {n} строк матрицы")

    matrix: List[List[str]] = []
    for i in range(n):
        row = lines[1 + i].split()
        if len(row) != n:
            raise ValueError(f"Строка {i + 2} должна содержать {n} элементов")
        matrix.append(row)

    edges = [
        (i + 1, j + 1)
        for i in range(n)
        for j in range(i + 1, n)
        if matrix[i][j] != "-" or matrix[j][i] != "-"
    ]
    return Graph.from_edges(range(1, n + 1), edges, max_degree=max_degree)


def graph_to_matrix_text(graph: Graph) -> str:
    """Обратное преобразование; вершины перенумеровываются 1..N по возрастанию id."""
    ids = graph.nodes
    index = {node: i for i, node in enumerate(ids)}
    n = len(ids)
    matrix = [["-"] * n for _ in range(n)]
    for a, b in graph.edges:
        matrix[index[a]][index[b]] = "1"
        matrix[index[b]][index[a]] = "1"
    return "\n".join([str(n)] + [" ".join(row) for row in matrix])


# ------------------------- Пример -------------------------

EXAMPLE_NODES = [6, 5, 4, 3, 8, 7, 0, 1, 2, 12, 13, 14, 15, 11, 10, 9]
EXAMPLE_EDGES = [
    (6, 5), (5, 4), (4, 3), (3, 8),
    (6, 7), (5, 0), (4, 1), (3, 2), (8, 9),
    (7, 0), (0, 1), (1, 2),
    (7, 12),
    (12, 13), (13, 14), (14, 11), (11, 10),
    (2, 15), (2, 13), (15, 14), (15, 9), (15, 11), (9, 10),
]


def example_graph() -> Tuple[Graph, int, int]:
    """Учебная «сетка» из 16 вершин и рекомендуемый запрос BFS 6 → 10."""
    return Graph.from_edges(EXAMPLE_NODES, EXAMPLE_EDGES), 6, 10
