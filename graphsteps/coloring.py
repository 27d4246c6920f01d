"""
Раскраска графа с ограничением степени r в k = r + 1 классов.

Раскраска — словарь {вершина: номер класса из [0, k)}. Пока явная раскраска
не задана, используется затравка (id - 1) mod k; она НЕ обязана быть
правильной. Жадная раскраска greedy_coloring всегда правильная, если
степень каждой вершины ≤ r.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from graphsteps.graph_model import Edge, Graph, MutationResult, accepted, rejected

Coloring = Dict[int, int]


def default_class(node: int, k: int) -> int:
    return (node - 1) % k


def seed_coloring(graph: Graph, k: int) -> Coloring:
    return {node: default_class(node, k) for node in graph.nodes}


def class_counts(coloring: Coloring, k: int) -> List[int]:
    counts = [0] * k
    for cls in coloring.values():
        counts[cls] += 1
    return counts


def is_equitable(coloring: Coloring, k: int) -> bool:
    counts = class_counts(coloring, k)
    return max(counts) <= min(counts) + 1


def target_sizes(n: int, k: int) -> List[int]:
    """Размеры классов равномерной раскраски: remainder классов по base+1, остальные по base."""
    base, remainder = divmod(n, k)
    return [base + 1 if i < remainder else base for i in range(k)]


def conflict_edges(graph: Graph, coloring: Coloring) -> List[Edge]:
    """Рёбра, соединяющие вершины одного класса."""
    return [(a, b) for a, b in graph.edges if coloring.get(a) == coloring.get(b)]


def is_proper(graph: Graph, coloring: Coloring) -> bool:
    return not conflict_edges(graph, coloring)


def validate_coloring(graph: Graph, coloring: Coloring, k: int) -> None:
    """ValueError, если раскраска не покрывает граф или выходит за [0, k)."""
    missing = [node for node in graph.nodes if node not in coloring]
    if missing:
        raise ValueError(f"Вершины без цвета: {missing}")
    extra = [node for node in coloring if node not in graph]
    if extra:
        raise ValueError(f"Цвет задан для несуществующих вершин: {sorted(extra)}")
    bad = sorted(node for node, cls in coloring.items() if not 0 <= cls < k)
    if bad:
        raise ValueError(f"Номер класса вне диапазона [0, {k}) у вершин: {bad}")


def greedy_coloring(graph: Graph, k: int) -> Coloring:
    """Жадно: вершины по возрастанию id, каждой — наименьший свободный класс."""
    adj = graph.adjacency()
    coloring: Coloring = {}
    for node in graph.nodes:
        used = {coloring[v] for v in adj[node] if v in coloring}
        cls = next((c for c in range(k) if c not in used), None)
        if cls is None:
            raise ValueError(
                f"Вершине {node} не хватает цвета: степень {len(adj[node])} ≥ k = {k}"
            )
        coloring[node] = cls
    return coloring


class ColoringState:
    """Граф + ограничение степени + текущая раскраска (явная или затравочная)."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._explicit: Optional[Coloring] = None

    @property
    def max_degree(self) -> Optional[int]:
        return self.graph.max_degree

    @property
    def k(self) -> Optional[int]:
        r = self.graph.max_degree
        return None if r is None else r + 1

    def set_max_degree(self, r: Optional[int]) -> MutationResult:
        old_k = self.k
        result = self.graph.set_max_degree(r)
        if result.ok and self.k != old_k:
            # номера классов старой раскраски теряют смысл при другом k
            self._explicit = None
        return result

    def set_coloring(self, coloring: Coloring) -> MutationResult:
        k = self.k
        if k is None:
            return rejected("invalid", "Сначала задайте максимальную степень r")
        try:
            validate_coloring(self.graph, coloring, k)
        except ValueError as exc:
            return rejected("invalid", str(exc))
        self._explicit = dict(coloring)
        return accepted("Раскраска обновлена")

    def reset_coloring(self) -> None:
        self._explicit = None

    @property
    def has_explicit(self) -> bool:
        return self._explicit is not None

    def current_coloring(self) -> Coloring:
        """Явная раскраска для существующих вершин, затравка — для новых."""
        k = self.k
        if k is None:
            return {}
        explicit = self._explicit or {}
        return {
            node: explicit[node] if node in explicit else default_class(node, k)
            for node in self.graph.nodes
        }

    def class_counts(self) -> List[int]:
        k = self.k
        return class_counts(self.current_coloring(), k) if k is not None else []

    def is_equitable(self) -> bool:
        counts = self.class_counts()
        return not counts or max(counts) <= min(counts) + 1

    def is_proper(self) -> bool:
        return is_proper(self.graph, self.current_coloring())

    def apply_greedy(self) -> MutationResult:
        k = self.k
        if k is None:
            return rejected("invalid", "Сначала задайте максимальную степень r")
        try:
            coloring = greedy_coloring(self.graph, k)
        except ValueError as exc:
            return rejected("impossible", str(exc))
        self._explicit = coloring
        return accepted(f"Жадная правильная раскраска в {k} классов")
