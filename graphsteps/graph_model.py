"""
Модель графа: целочисленные вершины и неориентированные рёбра.

Инварианты:
  - каждое ребро хранится нормализованным (a < b), дублей и петель нет;
  - концы любого ребра присутствуют в множестве вершин;
  - смежность не хранится, а каждый раз строится заново из рёбер.

Ошибки ввода не бросаются исключениями, а возвращаются как MutationResult
(ok, kind, reason) — при отказе граф не меняется.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional, Set, Tuple, Union

Edge = Tuple[int, int]
Snapshot = Tuple[Tuple[int, ...], Tuple[Edge, ...]]

MAX_BULK_NODES = 50


class MutationResult(NamedTuple):
    """Итог изменения графа: успех/отказ, вид отказа и текст для пользователя."""

    ok: bool
    kind: str
    reason: str = ""


def accepted(reason: str = "") -> MutationResult:
    return MutationResult(True, "ok", reason)


def rejected(kind: str, reason: str) -> MutationResult:
    return MutationResult(False, kind, reason)


def normalize_edge(u: int, v: int) -> Edge:
    return (u, v) if u < v else (v, u)


def _is_node_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_connectable(r: int, n: int) -> Optional[MutationResult]:
    """Можно ли построить связный граф на n вершинах со степенью ≤ r. None — можно."""
    if r == 0 and n > 1:
        return rejected("impossible", "Невозможно: при r = 0 граф не может быть связным.")
    if r == 1 and n > 2:
        return rejected(
            "impossible",
            "Невозможно: связный граф со степенью ≤ 1 требует n ≤ 2. Увеличьте r до ≥ 2.",
        )
    return None


class Graph:
    """Вершины и рёбра; порядок вставки рёбер определяет порядок соседей."""

    def __init__(self, max_degree: Optional[int] = None) -> None:
        # dict как упорядоченное множество
        self._nodes: Dict[int, None] = {}
        self._edges: Dict[Edge, None] = {}
        self.max_degree: Optional[int] = max_degree

    @classmethod
    def from_edges(
        cls,
        nodes: Iterable[int],
        edges: Iterable[Tuple[int, int]] = (),
        max_degree: Optional[int] = None,
    ) -> "Graph":
        """Собирает граф целиком; любой отказ add_edge превращается в ValueError."""
        graph = cls(max_degree=max_degree)
        for node in nodes:
            if not _is_node_id(node):
                raise ValueError(f"Некорректный id вершины: {node!r}")
            graph._nodes[node] = None
        for a, b in edges:
            result = graph.add_edge(a, b)
            if not result.ok:
                raise ValueError(result.reason)
        return graph

    # ------------------------- Чтение -------------------------

    @property
    def nodes(self) -> List[int]:
        return sorted(self._nodes)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def has_edge(self, a: int, b: int) -> bool:
        return normalize_edge(a, b) in self._edges

    def adjacency(self) -> Dict[int, List[int]]:
        """Списки соседей без повторов, в порядке добавления рёбер."""
        adj: Dict[int, List[int]] = {node: [] for node in self.nodes}
        for a, b in self._edges:
            adj[a].append(b)
            adj[b].append(a)
        return adj

    def degree(self, node: int) -> int:
        return sum(1 for a, b in self._edges if node in (a, b))

    def degrees(self) -> Dict[int, int]:
        deg = {node: 0 for node in self._nodes}
        for a, b in self._edges:
            deg[a] += 1
            deg[b] += 1
        return deg

    def max_current_degree(self) -> int:
        return max(self.degrees().values(), default=0)

    # ------------------------- Вершины -------------------------

    def next_node_id(self) -> int:
        return max(self._nodes) + 1 if self._nodes else 1

    def add_node(self) -> int:
        node = self.next_node_id()
        self._nodes[node] = None
        return node

    def add_nodes(self, count: int) -> MutationResult:
        if not _is_node_id(count) or count <= 0 or count > MAX_BULK_NODES:
            return rejected("invalid", f"Количество вершин должно быть от 1 до {MAX_BULK_NODES}")
        first = self.next_node_id()
        for node in range(first, first + count):
            self._nodes[node] = None
        return accepted(f"Добавлено {count} вершин ({first}-{first + count - 1})")

    def remove_node(self, node: int) -> MutationResult:
        """Удаляет вершину вместе с инцидентными рёбрами; отсутствующая — не ошибка."""
        if node not in self._nodes:
            return MutationResult(True, "no_change", f"Вершины {node} нет — ничего не удалено")
        del self._nodes[node]
        self._edges = {e: None for e in self._edges if node not in e}
        return accepted(f"Удалена вершина {node}")

    # ------------------------- Рёбра -------------------------

    def check_edge(self, a: object, b: object) -> Optional[MutationResult]:
        """Причина отказа для ребра a—b или None, если его можно добавить."""
        if not _is_node_id(a) or not _is_node_id(b):
            return rejected("invalid", f"Некорректная пара вершин: {a!r}-{b!r}")
        if a == b:
            return rejected("self_loop", f"Петля недопустима: {a}-{b}")
        if a not in self._nodes or b not in self._nodes:
            return rejected("unknown_node", f"Ребро использует несуществующую вершину: {a}-{b}")
        if normalize_edge(a, b) in self._edges:
            return rejected("duplicate_edge", f"Ребро {a}-{b} уже существует")
        if self.max_degree is not None:
            for node in (a, b):
                if self.degree(node) >= self.max_degree:
                    return rejected(
                        "degree_limit",
                        f"Нельзя добавить ребро: вершина {node} уже имеет степень {self.max_degree}",
                    )
        return None

    def add_edge(self, a: int, b: int) -> MutationResult:
        problem = self.check_edge(a, b)
        if problem is not None:
            return problem
        self._edges[normalize_edge(a, b)] = None
        return accepted(f"Добавлено ребро {a}-{b}")

    def remove_edge(self, a: int, b: int) -> MutationResult:
        key = normalize_edge(a, b)
        if key not in self._edges:
            return MutationResult(True, "no_change", f"Ребра {a}-{b} нет — ничего не удалено")
        del self._edges[key]
        return accepted(f"Удалено ребро {a}-{b}")

    def clear_edges(self) -> None:
        self._edges.clear()

    def replace_edges(self, edges: Iterable[Edge]) -> None:
        """Заменяет рёбра целиком. Вызывающий отвечает за то, что набор уже проверен."""
        fresh: Dict[Edge, None] = {}
        for a, b in edges:
            if a == b or a not in self._nodes or b not in self._nodes:
                raise ValueError(f"Недопустимое ребро {a}-{b}")
            fresh[normalize_edge(a, b)] = None
        self._edges = fresh

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()

    # ------------------------- Ограничение степени -------------------------

    def set_max_degree(self, r: Optional[int]) -> MutationResult:
        if r is None:
            self.max_degree = None
            return accepted("Ограничение степени снято")
        if not _is_node_id(r) or r < 0:
            return rejected("invalid", "Введите неотрицательное целое r (максимальная степень).")
        current = self.max_current_degree()
        if current > r:
            return rejected(
                "impossible",
                f"Нельзя установить r = {r}: в графе уже есть вершина степени {current}",
            )
        self.max_degree = r
        return accepted(f"Максимальная степень r = {r}, классов k = {r + 1}")

    # ------------------------- Снимки -------------------------

    def snapshot(self) -> Snapshot:
        return tuple(self._nodes), tuple(self._edges)

    def restore(self, snap: Snapshot) -> bool:
        """Восстанавливает вершины и рёбра снимка.

        Если восстановленный граф нарушает текущее ограничение степени,
        ограничение снимается; тогда возвращается True.
        """
        nodes, edges = snap
        self._nodes = dict.fromkeys(nodes)
        self._edges = dict.fromkeys(edges)
        if self.max_degree is not None and self.max_current_degree() > self.max_degree:
            self.max_degree = None
            return True
        return False

    # ------------------------- Свойства -------------------------

    def connected_components(self) -> int:
        adj = self.adjacency()
        seen: Set[int] = set()
        components = 0
        for start in adj:
            if start in seen:
                continue
            components += 1
            stack = [start]
            seen.add(start)
            while stack:
                u = stack.pop()
                for v in adj[u]:
                    if v not in seen:
                        seen.add(v)
                        stack.append(v)
        return components

    def properties(self) -> Dict[str, Union[int, float]]:
        n = len(self._nodes)
        m = len(self._edges)
        return {
            "nodes": n,
            "edges": m,
            "components": self.connected_components(),
            "max_degree": self.max_current_degree(),
            "average_degree": round(2 * m / n, 2) if n else 0.0,
        }


class GraphHistory:
    """Undo/redo на полных снимках графа (только вершины и рёбра, без координат)."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.entries: List[Tuple[Snapshot, str]] = [(graph.snapshot(), "Начальное состояние")]
        self.position = 0

    def record(self, operation: str = "") -> None:
        # после undo «хвост» для redo отбрасывается
        del self.entries[self.position + 1:]
        self.entries.append((self.graph.snapshot(), operation))
        self.position = len(self.entries) - 1

    @property
    def can_undo(self) -> bool:
        return self.position > 0

    @property
    def can_redo(self) -> bool:
        return self.position < len(self.entries) - 1

    def undo(self) -> Optional[str]:
        """Откат последней операции; возвращает её название или None."""
        if not self.can_undo:
            return None
        undone = self.entries[self.position][1]
        self.position -= 1
        self.graph.restore(self.entries[self.position][0])
        return undone or "Предыдущая операция"

    def redo(self) -> Optional[str]:
        if not self.can_redo:
            return None
        self.position += 1
        snap, operation = self.entries[self.position]
        self.graph.restore(snap)
        return operation or "Следующая операция"
