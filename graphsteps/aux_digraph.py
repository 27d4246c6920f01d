"""
Вспомогательный орграф над классами раскраски.

Вершины — номера классов 0..k-1. Дуга i → j есть, если в классе i нашлась
вершина без соседей в классе j (её можно перекрасить в j, не создав
конфликта). Свидетель — вершина с наименьшим id. Орграф строится заново
из текущей раскраски при каждом обращении и нигде не хранится.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, NamedTuple, Optional, Tuple

from graphsteps.coloring import Coloring, class_counts
from graphsteps.graph_model import Graph

LARGE = "large"
SMALL = "small"
NORMAL = "normal"


class ClassNode(NamedTuple):
    id: int
    size: int
    role: str


class AuxEdge(NamedTuple):
    source: int
    target: int
    witness: int


class AuxDigraph(NamedTuple):
    class_nodes: List[ClassNode]
    edges: List[AuxEdge]

    def successors(self, cls: int) -> List[int]:
        return sorted(e.target for e in self.edges if e.source == cls)

    def has_edge(self, source: int, target: int) -> bool:
        return any(e.source == source and e.target == target for e in self.edges)


def members_by_class(coloring: Coloring, k: int) -> List[List[int]]:
    members: List[List[int]] = [[] for _ in range(k)]
    for node in sorted(coloring):
        members[coloring[node]].append(node)
    return members


def find_witness(
    members: List[int],
    target: int,
    adj: Dict[int, List[int]],
    coloring: Coloring,
) -> Optional[int]:
    """Наименьшая вершина из members, у которой нет соседей в классе target."""
    for node in sorted(members):
        if all(coloring[v] != target for v in adj[node]):
            return node
    return None


def extreme_classes(counts: List[int]) -> Tuple[int, int]:
    """(V+, V-): самый большой и самый маленький класс, при равенстве — меньший индекс."""
    large = max(range(len(counts)), key=lambda i: (counts[i], -i))
    small = min(range(len(counts)), key=lambda i: (counts[i], i))
    return large, small


def class_roles(counts: List[int]) -> List[str]:
    roles = [NORMAL] * len(counts)
    if not counts or max(counts) == min(counts):
        return roles
    large, small = extreme_classes(counts)
    roles[large] = LARGE
    roles[small] = SMALL
    return roles


def build_aux(graph: Graph, coloring: Coloring, k: int) -> AuxDigraph:
    adj = graph.adjacency()
    counts = class_counts(coloring, k)
    roles = class_roles(counts)
    members = members_by_class(coloring, k)

    edges: List[AuxEdge] = []
    for i in range(k):
        for j in range(k):
            if i == j:
                continue
            witness = find_witness(members[i], j, adj, coloring)
            if witness is not None:
                edges.append(AuxEdge(i, j, witness))

    class_nodes = [ClassNode(i, counts[i], roles[i]) for i in range(k)]
    return AuxDigraph(class_nodes, edges)


def find_class_path(aux: AuxDigraph, source: int, target: int) -> Optional[List[int]]:
    """Кратчайший путь source → ... → target в орграфе классов (BFS)."""
    if source == target:
        return [source]
    parent: Dict[int, int] = {}
    seen = {source}
    queue: deque[int] = deque([source])
    while queue:
        u = queue.popleft()
        for v in aux.successors(u):
            if v in seen:
                continue
            seen.add(v)
            parent[v] = u
            if v == target:
                path = [v]
                while path[-1] != source:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            queue.append(v)
    return None
