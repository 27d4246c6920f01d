"""
Пошаговый BFS (поиск кратчайшего пути в невзвешенном графе).

run_bfs строит ВЕСЬ список шагов сразу. Каждый шаг — полный снимок
(очередь, посещённые, предки, расстояния), поэтому перемотка вперёд/назад
и автозапуск — это просто индексация в готовом списке без пересчёта.
"""

from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Tuple

from graphsteps.graph_model import Graph

INITIALIZE = "initialize"
DEQUEUE = "dequeue"
EXPLORE = "explore"
NO_NEIGHBORS = "no_neighbors"
FOUND = "found"
NOT_FOUND = "not_found"


class NodeNotFoundError(ValueError):
    """Стартовой или конечной вершины нет в графе."""


class BFSStep(NamedTuple):
    step_index: int
    action: str
    description: str
    queue: Tuple[int, ...]
    visited: FrozenSet[int]
    current: Optional[int]
    newly_discovered: Tuple[int, ...]
    parent: Mapping[int, int]
    distance: Mapping[int, int]
    path_found: bool
    final_path: Tuple[int, ...]


def reconstruct_path(parent: Mapping[int, int], start: int, end: int) -> List[int]:
    """Путь start → end по ссылкам на предков."""
    path = [end]
    node = end
    while node != start:
        node = parent[node]
        path.append(node)
    path.reverse()
    return path


def run_bfs(graph: Graph, start: int, end: int) -> List[BFSStep]:
    """Полный список шагов BFS от start до end.

    Соседи обходятся в порядке списка смежности (т.е. порядке добавления рёбер).
    При нахождении цели алгоритм останавливается, даже если очередь не пуста.
    """
    if start not in graph or end not in graph:
        raise NodeNotFoundError(f"Стартовая или конечная вершина не существует: {start} → {end}")

    adj = graph.adjacency()
    queue: deque[int] = deque([start])
    visited = {start}
    parent: Dict[int, int] = {}
    dist: Dict[int, int] = {start: 0}
    steps: List[BFSStep] = []

    def snap(
        action: str,
        description: str,
        current: Optional[int],
        discovered: Tuple[int, ...] = (),
        final_path: Tuple[int, ...] = (),
    ) -> None:
        steps.append(
            BFSStep(
                step_index=len(steps),
                action=action,
                description=description,
                queue=tuple(queue),
                visited=frozenset(visited),
                current=current,
                newly_discovered=discovered,
                parent=MappingProxyType(dict(parent)),
                distance=MappingProxyType(dict(dist)),
                path_found=bool(final_path),
                final_path=final_path,
            )
        )

    snap(INITIALIZE, f"Инициализация BFS со стартовой вершиной {start}", start)

    while queue:
        current = queue.popleft()
        snap(DEQUEUE, f"Извлекаем вершину {current} из начала очереди", current)

        if current == end:
            path = tuple(reconstruct_path(parent, start, end))
            snap(
                FOUND,
                f"Цель {end} найдена! Путь: {' → '.join(map(str, path))}",
                current,
                final_path=path,
            )
            return steps

        discovered: List[int] = []
        for neighbor in adj[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
                parent[neighbor] = current
                dist[neighbor] = dist[current] + 1
                discovered.append(neighbor)

        if discovered:
            snap(
                EXPLORE,
                f"Соседи {current}: {adj[current]}. В очередь добавлены: {discovered}",
                current,
                tuple(discovered),
            )
        else:
            snap(NO_NEIGHBORS, f"У вершины {current} нет непосещённых соседей", current)

    snap(NOT_FOUND, f"Очередь пуста. Пути из {start} в {end} не существует", None)
    return steps


# ------------------------- Воспроизведение -------------------------

def go_to_step(steps: List[BFSStep], index: int) -> BFSStep:
    if not 0 <= index < len(steps):
        raise IndexError(f"Шаг {index} вне диапазона 0..{len(steps) - 1}")
    return steps[index]


class StepReplay:
    """Курсор по готовому списку шагов: вперёд, назад, в начало, к произвольному шагу."""

    def __init__(self, steps: List[BFSStep]) -> None:
        if not steps:
            raise ValueError("Пустой список шагов")
        self.steps = steps
        self.position = 0

    @property
    def current(self) -> BFSStep:
        return self.steps[self.position]

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.steps) - 1

    def next(self) -> BFSStep:
        if not self.at_end:
            self.position += 1
        return self.current

    def prev(self) -> BFSStep:
        if self.position > 0:
            self.position -= 1
        return self.current

    def reset(self) -> BFSStep:
        self.position = 0
        return self.current

    def go_to(self, index: int) -> BFSStep:
        step = go_to_step(self.steps, index)
        self.position = index
        return step

    def counter(self) -> str:
        return f"{self.position + 1}/{len(self.steps)}"
