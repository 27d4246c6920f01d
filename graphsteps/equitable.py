"""
Шаг выравнивания раскраски (Лемма 2.1).

Один вызов apply_repair_step:
  1. находит самый большой класс V+ и самый маленький V-;
  2. строит вспомогательный орграф классов и ищет в нём BFS-ом
     кратчайший путь V+ → ... → V-;
  3. проходит путь, каждый раз перекрашивая вершину-свидетеля из c_j в c_{j+1}.
     Свидетель проверяется по РАБОЧЕЙ копии раскраски в момент хода,
     т.к. предыдущие ходы цепочки могли изменить допустимые вершины.

Всё или ничего: если на каком-то ходе свидетеля нет, исходная раскраска
возвращается без изменений. «Уже равномерна», «недостижим», «путь прерван» —
штатные исходы (RepairOutcome.status), а не исключения.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from graphsteps.aux_digraph import (
    AuxDigraph,
    build_aux,
    extreme_classes,
    find_class_path,
    find_witness,
    members_by_class,
)
from graphsteps.coloring import Coloring, class_counts, is_equitable, validate_coloring
from graphsteps.graph_model import Graph
from graphsteps.steplog import Logger

MOVED = "moved"
ALREADY_EQUITABLE = "already_equitable"
UNREACHABLE = "unreachable"
PATH_BROKEN = "path_broken"


class Move(NamedTuple):
    node: int
    source: int
    target: int


class RepairOutcome(NamedTuple):
    status: str
    coloring: Coloring
    reason: str
    large: Optional[int] = None
    small: Optional[int] = None
    aux: Optional[AuxDigraph] = None
    path: Tuple[int, ...] = ()
    moves: Tuple[Move, ...] = ()
    broken_at: Optional[int] = None

    @property
    def changed(self) -> bool:
        return self.status == MOVED


def _say(logger: Optional[Logger], msg: str) -> None:
    if logger is not None:
        logger.log(msg)


def replay_path(
    graph: Graph,
    coloring: Coloring,
    path: Sequence[int],
    logger: Optional[Logger] = None,
) -> Tuple[Optional[Coloring], List[Move], Optional[int]]:
    """Проходит путь классов на рабочей копии раскраски.

    Возвращает (новая раскраска, ходы, None) при успехе или
    (None, сделанные ходы, позиция обрыва) — исходная раскраска не трогается.
    """
    adj = graph.adjacency()
    working: Dict[int, int] = dict(coloring)
    moves: List[Move] = []
    for j, (src, dst) in enumerate(zip(path, path[1:])):
        members = [node for node in sorted(working) if working[node] == src]
        witness = find_witness(members, dst, adj, working)
        if witness is None:
            _say(logger, f"  ✖ Ход {j + 1}: в классе {src} нет вершины без соседей в классе {dst}")
            return None, moves, j
        working[witness] = dst
        moves.append(Move(witness, src, dst))
        _say(logger, f"  ✔ Ход {j + 1}: вершина {witness} перекрашена {src} → {dst}")
    return working, moves, None


def apply_repair_step(
    graph: Graph,
    coloring: Coloring,
    k: int,
    logger: Optional[Logger] = None,
) -> RepairOutcome:
    """Один проход выравнивания: |V+| уменьшается на 1, |V-| увеличивается на 1."""
    if k < 2:
        raise ValueError(f"Нужно хотя бы 2 класса, получено k = {k}")
    if len(graph) == 0:
        raise ValueError("Граф пуст — нечего выравнивать")
    validate_coloring(graph, coloring, k)

    counts = class_counts(coloring, k)
    large, small = extreme_classes(counts)
    _say(logger, f"Размеры классов: {counts}; V+ = {large} ({counts[large]}), V- = {small} ({counts[small]})")

    if counts[large] <= counts[small] + 1:
        _say(logger, "Раскраска уже равномерна — действий не требуется")
        return RepairOutcome(
            ALREADY_EQUITABLE, dict(coloring), "Раскраска уже равномерна", large, small
        )

    aux = build_aux(graph, coloring, k)
    _say(logger, "Дуги вспомогательного орграфа: " + (
        ", ".join(f"{e.source}→{e.target} (свид. {e.witness})" for e in aux.edges) or "нет"
    ))

    path = find_class_path(aux, large, small)
    if path is None:
        _say(logger, f"Класс {small} недостижим из класса {large}")
        return RepairOutcome(
            UNREACHABLE,
            dict(coloring),
            f"Нет пути из V+ = {large} в V- = {small} во вспомогательном орграфе",
            large,
            small,
            aux,
        )
    _say(logger, "Путь классов: " + " → ".join(map(str, path)))

    new_coloring, moves, broken_at = replay_path(graph, coloring, path, logger)
    if new_coloring is None:
        return RepairOutcome(
            PATH_BROKEN,
            dict(coloring),
            f"Путь прерван на позиции {broken_at}: нет допустимого свидетеля",
            large,
            small,
            aux,
            tuple(path),
            tuple(moves),
            broken_at,
        )

    expected = list(counts)
    expected[large] -= 1
    expected[small] += 1
    after = class_counts(new_coloring, k)
    if after != expected:
        raise RuntimeError(f"Нарушен баланс классов: ожидалось {expected}, получено {after}")

    _say(logger, f"Новые размеры классов: {after}")
    return RepairOutcome(
        MOVED,
        new_coloring,
        f"Перенесена одна вершина из класса {large} в класс {small}",
        large,
        small,
        aux,
        tuple(path),
        tuple(moves),
    )


def run_until_equitable(
    graph: Graph,
    coloring: Coloring,
    k: int,
    max_steps: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> Tuple[Coloring, List[RepairOutcome]]:
    """Повторяет apply_repair_step, пока шаги удаются (или до max_steps).

    Каждый удачный шаг строго уменьшает сумму квадратов размеров классов,
    поэтому цикл конечен и без ограничения.
    """
    current = dict(coloring)
    outcomes: List[RepairOutcome] = []
    step = 0
    while max_steps is None or step < max_steps:
        step += 1
        _say(logger, f"[Шаг {step}]")
        outcome = apply_repair_step(graph, current, k, logger)
        outcomes.append(outcome)
        current = outcome.coloring
        if not outcome.changed:
            break
    _say(logger, f"Итог: размеры {class_counts(current, k)}, равномерна: {'ДА' if is_equitable(current, k) else 'НЕТ'}")
    return current, outcomes


def describe_classes(coloring: Coloring, k: int) -> List[str]:
    """Строки «класс i (размер): вершины» для вывода в лог."""
    return [
        f"  класс {i} ({len(members)}): {members}"
        for i, members in enumerate(members_by_class(coloring, k))
    ]
