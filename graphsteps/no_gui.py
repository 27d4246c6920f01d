# no_gui.py
"""
Консольный запуск: пошаговый BFS и выравнивание раскраски (Лемма 2.1).
Формат входного файла:
  1-я строка: N (число вершин, нумерация 1..N)
  далее N строк: матрица; '-' = нет ребра, любое другое значение = есть ребро.
Все графы считаются НЕОРИЕНТИРОВАННЫМИ. Самопетли игнорируются.

Программа:
- читает файл и строит неориентированный граф,
- bfs: строит все шаги BFS от --start до --end и печатает их,
- equitable: при ограничении степени r раскрашивает граф в k = r + 1 классов
  и повторяет шаг выравнивания, пока классы не станут равномерными,
- по окончании пишет ВСЕ шаги в файл (по умолчанию steps.log).
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from graphsteps.bfs_steps import BFSStep, run_bfs
from graphsteps.coloring import (
    Coloring,
    class_counts,
    conflict_edges,
    greedy_coloring,
    is_equitable,
    seed_coloring,
    target_sizes,
)
from graphsteps.equitable import describe_classes, run_until_equitable
from graphsteps.generators import parse_matrix_text
from graphsteps.graph_model import Graph
from graphsteps.steplog import Logger


# ---------- Загрузка графа ----------

def load_graph(path: str, logger: Logger, max_degree: Optional[int] = None) -> Graph:
    logger.log(f"Чтение файла: {path}")
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    graph = parse_matrix_text(text)
    if max_degree is not None:
        result = graph.set_max_degree(max_degree)
        if not result.ok:
            raise ValueError(result.reason)
    logger.log(f"Загружено: N={len(graph)}, |E|={len(graph.edges)} (неориентированный)")
    return graph


# ---------- BFS ----------

def print_bfs_steps(steps: List[BFSStep], logger: Logger) -> None:
    logger.log("\n=== Пошаговый BFS ===")
    for step in steps:
        logger.log(f"[Шаг {step.step_index}] {step.action}: {step.description}")
        logger.log(f"    очередь: {list(step.queue)}")
        logger.log(f"    посещены: {sorted(step.visited)}")
        logger.log(f"    расстояния: {dict(sorted(step.distance.items()))}")
    logger.log("=== Завершение BFS ===\n")

    last = steps[-1]
    logger.log("ИТОГ:")
    if last.path_found:
        logger.log(f"  Кратчайший путь: {' → '.join(map(str, last.final_path))}")
        logger.log(f"  Длина: {len(last.final_path) - 1}")
    else:
        logger.log("  Путь не найден")


# ---------- Выравнивание раскраски ----------

def run_equitable(
    graph: Graph,
    logger: Logger,
    seed: str = "greedy",
    max_steps: Optional[int] = None,
) -> Coloring:
    if graph.max_degree is None:
        raise ValueError("Для выравнивания нужно ограничение степени r (-r)")
    if max_steps is not None and max_steps < 1:
        raise ValueError(f"--max-steps должно быть не меньше 1, получено {max_steps}")
    k = graph.max_degree + 1
    coloring = greedy_coloring(graph, k) if seed == "greedy" else seed_coloring(graph, k)

    logger.log(f"\n=== Выравнивание раскраски: r = {graph.max_degree}, k = {k} ===")
    logger.log(f"Затравка: {seed}")
    for line in describe_classes(coloring, k):
        logger.log(line)
    conflicts = conflict_edges(graph, coloring)
    if conflicts:
        logger.log(f"Внимание: раскраска неправильная, конфликтных рёбер: {len(conflicts)}")
    logger.log(f"Целевые размеры: {target_sizes(len(graph), k)}\n")

    final, outcomes = run_until_equitable(graph, coloring, k, max_steps=max_steps, logger=logger)

    logger.log("\nИТОГ:")
    logger.log(f"  Шагов выполнено: {sum(1 for o in outcomes if o.changed)}")
    logger.log(f"  Последний исход: {outcomes[-1].status} — {outcomes[-1].reason}")
    logger.log(f"  Размеры классов: {class_counts(final, k)}")
    logger.log(f"  Равномерная: {'ДА' if is_equitable(final, k) else 'НЕТ'}")
    for line in describe_classes(final, k):
        logger.log(line)
    return final


# ---------- Главная программа ----------

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Пошаговый BFS и выравнивание раскраски (Лемма 2.1) + лог в файл."
    )
    parser.add_argument("input", help="путь к входному файлу с графом")
    parser.add_argument("--algo", choices=["bfs", "equitable"], default="bfs", help="алгоритм")
    parser.add_argument("--start", type=int, help="стартовая вершина BFS")
    parser.add_argument("--end", type=int, help="конечная вершина BFS")
    parser.add_argument("-r", "--max-degree", type=int, help="ограничение степени r (k = r + 1)")
    parser.add_argument("--seed", choices=["greedy", "default"], default="greedy",
                        help="начальная раскраска: жадная или (id - 1) mod k")
    parser.add_argument("--max-steps", type=int, help="ограничение на число шагов выравнивания")
    parser.add_argument(
        "-o",
        "--output",
        default="steps.log",
        help="файл для записи всех шагов (по умолчанию steps.log)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="не дублировать лог в stdout")
    args = parser.parse_args(argv)

    logger = Logger(echo=not args.quiet)
    try:
        graph = load_graph(args.input, logger, args.max_degree)
        if args.algo == "bfs":
            if args.start is None or args.end is None:
                raise ValueError("Для BFS нужны --start и --end")
            print_bfs_steps(run_bfs(graph, args.start, args.end), logger)
        else:
            run_equitable(graph, logger, seed=args.seed, max_steps=args.max_steps)
    except (OSError, ValueError) as e:
        logger.log(f"\nОШИБКА: {e}")
        logger.dump_to_file(args.output)
        sys.exit(1)

    # Записываем все шаги в файл
    logger.dump_to_file(args.output)
    logger.log(f"\nПолный лог шагов сохранён в файл: {args.output}")


if __name__ == "__main__":
    main()
