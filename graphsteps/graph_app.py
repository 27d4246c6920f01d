"""
GUI для пошаговой визуализации двух алгоритмов на неориентированном графе:
  - BFS-поиск кратчайшего пути (полный список шагов, перемотка вперёд/назад, автозапуск);
  - выравнивание раскраски с ограничением степени r (шаг Леммы 2.1) с показом
    вспомогательного орграфа классов.

Граф строится вручную (вершины/рёбра), генераторами или загружается из файла.
Формат файла:
  N
  N строк матрицы; '-' — нет ребра, любое иное значение — есть ребро.
Вершины нумеруются 1..N. Самопетли игнорируются.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

import matplotlib
import matplotlib.pyplot as plt
import tkinter as tk
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from tkinter import filedialog, messagebox, scrolledtext, ttk

from graphsteps import generators
from graphsteps.bfs_steps import NodeNotFoundError, StepReplay, run_bfs
from graphsteps.coloring import ColoringState, class_counts, target_sizes
from graphsteps.equitable import RepairOutcome, apply_repair_step, describe_classes
from graphsteps.graph_model import Graph, GraphHistory, MutationResult, accepted
from graphsteps.render import (
    Pos,
    degree_colors,
    draw_aux,
    draw_bfs_step,
    draw_coloring,
    draw_graph,
)
from graphsteps.steplog import Logger

matplotlib.use("TkAgg")

GENERATORS: Dict[str, Callable[[Graph], MutationResult]] = {
    "Полный граф": generators.complete_graph,
    "Цикл": generators.cycle_graph,
    "Звезда": generators.star_graph,
    "Связный со степенью ≤ r": generators.simulate_edges,
    "Конфликтные рёбра": generators.conflict_prone_edges,
}


class GraphApp:
    """Главное приложение: редактирование графа, пошаговый BFS, выравнивание раскраски."""

    # ------------------------- Инициализация и UI -------------------------

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.root.title("BFS и равномерная раскраска (Лемма 2.1)")
        self.root.geometry("1300x850")

        # Состояние графа/алгоритмов
        self.graph = Graph()
        self.history = GraphHistory(self.graph)
        self.coloring_state = ColoringState(self.graph)
        self.replay: Optional[StepReplay] = None
        self.last_repair: Optional[RepairOutcome] = None
        self.mode: str = "graph"  # graph | bfs | coloring | degree
        self.pos: Pos = {}

        # Управление шагами
        self.auto_running: bool = False
        self.delay = tk.IntVar(value=500)
        self.visualize = tk.BooleanVar(value=True)

        # Тестовые кейсы и ожидания
        self.tests = self._make_tests_data()
        self.test_expectations = self._make_test_expectations()
        self._last_test_name: Optional[str] = None

        self._build_ui()

    def _build_ui(self) -> None:
        """Интерфейс: ряды кнопок, холст с двумя осями, справа логи/статус/результаты."""
        main_pane = ttk.Panedwindow(self.root, orient=tk.HORIZONTAL)
        main_pane.pack(fill=tk.BOTH, expand=True)

        left_frame = tk.Frame(main_pane)
        right_frame = tk.Frame(main_pane, width=380)
        main_pane.add(left_frame, weight=3)
        main_pane.add(right_frame, weight=1)

        btns_container = tk.Frame(left_frame)
        btns_container.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(8, 6))

        # Ряд 1: загрузка, тесты, история
        row1 = tk.Frame(btns_container)
        row1.pack(side=tk.TOP, fill=tk.X)

        tk.Button(row1, text="Загрузить граф из файла", command=self.load_graph) \
            .pack(side=tk.LEFT, padx=5, pady=2)

        tests_mb = tk.Menubutton(row1, text="Тесты", relief=tk.RAISED)
        tests_menu = tk.Menu(tests_mb, tearoff=False)
        tests_mb.configure(menu=tests_menu)
        tests_mb.pack(side=tk.LEFT, padx=5, pady=2)
        for name in sorted(self.tests.keys()):
            tests_menu.add_command(label=name, command=lambda n=name: self.run_test(n))
        tests_menu.add_separator()
        tests_menu.add_command(label="Пример (сетка 16 вершин)", command=self.load_example)
        tests_menu.add_command(label="Очистить граф", command=self.clear_graph)

        gen_mb = tk.Menubutton(row1, text="Генераторы", relief=tk.RAISED)
        gen_menu = tk.Menu(gen_mb, tearoff=False)
        gen_mb.configure(menu=gen_menu)
        gen_mb.pack(side=tk.LEFT, padx=5, pady=2)
        for name in GENERATORS:
            gen_menu.add_command(label=name, command=lambda n=name: self.generate(n))
        gen_menu.add_command(label="Случайные рёбра (5)", command=lambda: self.add_random_edges(5))

        tk.Button(row1, text="Отменить", command=self.undo).pack(side=tk.LEFT, padx=5, pady=2)
        tk.Button(row1, text="Повторить", command=self.redo).pack(side=tk.LEFT, padx=5, pady=2)

        # Ряд 2: редактирование графа
        row2 = tk.Frame(btns_container)
        row2.pack(side=tk.TOP, fill=tk.X, pady=(4, 0))

        tk.Button(row2, text="+ вершина", command=self.add_node).pack(side=tk.LEFT, padx=5, pady=2)
        self.node_entry = tk.Entry(row2, width=5)
        self.node_entry.pack(side=tk.LEFT)
        tk.Button(row2, text="Удалить вершину", command=self.delete_node).pack(side=tk.LEFT, padx=5)
        tk.Button(row2, text="+N вершин", command=self.add_many_nodes).pack(side=tk.LEFT)

        self.edge_a = tk.Entry(row2, width=5)
        self.edge_a.pack(side=tk.LEFT, padx=(10, 0))
        self.edge_b = tk.Entry(row2, width=5)
        self.edge_b.pack(side=tk.LEFT)
        tk.Button(row2, text="+ ребро", command=self.add_edge).pack(side=tk.LEFT, padx=5)
        tk.Button(row2, text="− ребро", command=self.delete_edge).pack(side=tk.LEFT)

        tk.Label(row2, text="r:").pack(side=tk.LEFT, padx=(10, 0))
        self.r_entry = tk.Entry(row2, width=5)
        self.r_entry.pack(side=tk.LEFT)
        tk.Button(row2, text="Задать r", command=self.set_max_degree).pack(side=tk.LEFT, padx=5)

        # Ряд 2б: рёбра списком
        row2b = tk.Frame(btns_container)
        row2b.pack(side=tk.TOP, fill=tk.X, pady=(4, 0))
        tk.Label(row2b, text="Рёбра списком:").pack(side=tk.LEFT, padx=(5, 0))
        self.bulk_entry = tk.Entry(row2b, width=30)
        self.bulk_entry.pack(side=tk.LEFT, padx=5)
        tk.Button(row2b, text="Применить", command=self.apply_bulk_edges).pack(side=tk.LEFT)
        tk.Button(row2b, text="Удалить все рёбра", command=self.clear_edges).pack(side=tk.LEFT, padx=5)
        tk.Button(row2b, text="Свойства", command=self.show_properties).pack(side=tk.LEFT)

        # Ряд 3: алгоритмы
        row3 = tk.Frame(btns_container)
        row3.pack(side=tk.TOP, fill=tk.X, pady=(4, 0))

        tk.Label(row3, text="BFS:").pack(side=tk.LEFT)
        self.start_entry = tk.Entry(row3, width=5)
        self.start_entry.pack(side=tk.LEFT)
        self.end_entry = tk.Entry(row3, width=5)
        self.end_entry.pack(side=tk.LEFT)
        tk.Button(row3, text="Найти путь", command=self.start_bfs).pack(side=tk.LEFT, padx=5)

        self.prev_btn = tk.Button(row3, text="◀", command=self.prev_step, state=tk.DISABLED)
        self.prev_btn.pack(side=tk.LEFT)
        self.step_btn = tk.Button(
            row3, text="▶", command=lambda: self.next_step(from_auto=False), state=tk.DISABLED
        )
        self.step_btn.pack(side=tk.LEFT)
        self.auto_btn = tk.Button(row3, text="Автозапуск", command=self.toggle_auto_run, state=tk.DISABLED)
        self.auto_btn.pack(side=tk.LEFT, padx=5)

        tk.Label(row3, text="Раскраска:").pack(side=tk.LEFT, padx=(15, 0))
        tk.Button(row3, text="Жадная", command=self.apply_greedy).pack(side=tk.LEFT, padx=5)
        tk.Button(row3, text="Шаг Леммы 2.1", command=self.repair_step).pack(side=tk.LEFT)
        tk.Button(row3, text="По степени", command=self.show_by_degree).pack(side=tk.LEFT, padx=5)

        # Ряд 4: опции/скорость
        row4 = tk.Frame(btns_container)
        row4.pack(side=tk.TOP, fill=tk.X, pady=(4, 0))
        tk.Checkbutton(row4, text="Визуализация", variable=self.visualize).pack(side=tk.LEFT, padx=5)
        speed_frame = tk.Frame(row4)
        speed_frame.pack(side=tk.LEFT, padx=10, pady=2)
        tk.Label(speed_frame, text="Скорость:").pack(side=tk.LEFT)
        tk.Scale(
            speed_frame, from_=50, to=2000, orient=tk.HORIZONTAL,
            variable=self.delay, length=160, showvalue=True
        ).pack(side=tk.LEFT)
        tk.Label(speed_frame, text="мс").pack(side=tk.LEFT)

        # Площадка графа: слева граф, справа орграф классов
        graph_holder = tk.Frame(left_frame, borderwidth=1, relief=tk.GROOVE)
        graph_holder.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10, pady=(0, 10))
        self.fig, (self.ax, self.aux_ax) = plt.subplots(
            1, 2, figsize=(10, 6), gridspec_kw={"width_ratios": [3, 2]}
        )
        self.canvas = FigureCanvasTkAgg(self.fig, master=graph_holder)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True, pady=5)

        # Правая панель
        status_box = tk.Frame(right_frame)
        status_box.pack(side=tk.TOP, fill=tk.X, padx=8, pady=8)
        tk.Label(status_box, text="Логи выполнения:", font=("Arial", 10, "bold")).pack(anchor=tk.W)

        right_pane = ttk.Panedwindow(right_frame, orient=tk.VERTICAL)
        right_pane.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 8))
        logs_frame = tk.Frame(right_pane)
        results_frame = tk.Frame(right_pane)
        right_pane.add(logs_frame, weight=3)
        right_pane.add(results_frame, weight=2)

        self.log_text = scrolledtext.ScrolledText(logs_frame, height=20, width=44)
        self.log_text.pack(fill=tk.BOTH, expand=True)

        info_frame = tk.Frame(right_frame)
        info_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(0, 6))
        tk.Label(info_frame, text="Статус:", font=("Arial", 9, "bold")).grid(row=0, column=0, sticky="w")
        self.status_var = tk.StringVar(value="Граф пуст")
        tk.Label(info_frame, textvariable=self.status_var, foreground="blue") \
            .grid(row=0, column=1, sticky="w", padx=6)

        tk.Label(info_frame, text="Шаг:", font=("Arial", 9, "bold")).grid(row=1, column=0, sticky="w", pady=(4, 0))
        self.step_var = tk.StringVar(value="0/0")
        tk.Label(info_frame, textvariable=self.step_var).grid(row=1, column=1, sticky="w", padx=6, pady=(4, 0))

        tk.Label(results_frame, text="Результаты:", font=("Arial", 9, "bold")) \
            .pack(anchor=tk.W, pady=(0, 4))
        self.result_text = scrolledtext.ScrolledText(results_frame, height=8, width=44)
        self.result_text.pack(fill=tk.BOTH, expand=True)

    # ------------------------- Редактирование графа -------------------------

    def _apply_mutation(self, result: MutationResult, operation: str = "") -> bool:
        """Общая обработка изменения графа: лог, история, сброс результатов алгоритмов."""
        if not result.ok:
            self.add_log(f"ОШИБКА: {result.reason}")
            self.update_status(result.reason)
            return False
        self.add_log(result.reason)
        if result.kind != "no_change":
            self.history.record(operation or result.reason)
            self._invalidate_results()
        self.update_status(result.reason)
        self.viz_draw()
        return True

    def _invalidate_results(self) -> None:
        self.stop_auto_run()
        self.replay = None
        self.last_repair = None
        self.mode = "graph"
        self.prev_btn.config(state=tk.DISABLED)
        self.step_btn.config(state=tk.DISABLED)
        self.auto_btn.config(state=tk.DISABLED)
        self.update_step_counter()

    def _read_int(self, entry: tk.Entry, what: str) -> Optional[int]:
        text = entry.get().strip()
        try:
            return int(text)
        except ValueError:
            self.add_log(f"ОШИБКА: {what}: ожидается целое число, получено «{text}»")
            return None

    def add_node(self) -> None:
        node = self.graph.add_node()
        self.history.record(f"Добавлена вершина {node}")
        self._invalidate_results()
        self.add_log(f"Добавлена вершина {node}")
        self.viz_draw()

    def delete_node(self) -> None:
        node = self._read_int(self.node_entry, "вершина")
        if node is not None:
            self._apply_mutation(self.graph.remove_node(node))

    def add_many_nodes(self) -> None:
        """Несколько вершин сразу; количество берётся из поля вершины."""
        count = self._read_int(self.node_entry, "количество вершин")
        if count is not None:
            self._apply_mutation(self.graph.add_nodes(count))

    def add_edge(self) -> None:
        a = self._read_int(self.edge_a, "начало ребра")
        b = self._read_int(self.edge_b, "конец ребра")
        if a is not None and b is not None:
            self._apply_mutation(self.graph.add_edge(a, b))

    def delete_edge(self) -> None:
        a = self._read_int(self.edge_a, "начало ребра")
        b = self._read_int(self.edge_b, "конец ребра")
        if a is not None and b is not None:
            self._apply_mutation(self.graph.remove_edge(a, b))

    def apply_bulk_edges(self) -> None:
        self._apply_mutation(generators.apply_bulk_edges(self.graph, self.bulk_entry.get()),
                             "Рёбра списком")

    def clear_edges(self) -> None:
        if not self.graph.edges:
            self.update_status("Рёбер нет")
            return
        self.graph.clear_edges()
        self._apply_mutation(accepted("Все рёбра удалены"))

    def show_properties(self) -> None:
        props = self.graph.properties()
        self.result_text.delete(1.0, tk.END)
        self.result_text.insert(tk.END, "Свойства графа:\n")
        self.result_text.insert(tk.END, f"  вершин: {props['nodes']}\n")
        self.result_text.insert(tk.END, f"  рёбер: {props['edges']}\n")
        self.result_text.insert(tk.END, f"  компонент связности: {props['components']}\n")
        self.result_text.insert(tk.END, f"  максимальная степень: {props['max_degree']}\n")
        self.result_text.insert(tk.END, f"  средняя степень: {props['average_degree']}\n")
        if self.graph.max_degree is not None:
            self.result_text.insert(tk.END, f"  ограничение r: {self.graph.max_degree}\n")

    def set_max_degree(self) -> None:
        text = self.r_entry.get().strip()
        if not text:
            result = self.coloring_state.set_max_degree(None)
        else:
            r = self._read_int(self.r_entry, "r")
            if r is None:
                return
            result = self.coloring_state.set_max_degree(r)
        if result.ok:
            self.add_log(result.reason)
            self.last_repair = None
            self.mode = "coloring" if self.coloring_state.k else "graph"
            self.viz_draw()
        else:
            self.add_log(f"ОШИБКА: {result.reason}")
        self.update_status(result.reason)

    def generate(self, name: str) -> None:
        self._apply_mutation(GENERATORS[name](self.graph), name)

    def add_random_edges(self, count: int) -> None:
        self._apply_mutation(generators.random_edges(self.graph, count), "Случайные рёбра")

    def undo(self) -> None:
        r = self.graph.max_degree
        label = self.history.undo()
        if label is not None:
            self._invalidate_results()
            self.add_log(f"Отменено: {label}")
            self._check_bound_dropped(r)
            self.viz_draw()

    def redo(self) -> None:
        r = self.graph.max_degree
        label = self.history.redo()
        if label is not None:
            self._invalidate_results()
            self.add_log(f"Повторено: {label}")
            self._check_bound_dropped(r)
            self.viz_draw()

    def clear_graph(self) -> None:
        """Полный сброс графа и полей вывода."""
        self.graph.clear()
        self.history = GraphHistory(self.graph)
        self.coloring_state.reset_coloring()
        self._invalidate_results()
        self.log_text.delete(1.0, tk.END)
        self.result_text.delete(1.0, tk.END)
        self.update_status("Граф очищен")
        self.viz_draw()

    def load_example(self) -> None:
        example, start, end = generators.example_graph()
        self._replace_graph(example, "Пример: сетка из 16 вершин")
        self.start_entry.delete(0, tk.END)
        self.start_entry.insert(0, str(start))
        self.end_entry.delete(0, tk.END)
        self.end_entry.insert(0, str(end))
        self.add_log(f"Попробуйте BFS из {start} в {end}!")

    def _check_bound_dropped(self, before: Optional[int]) -> None:
        """Снимок мог нарушить ограничение степени; Graph.restore тогда снимает его."""
        if before is not None and self.graph.max_degree is None:
            self.coloring_state.reset_coloring()
            self.add_log(f"Ограничение степени r = {before} снято: граф его нарушает")

    def _replace_graph(self, other: Graph, operation: str) -> None:
        r = self.graph.max_degree
        self.graph.restore(other.snapshot())
        self.coloring_state.reset_coloring()
        self._check_bound_dropped(r)
        self.history.record(operation)
        self._invalidate_results()
        self.add_log(operation)
        self.update_status(operation)
        self.viz_draw()

    # ------------------------- BFS -------------------------

    def start_bfs(self) -> bool:
        start = self._read_int(self.start_entry, "старт")
        end = self._read_int(self.end_entry, "цель")
        if start is None or end is None:
            return False
        try:
            steps = run_bfs(self.graph, start, end)
        except NodeNotFoundError as exc:
            self.add_log(f"ОШИБКА: {exc}")
            messagebox.showwarning("Предупреждение", str(exc))
            return False

        self.stop_auto_run()
        self.replay = StepReplay(steps)
        self.mode = "bfs"
        self.add_log("=" * 50)
        self.add_log(f"BFS {start} → {end}: {len(steps)} шагов")
        self.add_log("=" * 50)
        self.prev_btn.config(state=tk.NORMAL)
        self.step_btn.config(state=tk.NORMAL)
        self.auto_btn.config(state=tk.NORMAL)
        self.show_step()
        return True

    def show_step(self) -> None:
        if self.replay is None:
            return
        step = self.replay.current
        self.add_log(f"Шаг {step.step_index}: {step.description}")
        self.update_status(step.description)
        self.update_step_counter()
        self.viz_draw()
        if self.replay.at_end:
            self.finalize_bfs()

    def next_step(self, from_auto: bool = False) -> None:
        """Следующий шаг. По клику во время автозапуска — останавливает его."""
        if not from_auto and self.auto_running:
            self.stop_auto_run()
            return
        if self.replay is None or self.replay.at_end:
            return
        self.replay.next()
        self.show_step()

    def prev_step(self) -> None:
        if self.replay is None:
            return
        self.stop_auto_run()
        self.replay.prev()
        self.show_step()

    def finalize_bfs(self) -> None:
        """Итог BFS: путь и расстояния на последнем шаге."""
        assert self.replay is not None
        last = self.replay.steps[-1]
        self.result_text.delete(1.0, tk.END)
        if last.path_found:
            self.result_text.insert(tk.END, f"Путь: {' → '.join(map(str, last.final_path))}\n")
            self.result_text.insert(tk.END, f"Длина: {len(last.final_path) - 1}\n\n")
        else:
            self.result_text.insert(tk.END, "Путь не найден\n\n")
        self.result_text.insert(tk.END, "Расстояния:\n")
        for node, d in sorted(last.distance.items()):
            self.result_text.insert(tk.END, f"{node}: {d}\n")

        if self._last_test_name and self._last_test_name in self.test_expectations:
            exp = self.test_expectations[self._last_test_name]
            self.add_log(f"[Ожидаемо] длина пути: {exp['length'] if exp['length'] is not None else 'нет пути'}")

    # ------------------------- Автозапуск -------------------------

    def toggle_auto_run(self) -> None:
        if not self.auto_running:
            if self.replay is None or self.replay.at_end:
                return
            self.auto_btn.config(text="Остановить")
            self.auto_running = True
            self._auto_tick()
        else:
            self.stop_auto_run()

    def stop_auto_run(self) -> None:
        self.auto_running = False
        self.auto_btn.config(text="Автозапуск")

    def _auto_tick(self) -> None:
        if self.auto_running and self.replay is not None and not self.replay.at_end:
            self.next_step(from_auto=True)
            if self.auto_running:
                self.root.after(self.delay.get(), self._auto_tick)
        else:
            self.stop_auto_run()

    # ------------------------- Раскраска -------------------------

    def _require_k(self) -> Optional[int]:
        k = self.coloring_state.k
        if k is None:
            messagebox.showwarning("Предупреждение", "Сначала задайте максимальную степень r!")
        return k

    def apply_greedy(self) -> None:
        if self._require_k() is None:
            return
        result = self.coloring_state.apply_greedy()
        self.add_log(result.reason if result.ok else f"ОШИБКА: {result.reason}")
        self.update_status(result.reason)
        self.mode = "coloring"
        self.last_repair = None
        self.show_coloring_summary()
        self.viz_draw()

    def repair_step(self) -> Optional[RepairOutcome]:
        """Один шаг Леммы 2.1 над текущей раскраской."""
        k = self._require_k()
        if k is None:
            return None
        coloring = self.coloring_state.current_coloring()
        logger = Logger(echo=False)
        try:
            outcome = apply_repair_step(self.graph, coloring, k, logger)
        except ValueError as exc:
            self.add_log(f"ОШИБКА: {exc}")
            self.update_status(str(exc))
            return None

        self.add_log("=" * 50)
        self.add_log("ШАГ ЛЕММЫ 2.1")
        for line in logger.lines:
            self.add_log(line)
        if outcome.changed:
            self.coloring_state.set_coloring(outcome.coloring)
        self.last_repair = outcome
        self.mode = "coloring"
        self.update_status(outcome.reason)
        self.show_coloring_summary()
        self.viz_draw()
        return outcome

    def show_by_degree(self) -> None:
        """Вершины окрашены по степени; нужна заданная максимальная степень r."""
        if self._require_k() is None:
            return
        self.stop_auto_run()
        self.last_repair = None
        self.mode = "degree"
        degrees = self.graph.degrees()
        self.result_text.delete(1.0, tk.END)
        self.result_text.insert(tk.END, f"Степени (r = {self.graph.max_degree}):\n")
        for node, d in degrees.items():
            self.result_text.insert(tk.END, f"  {node}: {d}\n")
        self.update_status("Раскраска по степени")
        self.viz_draw()

    def show_coloring_summary(self) -> None:
        k = self.coloring_state.k
        if k is None:
            return
        coloring = self.coloring_state.current_coloring()
        self.result_text.delete(1.0, tk.END)
        self.result_text.insert(tk.END, f"k = {k}\n")
        self.result_text.insert(tk.END, f"Размеры: {class_counts(coloring, k)}\n")
        self.result_text.insert(tk.END, f"Цель: {target_sizes(len(self.graph), k)}\n")
        self.result_text.insert(
            tk.END, f"Равномерная: {'ДА' if self.coloring_state.is_equitable() else 'НЕТ'}\n"
        )
        self.result_text.insert(
            tk.END, f"Правильная: {'ДА' if self.coloring_state.is_proper() else 'НЕТ'}\n\n"
        )
        for line in describe_classes(coloring, k):
            self.result_text.insert(tk.END, line + "\n")

    # ------------------------- Загрузка / парсинг -------------------------

    def load_graph(self) -> None:
        filename = filedialog.askopenfilename(
            title="Выберите файл с графом",
            filetypes=[("Текстовые файлы", "*.txt"), ("Все файлы", "*.*")],
        )
        if not filename:
            return

        try:
            self.add_log(f"Загрузка графа из файла: {filename}")
            with open(filename, "r", encoding="utf-8") as f:
                text = f.read()
            self._load_graph_from_text(text, source_name=filename)
        except (OSError, ValueError) as exc:
            self.add_log(f"ОШИБКА: {exc}")
            messagebox.showerror("Ошибка", f"Ошибка при загрузке файла:\n{exc}")

    def _load_graph_from_text(self, text: str, source_name: str = "текст") -> None:
        loaded = generators.parse_matrix_text(text)
        self._replace_graph(loaded, f"Граф загружен из: {source_name}")

    # ------------------------- Вспомогательные: UI -------------------------

    def viz_draw(self) -> None:
        """Перерисовать граф в текущем режиме (граф / шаг BFS / раскраска)."""
        if not self.visualize.get():
            return
        self.draw_graph()
        self.root.update_idletasks()

    def add_log(self, message: str) -> None:
        self.log_text.insert(tk.END, f"{message}\n")
        self.log_text.see(tk.END)
        if self.visualize.get():
            self.root.update_idletasks()

    def update_status(self, message: str) -> None:
        self.status_var.set(message)
        if self.visualize.get():
            self.root.update_idletasks()

    def update_step_counter(self) -> None:
        self.step_var.set(self.replay.counter() if self.replay is not None else "0/0")

    # ------------------------- Отрисовка -------------------------

    def draw_graph(self) -> None:
        k = self.coloring_state.k
        if self.mode == "bfs" and self.replay is not None:
            self.pos = draw_bfs_step(self.ax, self.graph, self.replay.current, self.pos)
        elif self.mode == "coloring" and k is not None and len(self.graph):
            self.pos = draw_coloring(self.ax, self.graph, self.coloring_state.current_coloring(), k, self.pos)
        elif self.mode == "degree":
            self.pos = draw_graph(self.ax, self.graph, self.pos, node_colors=degree_colors(self.graph),
                                  title=f"Степени вершин (r = {self.graph.max_degree})")
        else:
            self.pos = draw_graph(self.ax, self.graph, self.pos, title="Граф")

        if self.last_repair is not None and self.last_repair.aux is not None:
            draw_aux(self.aux_ax, self.last_repair.aux, self.last_repair.path)
        else:
            self.aux_ax.clear()
            self.aux_ax.set_axis_off()
        self.fig.tight_layout()
        self.canvas.draw()

    # ------------------------- Тесты -------------------------

    def _make_tests_data(self) -> Dict[str, str]:
        return {
            "1) path_3": """3
- 1 -
1 - 1
- 1 -""",
            "2) isolated_2": """2
- -
- -""",
            "3) cycle_6": """6
- 1 - - - 1
1 - 1 - - -
- 1 - 1 - -
- - 1 - 1 -
- - - 1 - 1
1 - - - 1 -""",
            "4) two_components_6": """6
- 1 - - - -
1 - 1 - - -
- 1 - - - -
- - - - 1 -
- - - 1 - 1
- - - - 1 -""",
            "5) star_5": """5
- 1 1 1 1
1 - - - -
1 - - - -
1 - - - -
1 - - - -""",
            "6) weighted_grid_4": """4
- 0 -5 -
0 - - 2
-5 - - 7
- 2 7 -""",
        }

    def _make_test_expectations(self) -> Dict[str, Dict]:
        # BFS из вершины 1 в последнюю вершину графа
        return {
            "1) path_3": dict(start=1, end=3, length=2),
            "2) isolated_2": dict(start=1, end=2, length=None),
            "3) cycle_6": dict(start=1, end=6, length=1),
            "4) two_components_6": dict(start=1, end=6, length=None),
            "5) star_5": dict(start=1, end=5, length=1),
            "6) weighted_grid_4": dict(start=1, end=4, length=2),
        }

    def run_test(self, name: str) -> None:
        self._last_test_name = name
        text = self.tests[name]
        self.log_text.delete(1.0, tk.END)
        self.result_text.delete(1.0, tk.END)

        self.add_log(f"=== Тест: {name} ===")
        exp = self.test_expectations.get(name, {})
        self._load_graph_from_text(text, source_name=f"тест «{name}»")
        for entry, value in ((self.start_entry, exp["start"]), (self.end_entry, exp["end"])):
            entry.delete(0, tk.END)
            entry.insert(0, str(value))
        length = exp["length"]
        self.add_log(f"[Ожидаемо] длина пути {exp['start']} → {exp['end']}: "
                     f"{length if length is not None else 'нет пути'}")


# ------------------------- Точка входа -------------------------

def main() -> None:
    root = tk.Tk()
    GraphApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
