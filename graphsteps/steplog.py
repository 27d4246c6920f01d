"""
Журнал шагов алгоритмов.

Один и тот же журнал используют консольный запуск (no_gui) и GUI:
строки копятся в памяти, при необходимости дублируются в stdout
и в конце сбрасываются в файл.
"""

from __future__ import annotations

from typing import List


class Logger:
    """Копит строки логов и дублирует их в stdout."""

    def __init__(self, echo: bool = True) -> None:
        self.lines: List[str] = []
        self.echo = echo

    def log(self, msg: str = "") -> None:
        self.lines.append(msg)
        if self.echo:
            print(msg)

    def clear(self) -> None:
        self.lines.clear()

    def dump_to_file(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(self.lines))
