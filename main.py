"""
Точка входа GUI: пошаговый BFS и равномерная раскраска графа (Лемма 2.1).

Запуск:  python main.py
Консольный вариант без окна:  python -m graphsteps.no_gui graph.txt --algo bfs --start 1 --end 5
"""

from graphsteps.graph_app import main

if __name__ == "__main__":
    main()
