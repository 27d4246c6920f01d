import pytest

tk = pytest.importorskip("tkinter")


@pytest.fixture
def app():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("нет дисплея для tkinter")
    from graphsteps.graph_app import GraphApp

    a = GraphApp(root)
    a.visualize.set(False)
    yield a
    root.destroy()


def run_to_end(app, limit: int = 1000) -> None:
    """Гоняем шаги BFS до конца без отрисовки."""
    assert app.start_bfs()
    for _ in range(limit):
        if app.replay.at_end:
            break
        app.next_step(from_auto=True)


@pytest.mark.parametrize(
    "name",
    [
        "1) path_3",
        "2) isolated_2",
        "3) cycle_6",
        "4) two_components_6",
        "5) star_5",
        "6) weighted_grid_4",
    ],
)
def test_builtin_cases(app, name):
    app.run_test(name)
    run_to_end(app)
    last = app.replay.current
    expected = app.test_expectations[name]["length"]
    if expected is None:
        assert not last.path_found
    else:
        assert len(last.final_path) - 1 == expected


def test_unknown_start_is_reported(app, monkeypatch):
    warnings = []
    monkeypatch.setattr("graphsteps.graph_app.messagebox.showwarning", lambda *a: warnings.append(a))
    app.run_test("1) path_3")
    app.start_entry.delete(0, tk.END)
    app.start_entry.insert(0, "42")
    assert not app.start_bfs()
    assert warnings
    assert app.replay is None


def test_edit_undo_redo(app):
    for _ in range(3):
        app.add_node()
    app.edge_a.insert(0, "1")
    app.edge_b.insert(0, "2")
    app.add_edge()
    assert app.graph.edges == [(1, 2)]
    app.undo()
    assert app.graph.edges == []
    app.redo()
    assert app.graph.edges == [(1, 2)]


def test_repair_until_equitable(app):
    for _ in range(7):
        app.add_node()
    app.r_entry.insert(0, "3")
    app.set_max_degree()
    assert app.coloring_state.k == 4

    app.apply_greedy()
    assert app.coloring_state.class_counts() == [7, 0, 0, 0]

    for _ in range(10):
        outcome = app.repair_step()
        if not outcome.changed:
            break
    assert outcome.status == "already_equitable"
    assert app.coloring_state.is_equitable()
    assert app.coloring_state.is_proper()


def test_bulk_nodes_edges_and_properties(app):
    app.node_entry.insert(0, "4")
    app.add_many_nodes()
    assert app.graph.nodes == [1, 2, 3, 4]

    app.bulk_entry.insert(0, "1-2, 2-3, 3-4")
    app.apply_bulk_edges()
    assert app.graph.edges == [(1, 2), (2, 3), (3, 4)]

    app.show_properties()
    assert "компонент связности: 1" in app.result_text.get(1.0, tk.END)

    app.clear_edges()
    assert app.graph.edges == []
    app.undo()
    assert app.graph.edges == [(1, 2), (2, 3), (3, 4)]


def test_example_drops_too_small_bound(app):
    app.r_entry.insert(0, "2")
    app.set_max_degree()
    assert app.coloring_state.k == 3

    app.load_example()
    assert app.graph.max_current_degree() == 4
    assert app.graph.max_degree is None
    assert app.coloring_state.k is None
    assert "снято" in app.log_text.get(1.0, tk.END)


def test_degree_view(app, monkeypatch):
    warnings = []
    monkeypatch.setattr("graphsteps.graph_app.messagebox.showwarning", lambda *a: warnings.append(a))
    app.show_by_degree()
    assert warnings and app.mode == "graph"

    app.load_example()
    app.r_entry.insert(0, "4")
    app.set_max_degree()
    app.show_by_degree()
    assert app.mode == "degree"
    assert "Степени (r = 4)" in app.result_text.get(1.0, tk.END)
