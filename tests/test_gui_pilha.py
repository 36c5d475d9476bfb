import math

import pytest

pytest.importorskip("tkinter")
pytest.importorskip("PIL")

from core.pilha import EPSILON  # noqa: E402
from core.leitor import parse_pda  # noqa: E402
from gui.gui_pilha import STATE_RADIUS, circle_layout, drawn_states, edge_label  # noqa: E402


def test_circle_layout_single_state_is_centered():
    assert circle_layout(1, 400, 300) == {0: (200, 150)}


def test_circle_layout_starts_on_the_left():
    positions = circle_layout(4, 400, 400)
    assert sorted(positions) == [0, 1, 2, 3]
    x0, y0 = positions[0]
    assert x0 < 200 and y0 == pytest.approx(200)
    radii = {round(math.hypot(x - 200, y - 200), 6) for x, y in positions.values()}
    assert len(radii) == 1
    assert radii.pop() >= 2 * STATE_RADIUS


def test_edge_label_uses_epsilon_sign():
    assert edge_label("(", "Z", ("(", "Z")) == "(, Z / (Z"
    assert edge_label(EPSILON, "Z", ()) == "ε, Z / ε"


def test_drawn_states_include_dead_state_used_as_source():
    # Uma transição que sai do estado morto também precisa de posição no canvas
    pda = parse_pda("1\n0\na\nZ\n1 a Z -> 0 / Z\n")
    states = drawn_states(pda)
    assert states == [0, 1]
    assert set(circle_layout(len(states), 400, 300)) >= {t.src for t in pda.transitions.values()}


def test_drawn_states_include_dead_state_used_as_target():
    pda = parse_pda("1\n0\na\nZ\n0 a Z -> 1 / Z\n")
    assert drawn_states(pda) == [0, 1]


def test_drawn_states_without_dead_state(parenteses):
    assert drawn_states(parenteses) == [0, 1]


@pytest.fixture
def tk_root():
    import tkinter as tk
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("sem display disponível")
    root.withdraw()
    yield root
    root.destroy()


def test_dica_evaluates_text_on_each_show(tk_root):
    from tkinter import ttk
    from gui.gui_pilha import Dica

    label = ttk.Label(tk_root, text="info")
    texts = iter(["primeira", "segunda"])
    dica = Dica(label, lambda: next(texts), delay_ms=10)

    dica._show()
    shown = dica._window.winfo_children()[0].cget("text")
    dica._hide()
    assert dica._window is None
    dica._show()
    assert str(shown) == "primeira"
    assert str(dica._window.winfo_children()[0].cget("text")) == "segunda"
    dica._hide()


def test_dica_with_empty_text_shows_nothing(tk_root):
    from tkinter import ttk
    from gui.gui_pilha import Dica

    dica = Dica(ttk.Label(tk_root), lambda: "")
    dica._show()
    assert dica._window is None
