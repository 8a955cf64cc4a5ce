import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from gridtactoe.board import Mark  # noqa: E402
from gridtactoe.config import GameMode  # noqa: E402
from gridtactoe.ui.main_window import GridTacToeWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    win = GridTacToeWindow(ai_delay_ms=0)
    yield win
    win.close()


def test_starts_with_x_to_move(window):
    assert window.session.board_size == 3
    assert window.session.config.mode is GameMode.HUMAN
    assert "X" in window.message_label.text()


def test_click_places_mark(window):
    window._on_cell_clicked(1, 1)
    assert window.session.board[1, 1] is Mark.X
    assert "O" in window.message_label.text()


def test_occupied_click_shows_error(window):
    window._on_cell_clicked(0, 0)
    window._on_cell_clicked(0, 0)
    assert "taken" in window.message_label.text()
    assert window.session.move_count == 1


def test_size_change_starts_new_session(window):
    window._on_cell_clicked(0, 0)
    window.size_combo.setCurrentIndex(window.size_combo.findData(7))
    assert window.session.board_size == 7
    assert window.session.run_length == 4
    assert window.session.move_count == 0
    assert window.board_widget.session is window.session


def test_computer_answers(window):
    window.mode_combo.setCurrentIndex(window.mode_combo.findData(GameMode.COMPUTER.value))
    window._on_cell_clicked(0, 0)
    assert window.session.is_computer_turn()
    window._play_computer_move(window._session_token)
    assert window.session.board[1, 1] is Mark.O
    assert window.session.current_player is Mark.X


def test_stale_computer_move_ignored(window):
    window.mode_combo.setCurrentIndex(window.mode_combo.findData(GameMode.COMPUTER.value))
    window._on_cell_clicked(0, 0)
    stale = window._session_token
    window.reset_game()
    window._play_computer_move(stale)
    assert window.session.move_count == 0


def test_win_message_and_paint(window):
    for move in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        window._on_cell_clicked(*move)
    assert "wins" in window.message_label.text()
    window.board_widget.resize(300, 300)
    assert not window.board_widget.grab().isNull()


def test_cell_at(window):
    widget = window.board_widget
    widget.resize(300, 300)
    assert widget.cell_at(10, 10) == (0, 0)
    assert widget.cell_at(299, 299) == (2, 2)
    assert widget.cell_at(150, 20) == (0, 1)


def test_delay_read_from_env(qapp, monkeypatch):
    monkeypatch.setenv("GRIDTACTOE_AI_DELAY_MS", "not-a-number")
    win = GridTacToeWindow()
    try:
        assert win.ai_delay_ms == 500
    finally:
        win.close()
