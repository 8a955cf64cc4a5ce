import logging

from ..config import (DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE, MIN_BOARD_SIZE,
                      GameMode, computer_move_delay_ms)
from ..errors import GameError
from ..game_logic import new_session
from ..wincheck import Outcome
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QComboBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, QTimer, Slot

logger = logging.getLogger(__name__)

MODE_LABELS = (
    ("Human vs Human", GameMode.HUMAN),
    ("Human vs Computer", GameMode.COMPUTER),
)


class GridTacToeWindow(QMainWindow):
    """
    main window UI and game flow
    """
    def __init__(self, ai_delay_ms=None):
        """
        init session, ui widgets, signals
        """
        super().__init__()
        if ai_delay_ms is None:
            ai_delay_ms = computer_move_delay_ms()   # env override
        self.ai_delay_ms = ai_delay_ms
        self.session = new_session(DEFAULT_BOARD_SIZE, GameMode.HUMAN)
        self.board_widget = BoardWidget(self.session, parent=self)
        # bumped on every new game so stale computer timers do nothing
        self._session_token = 0

        self._setup_ui()
        self._show_turn()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Grid Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_game_controls()       # size + mode pickers
        self.main_layout.addWidget(self.controls_top_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # status + reset
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        new_action = QAction("New Game", self)
        new_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        game_menu.addAction(new_action)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_game_controls(self):
        '''board size + game mode pickers'''
        self.controls_top_widget = QWidget()
        hl = QHBoxLayout(self.controls_top_widget)
        hl.addWidget(QLabel("Board:"))
        self.size_combo = QComboBox()
        for n in range(MIN_BOARD_SIZE, MAX_BOARD_SIZE + 1):
            self.size_combo.addItem(f"{n} x {n}", n)
        self.size_combo.setCurrentIndex(DEFAULT_BOARD_SIZE - MIN_BOARD_SIZE)
        hl.addWidget(self.size_combo)
        hl.addWidget(QLabel("Mode:"))
        self.mode_combo = QComboBox()
        for label, mode in MODE_LABELS:
            self.mode_combo.addItem(label, mode.value)
        hl.addWidget(self.mode_combo)
        hl.addStretch(1)
        # any config change starts over
        self.size_combo.currentIndexChanged.connect(self.reset_game)
        self.mode_combo.currentIndexChanged.connect(self.reset_game)

    def _create_bottom_controls(self):
        # status label + reset button
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.reset_button = QPushButton("Reset"); self.reset_button.clicked.connect(self.reset_game)
        hl.addWidget(self.message_label)
        hl.addStretch(1)
        hl.addWidget(self.reset_button)

    @Slot(str)
    def _update_message(self, text, is_error=False,
                        is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_error:   style = "color: #ff8a8a; font-weight: bold;"
        elif is_success: style = "color: lime; font-weight: bold;"
        elif is_turn:    style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _show_turn(self):
        # whose move it is
        player = self.session.current_player
        if self.session.is_computer_turn():
            self._update_message(f"computer ({player}) is thinking...")
        else:
            self._update_message(f"player {player}'s turn", is_turn=True)

    def _show_result(self, result):
        # end game UI updates, or next turn
        if result.outcome is Outcome.WIN:
            self._handle_game_over(f"player {result.winner} wins!")
        elif result.outcome is Outcome.DRAW:
            self._handle_game_over("it's a draw!")
        else:
            self._show_turn()

    def _handle_game_over(self, msg):
        self._update_message(msg, is_success=True)
        self.board_widget.set_accept_clicks(False)

    @Slot(int, int)
    def _on_cell_clicked(self, r, c):
        # ignore clicks after game over or while computer moves
        if not self.session.active or self.session.is_computer_turn():
            return
        try:
            result = self.session.play(r, c)
        except GameError as e:
            self._update_message(str(e), is_error=True)
            return
        self.board_widget.update()
        self._show_result(result)
        self._schedule_computer_move()

    def _schedule_computer_move(self):
        # computer answers after the human move has been shown
        if not self.session.is_computer_turn():
            return
        self.board_widget.set_accept_clicks(False)
        token = self._session_token
        QTimer.singleShot(self.ai_delay_ms, lambda: self._play_computer_move(token))

    def _play_computer_move(self, token):
        if token != self._session_token or not self.session.is_computer_turn():
            return  # game was replaced meanwhile
        move, result = self.session.play_computer()
        logger.info("computer played %s,%s", move.row, move.col)
        self.board_widget.update()
        self.board_widget.set_accept_clicks(result.outcome is Outcome.ONGOING)
        self._show_result(result)

    @Slot()
    def reset_game(self):
        # full reset with whatever the pickers say
        size = self.size_combo.currentData()
        mode = self.mode_combo.currentData()
        try:
            self.session = new_session(size, mode)
        except GameError as e:
            self._update_message(str(e), is_error=True)
            return
        self._session_token += 1
        logger.info("new %dx%d game, %s mode, %d in a row to win",
                    size, size, self.session.config.mode.value, self.session.run_length)
        self.board_widget.set_session(self.session)
        self.board_widget.set_accept_clicks(True)
        self._show_turn()
