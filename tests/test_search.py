import math

import pytest

from gridtactoe.board import Board, Mark, Move
from gridtactoe.config import DEFAULT_DEPTH_CEILING, GameMode, depth_ceiling_for
from gridtactoe.evaluation import evaluate
from gridtactoe.game_logic import apply_human_move, compute_move, new_session
from gridtactoe.search import WIN_SCORE, SearchStats, find_best_move, minimax, search_order
from gridtactoe.wincheck import winner_of


def _plain_minimax(board, me, run_length, depth, maximizing, ceiling):
    # same scoring, no pruning
    winner = winner_of(board, run_length)
    if winner is me:
        return WIN_SCORE - depth
    if winner is not None:
        return depth - WIN_SCORE
    if board.is_full():
        return 0
    if depth >= ceiling:
        return evaluate(board, me, run_length)
    mark = me if maximizing else me.opponent
    scores = []
    for row, col in board.empty_cells():
        with board.speculative(row, col, mark):
            scores.append(_plain_minimax(board, me, run_length, depth + 1,
                                         not maximizing, ceiling))
    return max(scores) if maximizing else min(scores)


@pytest.mark.parametrize("size,ceiling", [(3, 9), (4, 5), (5, 3), (6, 3), (8, 3)])
def test_depth_ceilings(size, ceiling):
    assert depth_ceiling_for(size) == ceiling
    assert depth_ceiling_for(42) == DEFAULT_DEPTH_CEILING


def test_takes_immediate_win(make_board):
    board = make_board("XX.",
                       "OO.",
                       "X..")
    assert find_best_move(board, Mark.O, 3) == Move(1, 2)


def test_blocks_opponent(make_board):
    board = make_board("XX.",
                       ".O.",
                       "...")
    assert find_best_move(board, Mark.O, 3) == Move(0, 2)


def test_prefers_faster_win(make_board):
    # O wins at once on (2,2) or later elsewhere
    board = make_board("OX.",
                       "XO.",
                       "X..")
    stats = SearchStats()
    assert find_best_move(board, Mark.O, 3, stats=stats) == Move(2, 2)
    assert stats.best_score == WIN_SCORE


def test_terminal_scores(make_board):
    won = make_board("OOO",
                     "XX.",
                     "X..")
    assert minimax(won, Mark.O, 3, 2, True, -math.inf, math.inf, 9) == WIN_SCORE - 2
    assert minimax(won, Mark.X, 3, 2, True, -math.inf, math.inf, 9) == 2 - WIN_SCORE
    draw = make_board("XOX",
                      "XOO",
                      "OXX")
    assert minimax(draw, Mark.O, 3, 0, False, -math.inf, math.inf, 9) == 0


def test_ceiling_falls_back_to_evaluation(make_board):
    board = make_board("X..",
                       "...",
                       "...")
    assert minimax(board, Mark.O, 3, 1, True, -math.inf, math.inf, 1) == evaluate(board, Mark.O, 3)


@pytest.mark.parametrize("rows,me", [
    (("X..", ".O.", "..X"), Mark.O),
    (("XO.", "...", "X.."), Mark.O),
    (("X..", "...", "..."), Mark.O),
    (("XOX", ".O.", "..."), Mark.X),
])
def test_pruning_keeps_the_value(make_board, rows, me):
    board = make_board(*rows)
    for ceiling in (2, 9):
        for row, col in board.empty_cells():
            with board.speculative(row, col, me):
                pruned = minimax(board, me, 3, 0, False, -math.inf, math.inf, ceiling)
                plain = _plain_minimax(board, me, 3, 0, False, ceiling)
            assert pruned == plain


def test_search_leaves_board_untouched(make_board):
    board = make_board("XOO.",
                       "..X.",
                       "O.X.",
                       ".X.O")
    before = board.snapshot()
    stats = SearchStats()
    move = find_best_move(board, Mark.O, 3, ceiling=depth_ceiling_for(4), stats=stats)
    assert board.snapshot() == before
    assert move in board.empty_cells()
    assert stats.nodes > 0


def test_shallow_search_on_big_board():
    board = Board.create(6)
    board.place(0, 0, Mark.X)
    before = board.snapshot()
    move = find_best_move(board, Mark.O, 3, ceiling=1)
    assert board.is_empty(*move)
    assert board.snapshot() == before


def test_full_board_has_no_move(make_board):
    board = make_board("XOX",
                       "XOO",
                       "OXX")
    assert find_best_move(board, Mark.O, 3) is None


@pytest.mark.parametrize("rows,me", [
    (("X..", ".O.", "..X"), Mark.O),
    (("XO.", "...", "X.."), Mark.O),
    (("OX.", "XO.", "X.."), Mark.O),
    (("XOX", ".O.", "..."), Mark.X),
])
def test_root_choice_matches_plain_minimax(make_board, rows, me):
    board = make_board(*rows)
    scores = []
    for row, col in board.empty_cells():
        with board.speculative(row, col, me):
            scores.append(_plain_minimax(board, me, 3, 0, False, 9))
    best = max(scores)
    stats = SearchStats()
    move = find_best_move(board, me, 3, ceiling=9, stats=stats)
    assert move == board.empty_cells()[scores.index(best)]
    assert stats.best_score == best


def test_search_order_center_first():
    assert search_order(3)[0] == Move(1, 1)
    assert search_order(3)[1:5] == [Move(0, 1), Move(1, 0), Move(1, 2), Move(2, 1)]
    assert set(search_order(4)[:4]) == {Move(1, 1), Move(1, 2), Move(2, 1), Move(2, 2)}
    assert sorted(search_order(5)) == sorted(Move(r, c) for r in range(5) for c in range(5))


@pytest.mark.parametrize("size,first", [(4, (0, 0)), (4, (1, 1)), (5, (0, 0)), (5, (2, 2))])
def test_first_reply_stays_small(size, first):
    session = new_session(size, GameMode.COMPUTER)
    apply_human_move(session, *first)
    move = compute_move(session)
    assert session.board.is_empty(*move)
    assert session.last_search.nodes < 60000
