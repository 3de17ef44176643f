import logging

import pytest

from board import Move, EMPTY, WHITE, BLACK, SIDES
from bot import HeuristicBot, RandomBot
from game import CONNECTION, LINE, NashGame, SeriesResult, play_match, run_series, side_name, side_seed


def play_all(game, moves):
    for r, c in moves:
        assert game.play(Move(r, c))


def test_white_moves_first_and_turns_alternate():
    g = NashGame(3)
    assert g.current == WHITE
    assert g.play(Move(1, 1))
    assert g.current == BLACK
    assert g.board.get(1, 1) == WHITE
    assert g.last_move == Move(1, 1)
    assert g.moves_played == 1


def test_illegal_move_keeps_turn():
    g = NashGame(3)
    g.play(Move(0, 0))
    assert not g.play(Move(0, 0))
    assert not g.play(Move(3, 3))
    assert g.current == BLACK
    assert g.moves_played == 1


def test_full_row_is_reported_as_line_win():
    g = NashGame(3)
    play_all(g, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])
    assert g.over
    assert g.winner == WHITE
    assert g.win_kind == LINE


def test_connection_win():
    g = NashGame(3)
    play_all(g, [(1, 0), (2, 0), (0, 1), (2, 1), (0, 2)])
    assert g.over
    assert g.winner == WHITE
    assert g.win_kind == CONNECTION


def test_black_column_win():
    g = NashGame(3)
    play_all(g, [(0, 0), (0, 1), (2, 2), (1, 1), (1, 0), (2, 1)])
    assert g.winner == BLACK
    assert g.win_kind == LINE


def test_no_moves_after_game_over():
    g = NashGame(3)
    play_all(g, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])
    assert not g.play(Move(2, 2))
    assert g.legal_moves() == []
    assert g.board.is_empty(2, 2)


def test_reset_and_clone():
    g = NashGame(4)
    play_all(g, [(0, 0), (3, 3)])
    c = g.clone()
    assert c.board == g.board and c.current == g.current and c.moves_played == 2
    c.play(Move(2, 2))
    assert g.board.is_empty(2, 2)
    assert g.moves_played == 2
    g.reset()
    assert g.moves_played == 0 and g.current == WHITE and g.winner == EMPTY
    assert len(g.legal_moves()) == 16


def test_play_match_finishes_with_a_winner():
    seen = []
    g = play_match({WHITE: RandomBot(seed=1), BLACK: RandomBot(seed=2)}, size=4,
                   on_move=lambda game, mv: seen.append(mv))
    assert g.over
    assert g.winner in SIDES
    assert len(seen) == g.moves_played
    assert len(set(seen)) == len(seen)


def test_play_match_asks_again_after_illegal_move(caplog):
    class Stubborn:
        def __init__(self):
            self.first = True

        def choose_move(self, board, side):
            if self.first:
                self.first = False
                return Move(9, 9)
            return board.empty_cells()[0]

    with caplog.at_level(logging.WARNING, logger="game"):
        g = play_match({WHITE: Stubborn(), BLACK: HeuristicBot()}, size=3)
    assert g.over
    assert "illegal move" in caplog.text


def test_heuristic_bots_play_deterministically():
    a = play_match({WHITE: HeuristicBot(), BLACK: HeuristicBot()}, size=5)
    b = play_match({WHITE: HeuristicBot(), BLACK: HeuristicBot()}, size=5)
    assert a.board == b.board
    assert a.winner == b.winner != EMPTY


def test_series_counts_every_game():
    res = run_series(RandomBot(seed=3), RandomBot(seed=4), size=3, games=6)
    assert res.games == 6
    assert res.white_wins + res.black_wins + res.undecided == 6


def test_series_result_record():
    res = SeriesResult()
    for w in (WHITE, BLACK, WHITE, EMPTY):
        res.record(w)
    assert (res.games, res.white_wins, res.black_wins, res.undecided) == (4, 2, 1, 1)


@pytest.mark.parametrize("side,name", [(WHITE, "White"), (BLACK, "Black")])
def test_side_name(side, name):
    assert side_name(side) == name


def test_black_gets_its_own_random_stream():
    assert side_seed(None, WHITE) is None
    assert side_seed(None, BLACK) is None
    assert side_seed(10, WHITE) == 10
    assert side_seed(10, BLACK) == 11
    b = NashGame(5).board
    white = RandomBot(seed=side_seed(10, WHITE))
    black = RandomBot(seed=side_seed(10, BLACK))
    assert [white.choose_move(b, WHITE) for _ in range(8)] != [black.choose_move(b, BLACK) for _ in range(8)]
