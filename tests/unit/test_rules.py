"""
単体テスト: ルール判定のテスト
手の検証、手の適用、勝敗判定を確認
"""

import pytest
from src.engine import (
    Cell, Side, Outcome, Direction, Rules,
    OutOfBoundsError, NoSuchPieceError, IllegalDestinationError,
)


class TestValidateMove:
    """手の検証のテストクラス"""

    def test_musketeer_captures_adjacent_enemy(self, corner_board):
        """銃士は隣の敵のマスへ動ける"""
        origin, destination = Rules.validate_move(
            corner_board, (0, 0), Direction.RIGHT, Side.MUSKETEERS
        )
        assert origin == (0, 0)
        assert destination == (0, 1)

    def test_musketeer_cannot_move_to_empty(self, corner_board):
        """銃士は空きマスへは動けない"""
        with pytest.raises(IllegalDestinationError):
            Rules.validate_move(corner_board, (0, 4), Direction.DOWN, Side.MUSKETEERS)

    def test_musketeer_cannot_move_onto_musketeer(self, make_board):
        """銃士は銃士のマスへは動けない"""
        board = make_board(
            "M M o . .",
            ". . . . .",
            ". . . . .",
            ". . . . .",
            ". . . . M",
        )
        with pytest.raises(IllegalDestinationError):
            Rules.validate_move(board, (0, 0), Direction.RIGHT, Side.MUSKETEERS)

    def test_enemy_moves_to_empty(self, corner_board):
        """敵は空きマスへ動ける"""
        _, destination = Rules.validate_move(
            corner_board, (1, 0), Direction.DOWN, Side.ENEMIES
        )
        assert destination == (2, 0)

    def test_enemy_cannot_capture_musketeer(self, corner_board):
        """敵は銃士のマスへは動けない"""
        with pytest.raises(IllegalDestinationError):
            Rules.validate_move(corner_board, (0, 1), Direction.LEFT, Side.ENEMIES)

    def test_enemy_cannot_move_onto_enemy(self, initial_board):
        """敵は敵のマスへは動けない"""
        with pytest.raises(IllegalDestinationError):
            Rules.validate_move(initial_board, (0, 0), Direction.RIGHT, Side.ENEMIES)

    def test_no_such_piece_for_musketeers(self, corner_board):
        """移動元に銃士がいなければ NoSuchPieceError"""
        with pytest.raises(NoSuchPieceError) as exc_info:
            Rules.validate_move(corner_board, (0, 1), Direction.LEFT, Side.MUSKETEERS)
        assert "Musketeers" in str(exc_info.value)

    def test_no_such_piece_for_enemies(self, corner_board):
        """移動元に敵がいなければ NoSuchPieceError"""
        with pytest.raises(NoSuchPieceError) as exc_info:
            Rules.validate_move(corner_board, (2, 2), Direction.UP, Side.ENEMIES)
        assert "enemies" in str(exc_info.value)

    def test_origin_out_of_bounds(self, corner_board):
        """移動元が盤外なら OutOfBoundsError"""
        with pytest.raises(OutOfBoundsError):
            Rules.validate_move(corner_board, (5, 0), Direction.UP, Side.MUSKETEERS)

    @pytest.mark.parametrize("origin,direction", [
        ((0, 0), Direction.UP),
        ((0, 0), Direction.LEFT),
        ((0, 4), Direction.RIGHT),
        ((4, 0), Direction.DOWN),
    ])
    def test_destination_out_of_bounds(self, corner_board, origin, direction):
        """移動先が盤外なら OutOfBoundsError"""
        with pytest.raises(OutOfBoundsError):
            Rules.validate_move(corner_board, origin, direction, Side.MUSKETEERS)

    def test_bounds_checked_before_occupancy(self, corner_board):
        """盤外の判定は駒の有無より先に行う"""
        # (4, 4) は空きマスだが、まず移動先が盤外であることを報告する
        with pytest.raises(OutOfBoundsError):
            Rules.validate_move(corner_board, (4, 4), Direction.DOWN, Side.ENEMIES)

    def test_error_messages_are_distinct(self, corner_board):
        """4種類の不正な手のメッセージがすべて異なることを確認"""
        messages = set()
        cases = [
            ((0, 0), Direction.UP, Side.MUSKETEERS),
            ((0, 1), Direction.LEFT, Side.MUSKETEERS),
            ((0, 4), Direction.DOWN, Side.MUSKETEERS),
            ((2, 2), Direction.UP, Side.ENEMIES),
            ((0, 1), Direction.LEFT, Side.ENEMIES),
        ]
        for origin, direction, side in cases:
            with pytest.raises(Exception) as exc_info:
                Rules.validate_move(corner_board, origin, direction, side)
            messages.add(str(exc_info.value))

        assert len(messages) == len(cases)

    def test_is_valid_move(self, corner_board):
        assert Rules.is_valid_move(corner_board, (0, 0), Direction.RIGHT, Side.MUSKETEERS)
        assert not Rules.is_valid_move(corner_board, (0, 0), Direction.UP, Side.MUSKETEERS)


class TestLegalMoves:
    """合法手生成のテストクラス"""

    def test_initial_musketeer_moves(self, initial_board):
        """初期盤面の銃士の合法手は8手"""
        legal_moves = Rules.get_legal_moves(initial_board, Side.MUSKETEERS)

        assert len(legal_moves) == 8
        assert all(move.side == Side.MUSKETEERS for move in legal_moves)

    def test_initial_enemy_has_no_moves(self, initial_board):
        """初期盤面には空きマスがないので敵は動けない"""
        assert Rules.get_legal_moves(initial_board, Side.ENEMIES) == []

    def test_legal_moves_are_valid(self, corner_board):
        """生成された手はすべて検証を通る"""
        for side in Side:
            for move in Rules.get_legal_moves(corner_board, side):
                Rules.validate_move(corner_board, move.origin, move.direction, side)


class TestApplyMove:
    """手の適用のテストクラス"""

    def test_musketeer_capture_removes_enemy(self, corner_board):
        """銃士の捕獲で敵が1つ減る"""
        enemies_before = corner_board.count(Cell.ENEMY)

        captured = Rules.apply_move(corner_board, (0, 0), (0, 1), Side.MUSKETEERS)

        assert captured == Cell.ENEMY
        assert corner_board.get(0, 0) == Cell.EMPTY
        assert corner_board.get(0, 1) == Cell.MUSKETEER
        assert corner_board.count(Cell.MUSKETEER) == 3
        assert corner_board.count(Cell.ENEMY) == enemies_before - 1

    def test_enemy_move_relocates(self, corner_board):
        """敵の移動では敵の数は変わらない"""
        enemies_before = corner_board.count(Cell.ENEMY)

        captured = Rules.apply_move(corner_board, (1, 0), (2, 0), Side.ENEMIES)

        assert captured == Cell.EMPTY
        assert corner_board.get(1, 0) == Cell.EMPTY
        assert corner_board.get(2, 0) == Cell.ENEMY
        assert corner_board.count(Cell.ENEMY) == enemies_before


class TestEvaluate:
    """勝敗判定のテストクラス"""

    def test_ongoing(self, initial_board, corner_board):
        assert Rules.evaluate(initial_board) == Outcome.ONGOING
        assert Rules.evaluate(corner_board) == Outcome.ONGOING

    def test_musketeers_win_when_no_adjacent_enemy(self, make_board):
        """どの銃士の隣にも敵がいなければ銃士の勝ち"""
        board = make_board(
            "M . . . .",
            ". . . . .",
            ". . M . o",
            ". o . . .",
            "o . . . M",
        )
        assert Rules.evaluate(board) == Outcome.MUSKETEERS_WIN

    def test_diagonal_enemy_does_not_threaten(self, make_board):
        """斜めの敵は隣接に含まれない"""
        board = make_board(
            "M . . . .",
            ". o . . .",
            ". . M . .",
            ". . . o .",
            ". . . . M",
        )
        assert Rules.evaluate(board) == Outcome.MUSKETEERS_WIN

    def test_enemies_win_same_row(self, make_board):
        """3人の銃士が同じ行に並ぶと敵の勝ち"""
        board = make_board(
            ". . . . .",
            ". o o o .",
            "M . M . M",
            ". o . o .",
            ". . . . .",
        )
        assert Rules.evaluate(board) == Outcome.ENEMIES_WIN

    def test_enemies_win_same_column(self, make_board):
        """3人の銃士が同じ列に並ぶと敵の勝ち"""
        board = make_board(
            ". M . . .",
            ". o . . .",
            ". M o . .",
            ". . . . .",
            ". M . . .",
        )
        assert Rules.evaluate(board) == Outcome.ENEMIES_WIN

    def test_musketeers_win_takes_priority(self, make_board):
        """両方の条件を満たす場合は銃士の勝利を優先する"""
        board = make_board(
            ". . . . .",
            ". . . . .",
            "M . M . M",
            ". . . . .",
            "o o o o o",
        )
        assert Rules.musketeers_win(board)
        assert Rules.enemies_win(board)
        assert Rules.evaluate(board) == Outcome.MUSKETEERS_WIN

    def test_is_game_over(self, make_board, initial_board):
        board = make_board(
            ". M . . .",
            ". o . . .",
            ". M o . .",
            ". . . . .",
            ". M . . .",
        )
        assert Rules.is_game_over(board) == (True, Side.ENEMIES)
        assert Rules.is_game_over(initial_board) == (False, None)
