"""
三銃士のルール判定を行うモジュール

手の検証・手の適用・勝敗判定をまとめて扱う
"""

import logging
from collections import Counter
from typing import List, Tuple, Optional

from .board import Board
from .piece import Cell, Side, Outcome, NUM_MUSKETEERS
from .move import Move, Direction
from .errors import OutOfBoundsError, NoSuchPieceError, IllegalDestinationError

logger = logging.getLogger(__name__)


# 不正な手の理由（手番ごと）
NO_SUCH_PIECE_MESSAGES = {
    Side.MUSKETEERS: "No Musketeers spotted!",
    Side.ENEMIES: "No enemies spotted!",
}

ILLEGAL_DESTINATION_MESSAGES = {
    Side.MUSKETEERS: "A Musketeer can only move onto a cell held by an enemy.",
    Side.ENEMIES: "An enemy can only move onto an empty cell.",
}

OUT_OF_BOUNDS_MESSAGE = "This move gets out of the board."


class Rules:
    """三銃士のルールを管理するクラス"""

    @staticmethod
    def validate_move(
        board: Board,
        origin: Tuple[int, int],
        direction: Direction,
        side: Side
    ) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """
        手が合法か検証する

        1. 移動元と移動先（1マス先）が盤内であること
        2. 移動元に手番側の駒があること
        3. 移動先が手番側の条件を満たすこと
           - 銃士: 敵のいるマス（捕獲）
           - 敵: 空きマス

        返り値: (移動元, 移動先)
        不正な場合は OutOfBoundsError / NoSuchPieceError / IllegalDestinationError
        """
        destination = direction.step(origin)

        if not board.is_valid_position(origin) or not board.is_valid_position(destination):
            raise OutOfBoundsError(OUT_OF_BOUNDS_MESSAGE)

        if board.get(*origin) != side.piece:
            raise NoSuchPieceError(NO_SUCH_PIECE_MESSAGES[side])

        if board.get(*destination) != side.target:
            raise IllegalDestinationError(ILLEGAL_DESTINATION_MESSAGES[side])

        return origin, destination

    @staticmethod
    def is_valid_move(
        board: Board,
        origin: Tuple[int, int],
        direction: Direction,
        side: Side
    ) -> bool:
        """手が合法ならTrue"""
        try:
            Rules.validate_move(board, origin, direction, side)
        except (OutOfBoundsError, NoSuchPieceError, IllegalDestinationError):
            return False
        return True

    @staticmethod
    def get_legal_moves(board: Board, side: Side) -> List[Move]:
        """
        指定手番の合法手をすべて取得
        順序: 行優先で駒を走査し、方向は U, D, L, R
        """
        legal_moves = []

        for origin in board.find(side.piece):
            for direction in Direction:
                if Rules.is_valid_move(board, origin, direction, side):
                    legal_moves.append(Move(origin, direction, side))

        return legal_moves

    @staticmethod
    def apply_move(
        board: Board,
        origin: Tuple[int, int],
        destination: Tuple[int, int],
        side: Side
    ) -> Cell:
        """
        検証済みの手を盤面に適用する（盤面を直接書き換える）

        移動元は空きマス、移動先は手番側の駒になる
        銃士の手では移動先にいた敵が盤上から取り除かれる

        返り値: 移動先にあったマス
        """
        replaced = board.get(*destination)
        board.set(origin[0], origin[1], Cell.EMPTY)
        board.set(destination[0], destination[1], side.piece)
        logger.debug("%s moved %s -> %s (replaced %s)", side.name, origin, destination, replaced.name)
        return replaced

    @staticmethod
    def musketeers_win(board: Board) -> bool:
        """
        銃士の勝利判定
        どの銃士の上下左右にも敵がいなければ勝ち
        """
        for position in board.find(Cell.MUSKETEER):
            for neighbor in board.neighbors(position):
                if board.get(*neighbor) == Cell.ENEMY:
                    return False
        return True

    @staticmethod
    def enemies_win(board: Board) -> bool:
        """
        敵の勝利判定
        3人の銃士が同じ行または同じ列に並んだら勝ち
        """
        positions = board.find(Cell.MUSKETEER)

        row_counts = Counter(row for row, _ in positions)
        if NUM_MUSKETEERS in row_counts.values():
            return True

        col_counts = Counter(col for _, col in positions)
        return NUM_MUSKETEERS in col_counts.values()

    @staticmethod
    def evaluate(board: Board) -> Outcome:
        """
        盤面の勝敗を判定する
        両方の条件を満たす場合は銃士の勝利を優先する
        """
        if Rules.musketeers_win(board):
            return Outcome.MUSKETEERS_WIN
        if Rules.enemies_win(board):
            return Outcome.ENEMIES_WIN
        return Outcome.ONGOING

    @staticmethod
    def is_game_over(board: Board) -> Tuple[bool, Optional[Side]]:
        """
        ゲームが終了したか確認
        返り値: (終了フラグ, 勝者)
        """
        outcome = Rules.evaluate(board)
        return outcome != Outcome.ONGOING, outcome.winner
