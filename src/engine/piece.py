"""
三銃士の駒・手番・勝敗の種類を定義するモジュール
"""

from enum import Enum, auto

from .errors import InvalidCellError


class Cell(Enum):
    """盤面の1マスの状態（値はスナップショットの記号）"""
    MUSKETEER = 'M'  # 銃士
    ENEMY = 'o'      # 敵（リシュリュー枢機卿の兵）
    EMPTY = '.'      # 空きマス

    @property
    def symbol(self) -> str:
        return self.value

    @staticmethod
    def from_symbol(symbol) -> 'Cell':
        """
        記号からマスの状態を復元する
        既知の3記号以外は InvalidCellError
        """
        if isinstance(symbol, Cell):
            return symbol
        for cell in Cell:
            if cell.value == symbol:
                return cell
        raise InvalidCellError(f"Invalid character in the board: {symbol!r}")

    def __str__(self):
        return self.value


class Side(Enum):
    """手番の定義"""
    MUSKETEERS = 0  # 先手（銃士）
    ENEMIES = 1     # 後手（敵）

    @property
    def opponent(self) -> 'Side':
        """相手の手番を返す"""
        return Side.ENEMIES if self == Side.MUSKETEERS else Side.MUSKETEERS

    @property
    def piece(self) -> Cell:
        """この手番が動かす駒"""
        return Cell.MUSKETEER if self == Side.MUSKETEERS else Cell.ENEMY

    @property
    def target(self) -> Cell:
        """
        移動先に必要なマスの状態
        銃士は敵のいるマスへ（捕獲）、敵は空きマスへのみ進める
        """
        return Cell.ENEMY if self == Side.MUSKETEERS else Cell.EMPTY

    @property
    def label(self) -> str:
        """表示用の名前"""
        return "Musketeer" if self == Side.MUSKETEERS else "enemy"


class Outcome(Enum):
    """勝敗判定の結果"""
    ONGOING = auto()
    MUSKETEERS_WIN = auto()
    ENEMIES_WIN = auto()

    @property
    def winner(self):
        """勝者の手番（継続中はNone）"""
        if self == Outcome.MUSKETEERS_WIN:
            return Side.MUSKETEERS
        if self == Outcome.ENEMIES_WIN:
            return Side.ENEMIES
        return None


# 盤上の銃士の数
NUM_MUSKETEERS = 3

# 勝敗のメッセージ
OUTCOME_MESSAGES = {
    Outcome.MUSKETEERS_WIN: "The Musketeers win!",
    Outcome.ENEMIES_WIN: "Cardinal Richelieu's men win!",
}
