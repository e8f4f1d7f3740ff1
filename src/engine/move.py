"""
三銃士の手（Move）を表現するモジュール
"""

from enum import Enum
from typing import Tuple, Optional

from .piece import Side


class Direction(Enum):
    """移動方向（値は入力で使う文字）"""
    UP = 'U'
    DOWN = 'D'
    LEFT = 'L'
    RIGHT = 'R'

    @property
    def delta(self) -> Tuple[int, int]:
        """1マス分の移動量 (row, col)"""
        return DIRECTION_DELTAS[self]

    @property
    def letter(self) -> str:
        return self.value

    @staticmethod
    def from_letter(letter: str) -> Optional['Direction']:
        """方向の文字（大文字小文字を区別しない）から復元、該当なしはNone"""
        upper = letter.upper()
        for direction in Direction:
            if direction.value == upper:
                return direction
        return None

    def step(self, position: Tuple[int, int]) -> Tuple[int, int]:
        """指定位置から1マス進んだ位置（盤外の場合もある）"""
        dr, dc = self.delta
        return position[0] + dr, position[1] + dc


DIRECTION_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class Move:
    """三銃士の一手を表すクラス"""

    def __init__(
        self,
        origin: Tuple[int, int],
        direction: Direction,
        side: Side
    ):
        self.origin = origin        # 移動元
        self.direction = direction  # 移動方向
        self.side = side            # 手番（入力ではなく手番から決まる）

    @property
    def destination(self) -> Tuple[int, int]:
        """移動先"""
        return self.direction.step(self.origin)

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return (
            self.origin == other.origin
            and self.direction == other.direction
            and self.side == other.side
        )

    def __hash__(self):
        return hash((self.origin, self.direction, self.side))

    def __str__(self):
        row, col = self.origin
        return f"{self.side.name} {chr(ord('A') + row)},{col + 1}={self.direction.letter}"

    def __repr__(self):
        return (
            f"Move(origin={self.origin}, "
            f"direction={self.direction.name}, "
            f"side={self.side.name})"
        )

    def to_dict(self) -> dict:
        """手を辞書形式に変換（API用）"""
        return {
            "from": self.origin,
            "to": self.destination,
            "direction": self.direction.name,
            "side": self.side.name,
        }
