"""
三銃士の盤面を管理するモジュール
"""

from typing import List, Tuple, Iterable, Sequence

from .piece import Cell
from .errors import OutOfBoundsError, MalformedDimensionsError

# 盤面サイズ
BOARD_SIZE = 5

# 上下左右の隣接マス
ORTHOGONAL_STEPS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


class Board:
    """三銃士のゲームボードを表すクラス"""

    def __init__(self):
        # 5x5の空きマスで初期化
        self.cells: List[List[Cell]] = [
            [Cell.EMPTY for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]

    @staticmethod
    def from_rows(rows: Sequence[Iterable]) -> 'Board':
        """
        行優先の記号列（またはCell）から盤面を作成する
        未知の記号は InvalidCellError、5x5でなければ MalformedDimensionsError
        """
        rows = [list(row) for row in rows]
        if len(rows) != BOARD_SIZE:
            raise MalformedDimensionsError(
                f"Expected {BOARD_SIZE} rows, got {len(rows)}"
            )

        board = Board()
        for row, symbols in enumerate(rows):
            cells = [Cell.from_symbol(symbol) for symbol in symbols]
            if len(cells) != BOARD_SIZE:
                raise MalformedDimensionsError(
                    f"Row {row + 1} has {len(cells)} cells, expected {BOARD_SIZE}"
                )
            board.cells[row] = cells
        return board

    def is_valid_position(self, position: Tuple[int, int]) -> bool:
        """位置が盤面内か確認"""
        row, col = position
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def _check_position(self, row: int, col: int):
        if not self.is_valid_position((row, col)):
            raise OutOfBoundsError(f"Invalid position: {(row, col)}")

    def get(self, row: int, col: int) -> Cell:
        """指定位置のマスを取得"""
        self._check_position(row, col)
        return self.cells[row][col]

    def set(self, row: int, col: int, cell: Cell):
        """指定位置のマスを書き換える"""
        self._check_position(row, col)
        self.cells[row][col] = cell

    def __getitem__(self, position: Tuple[int, int]) -> Cell:
        return self.get(*position)

    def __setitem__(self, position: Tuple[int, int], cell: Cell):
        self.set(position[0], position[1], cell)

    def find(self, cell: Cell) -> List[Tuple[int, int]]:
        """指定した状態のマスの位置を行優先で返す"""
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.cells[row][col] == cell
        ]

    def count(self, cell: Cell) -> int:
        """指定した状態のマスの数"""
        return sum(row.count(cell) for row in self.cells)

    def neighbors(self, position: Tuple[int, int]) -> List[Tuple[int, int]]:
        """上下左右の隣接マスのうち盤内のもの"""
        row, col = position
        result = []
        for dr, dc in ORTHOGONAL_STEPS:
            neighbor = (row + dr, col + dc)
            if self.is_valid_position(neighbor):
                result.append(neighbor)
        return result

    def copy(self) -> 'Board':
        """盤面のコピーを作成"""
        new_board = Board()
        new_board.cells = [list(row) for row in self.cells]
        return new_board

    def to_rows(self) -> List[List[str]]:
        """記号の2次元リストに変換"""
        return [[cell.symbol for cell in row] for row in self.cells]

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（API用）"""
        return {
            "board": self.to_rows(),
            "musketeers": [list(pos) for pos in self.find(Cell.MUSKETEER)],
            "enemy_count": self.count(Cell.ENEMY),
        }

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self):
        return f"Board({self.to_rows()!r})"

    def __str__(self):
        """盤面の文字列表現を返す（行はA-E、列は1-5）"""
        separator = "  +" + "---+" * BOARD_SIZE
        header = "   " + "".join(f" {col + 1}  " for col in range(BOARD_SIZE))

        result = [header.rstrip(), separator]
        for row in range(BOARD_SIZE):
            row_str = f"{chr(ord('A') + row)} |"
            for col in range(BOARD_SIZE):
                row_str += f" {self.cells[row][col].symbol} |"
            result.append(row_str)
            result.append(separator)

        return "\n".join(result)
