"""
手の入力文字列の解析

書式: <行の文字>,<列の数字>=<方向>  例: A,5=L / a,5 = l
行は A-E、列は 1-5、方向は L/R/U/D（大文字小文字を区別しない）
"0,0=E" は座標ではなく中断の合図として扱う
"""

import re
from dataclasses import dataclass
from typing import Tuple, Union

from .move import Direction
from .errors import ParseError

# 中断の合図（座標の解析より先に判定する）
INTERRUPT_SENTINELS = ("0,0=E", "0,0=e")

# 行・列は任意の英字・数字を受け付け、盤外かどうかはルール側で判定する
MOVE_PATTERN = re.compile(
    r"^\s*([A-Za-z])\s*,\s*([0-9])\s*=\s*([A-Za-z])\s*$"
)

FORMAT_ERROR_MESSAGE = "Invalid input format. Use i,j=value (e.g., A,5=L)."


@dataclass(frozen=True)
class MoveCommand:
    """盤上の駒を動かす入力"""
    origin: Tuple[int, int]
    direction: Direction


@dataclass(frozen=True)
class InterruptCommand:
    """ゲームを中断して保存する入力"""


INTERRUPT = InterruptCommand()

Command = Union[MoveCommand, InterruptCommand]


def parse_move_text(text: str) -> Command:
    """
    入力文字列を MoveCommand か InterruptCommand に変換する
    書式に合わない場合は ParseError
    """
    if text.strip() in INTERRUPT_SENTINELS:
        return INTERRUPT

    match = MOVE_PATTERN.match(text)
    if match is None:
        raise ParseError(FORMAT_ERROR_MESSAGE)

    row_char, col_char, direction_char = match.groups()
    direction = Direction.from_letter(direction_char)
    if direction is None:
        raise ParseError(f"Invalid direction {direction_char!r}. Use L/l, R/r, U/u, or D/d.")

    return MoveCommand(origin=parse_position(row_char + col_char), direction=direction)


def parse_position(pos_str: str) -> Tuple[int, int]:
    """
    文字列を盤面の位置に変換
    例: "A1" -> (0, 0), "e5" -> (4, 4)
    """
    if len(pos_str) != 2 or not pos_str[0].isalpha() or not pos_str[1].isdigit():
        raise ParseError(f"Invalid position string: {pos_str}")

    row = ord(pos_str[0].lower()) - ord('a')
    col = int(pos_str[1]) - 1
    return row, col


def format_position(position: Tuple[int, int]) -> str:
    """
    盤面の位置を文字列に変換
    例: (0, 0) -> "A1", (4, 4) -> "E5"
    """
    row, col = position
    return f"{chr(ord('A') + row)}{col + 1}"


def format_move(origin: Tuple[int, int], direction: Direction) -> str:
    """手を入力書式の文字列に変換  例: ((0, 4), LEFT) -> "A,5=L" """
    position = format_position(origin)
    return f"{position[0]},{position[1:]}={direction.letter}"
