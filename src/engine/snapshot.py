"""
盤面スナップショットの読み書き

形式: 5行、各行は5つの記号を半角スペース1つで区切り、改行で終わる
    M o o o M
    o o o o o
    ...
記号: M（銃士）, o（敵）, .（空きマス）
"""

import logging
import os
from pathlib import Path
from typing import Union

from .board import Board, BOARD_SIZE
from .piece import Cell
from .errors import LoadError, MalformedDimensionsError, SaveError
from ..config import OUTPUT_PREFIX

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_initial_board() -> Board:
    """
    標準の初期盤面を作成する
    銃士は A5, C3, E1、それ以外のマスはすべて敵
    """
    board = Board()

    musketeer_setup = [
        (0, 4),  # A5
        (2, 2),  # C3
        (4, 0),  # E1
    ]

    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            board.set(row, col, Cell.ENEMY)

    for row, col in musketeer_setup:
        board.set(row, col, Cell.MUSKETEER)

    return board


def parse_snapshot(text: str) -> Board:
    """
    スナップショット文字列から盤面を作成する
    形式から少しでも外れていれば部分的な盤面は返さず例外を送出する
    """
    if not text.endswith("\n"):
        raise MalformedDimensionsError("The board must end with a newline")

    lines = text[:-1].split("\n")
    if len(lines) != BOARD_SIZE:
        raise MalformedDimensionsError(
            f"Expected {BOARD_SIZE} lines, got {len(lines)}"
        )

    rows = []
    for line_no, line in enumerate(lines, start=1):
        tokens = line.split(" ")
        # 記号の妥当性を先に確認する（未知の記号は InvalidCellError）
        for token in tokens:
            for symbol in token:
                Cell.from_symbol(symbol)

        if len(tokens) != BOARD_SIZE or any(len(token) != 1 for token in tokens):
            raise MalformedDimensionsError(
                f"Line {line_no} must hold {BOARD_SIZE} symbols separated by single spaces"
            )
        rows.append(tokens)

    return Board.from_rows(rows)


def format_snapshot(board: Board) -> str:
    """盤面をスナップショット文字列に変換"""
    return "".join(" ".join(row) + "\n" for row in board.to_rows())


def load_board(path: PathLike) -> Board:
    """
    ファイルから盤面を読み込む
    ファイルがない・読めない・形式が不正な場合は LoadError
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Error opening the file: {path}") from e

    board = parse_snapshot(text)
    logger.debug("Loaded board from %s", path)
    return board


def save_board(board: Board, path: PathLike) -> Path:
    """
    盤面をファイルに書き出す
    書き込めない場合は SaveError（盤面はそのまま残る）
    """
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(format_snapshot(board))
    except OSError as e:
        raise SaveError(f"Error opening the saved file: {path}") from e

    logger.debug("Saved board to %s", path)
    return path


def output_path_for(path: PathLike, prefix: str = OUTPUT_PREFIX) -> Path:
    """
    読み込んだファイルから保存先を決める
    例: boards/game.txt -> boards/out-game.txt
    接頭辞にディレクトリ区切りを含めることはできない
    """
    if any(sep and sep in prefix for sep in (os.sep, os.altsep, "/")):
        raise SaveError(f"The output prefix must not contain a path separator: {prefix!r}")

    path = Path(path)
    return path.with_name(prefix + path.name)
