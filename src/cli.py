"""
三銃士 コンソール版

使用方法:
    python -m src.cli board.txt [--prefix out-] [--verbose]

中断（0,0=E）または決着すると盤面を out-board.txt に保存する
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import OUTPUT_PREFIX
from .engine import Board, GameSession, LoadError, SaveError
from .engine.snapshot import load_board, save_board, output_path_for

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "*** The Three Musketeers Game ***\n"
    "To make a move, enter the location of the piece you want to move,\n"
    "and the direction you want it to move. Locations are indicated as\n"
    "a letter (A, B, C, D, E) followed by a number (1, 2, 3, 4, or 5).\n"
    "Directions are indicated as left, right, up, down (L/l, R/r, U/u, D/d).\n"
    "For example, to move the Musketeer from the top right-hand corner\n"
    "to the left, enter 'A,5=L' or 'a,5=l' (without quotes).\n"
    "Enter '0,0=E' to interrupt the game and save the board.\n"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='The Three Musketeers board game')
    parser.add_argument('board', help='読み込む盤面ファイル')
    parser.add_argument('--prefix', default=OUTPUT_PREFIX,
                        help=f'保存先ファイル名の接頭辞 (default: {OUTPUT_PREFIX})')
    parser.add_argument('--verbose', action='store_true', help='デバッグログを表示')
    return parser


def make_saver(output_path: Path):
    """盤面を output_path に保存するコールバックを作る"""
    def save(board: Board) -> Path:
        try:
            path = save_board(board, output_path)
        except SaveError as e:
            print(e)
            raise
        print(f"Saving {path.name}...Done.\nAu revoir!\n")
        return path
    return save


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    try:
        output_path = output_path_for(args.board, args.prefix)
    except SaveError as e:
        print(e)
        return 0

    try:
        board = load_board(args.board)
    except LoadError as e:
        print(e)
        print("Failed to read the board from the file.")
        return 0

    print(INSTRUCTIONS)
    session = GameSession(board, save_callback=make_saver(output_path))
    outcome = session.run(input)
    logger.debug("Session finished: state=%s outcome=%s", session.state.name, outcome.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
