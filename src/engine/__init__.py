"""
三銃士のゲームエンジン - パッケージ初期化
"""

from .piece import Cell, Side, Outcome, NUM_MUSKETEERS
from .board import Board, BOARD_SIZE
from .move import Move, Direction
from .rules import Rules
from .session import GameSession, SessionState, TurnResult
from .notation import MoveCommand, InterruptCommand, INTERRUPT, parse_move_text
from .errors import (
    GameError,
    LoadError,
    InvalidCellError,
    MalformedDimensionsError,
    ParseError,
    MoveError,
    OutOfBoundsError,
    NoSuchPieceError,
    IllegalDestinationError,
    SaveError,
)

__all__ = [
    'Cell',
    'Side',
    'Outcome',
    'NUM_MUSKETEERS',
    'Board',
    'BOARD_SIZE',
    'Move',
    'Direction',
    'Rules',
    'GameSession',
    'SessionState',
    'TurnResult',
    'MoveCommand',
    'InterruptCommand',
    'INTERRUPT',
    'parse_move_text',
    'GameError',
    'LoadError',
    'InvalidCellError',
    'MalformedDimensionsError',
    'ParseError',
    'MoveError',
    'OutOfBoundsError',
    'NoSuchPieceError',
    'IllegalDestinationError',
    'SaveError',
]
