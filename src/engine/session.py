"""
三銃士の対局進行（手番の状態機械）

検証 -> 適用 -> 勝敗判定 -> 手番交代 の順に1手ずつ進める
中断または決着した時点で保存コールバックを1回だけ呼ぶ
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .board import Board
from .piece import Cell, Side, Outcome, OUTCOME_MESSAGES
from .move import Move, Direction
from .rules import Rules
from .notation import Command, InterruptCommand, parse_move_text
from .errors import GameError, MoveError, ParseError, SaveError

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """対局の状態"""
    AWAITING_MUSKETEER_MOVE = auto()
    AWAITING_ENEMY_MOVE = auto()
    INTERRUPTED = auto()
    TERMINAL = auto()


AWAITING_STATES = {
    Side.MUSKETEERS: SessionState.AWAITING_MUSKETEER_MOVE,
    Side.ENEMIES: SessionState.AWAITING_ENEMY_MOVE,
}


@dataclass
class TurnResult:
    """1回の入力に対する結果"""
    accepted: bool
    message: str
    state: SessionState
    outcome: Outcome
    error: Optional[GameError] = None
    move: Optional[Move] = None
    captured: Optional[Cell] = None

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "message": self.message,
            "state": self.state.name,
            "outcome": self.outcome.name,
            "error": type(self.error).__name__ if self.error else None,
            "move": self.move.to_dict() if self.move else None,
        }


class GameSession:
    """対局の状態を管理するクラス"""

    def __init__(
        self,
        board: Board,
        save_callback: Optional[Callable[[Board], object]] = None
    ):
        self.board = board
        self.save_callback = save_callback
        self.move_history: List[Move] = []
        self.save_requested = False
        self.save_result = None
        self.save_error: Optional[SaveError] = None

        # 読み込んだ時点で決着していれば即終了
        self.outcome = Rules.evaluate(board)
        if self.outcome == Outcome.ONGOING:
            self.state = SessionState.AWAITING_MUSKETEER_MOVE
        else:
            self.state = SessionState.TERMINAL

    @property
    def side_to_move(self) -> Optional[Side]:
        """現在の手番（終了後はNone）"""
        for side, state in AWAITING_STATES.items():
            if self.state == state:
                return side
        return None

    @property
    def is_finished(self) -> bool:
        return self.state in (SessionState.INTERRUPTED, SessionState.TERMINAL)

    def _result(self, accepted: bool, message: str, **kwargs) -> TurnResult:
        return TurnResult(
            accepted=accepted,
            message=message,
            state=self.state,
            outcome=self.outcome,
            **kwargs
        )

    def submit_text(self, text: str) -> TurnResult:
        """入力文字列を解析して1手進める（書式エラーは手番を消費しない）"""
        if self.is_finished:
            return self._result(False, "The game is already over.")

        try:
            command = parse_move_text(text)
        except ParseError as e:
            return self._result(False, str(e), error=e)
        return self.submit(command)

    def submit(self, command: Command) -> TurnResult:
        """解析済みの入力で1手進める"""
        if self.is_finished:
            return self._result(False, "The game is already over.")

        if isinstance(command, InterruptCommand):
            return self.interrupt()

        return self.play_move(command.origin, command.direction)

    def play_move(self, origin: Tuple[int, int], direction: Direction) -> TurnResult:
        """
        手番側の手を検証して適用する
        不正な手では状態も手番も変わらない
        """
        side = self.side_to_move
        if side is None:
            return self._result(False, "The game is already over.")

        try:
            origin, destination = Rules.validate_move(self.board, origin, direction, side)
        except MoveError as e:
            logger.debug("Rejected %s move %s %s: %s", side.name, origin, direction.name, e)
            return self._result(False, str(e), error=e)

        captured = Rules.apply_move(self.board, origin, destination, side)
        move = Move(origin, direction, side)
        self.move_history.append(move)

        self.outcome = Rules.evaluate(self.board)
        if self.outcome == Outcome.ONGOING:
            self.state = AWAITING_STATES[side.opponent]
            message = "Move applied."
        else:
            self.state = SessionState.TERMINAL
            message = OUTCOME_MESSAGES[self.outcome]
            self._request_save()

        return self._result(True, message, move=move, captured=captured)

    def interrupt(self) -> TurnResult:
        """対局を中断して保存を要求する（検証は行わない）"""
        if self.is_finished:
            return self._result(False, "The game is already over.")

        self.state = SessionState.INTERRUPTED
        self._request_save()
        return self._result(True, "Game interrupted. Exiting...")

    def _request_save(self):
        """保存コールバックを1回だけ呼ぶ（失敗しても例外は外に出さない）"""
        if self.save_requested:
            return
        self.save_requested = True

        if self.save_callback is None:
            return

        try:
            self.save_result = self.save_callback(self.board)
        except SaveError as e:
            self.save_error = e
            logger.warning("Failed to save the game state: %s", e)

    def run(
        self,
        read_line: Callable[[str], str],
        write: Callable[[str], None] = print
    ) -> Outcome:
        """
        対話形式で対局を進める
        read_line: プロンプトを受け取り1行を返す関数（input など）
        """
        write(str(self.board))

        while not self.is_finished:
            side = self.side_to_move
            try:
                text = read_line(f"\nGive the {side.label}'s move\n>")
            except (EOFError, KeyboardInterrupt):
                # 入力が尽きた場合や Ctrl-C も中断と同じ扱い
                result = self.interrupt()
            else:
                result = self.submit_text(text)

            if result.accepted:
                if result.move is not None:
                    write(str(self.board))
                if self.state == SessionState.INTERRUPTED:
                    write("\n" + result.message)
            else:
                write("\n" + result.message)

        if self.state == SessionState.TERMINAL:
            write("\n" + OUTCOME_MESSAGES[self.outcome] + "\n")
            # 読み込んだ時点で決着していた場合もここで保存する
            self._request_save()

        if self.save_error is not None:
            write("Failed to save the game state.")

        return self.outcome

    def to_dict(self) -> dict:
        """対局状態を辞書形式に変換"""
        side = self.side_to_move
        return {
            "board": self.board.to_dict(),
            "state": self.state.name,
            "side_to_move": side.name if side else None,
            "outcome": self.outcome.name,
            "winner": self.outcome.winner.name if self.outcome.winner else None,
            "move_count": len(self.move_history),
            "game_over": self.is_finished,
        }
