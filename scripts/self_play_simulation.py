"""
三銃士の自己対戦シミュレーション
両陣営がランダムな合法手を指し、対局ごとに盤面の不変条件を検査する

使用方法:
    python scripts/self_play_simulation.py [--games 1000] [--max-moves 200] [--board board.txt] [--seed 0] [--verbose]
"""

import sys
import argparse
import random
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.engine import Board, Cell, Side, Outcome, GameSession, Rules, NUM_MUSKETEERS
from src.engine.snapshot import load_initial_board, load_board

# 終了理由
GAME_OVER = "game_over"
STALEMATE = "stalemate"
MAX_MOVES = "max_moves"
ERROR = "error"


class InvariantViolation(Exception):
    """ランダム対局中に見つかった不変条件の違反"""


@dataclass
class GameResult:
    """1局の結果"""
    game_id: int
    termination_reason: str
    total_moves: int
    winner: Optional[Side] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.termination_reason == ERROR


@dataclass
class SimulationStats:
    """全対局の集計"""
    total_games: int = 0
    completed_games: int = 0
    error_games: int = 0
    musketeer_wins: int = 0
    enemy_wins: int = 0
    stalemates: int = 0
    max_moves_reached: int = 0
    total_moves: int = 0
    errors: List[str] = field(default_factory=list)

    def record(self, result: GameResult):
        self.total_games += 1
        self.total_moves += result.total_moves

        if result.termination_reason == GAME_OVER:
            self.completed_games += 1
            if result.winner == Side.MUSKETEERS:
                self.musketeer_wins += 1
            else:
                self.enemy_wins += 1
        elif result.termination_reason == STALEMATE:
            self.stalemates += 1
        elif result.termination_reason == MAX_MOVES:
            self.max_moves_reached += 1
        else:
            self.error_games += 1
            self.errors.append(f"Game {result.game_id}: {result.error}")

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.total_games if self.total_games else 0.0


class SelfPlaySimulator:
    """GameSession を通してランダム対局を繰り返す"""

    def __init__(self, verbose: bool = False, seed: Optional[int] = None,
                 initial_board: Optional[Board] = None):
        self.verbose = verbose
        self.rng = random.Random(seed)
        self.initial_board = initial_board

    def _new_session(self) -> GameSession:
        if self.initial_board is not None:
            return GameSession(self.initial_board.copy())
        return GameSession(load_initial_board())

    def run_game(self, game_id: int, max_moves: int = 200) -> GameResult:
        """1局をランダムな合法手で進める"""
        session = self._new_session()
        played = 0

        try:
            for played in range(max_moves):
                if session.is_finished:
                    return GameResult(game_id, GAME_OVER, played, winner=session.outcome.winner)

                side = session.side_to_move
                candidates = Rules.get_legal_moves(session.board, side)
                if not candidates:
                    # 敵が銃士に囲まれて動けない
                    return GameResult(game_id, STALEMATE, played)

                move = self.rng.choice(candidates)
                enemies_before = session.board.count(Cell.ENEMY)
                result = session.play_move(move.origin, move.direction)
                if not result.accepted:
                    raise InvariantViolation(f"合法手 {move} が拒否されました: {result.message}")

                self._check_invariants(session, side, enemies_before)
            else:
                played = max_moves

            if session.is_finished:
                return GameResult(game_id, GAME_OVER, played, winner=session.outcome.winner)
            return GameResult(game_id, MAX_MOVES, played)

        except InvariantViolation as e:
            return GameResult(game_id, ERROR, played, error=f"{e} (move {played + 1})")

    @staticmethod
    def _check_invariants(session: GameSession, side: Side, enemies_before: int):
        board = session.board

        if board.count(Cell.MUSKETEER) != NUM_MUSKETEERS:
            raise InvariantViolation(f"銃士が{board.count(Cell.MUSKETEER)}人になりました")

        # 銃士の手は敵を1つ取り、敵の手では数が変わらない
        expected = enemies_before - 1 if side == Side.MUSKETEERS else enemies_before
        if board.count(Cell.ENEMY) != expected:
            raise InvariantViolation(
                f"敵の数が{board.count(Cell.ENEMY)}（期待値{expected}）"
            )

        if session.outcome == Outcome.ONGOING and session.side_to_move != side.opponent:
            raise InvariantViolation("手番が交代していません")

    def run_simulation(self, num_games: int, max_moves: int = 200) -> SimulationStats:
        """num_games 局を実行して集計を返す"""
        stats = SimulationStats()
        print(f"🎲 三銃士ランダム対局: {num_games}局（1局あたり最大{max_moves}手）")

        for game_id in range(1, num_games + 1):
            result = self.run_game(game_id, max_moves)
            stats.record(result)
            if self.verbose or result.failed:
                self._print_result(result)

        self._print_summary(stats)
        return stats

    @staticmethod
    def _print_result(result: GameResult):
        mark = "❌" if result.failed else "・"
        winner = result.winner.name if result.winner else "-"
        line = f"{mark} #{result.game_id} {result.termination_reason} 手数={result.total_moves} 勝者={winner}"
        if result.error:
            line += f"\n    {result.error}"
        print(line)

    @staticmethod
    def _print_summary(stats: SimulationStats):
        rows = [
            ("対局数", stats.total_games),
            ("決着", stats.completed_games),
            ("  銃士の勝ち", stats.musketeer_wins),
            ("  敵の勝ち", stats.enemy_wins),
            ("手詰まり", stats.stalemates),
            ("打ち切り", stats.max_moves_reached),
            ("不変条件違反", stats.error_games),
        ]
        print("-" * 40)
        for label, value in rows:
            print(f"{label:<12}{value:>8}")
        print(f"{'平均手数':<12}{stats.average_moves:>8.1f}")
        print("-" * 40)

        for error in stats.errors[:10]:
            print(f"❌ {error}")


def main():
    parser = argparse.ArgumentParser(description="三銃士のランダム自己対戦で不変条件を検査する")
    parser.add_argument("--games", type=int, default=100, help="対局数")
    parser.add_argument("--max-moves", type=int, default=200, help="1局あたりの最大手数")
    parser.add_argument("--board", type=str, default=None, help="開始盤面のファイル（省略時は標準の初期盤面）")
    parser.add_argument("--seed", type=int, default=None, help="乱数シード")
    parser.add_argument("--verbose", "-v", action="store_true", help="全対局の結果を表示")
    args = parser.parse_args()

    initial_board = load_board(args.board) if args.board else None
    simulator = SelfPlaySimulator(verbose=args.verbose, seed=args.seed, initial_board=initial_board)
    stats = simulator.run_simulation(args.games, args.max_moves)

    sys.exit(1 if stats.error_games else 0)


if __name__ == "__main__":
    main()
