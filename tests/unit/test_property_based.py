"""
プロパティベーステスト（Hypothesis）
ランダムな盤面と手で不変条件を検証する

戦略:
1. 手は条件を満たすときだけ受理され、拒否理由の種類も正しい
2. 手の適用後も銃士は常に3人、敵の数は銃士の捕獲でのみ1つ減る
3. 勝敗判定は隣接・整列の定義どおり
4. 手番は受理された手でのみ交代する
"""

from hypothesis import given, settings, strategies as st

from src.engine import (
    Board, Cell, Side, Outcome, Direction, Rules, GameSession, BOARD_SIZE, NUM_MUSKETEERS,
    OutOfBoundsError, NoSuchPieceError, IllegalDestinationError,
)


# =============================================================================
# カスタム戦略の定義
# =============================================================================

@st.composite
def board_strategy(draw) -> Board:
    """銃士3人と、それ以外のマスに敵か空きをランダムに置いた盤面を生成"""
    indices = draw(st.lists(
        st.integers(min_value=0, max_value=BOARD_SIZE * BOARD_SIZE - 1),
        min_size=NUM_MUSKETEERS, max_size=NUM_MUSKETEERS, unique=True
    ))
    others = draw(st.lists(
        st.sampled_from([Cell.ENEMY, Cell.EMPTY]),
        min_size=BOARD_SIZE * BOARD_SIZE, max_size=BOARD_SIZE * BOARD_SIZE
    ))

    board = Board()
    for index in range(BOARD_SIZE * BOARD_SIZE):
        cell = Cell.MUSKETEER if index in indices else others[index]
        board.set(index // BOARD_SIZE, index % BOARD_SIZE, cell)
    return board


@st.composite
def position_strategy(draw) -> tuple:
    """盤外を少し含む位置を生成"""
    row = draw(st.integers(min_value=-1, max_value=BOARD_SIZE))
    col = draw(st.integers(min_value=-1, max_value=BOARD_SIZE))
    return (row, col)


def in_bounds(position) -> bool:
    return 0 <= position[0] < BOARD_SIZE and 0 <= position[1] < BOARD_SIZE


# =============================================================================
# 不変条件テスト
# =============================================================================

class TestPropertyBasedRules:
    """プロパティベーステスト: ルールの不変条件"""

    @given(board_strategy(), position_strategy(),
           st.sampled_from(list(Direction)), st.sampled_from(list(Side)))
    @settings(max_examples=300)
    def test_validation_matches_rule(self, board, origin, direction, side):
        """受理されるのは条件を満たすときだけで、拒否理由の種類も正しい"""
        destination = direction.step(origin)

        if not in_bounds(origin) or not in_bounds(destination):
            expected = OutOfBoundsError
        elif board.get(*origin) != side.piece:
            expected = NoSuchPieceError
        elif board.get(*destination) != side.target:
            expected = IllegalDestinationError
        else:
            expected = None

        try:
            Rules.validate_move(board, origin, direction, side)
            raised = None
        except (OutOfBoundsError, NoSuchPieceError, IllegalDestinationError) as e:
            raised = type(e)

        assert raised == expected

    @given(board_strategy(), st.sampled_from(list(Side)), st.data())
    @settings(max_examples=200)
    def test_piece_counts_conserved(self, board, side, data):
        """手の適用後も銃士は3人、敵は銃士の捕獲でのみ1つ減る"""
        legal_moves = Rules.get_legal_moves(board, side)
        if not legal_moves:
            return

        move = data.draw(st.sampled_from(legal_moves))
        enemies_before = board.count(Cell.ENEMY)
        Rules.apply_move(board, move.origin, move.destination, side)

        assert board.count(Cell.MUSKETEER) == NUM_MUSKETEERS
        if side == Side.MUSKETEERS:
            assert board.count(Cell.ENEMY) == enemies_before - 1
        else:
            assert board.count(Cell.ENEMY) == enemies_before

    @given(board_strategy())
    @settings(max_examples=300)
    def test_evaluate_matches_definition(self, board):
        """勝敗判定が隣接・整列の定義と一致する"""
        musketeers = board.find(Cell.MUSKETEER)

        threatened = False
        for row, col in musketeers:
            for dr, dc in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
                r, c = row + dr, col + dc
                if in_bounds((r, c)) and board.get(r, c) == Cell.ENEMY:
                    threatened = True

        same_row = len({row for row, _ in musketeers}) == 1
        same_col = len({col for _, col in musketeers}) == 1

        outcome = Rules.evaluate(board)
        if not threatened:
            assert outcome == Outcome.MUSKETEERS_WIN
        elif same_row or same_col:
            assert outcome == Outcome.ENEMIES_WIN
        else:
            assert outcome == Outcome.ONGOING

    @given(board_strategy(), st.lists(
        st.tuples(position_strategy(), st.sampled_from(list(Direction))),
        max_size=30
    ))
    @settings(max_examples=100)
    def test_turn_flips_only_on_accepted_moves(self, board, attempts):
        """手番は受理された手でのみ交代する"""
        session = GameSession(board)

        for origin, direction in attempts:
            if session.is_finished:
                break
            side = session.side_to_move
            result = session.play_move(origin, direction)

            if not result.accepted:
                assert session.side_to_move == side
            elif session.outcome == Outcome.ONGOING:
                assert session.side_to_move == side.opponent
            else:
                assert session.side_to_move is None
