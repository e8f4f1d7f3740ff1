"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# 銃士が角に3人、それぞれの隣に敵がいる盤面
CORNER_SNAPSHOT = (
    "M o . o M\n"
    "o . . . .\n"
    ". . . . .\n"
    "o . . . .\n"
    "M . . . .\n"
)


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from src.engine import Board
    return Board()


@pytest.fixture
def initial_board():
    """標準の初期盤面を提供するフィクスチャ"""
    from src.engine.snapshot import load_initial_board
    return load_initial_board()


@pytest.fixture
def make_board():
    """スナップショット形式の行から盤面を作る関数を提供するフィクスチャ"""
    from src.engine.snapshot import parse_snapshot

    def _make_board(*lines):
        return parse_snapshot("".join(line + "\n" for line in lines))
    return _make_board


@pytest.fixture
def corner_board():
    """角の銃士の盤面を提供するフィクスチャ"""
    from src.engine.snapshot import parse_snapshot
    return parse_snapshot(CORNER_SNAPSHOT)


@pytest.fixture
def corner_board_file(tmp_path):
    """角の銃士の盤面ファイルを提供するフィクスチャ"""
    path = tmp_path / "board.txt"
    path.write_text(CORNER_SNAPSHOT, encoding="utf-8")
    return path
