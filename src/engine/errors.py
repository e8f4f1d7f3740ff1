"""
ゲームエンジンの例外定義

読み込み・入力・手・保存の4系統に分かれる
"""


class GameError(Exception):
    """三銃士エンジンの例外の基底クラス"""


# 読み込みエラー（ゲーム開始前に致命的）

class LoadError(GameError):
    """盤面を読み込めない"""


class InvalidCellError(LoadError, ValueError):
    """未知の記号が含まれている"""


class MalformedDimensionsError(LoadError, ValueError):
    """5行5列になっていない"""


# 入力エラー（同じ手番でやり直し）

class ParseError(GameError, ValueError):
    """手の書式が正しくない"""


# 手のエラー（同じ手番でやり直し、手番は消費しない）

class MoveError(GameError):
    """不正な手の基底クラス"""


class OutOfBoundsError(MoveError, IndexError):
    """移動元または移動先が盤外"""


class NoSuchPieceError(MoveError, ValueError):
    """移動元に手番側の駒がない"""


class IllegalDestinationError(MoveError, ValueError):
    """移動先のマスが手番側の条件を満たさない"""


# 保存エラー（報告のみ、盤面はメモリに残る）

class SaveError(GameError):
    """盤面を書き出せない"""
