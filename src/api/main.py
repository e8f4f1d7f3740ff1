"""
三銃士 FastAPI サーバ
対局の状態管理と手の適用のエンドポイントを提供
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Optional, List, Dict
import logging
import uuid

from ..config import API_HOST, API_PORT
from ..engine import GameSession, Rules, LoadError
from ..engine.snapshot import load_initial_board, parse_snapshot, format_snapshot

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Three Musketeers API",
    description="三銃士ゲームのバックエンドAPI",
    version="1.0.0"
)

# CORS設定（フロントエンドからのアクセスを許可）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 対局を保持する辞書
games: Dict[str, GameSession] = {}


def get_session(game_id: str) -> GameSession:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="Game not found")
    return games[game_id]


def legal_moves_for(session: GameSession) -> List[dict]:
    """現在の手番の合法手（終了後は空）"""
    if session.side_to_move is None:
        return []
    moves = Rules.get_legal_moves(session.board, session.side_to_move)
    return [move.to_dict() for move in moves]


def game_state_dict(game_id: str, session: GameSession) -> dict:
    state = session.to_dict()
    state["game_id"] = game_id
    return state


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameRequest(BaseModel):
    snapshot: Optional[str] = None  # 省略時は標準の初期盤面


class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class MoveRequest(BaseModel):
    move: str  # 例: "A,5=L"、"0,0=E" で中断


class MoveResponse(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None
    game_state: dict
    legal_moves: Optional[List[dict]] = None


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "Welcome to the Three Musketeers API",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/apply_move/{game_id}",
            "/get_legal_moves/{game_id}",
            "/get_game/{game_id}",
            "/interrupt/{game_id}",
            "/snapshot/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game(request: Optional[NewGameRequest] = None):
    """
    新しい対局を開始する
    スナップショットを渡せばその盤面から、なければ標準の初期盤面から始まる
    """
    snapshot = request.snapshot if request else None
    try:
        board = parse_snapshot(snapshot) if snapshot is not None else load_initial_board()
    except LoadError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board: {e}")

    game_id = str(uuid.uuid4())
    session = GameSession(board)
    games[game_id] = session
    logger.info("New game %s (state=%s)", game_id, session.state.name)

    return NewGameResponse(
        game_id=game_id,
        message="New game started",
        game_state=game_state_dict(game_id, session)
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """対局の状態を取得"""
    return game_state_dict(game_id, get_session(game_id))


@app.post("/apply_move/{game_id}", response_model=MoveResponse)
async def apply_move(game_id: str, move_request: MoveRequest):
    """
    手を適用する
    不正な手・書式エラーでは success=False となり手番は変わらない
    """
    session = get_session(game_id)

    if session.is_finished:
        raise HTTPException(status_code=400, detail="The game is already over")

    result = session.submit_text(move_request.move)
    if not result.accepted:
        logger.debug("Rejected move %r in game %s: %s", move_request.move, game_id, result.message)

    return MoveResponse(
        success=result.accepted,
        message=result.message,
        error=type(result.error).__name__ if result.error else None,
        game_state=game_state_dict(game_id, session),
        legal_moves=legal_moves_for(session)
    )


@app.get("/get_legal_moves/{game_id}")
async def get_legal_moves(game_id: str):
    """現在の手番の合法手を取得"""
    session = get_session(game_id)

    if session.is_finished:
        return {"legal_moves": [], "message": "The game is over"}

    legal_moves = legal_moves_for(session)
    return {
        "legal_moves": legal_moves,
        "count": len(legal_moves),
        "side_to_move": session.side_to_move.name
    }


@app.post("/interrupt/{game_id}")
async def interrupt(game_id: str):
    """
    対局を中断する
    保存用のスナップショット文字列を返す
    """
    session = get_session(game_id)

    if session.is_finished:
        raise HTTPException(status_code=400, detail="The game is already over")

    result = session.interrupt()
    return {
        "message": result.message,
        "snapshot": format_snapshot(session.board),
        "game_state": game_state_dict(game_id, session)
    }


@app.get("/snapshot/{game_id}", response_class=PlainTextResponse)
async def snapshot(game_id: str):
    """現在の盤面をスナップショット形式で返す"""
    return format_snapshot(get_session(game_id).board)


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """対局を削除"""
    get_session(game_id)
    del games[game_id]
    return {"message": "Game deleted", "game_id": game_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
