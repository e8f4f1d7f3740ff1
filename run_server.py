#!/usr/bin/env python
"""
三銃士 開発サーバ起動スクリプト
"""

import sys
import os

# プロジェクトルートをパスに追加
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

# appを直接インポート
from src.api.main import app
from src.config import API_HOST, API_PORT
import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Three Musketeers 開発サーバを起動します")
    print("=" * 60)
    print(f"APIサーバ: http://localhost:{API_PORT}")
    print(f"API ドキュメント: http://localhost:{API_PORT}/docs")
    print("=" * 60)
    print()

    uvicorn.run(
        app,
        host=API_HOST,
        port=API_PORT,
        reload=False,
        log_level="info"
    )
