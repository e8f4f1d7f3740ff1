"""
ゲーム全体の既定設定をまとめたモジュール
CLIやAPIの引数で上書きされない場合はここの値を使う
"""

# 保存先ファイル名の先頭に付ける文字列（board.txt -> out-board.txt）
OUTPUT_PREFIX = "out-"

# 開発サーバ
API_HOST = "0.0.0.0"
API_PORT = 8001
