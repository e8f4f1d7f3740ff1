"""
三銃士 API パッケージ
"""
