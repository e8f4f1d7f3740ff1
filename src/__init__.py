"""
三銃士 (Three Musketeers)
"""
