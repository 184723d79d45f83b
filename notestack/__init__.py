"""
notestack: Markdown notes kept one file per note, ordered by a number in each filename.
"""
