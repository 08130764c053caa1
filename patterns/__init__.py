"""Reusable persistence patterns shared by verticals.

Each module demonstrates a self-contained pattern that verticals subclass:
currently the session-bound repository base.
"""
