"""Hanoi Scores package: score-tracking HTTP service for the Tower of Hanoi game.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
