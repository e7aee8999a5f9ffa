"""
PySide6/QML desktop frontend for Memory Match.

Bridges the portable game engine to Qt signals, list models and timers.
Desktop-only package.
"""
