# src/lineplay/__init__.py
"""
LinePlay - LINE Token Economy Core

Fixed-point LINE amount handling, level progression and daily streak rewards
for the LINE play-to-earn portal, with a small JSON-backed account layer that
applies them.
"""

__version__ = "1.0.0"
