# src/lineplay/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Persistence (storage)
- Formatting (output)
"""

__all__ = []
