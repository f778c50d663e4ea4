"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the booking core to:
- Entity storage (in-memory keyed collections, shared id counter)
- Persistence (JSON snapshots)
- Time (system and fixed clocks)
"""
