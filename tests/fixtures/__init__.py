"""Test fixtures for pytest.

This module re-exports commonly used test doubles for easier importing.
"""

from .broker import ConnectFactory, FakeCallbacks, FakeChannel, FakeConnection, make_status

__all__ = [
    "ConnectFactory",
    "FakeCallbacks",
    "FakeChannel",
    "FakeConnection",
    "make_status",
]
