"""Testing utilities for envload.

This package provides an in-memory environment provider for unit testing
without touching the real process environment.
"""

from envload.testing.fake_environment import FakeEnvironment

__all__ = [
    "FakeEnvironment",
]
