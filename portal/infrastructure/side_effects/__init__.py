"""Detached side effects fired after a committed mutation."""

from .queue import SideEffect, SideEffectOutcome, SideEffectQueue

__all__ = ["SideEffect", "SideEffectOutcome", "SideEffectQueue"]
