"""Completion over the live R namespace."""

from rbridge.completion.engine import CompletionEngine, CompletionQuery

__all__ = ["CompletionEngine", "CompletionQuery"]
