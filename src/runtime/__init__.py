"""Runtime engine exports."""

from .commands import CommandResult, RuntimeCommandDispatcher
from .loop import RuntimeBootstrap, RuntimeEngine

__all__ = [
    "CommandResult",
    "RuntimeBootstrap",
    "RuntimeCommandDispatcher",
    "RuntimeEngine",
]
