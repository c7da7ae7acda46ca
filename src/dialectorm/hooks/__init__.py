"""
Diagnostic hooks registry for dialectorm.
"""

from .dispatcher import HookDispatcher, HookEvent, hooks

__all__ = ["HookDispatcher", "HookEvent", "hooks"]
