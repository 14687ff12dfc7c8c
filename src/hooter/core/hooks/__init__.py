"""Hook storage and registration.

Example usage:
    from hooter.core.hooks import HookStore

    store = HookStore()
    hook_id = store.put("user.*", on_user_event)
    store.get("user.created")
    store.delete(hook_id)
"""

from hooter.core.hooks.hook_decorator import HookDecorator
from hooter.core.hooks.hook_store import HookStore, RegisteredHook
from hooter.core.hooks.matching import GLOBSTAR, compile_pattern, match

__all__ = [
    "HookDecorator",
    "HookStore",
    "RegisteredHook",
    "GLOBSTAR",
    "compile_pattern",
    "match",
]
