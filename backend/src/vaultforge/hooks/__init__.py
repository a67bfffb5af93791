"""VaultForge lifecycle hook system.

Hooks are lightweight, untyped extension points keyed by
(object type, phase):
- preClone / postClone
- preDelete / postDelete
- preDestroy / postDestroy

``pre*`` hooks run before the state change, ``post*`` hooks after the
change is persisted and every typed event has been dispatched.

Usage:
    from vaultforge.hooks import hook

    @hook("Password", "postDelete")
    def notify_shares(password):
        ...
"""

from vaultforge.hooks.cascade import CascadeHooks, register_builtin_hooks
from vaultforge.hooks.registry import HOOK_PHASES, HookFn, HookRegistry, hook

__all__ = [
    "CascadeHooks",
    "HOOK_PHASES",
    "HookFn",
    "HookRegistry",
    "hook",
    "register_builtin_hooks",
]
