"""Post-command hook registry.

The host orchestrator owns one ``PostCommandHooks`` instance and calls
``run("update")`` once a workspace update has finished.  Listeners register
plain zero-argument callables.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable

from loguru import logger

Hook = Callable[[], object]

UPDATE_COMMAND = "update"


class PostCommandHooks:
    """Callbacks run, in registration order, after a host command succeeds."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)

    def register(self, command: str, hook: Hook) -> None:
        """Register *hook* for *command*.  Registering the same hook twice is a no-op."""
        hooks = self._hooks[command]
        if hook not in hooks:
            hooks.append(hook)
            logger.debug("Hooks: registered {} after '{}'", getattr(hook, "__qualname__", hook), command)

    def hooks_for(self, command: str) -> list[Hook]:
        return list(self._hooks.get(command, []))

    def run(self, command: str) -> int:
        """Run every hook for *command*; exceptions propagate.  Returns the hook count."""
        hooks = self.hooks_for(command)
        for hook in hooks:
            hook()
        return len(hooks)
