"""
Command dispatch - named actions embedded at the start of statements.

A statement such as ``"disableNextPrompt sayHi r Hello"`` carries two
commands. The parser only collects their names; the session runs them
after the sequence cursor has moved on, so a handler that calls
``advance()`` sees the next statement.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

CommandHandler = Callable[[], None]

ENABLE_NEXT_PROMPT = "enableNextPrompt"
DISABLE_NEXT_PROMPT = "disableNextPrompt"


class CommandDispatcher:
    """
    Maps command names to zero-argument handlers.

    Built-in commands are passed in as effects. Registering a handler
    under a built-in name does not remove the built-in effect: both run,
    the custom handler first.

    Usage:
        dispatcher = CommandDispatcher()
        dispatcher.register("sayHi", lambda: print("Hi!"))
        dispatcher.execute(["sayHi"])
    """

    def __init__(self, builtins: Optional[Mapping[str, CommandHandler]] = None):
        self._builtins: dict[str, CommandHandler] = dict(builtins or {})
        # Built-in names are recognized even without a custom handler
        self._handlers: dict[str, Optional[CommandHandler]] = {
            name: None for name in self._builtins
        }

    def register(self, name: str, handler: Optional[CommandHandler]) -> None:
        """
        Add or replace a command.

        Args:
            name: Word that triggers the command at the start of a statement
            handler: Zero-argument callable. None registers the name only,
                so the word is stripped from statements without side effects.
        """
        if not name or any(c.isspace() for c in name):
            raise ValueError(f"Command name must be a single word: {name!r}")
        if name in self._handlers and self._handlers[name] is not None:
            logger.debug(f"Overriding command handler {name!r}")
        self._handlers[name] = handler

    def is_command(self, word: str) -> bool:
        """Check if a word is a registered command name."""
        return word in self._handlers

    def names(self) -> list[str]:
        return list(self._handlers)

    def execute(self, commands: Iterable[str]) -> None:
        """
        Run commands in the given order.

        Handler exceptions propagate to the caller; commands after the
        failing one do not run.
        """
        for name in commands:
            if name not in self._handlers:
                logger.warning(f"Skipping unregistered command {name!r}")
                continue

            handler = self._handlers[name]
            if callable(handler):
                handler()

            # Built-in effects run on top of registered handlers
            effect = self._builtins.get(name)
            if effect is not None:
                effect()

            logger.debug(f"Executed command {name!r}")
