"""
Dialog errors.

Parsing errors are raised synchronously to whoever called
``advance()``, ``parse_only()`` or ``say()``. Nothing retries them.
"""

from __future__ import annotations

from typing import Any


class ParleyError(Exception):
    """Base class for all dialog errors."""


class UnknownCharacter(ParleyError, KeyError):
    """A speaker key is not registered."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Character "{key}" is not registered')

    def __str__(self) -> str:
        return self.args[0]


class UnknownExpression(ParleyError, KeyError):
    """An expression key is not in the character's expression map."""

    def __init__(self, character: str, expression: str):
        self.character = character
        self.expression = expression
        super().__init__(
            f'Expression "{expression}" not found for character "{character}"'
        )

    def __str__(self) -> str:
        return self.args[0]


class MalformedStatement(ParleyError, ValueError):
    """A statement value cannot be turned into a string to parse."""

    def __init__(self, statement: Any, reason: str):
        self.statement = statement
        self.reason = reason
        super().__init__(f"Malformed statement {statement!r}: {reason}")
