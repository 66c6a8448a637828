"""
Character registry - speakers and their side image expressions.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Optional, Union

from parley.core.errors import UnknownCharacter, UnknownExpression
from parley.core.models import NARRATOR, Character, DialogType

logger = logging.getLogger(__name__)

CharacterData = Union[Character, Mapping[str, Any]]


class CharacterRegistry:
    """
    Registered characters, keyed by the short key used in scripts.

    The narrator always exists so that lines without a speaker prefix
    have someone to belong to. It can be replaced by registering the
    ``narrator`` key like any other character.
    """

    def __init__(self):
        self._characters: dict[str, Character] = {
            NARRATOR: Character(key=NARRATOR, dialog_type=DialogType.VN),
        }
        # Longest key first, for prefix matching
        self._by_length: list[str] = [NARRATOR]

    def register(self, characters: Mapping[str, CharacterData]) -> None:
        """
        Add or replace characters.

        Args:
            characters: Mapping of key -> Character or plain dict. A later
                registration for the same key replaces the whole record.

        Raises:
            pydantic.ValidationError: If a plain dict is not a valid character
        """
        for key, data in characters.items():
            if isinstance(data, Character):
                character = data.model_copy(update={"key": key}, deep=True)
            else:
                character = Character.model_validate({**data, "key": key})
            self._characters[key] = character
            logger.debug(f"Registered character {key!r} ({character.dialog_type.value})")

        self._by_length = sorted(self._characters, key=len, reverse=True)

    def resolve_character(self, key: Optional[str]) -> Character:
        """
        Get a character by key.

        An empty key means the narrator.

        Raises:
            UnknownCharacter: If the key is not registered
        """
        if not key:
            return self._characters[NARRATOR]
        try:
            return self._characters[key]
        except KeyError:
            raise UnknownCharacter(key) from None

    def resolve_expression(self, key: Optional[str], expression: Optional[str]) -> Optional[str]:
        """
        Get the side image asset key of a character expression.

        Returns:
            The asset key, or None when no expression is given

        Raises:
            UnknownCharacter: If the key is not registered
            UnknownExpression: If the character has no such expression
        """
        if expression is None:
            return None
        character = self.resolve_character(key)
        try:
            return character.expressions[expression]
        except KeyError:
            raise UnknownExpression(character.key, expression) from None

    def match_prefix(self, text: str) -> Optional[str]:
        """
        Find the character key that starts a line.

        A key matches when the text starts with the key followed by a
        single space. When several keys match, the longest one wins,
        whatever the registration order.

        Several keys can only match when the longer one contains a space
        and starts with the shorter one plus a space ("old" and
        "old man"). Keys of equal length never both match.

        Returns:
            The matching key, or None
        """
        for key in self._by_length:
            if key and text.startswith(key + " "):
                return key
        return None

    def get(self, key: str) -> Optional[Character]:
        return self._characters.get(key)

    def keys(self) -> list[str]:
        return list(self._characters)

    def __contains__(self, key: object) -> bool:
        return key in self._characters

    def __iter__(self) -> Iterator[str]:
        return iter(self._characters)

    def __len__(self) -> int:
        return len(self._characters)
