"""
Statement parser - turns one script line into a DialogIntent.

Statement grammar:

```
(<command> )* (<key>:<expression> | <key> )? <free text>
```

Examples:

```
Hello there.                    narrator says "Hello there."
r Hello, I am a robot!          r says it, with r's default expression
r:happy Hello, I am a robot!    r says it with the "happy" side image
disableNextPrompt sayHi r Hi    runs two commands, then r says "Hi"
disableNextPrompt               commands only, nothing is displayed
```
"""

from __future__ import annotations

import random
import re
from typing import Any, Mapping, Optional

from parley.core.errors import MalformedStatement
from parley.core.models import NARRATOR, ChoiceStatement, DialogIntent, Statement
from parley.script.commands import CommandDispatcher
from parley.script.registry import CharacterRegistry


class StatementParser:
    """
    Parses statements against the registered characters and commands.

    Parsing has no side effects: commands are collected, not run.
    """

    # First whitespace-delimited word and the whitespace run after it
    WORD_PATTERN = re.compile(r'^(\S+)(?:\s+|$)')
    # key:expression followed by whitespace
    SPEAKER_PATTERN = re.compile(r'^(\w+):(\S+)\s+')

    def __init__(
        self,
        characters: CharacterRegistry,
        commands: CommandDispatcher,
        rng: Optional[random.Random] = None,
    ):
        self.characters = characters
        self.commands = commands
        self.rng = rng or random.Random()

    def parse(self, statement: Statement) -> DialogIntent:
        """
        Parse a statement.

        Args:
            statement: String, list of alternative strings, or
                structured statement

        Returns:
            The parsed intent

        Raises:
            MalformedStatement: If no string can be taken from the statement
            UnknownCharacter: If a key:expression line names an unknown key
            UnknownExpression: If the expression is not defined for the speaker
        """
        intent = DialogIntent(source=statement)
        text = self.select(statement)
        text = self._extract_commands(text, intent)

        # Commands only: nothing to display, no speaker lookup
        if text == "":
            return intent

        text = self._extract_speaker(text, intent)
        intent.side_image = self.characters.resolve_expression(intent.who, intent.expression)
        intent.text = text
        return intent

    def select(self, statement: Statement) -> str:
        """Pick the string to parse out of any statement shape."""
        if isinstance(statement, str):
            return statement

        if isinstance(statement, ChoiceStatement):
            return statement.statement

        if isinstance(statement, Mapping):
            return self._select_structured(statement)

        if isinstance(statement, (list, tuple)):
            if not statement:
                raise MalformedStatement(statement, "no alternatives to choose from")
            chosen = self.rng.choice(statement)
            if not isinstance(chosen, str):
                raise MalformedStatement(statement, "alternatives must be strings")
            return chosen

        raise MalformedStatement(statement, f"unsupported type {type(statement).__name__}")

    def _select_structured(self, statement: Mapping[str, Any]) -> str:
        text = statement.get("statement")
        if not isinstance(text, str):
            raise MalformedStatement(statement, 'missing string field "statement"')
        return text

    def _extract_commands(self, text: str, intent: DialogIntent) -> str:
        while text:
            match = self.WORD_PATTERN.match(text)
            if not match or not self.commands.is_command(match.group(1)):
                break
            intent.commands.append(match.group(1))
            text = text[match.end():]
        return text

    def _extract_speaker(self, text: str, intent: DialogIntent) -> str:
        # key:expression wins over a bare key
        match = self.SPEAKER_PATTERN.match(text)
        if match:
            character = self.characters.resolve_character(match.group(1))
            intent.who = character.key
            intent.expression = match.group(2)
            return text[match.end():]

        key = self.characters.match_prefix(text)
        if key is not None:
            character = self.characters.resolve_character(key)
            intent.who = key
            intent.expression = character.default_expression
            return text[len(key) + 1:]

        intent.who = NARRATOR
        return text
