"""
Dialog session - the public entry point.

A session owns everything a running dialog needs: characters, commands,
labels, the sequence cursor and the configuration. Several sessions can
run side by side; nothing is stored at module level.

Usage:
    session = DialogSession(surface)
    session.register_characters({
        "r": {"name": "Robot", "expressions": {"happy": "bean"},
              "default_expression": "happy"},
    })
    session.register_command("sayHi", lambda: print("Hi!"))
    session.define_labels({
        "begin": [
            "r Hello, I am Bean.",
            "disableNextPrompt sayHi r I can say hi too!",
        ],
    })
    session.start_label("begin")

    # On each "next" key press
    if session.show_next_prompt:
        session.advance()
"""

from __future__ import annotations

import logging
import random
from typing import Any, Mapping, Optional, Sequence

from parley.core.config import ConfigTree, DialogConfig
from parley.core.events import DialogEvent, EventBus
from parley.core.models import DialogIntent, DialogType, Statement
from parley.presentation.surface import PresentationSurface
from parley.script.commands import (
    DISABLE_NEXT_PROMPT,
    ENABLE_NEXT_PROMPT,
    CommandDispatcher,
    CommandHandler,
)
from parley.script.parser import StatementParser
from parley.script.registry import CharacterData, CharacterRegistry
from parley.script.sequencer import ScriptSequencer, SequenceState

logger = logging.getLogger(__name__)


class DialogSession:
    """
    Runs dialog scripts against a presentation surface.

    Each advance() clears the surface, parses the statement at the
    cursor, moves the cursor, runs the statement's commands and then
    renders it. The cursor moves before anything can fail, so a
    statement that raises is consumed and not retried.
    """

    def __init__(
        self,
        surface: PresentationSurface,
        config: Optional[DialogConfig] = None,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.surface = surface
        self.config = config or DialogConfig()
        self.events = events or EventBus()

        self.characters = CharacterRegistry()
        self.commands = CommandDispatcher({
            ENABLE_NEXT_PROMPT: lambda: self._set_next_prompt(True),
            DISABLE_NEXT_PROMPT: lambda: self._set_next_prompt(False),
        })
        self.parser = StatementParser(self.characters, self.commands, rng)
        self.sequencer = ScriptSequencer()

        # Handle of the last box rendered by this session
        self.handle: Any = None

    # Configuration

    def configure(self, options: Mapping[str, Any]) -> None:
        """Merge options (show_next_prompt, pop, vn) into the configuration."""
        self.config.update(options)

    @property
    def show_next_prompt(self) -> bool:
        return self.config.show_next_prompt

    def _set_next_prompt(self, visible: bool) -> None:
        self.config.show_next_prompt = visible

    def register_characters(self, characters: Mapping[str, CharacterData]) -> None:
        self.characters.register(characters)

    def register_command(self, name: str, handler: Optional[CommandHandler]) -> None:
        self.commands.register(name, handler)

    # Script loading

    def define_labels(self, labels: Mapping[str, Sequence[Statement]]) -> None:
        self.sequencer.define_labels(labels)

    def load_sequence(self, statements: Sequence[Statement], auto_advance: bool = True) -> None:
        """
        Make a list of statements the current sequence.

        Args:
            statements: Statements to run, not stored under any label
            auto_advance: Display the first statement right away
        """
        self.sequencer.load_sequence(statements)
        self.events.publish(DialogEvent.SEQUENCE_LOADED, length=len(statements))
        if auto_advance:
            self.advance()

    def script(self, script: Mapping[str, Sequence[Statement]] | Sequence[Statement], auto_advance: bool = True) -> None:
        """
        Load a script.

        A mapping defines labels (merged with existing ones). A list is
        loaded as the current unnamed sequence.
        """
        if isinstance(script, Mapping):
            self.define_labels(script)
        elif isinstance(script, (list, tuple)):
            self.load_sequence(script, auto_advance)
        else:
            raise TypeError(f"Script must be a mapping or a list, not {type(script).__name__}")

    def start_label(self, label: str, auto_advance: bool = True) -> None:
        """
        Start the sequence stored under a label.

        An unknown label leaves the session idle; advance() then
        returns False.
        """
        found = self.sequencer.start_label(label)
        self.events.publish(DialogEvent.LABEL_STARTED, label=label, found=found)
        if auto_advance:
            self.advance()

    # Sequencing

    @property
    def state(self) -> SequenceState:
        return self.sequencer.state

    @property
    def cursor(self) -> int:
        return self.sequencer.cursor

    @property
    def current_label(self) -> Optional[str]:
        return self.sequencer.current_label

    def advance(self) -> bool:
        """
        Display the next statement.

        Returns:
            True if a statement was processed, False when idle or when
            the sequence is over

        Raises:
            MalformedStatement, UnknownCharacter, UnknownExpression:
                From parsing. The statement still counts as consumed.
        """
        state = self.sequencer.state
        if state is SequenceState.IDLE:
            return False

        self.clear()

        if state is SequenceState.EXHAUSTED:
            self.events.publish(DialogEvent.SEQUENCE_EXHAUSTED, label=self.current_label)
            return False

        logger.debug(f"Advancing {self.current_label or '<unnamed>'} at statement {self.cursor}")
        statement = self.sequencer.take()
        intent = self.parser.parse(statement)

        self._execute(intent)
        self._display(intent)
        return True

    def parse_only(self, statement: Statement) -> DialogIntent:
        """Parse a statement without running commands or displaying it."""
        return self.parser.parse(statement)

    def say(self, statement: Statement) -> DialogIntent:
        """
        Parse, execute and display one statement now.

        The sequence and its cursor are left alone.
        """
        intent = self.parser.parse(statement)
        self._execute(intent)
        self._display(intent)
        return intent

    def clear(self) -> None:
        """Remove non-persistent dialog boxes from the surface."""
        self.surface.clear_all()
        self.events.publish(DialogEvent.DIALOG_CLEARED)

    # Display

    def effective_config(
        self,
        intent: DialogIntent,
        options: Optional[Mapping[str, Any]] = None,
    ) -> ConfigTree:
        """Resolve the options used to display an intent."""
        character = self.characters.resolve_character(intent.who)
        return self.config.resolve(
            character.dialog_type,
            character,
            side_image=intent.side_image,
            options=options,
        )

    def pop(self, text: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Display text in a pop dialog box, outside of any script."""
        return self._show(DialogType.POP, text, options)

    def vn(self, text: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Display text in a visual novel dialog box, outside of any script."""
        return self._show(DialogType.VN, text, options)

    def _show(self, dialog_type: DialogType, text: str, options: Optional[Mapping[str, Any]]) -> Any:
        if not text:
            return None
        intent = DialogIntent(source=text, text=text)
        config = self.config.resolve(dialog_type, options=options)
        self.handle = self.surface.render(intent, config)
        return self.handle

    def _execute(self, intent: DialogIntent) -> None:
        if not intent.commands:
            return
        self.commands.execute(intent.commands)
        self.events.publish(DialogEvent.COMMANDS_EXECUTED, commands=list(intent.commands))

    def _display(self, intent: DialogIntent) -> Any:
        # Command-only statements show nothing
        if not intent.is_displayable:
            return None

        config = self.effective_config(intent)
        self.handle = self.surface.render(intent, config)
        self.events.publish(
            DialogEvent.STATEMENT_DISPLAYED,
            intent=intent,
            handle=self.handle,
        )
        return self.handle
