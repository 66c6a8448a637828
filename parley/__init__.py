"""
Parley

Branching dialog sequences for visual novels and interactive fiction.

Quick Start:
    from parley import DialogSession, MemorySurface

    session = DialogSession(MemorySurface())
    session.register_characters({
        "r": {"name": "Robot", "expressions": {"happy": "bean"}},
    })
    session.define_labels({
        "begin": ["r:happy Hello, I am Bean.", "Bean waves."],
    })
    session.start_label("begin")
    session.advance()
"""

__version__ = "0.1.0"

from parley.core import (
    Character,
    ChoiceStatement,
    DialogConfig,
    DialogEvent,
    DialogIntent,
    DialogType,
    EventBus,
    MalformedStatement,
    ParleyError,
    UnknownCharacter,
    UnknownExpression,
    deep_merge,
)
from parley.presentation import MemorySurface, PresentationSurface
from parley.script import DialogSession, SequenceState

__all__ = [
    # Session
    "DialogSession",
    "SequenceState",
    # Data
    "Character",
    "ChoiceStatement",
    "DialogIntent",
    "DialogType",
    # Configuration
    "DialogConfig",
    "deep_merge",
    # Events
    "EventBus",
    "DialogEvent",
    # Presentation
    "PresentationSurface",
    "MemorySurface",
    # Errors
    "ParleyError",
    "UnknownCharacter",
    "UnknownExpression",
    "MalformedStatement",
]
