"""
Core dialog module.

Exports:
- DialogConfig, deep_merge: Layered configuration
- Character, DialogType, ChoiceStatement, DialogIntent: Data model
- EventBus, Event, DialogEvent: Event system
- ParleyError and subclasses: Error taxonomy
"""

from parley.core.models import (
    NARRATOR,
    Character,
    ChoiceStatement,
    DialogIntent,
    DialogType,
    Statement,
)
from parley.core.config import DialogConfig, ConfigTree, deep_merge
from parley.core.events import EventBus, Event, DialogEvent
from parley.core.errors import (
    ParleyError,
    UnknownCharacter,
    UnknownExpression,
    MalformedStatement,
)

__all__ = [
    # Data
    "NARRATOR",
    "Character",
    "ChoiceStatement",
    "DialogIntent",
    "DialogType",
    "Statement",
    # Configuration
    "DialogConfig",
    "ConfigTree",
    "deep_merge",
    # Events
    "EventBus",
    "Event",
    "DialogEvent",
    # Errors
    "ParleyError",
    "UnknownCharacter",
    "UnknownExpression",
    "MalformedStatement",
]
