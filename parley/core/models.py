"""
Dialog data model - characters, statements and parse results.

Records that arrive from user data (characters, structured statements)
are Pydantic models so they are validated on the way in. The parser's
output is a plain dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field


NARRATOR = "narrator"


class DialogType(str, Enum):
    """Layout family used to present a character's lines."""
    POP = "pop"  # Positionable pop-up box
    VN = "vn"    # Full-width visual novel box at the bottom


class Model(BaseModel):
    """
    Base class for validated dialog records.

    Field aliases let records written with camelCase keys
    (defaultExpression, dialogType, ...) load unchanged.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self) -> Model:
        """Create a deep copy of this record."""
        return self.model_copy(deep=True)


class Character(Model):
    """
    A speaker that statements can refer to by key.

    Attributes:
        key: Registry key (the mapping key wins on registration)
        name: Display name shown in the dialog box
        expressions: Expression key -> side image asset key
        default_expression: Expression used when a line names no expression
        dialog_type: Box layout for this character's lines
        position: Shorthand for dialog_options["position"]
        dialog_options: Per-character option overrides
    """
    key: str = ""
    name: Optional[str] = None
    expressions: dict[str, str] = Field(default_factory=dict)
    default_expression: Optional[str] = Field(default=None, alias="defaultExpression")
    dialog_type: DialogType = Field(default=DialogType.POP, alias="dialogType")
    position: Optional[str] = None
    dialog_options: Optional[dict[str, Any]] = Field(default=None, alias="dialogOptions")


class ChoiceStatement(BaseModel):
    """
    Structured statement for interactive dialogs.

    Only ``statement`` is read today. Extra fields are kept on the model
    so scripts can carry data for later interactive types.
    """

    model_config = ConfigDict(extra='allow')

    statement: str


# A raw script line: text, alternatives picked at random, or a structured object
Statement = Union[str, Sequence[str], ChoiceStatement, Mapping[str, Any]]


@dataclass
class DialogIntent:
    """
    Normalized result of parsing one statement.

    ``who``, ``expression`` and ``side_image`` stay None for statements
    made only of commands. Those have empty text and are never displayed.
    """
    source: Any = None
    who: Optional[str] = None
    expression: Optional[str] = None
    side_image: Optional[str] = None
    text: str = ""
    commands: list[str] = field(default_factory=list)

    @property
    def is_displayable(self) -> bool:
        return self.text != ""
