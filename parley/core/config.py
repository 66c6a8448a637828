"""
Layered dialog configuration.

Presentation options are nested dicts ("config trees") merged across
layers of increasing precedence:

    built-in flags -> dialog type defaults -> character values
        -> character dialog_options -> per-call options

Merging is structural: dict keys are unioned recursively, lists are
concatenated, and anything else is replaced by the later layer.

Usage:
    config = DialogConfig(pop={"position": "center"})
    options = config.resolve(DialogType.POP, character, side_image="bean")
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from parley.core.models import DialogType

if TYPE_CHECKING:
    from parley.core.models import Character


ConfigTree = dict[str, Any]

# Positions understood by pop dialogs
POP_POSITIONS = (
    "topleft", "top", "topright",
    "left", "center", "right",
    "botleft", "bot", "botright",
)

DEFAULT_POP_OPTIONS: ConfigTree = {
    "position": "topleft",
    "side_image": {
        "options": {"width": 60},
    },
    "text_box": {
        "width": 450,
        "margin": 20,
        "padding": {"top": 15, "right": 20, "bottom": 15, "left": 20},
        "options": {"radius": 15},
    },
    "dialog_text": {
        "offset_x": 1,
        "options": {
            "size": 20,
            "letter_spacing": 10,
            "line_spacing": 10,
            "width": 350,
        },
    },
    "next_prompt": {
        "name": "right-arrow",
        "options": {"width": 20},
    },
    "do_tween": True,
}

DEFAULT_VN_OPTIONS: ConfigTree = {
    "side_image": {
        "options": {"width": 120},
    },
    "text_box": {
        "margin": 20,
        "padding": {"top": 15, "right": 20, "bottom": 15, "left": 20},
        "options": {"radius": 15},
    },
    "dialog_text": {
        "offset_x": 1,
        # width is left to the surface: vn boxes span the screen
        "options": {
            "size": 20,
            "letter_spacing": 0,
            "line_spacing": 10,
        },
    },
    "next_prompt": {
        "name": "right-arrow",
        "options": {"width": 20},
    },
    "do_tween": True,
}


def _kind(value: Any) -> str:
    if isinstance(value, Mapping):
        return "dict"
    if isinstance(value, (list, tuple)):
        return "list"
    return "scalar"


def _merge_into(target: dict, layer: Mapping) -> None:
    for key, value in layer.items():
        kind = _kind(value)
        if key in target and kind != "scalar" and _kind(target[key]) == kind:
            target[key] = deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


def deep_merge(*layers: Any) -> Any:
    """
    Deep merge two or more config trees, later layers winning.

    Inputs are never mutated: every layer is deep-copied before it is
    merged. Lists are concatenated rather than merged by index.

    Args:
        *layers: Dicts, lists or scalars, lowest precedence first

    Returns:
        The merged value ({} when called without layers)
    """
    if not layers:
        return {}

    first, *rest = layers
    result = copy.deepcopy(first)
    if isinstance(result, Mapping) and not isinstance(result, dict):
        result = dict(result)
    elif isinstance(result, tuple):
        result = list(result)

    for layer in rest:
        kind = _kind(layer)
        if kind != _kind(result):
            result = copy.deepcopy(layer)
            if kind == "dict":
                result = dict(result)
            elif kind == "list":
                result = list(result)
        elif kind == "list":
            result = result + copy.deepcopy(list(layer))
        elif kind == "dict":
            _merge_into(result, layer)
        else:
            result = layer

    return result


class DialogConfig:
    """Configuration for a dialog session."""

    def __init__(
        self,
        show_next_prompt: bool = True,
        pop: Optional[Mapping[str, Any]] = None,
        vn: Optional[Mapping[str, Any]] = None,
    ):
        self.show_next_prompt = show_next_prompt
        self.pop: ConfigTree = deep_merge(DEFAULT_POP_OPTIONS, pop or {})
        self.vn: ConfigTree = deep_merge(DEFAULT_VN_OPTIONS, vn or {})

    def update(self, options: Mapping[str, Any]) -> None:
        """
        Merge options into the live configuration.

        Args:
            options: Mapping with any of show_next_prompt, pop, vn

        Raises:
            TypeError: On an option name this config does not know
        """
        for key, value in options.items():
            if key == "show_next_prompt":
                self.show_next_prompt = bool(value)
            elif key in ("pop", "vn"):
                setattr(self, key, deep_merge(getattr(self, key), value))
            else:
                raise TypeError(f"Unknown dialog option: {key!r}")

    def type_defaults(self, dialog_type: DialogType) -> ConfigTree:
        """Get a copy of the option tree for a dialog type."""
        return copy.deepcopy(getattr(self, DialogType(dialog_type).value))

    def resolve(
        self,
        dialog_type: DialogType,
        character: Optional[Character] = None,
        side_image: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> ConfigTree:
        """
        Build the effective options for one dialog box.

        Args:
            dialog_type: Layout family of the box
            character: Speaking character (None for direct display)
            side_image: Resolved side image asset key
            options: Per-call overrides, highest precedence

        Returns:
            Fully merged config tree
        """
        dialog_type = DialogType(dialog_type)
        layers: list[Mapping[str, Any]] = [
            {
                "show_next_prompt": self.show_next_prompt,
                "dialog_type": dialog_type.value,
            },
            getattr(self, dialog_type.value),
        ]

        if character is not None:
            speaker: ConfigTree = {
                "name": character.name,
                "side_image": {"name": side_image},
            }
            # Shorthand for dialog_options.position
            if character.position:
                speaker["position"] = character.position
            layers.append(speaker)
            if character.dialog_options:
                layers.append(character.dialog_options)

        if options:
            layers.append(options)

        return deep_merge(*layers)

    def to_dict(self) -> ConfigTree:
        """Snapshot the whole configuration as a config tree."""
        return {
            "show_next_prompt": self.show_next_prompt,
            "pop": copy.deepcopy(self.pop),
            "vn": copy.deepcopy(self.vn),
        }
