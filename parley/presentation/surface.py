"""
Presentation surface interface.

The dialog core never draws anything. It hands each displayable
DialogIntent, with fully resolved options, to a surface supplied by the
host (a sprite layer, a terminal, a test double...). Animations are the
surface's business: the core does not wait for them.

Usage:
    class TerminalSurface(PresentationSurface):
        def render(self, intent, config):
            print(f"{config.get('name') or ''}: {intent.text}")

        def clear_all(self):
            pass
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from parley.core.config import ConfigTree
from parley.core.models import DialogIntent

logger = logging.getLogger(__name__)


class PresentationSurface(ABC):
    """Base class for anything that can show dialog boxes."""

    @abstractmethod
    def render(self, intent: DialogIntent, config: ConfigTree) -> Any:
        """
        Draw one dialog box.

        Args:
            intent: Parsed statement; ``intent.text`` is never empty
            config: Effective options. ``config["dialog_type"]`` selects
                the layout, ``config["side_image"]["name"]`` is the side
                image asset key (or None).

        Returns:
            An opaque handle the host can use to manipulate the box
        """

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every dialog box not rendered with ``persistent``."""


@dataclass(eq=False)
class RenderedDialog:
    """A dialog box held by a MemorySurface."""
    handle: int
    intent: DialogIntent
    config: ConfigTree

    @property
    def text(self) -> str:
        return self.intent.text

    @property
    def persistent(self) -> bool:
        return bool(self.config.get("persistent", False))


class MemorySurface(PresentationSurface):
    """
    Surface that keeps dialog boxes in memory.

    Useful for headless hosts and tests.

    Attributes:
        visible: Boxes currently on screen
        history: Every box ever rendered, in order
        clear_count: Number of clear_all() calls
    """

    def __init__(self):
        self.visible: list[RenderedDialog] = []
        self.history: list[RenderedDialog] = []
        self.clear_count = 0
        self._next_handle = 1

    def render(self, intent: DialogIntent, config: ConfigTree) -> RenderedDialog:
        dialog = RenderedDialog(handle=self._next_handle, intent=intent, config=config)
        self._next_handle += 1
        self.visible.append(dialog)
        self.history.append(dialog)
        logger.debug(f"Rendered {config.get('dialog_type')} dialog #{dialog.handle}: {intent.text!r}")
        return dialog

    def clear_all(self) -> None:
        self.visible = [d for d in self.visible if d.persistent]
        self.clear_count += 1

    @property
    def texts(self) -> list[str]:
        """Text of every box rendered so far."""
        return [d.text for d in self.history]

    @property
    def current(self) -> RenderedDialog | None:
        """The most recently rendered box still visible."""
        return self.visible[-1] if self.visible else None
