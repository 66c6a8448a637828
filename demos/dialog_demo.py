"""
Dialog Demo: scripted conversation in a pygame window

Demonstrates:
- Characters with expressions and per-character options
- Labels and auto-advance
- Custom commands and the built-in next prompt commands
- A minimal PresentationSurface drawn with pygame

Controls:
    SPACE  next statement (only while the next prompt is shown)
    Z      jump to the "finish" label
    ESC    quit

Run: python -m demos.dialog_demo
"""

from __future__ import annotations

import logging

import pygame

from parley import DialogSession, PresentationSurface
from parley.core.config import ConfigTree
from parley.core.models import DialogIntent


# ============================================================================
# SURFACE
# ============================================================================

class PygameSurface(PresentationSurface):
    """Draws dialog boxes as plain rectangles. Side images are placeholders."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.Font(None, 26)
        self._boxes: list[tuple[pygame.Rect, DialogIntent, ConfigTree]] = []

    def render(self, intent: DialogIntent, config: ConfigTree) -> pygame.Rect:
        width, height = self.screen.get_size()
        box = config["text_box"]
        margin = box["margin"]
        padding = box["padding"]
        box_height = self.font.get_linesize() * 2 + padding["top"] + padding["bottom"]

        if config["dialog_type"] == "vn":
            side = config["side_image"]["options"]["width"] + margin if config["side_image"].get("name") else 0
            rect = pygame.Rect(margin + side, height - margin - box_height, width - 2 * margin - side, box_height)
        else:
            rect = self._pop_rect(config.get("position"), box["width"], box_height, margin)

        self._boxes.append((rect, intent, config))
        return rect

    def _pop_rect(self, position: str | None, box_width: int, box_height: int, margin: int) -> pygame.Rect:
        width, height = self.screen.get_size()
        position = position or "topleft"

        if position.endswith("left"):
            x = margin
        elif position.endswith("right"):
            x = width - box_width - margin
        else:
            x = (width - box_width) // 2

        if position.startswith("top"):
            y = margin
        elif position.startswith("bot"):
            y = height - margin - box_height
        else:
            y = (height - box_height) // 2

        return pygame.Rect(x, y, box_width, box_height)

    def clear_all(self) -> None:
        self._boxes = [b for b in self._boxes if b[2].get("persistent")]

    def draw(self) -> None:
        for rect, intent, config in self._boxes:
            padding = config["text_box"]["padding"]
            pygame.draw.rect(self.screen, (240, 240, 240), rect, border_radius=config["text_box"]["options"]["radius"])

            side_name = config["side_image"].get("name")
            if side_name:
                size = config["side_image"]["options"]["width"]
                side = pygame.Rect(rect.x - size - 10, rect.bottom - size, size, size)
                pygame.draw.rect(self.screen, (120, 160, 220), side)
                self.screen.blit(self.font.render(side_name, True, (0, 0, 0)), side.move(4, 4))

            y = rect.y + padding["top"]
            if config.get("name"):
                self.screen.blit(self.font.render(config["name"], True, (160, 40, 40)), (rect.x + padding["left"], y))
                y += self.font.get_linesize()
            self.screen.blit(self.font.render(intent.text, True, (0, 0, 0)), (rect.x + padding["left"], y))

            if config.get("show_next_prompt"):
                tip = (rect.right - padding["right"], rect.bottom - padding["bottom"])
                pygame.draw.polygon(self.screen, (0, 0, 0), [(tip[0] - 12, tip[1] - 12), (tip[0] - 12, tip[1]), tip])


# ============================================================================
# SCRIPT
# ============================================================================

CHARACTERS = {
    "r": {
        "name": "Robot",
        "expressions": {"happy": "bean"},
        "default_expression": "happy",
    },
    "t": {
        "name": "Tom",
        "expressions": {"happy": "skuller"},
        "default_expression": "happy",
        "dialog_type": "vn",
        "dialog_options": {"dialog_text": {"options": {"letter_spacing": 10}}},
    },
}

SCRIPT = {
    "begin": [
        "r Hello, I am Bean.",
        "t Hi, I am Skuller.",
        "disableNextPrompt sayHi r I can say hi from the console too!",
    ],
    "finish": [
        "enableNextPrompt r Parley is awesome!",
    ],
}


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("DialogDemo")

    pygame.init()
    screen = pygame.display.set_mode((960, 540))
    pygame.display.set_caption("Parley Dialog Demo")
    clock = pygame.time.Clock()

    surface = PygameSurface(screen)
    session = DialogSession(surface)
    session.register_characters(CHARACTERS)
    session.register_command("sayHi", lambda: logger.info("Hi! Press Z to finish the script"))
    session.define_labels(SCRIPT)
    session.start_label("begin")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE and session.show_next_prompt:
                    session.advance()
                elif event.key == pygame.K_z:
                    session.configure({"pop": {"position": "center"}})
                    session.start_label("finish")

        screen.fill((30, 30, 40))
        surface.draw()
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":
    main()
