import os
import sys
import random
import pytest

# Ensure parley can be imported without installing
sys.path.append(os.getcwd())


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from parley.core.events import EventBus
    return EventBus()


@pytest.fixture
def surface():
    """In-memory presentation surface."""
    from parley.presentation.surface import MemorySurface
    return MemorySurface()


@pytest.fixture
def session(surface, event_bus):
    """Session with a seeded random source."""
    from parley.script.session import DialogSession
    return DialogSession(surface, events=event_bus, rng=random.Random(1234))


@pytest.fixture
def characters():
    """Robot and Tom, as in the sample script."""
    return {
        "r": {
            "name": "Robot",
            "expressions": {"happy": "robot-happy", "sad": "robot-sad"},
        },
        "t": {
            "name": "Tom",
            "expressions": {"happy": "skuller"},
            "default_expression": "happy",
            "dialog_type": "vn",
            "dialog_options": {"dialog_text": {"options": {"letter_spacing": 10}}},
        },
    }


@pytest.fixture
def cast_session(session, characters):
    """Session with the sample characters registered."""
    session.register_characters(characters)
    return session
