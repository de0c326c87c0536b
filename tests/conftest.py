import pytest

from lifecycle.task_registry import TaskRegistry
from models.enums import AnimationTrigger as T
from services.deck_service import DeckService
from services.event_bus import EventBus
from services.presentation_channel import ChannelHub
from helpers import anim, slide, deck


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Each test gets its own registry; tasks of earlier event loops are gone"""
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def sample_deck():
    """
    Three slides:
      0: title onEnter, then two onClick bullets (2 steps)
      1: onKey "v" reveal with a chained caption (1 step)
      2: one onClick "thanks" (1 step)
    """
    return deck(
        slide(
            "intro",
            anim("title", T.ON_ENTER, duration=600),
            anim("bullet-1", T.ON_CLICK, duration=300),
            anim("bullet-2", T.ON_CLICK),
            notes="Welcome [step:1]first point[/step] and [step:2]second point[/step]",
        ),
        slide(
            "demo",
            anim("video", T.ON_KEY, key="v"),
            anim("caption", T.AFTER_PREVIOUS, delay=100),
        ),
        slide("outro", anim("thanks")),
    )


@pytest.fixture
def deck_service(sample_deck):
    return DeckService(sample_deck)


@pytest.fixture
def hub():
    return ChannelHub()


@pytest.fixture
def bus():
    return EventBus(name="test")
