import pytest
import pytest_asyncio

from controllers.keyboard_controller import KeyboardController
from controllers.presentation_controller import PresentationController
from models.config import KeyBindings
from models.domain.playback import PlaybackState
from models.enums import PlaybackMode, ViewMode
from models.events import KeyboardKeyPressEvent
from services.elapsed_timer import ElapsedTimer


@pytest_asyncio.fixture
async def keys(deck_service, hub, bus):
    presentation = PresentationController(deck_service, hub, bus, timer=ElapsedTimer(tick_s=60))
    keyboard = KeyboardController(presentation, bus)
    yield keyboard
    await presentation.shutdown()


@pytest.mark.asyncio
async def test_keys_ignored_while_idle(keys):
    assert await keys.handle_key("RIGHT") == "none"
    assert keys.presentation.mode == PlaybackMode.IDLE


@pytest.mark.asyncio
async def test_default_bindings(keys):
    p = keys.presentation
    await p.start()

    assert await keys.handle_key("RIGHT") == "advance"
    assert await keys.handle_key("SPACE") == "advance"
    assert p.state == PlaybackState(0, 2)
    assert await keys.handle_key("LEFT") == "back"
    assert p.state == PlaybackState(0, 1)

    assert await keys.handle_key("p") == "toggle_view"
    assert p.view_mode == ViewMode.AUDIENCE
    assert await keys.handle_key("L") == "toggle_pointer"
    assert p.pointer_active
    assert await keys.handle_key("w") == "open_window"

    assert await keys.handle_key("ESCAPE") == "exit"
    assert p.mode == PlaybackMode.IDLE


@pytest.mark.asyncio
async def test_other_keys_go_to_on_key_step(keys):
    p = keys.presentation
    await p.start()
    for _ in range(3):
        await p.advance()

    assert await keys.handle_key("x") == "none"
    assert await keys.handle_key("v") == "on_key"
    assert p.state == PlaybackState(1, 1)


@pytest.mark.asyncio
async def test_bus_key_events_are_dispatched(keys, bus):
    await keys.presentation.start()
    await bus.publish(KeyboardKeyPressEvent("RIGHT"))
    assert keys.presentation.state == PlaybackState(0, 1)


@pytest.mark.asyncio
async def test_custom_bindings(deck_service, hub, bus):
    presentation = PresentationController(deck_service, hub, bus)
    keyboard = KeyboardController(presentation, bus, KeyBindings(advance=["n"], back=["b"]))
    await presentation.start()

    assert await keyboard.handle_key("RIGHT") == "none"
    assert await keyboard.handle_key("N") == "advance"
    assert presentation.state == PlaybackState(0, 1)
    await presentation.exit()
