"""
Passenger window mirroring the driver, alone and paired through a WindowHost
"""

import pytest
import pytest_asyncio

from controllers.audience_controller import AudienceController
from controllers.presentation_controller import PresentationController
from controllers.window_host import InProcessWindowHost
from models.domain.playback import PlaybackState
from models.enums import PlaybackMode
from models.events import KeyboardKeyPressEvent
from services.elapsed_timer import ElapsedTimer
from services.event_bus import EventBus
from helpers import settle


@pytest_asyncio.fixture
async def audience(deck_service, hub):
    rendered = []
    a = AudienceController(hub, deck_service.fork(), EventBus("passenger"), renderer=rendered.append)
    a.rendered = rendered
    yield a
    a.close()


@pytest_asyncio.fixture
async def paired(deck_service, hub, bus):
    host = InProcessWindowHost(hub, deck_service)
    driver = PresentationController(deck_service, hub, bus, window_host=host, timer=ElapsedTimer(tick_s=60))
    await driver.start()
    await settle()
    yield driver, host
    await driver.shutdown()
    await settle()


# ===== Standalone passenger =====

@pytest.mark.asyncio
async def test_mount_requests_sync(audience, hub):
    driver_side = hub.open_port(label="driver")

    await audience.mount()

    assert driver_side.inbox.get_nowait() == {"type": "sync-request"}
    assert audience.rendered[-1].slide.id == "intro"


@pytest.mark.asyncio
async def test_navigate_applies_slide_then_clamped_step(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()

    driver_side.post({"type": "navigate", "slideIndex": 1, "activeStep": 5})
    await settle()

    assert audience.state == PlaybackState(1, 1)
    assert audience.rendered[-1].slide.id == "demo"


@pytest.mark.asyncio
async def test_navigate_to_unknown_slide_is_ignored(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()

    driver_side.post({"type": "navigate", "slideIndex": 3, "activeStep": 0})
    await settle()

    assert audience.state == PlaybackState(0, 0)


@pytest.mark.asyncio
async def test_passenger_never_broadcasts_navigation(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()
    driver_side.inbox.get_nowait()  # sync-request

    driver_side.post({"type": "navigate", "slideIndex": 2, "activeStep": 1})
    await settle()

    assert driver_side.inbox.empty()


@pytest.mark.asyncio
async def test_pointer_is_mirrored(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()

    driver_side.post({"type": "pointer", "x": 0.25, "y": 0.75, "visible": True})
    await settle()

    assert (audience.pointer.x, audience.pointer.y, audience.pointer.visible) == (0.25, 0.75, True)


@pytest.mark.asyncio
async def test_exit_closes_window(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()

    driver_side.post({"type": "exit"})
    await settle()

    assert audience.closed
    assert audience.channel.closed


@pytest.mark.asyncio
async def test_escape_leaves_fullscreen_then_closes(audience):
    await audience.mount()
    assert audience.fullscreen

    await audience.event_bus.publish(KeyboardKeyPressEvent("ESCAPE"))
    assert not audience.fullscreen and not audience.closed

    await audience.event_bus.publish(KeyboardKeyPressEvent("f"))
    assert audience.fullscreen

    await audience.event_bus.publish(KeyboardKeyPressEvent("F"))
    assert not audience.fullscreen

    await audience.event_bus.publish(KeyboardKeyPressEvent("ESCAPE"))
    assert audience.closed


@pytest.mark.asyncio
async def test_closing_does_not_notify_driver(audience, hub):
    driver_side = hub.open_port(label="driver")
    await audience.mount()
    driver_side.inbox.get_nowait()  # sync-request

    audience.close()

    assert driver_side.inbox.empty()


# ===== Paired through the window host =====

@pytest.mark.asyncio
async def test_passenger_follows_driver(paired):
    driver, host = paired
    passenger = host.passenger

    assert host.passenger_open
    assert host.fullscreen
    assert passenger.state == PlaybackState(0, 0)

    await driver.advance()
    await settle()
    assert passenger.state == PlaybackState(0, 1)

    await driver.advance()
    await driver.advance()
    await settle()
    assert passenger.state == PlaybackState(1, 0)
    assert passenger.render_state().slide.id == "demo"


@pytest.mark.asyncio
async def test_passenger_joining_late_syncs_to_driver(paired):
    driver, host = paired
    host.close_passenger()
    await driver.advance()
    await driver.advance()
    await driver.advance()

    await driver.open_window()
    await settle()

    assert host.passenger.state == PlaybackState(1, 0)


@pytest.mark.asyncio
async def test_open_window_focuses_existing_passenger(paired):
    driver, host = paired
    first = host.passenger

    await driver.open_window()

    assert host.passenger is first
    assert host.focus_count == 1


@pytest.mark.asyncio
async def test_driver_exit_closes_passenger(paired):
    driver, host = paired
    passenger = host.passenger

    await driver.exit()
    await settle()

    assert passenger.closed
    assert not host.passenger_open
    assert not host.fullscreen


@pytest.mark.asyncio
async def test_passenger_closing_leaves_driver_presenting(paired):
    driver, host = paired

    host.passenger.close()
    await driver.advance()

    assert driver.mode == PlaybackMode.PRESENTING
    assert driver.state == PlaybackState(0, 1)
    assert not host.passenger_open
