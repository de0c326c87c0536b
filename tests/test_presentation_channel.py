"""
Presentation channel: hub delivery rules, codec, and the per-window pump
"""

import pytest

from models.enums import WindowRole
from models.events import (
    EventType,
    ExitMessage,
    NavigateMessage,
    PointerMessage,
    SyncRequestMessage,
    decode_message,
)
from services.event_bus import EventBus
from services.presentation_channel import PresentationChannel
from helpers import settle


# ===== Codec =====

def test_navigate_wire_format():
    assert NavigateMessage(2, 1).to_wire() == {"type": "navigate", "slideIndex": 2, "activeStep": 1}


@pytest.mark.parametrize("message", [NavigateMessage(3, 0), ExitMessage(), SyncRequestMessage()])
def test_decode_recovers_message(message):
    decoded = decode_message(message.to_wire())
    assert type(decoded) is type(message)
    assert decoded.to_wire() == message.to_wire()


def test_pointer_is_clamped_to_slide():
    message = PointerMessage(1.5, -0.2, True)
    assert message.to_wire() == {"type": "pointer", "x": 1.0, "y": 0.0, "visible": True}


@pytest.mark.parametrize("wire", [
    None,
    "navigate",
    {},
    {"type": "zoom", "level": 2},
    {"type": "navigate", "slideIndex": "2", "activeStep": 1},
    {"type": "navigate", "slideIndex": 2},
    {"type": "navigate", "slideIndex": -1, "activeStep": 0},
    {"type": "navigate", "slideIndex": True, "activeStep": 0},
    {"type": "pointer", "x": 0.5, "y": 0.5},
    {"type": "pointer", "x": "left", "y": 0.5, "visible": True},
])
def test_malformed_or_unknown_messages_decode_to_none(wire):
    assert decode_message(wire) is None


# ===== Hub =====

def test_post_reaches_other_ports_but_not_sender(hub):
    a = hub.open_port(label="a")
    b = hub.open_port(label="b")
    c = hub.open_port(label="c")

    assert a.post({"type": "exit"}) == 2

    assert a.inbox.empty()
    assert b.inbox.get_nowait() == {"type": "exit"}
    assert c.inbox.get_nowait() == {"type": "exit"}


def test_receivers_get_independent_copies(hub):
    a = hub.open_port(label="a")
    b = hub.open_port(label="b")
    wire = {"type": "navigate", "slideIndex": 0, "activeStep": 0}

    a.post(wire)
    wire["slideIndex"] = 9

    assert b.inbox.get_nowait()["slideIndex"] == 0


def test_topics_are_isolated_by_name(hub):
    a = hub.open_port("deck-a", label="a")
    other = hub.open_port("deck-b", label="other")

    assert a.post({"type": "exit"}) == 0
    assert other.inbox.empty()


def test_closed_port_neither_sends_nor_receives(hub):
    a = hub.open_port(label="a")
    b = hub.open_port(label="b")

    b.close()
    assert a.post({"type": "exit"}) == 0
    assert b.post({"type": "exit"}) == 0
    assert hub.listener_count() == 1


# ===== PresentationChannel =====

@pytest.mark.asyncio
async def test_received_messages_are_published_on_the_bus(hub):
    driver_bus, passenger_bus = EventBus("driver"), EventBus("passenger")
    received = []
    passenger_bus.subscribe(EventType.CHANNEL_NAVIGATE, received.append)

    driver = PresentationChannel(hub, driver_bus, WindowRole.DRIVER)
    passenger = PresentationChannel(hub, passenger_bus, WindowRole.PASSENGER)
    passenger.start()

    assert driver.post(NavigateMessage(2, 1)) == 1
    await settle()

    assert [(m.slide_index, m.active_step) for m in received] == [(2, 1)]

    driver.close()
    passenger.close()


@pytest.mark.asyncio
async def test_messages_arrive_in_send_order(hub):
    bus = EventBus("passenger")
    received = []
    bus.subscribe(EventType.CHANNEL_NAVIGATE, lambda m: received.append(m.active_step))

    driver = PresentationChannel(hub, EventBus("driver"), WindowRole.DRIVER)
    passenger = PresentationChannel(hub, bus, WindowRole.PASSENGER)

    for step in range(5):
        driver.post(NavigateMessage(0, step))

    assert await passenger.deliver_pending() == 5
    assert received == [0, 1, 2, 3, 4]


@pytest.mark.asyncio
async def test_unknown_messages_are_skipped(hub):
    bus = EventBus("passenger")
    received = []
    bus.subscribe(EventType.CHANNEL_EXIT, received.append)

    passenger = PresentationChannel(hub, bus, WindowRole.PASSENGER)
    raw = hub.open_port(label="newer-peer")

    raw.post({"type": "laser-color", "color": "red"})
    raw.post({"type": "exit"})
    await passenger.deliver_pending()

    assert len(received) == 1


@pytest.mark.asyncio
async def test_post_without_listeners_is_dropped(hub):
    driver = PresentationChannel(hub, EventBus("driver"), WindowRole.DRIVER)
    assert driver.post(ExitMessage()) == 0


@pytest.mark.asyncio
async def test_close_stops_pump_and_drops_pending(hub):
    bus = EventBus("passenger")
    received = []
    bus.subscribe(EventType.CHANNEL_NAVIGATE, received.append)

    driver = PresentationChannel(hub, EventBus("driver"), WindowRole.DRIVER)
    passenger = PresentationChannel(hub, bus, WindowRole.PASSENGER)
    task = passenger.start()

    driver.post(NavigateMessage(1, 0))
    passenger.close()
    await settle()

    assert passenger.closed
    assert task.cancelled()
    assert received == []
    assert driver.post(NavigateMessage(1, 1)) == 0


@pytest.mark.parametrize("x, y", [(float("nan"), 0.5), (0.5, float("inf")), (float("-inf"), 0.0)])
def test_non_finite_pointer_is_ignored(x, y):
    assert decode_message({"type": "pointer", "x": x, "y": y, "visible": True}) is None


def test_non_finite_pointer_collapses_when_built_locally():
    message = PointerMessage(float("nan"), 0.5, True)
    assert message.to_wire() == {"type": "pointer", "x": 0.0, "y": 0.5, "visible": True}
