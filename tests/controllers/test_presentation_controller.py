"""
Driver-side playback state machine and its channel protocol.

A raw hub port stands in for the remote window: it sees everything the
driver posts and can inject messages as if another window sent them.
"""

import pytest
import pytest_asyncio

from controllers.presentation_controller import PresentationController
from models.config import PresenterConfig
from models.domain.playback import PlaybackState
from models.enums import PlaybackMode, ViewMode
from models.events import EventType
from services.deck_service import DeckService
from services.elapsed_timer import ElapsedTimer
from helpers import deck, settle


def drain(port):
    items = []
    while not port.inbox.empty():
        items.append(port.inbox.get_nowait())
    return items


def navigates(port):
    return [(w["slideIndex"], w["activeStep"]) for w in drain(port) if w["type"] == "navigate"]


@pytest_asyncio.fixture
async def controller(deck_service, hub, bus):
    rendered = []
    c = PresentationController(
        deck_service, hub, bus,
        renderer=rendered.append,
        timer=ElapsedTimer(tick_s=60)
    )
    c.rendered = rendered
    yield c
    await c.shutdown()
    await settle()


@pytest_asyncio.fixture
async def remote(controller, hub):
    """Started controller plus a remote endpoint opened after the initial broadcast"""
    await controller.start()
    port = hub.open_port(label="remote")
    yield port
    port.close()


# ===== Lifecycle =====

@pytest.mark.asyncio
async def test_start_enters_presenting_at_step_zero(controller, bus):
    started = []
    bus.subscribe(EventType.PRESENTATION_STARTED, started.append)

    await controller.start()

    assert controller.mode == PlaybackMode.PRESENTING
    assert controller.state == PlaybackState(0, 0)
    assert controller.view_mode == ViewMode.PRESENTER
    assert controller.timer.running
    assert len(started) == 1
    assert controller.rendered[-1].slide.id == "intro"


@pytest.mark.asyncio
async def test_start_twice_is_ignored(controller):
    await controller.start()
    await controller.advance()
    await controller.start()
    assert controller.state == PlaybackState(0, 1)


@pytest.mark.asyncio
async def test_start_on_empty_deck_stays_idle(hub, bus):
    controller = PresentationController(DeckService(deck()), hub, bus)
    await controller.start()
    assert controller.mode == PlaybackMode.IDLE


@pytest.mark.asyncio
async def test_operations_are_noops_while_idle(controller, hub):
    spy = hub.open_port(label="spy")

    await controller.advance()
    await controller.go_back()
    assert not await controller.on_key("v")
    await controller.exit()
    assert controller.toggle_view() == ViewMode.PRESENTER
    assert not controller.toggle_pointer()

    assert controller.state == PlaybackState(0, 0)
    assert controller.rendered == []
    assert drain(spy) == []


@pytest.mark.asyncio
async def test_start_broadcasts_initial_position(controller, hub):
    spy = hub.open_port(label="spy")
    await controller.start()
    assert navigates(spy) == [(0, 0)]


# ===== Navigation =====

@pytest.mark.asyncio
async def test_advance_through_steps_then_next_slide(controller, deck_service):
    await controller.start()
    step_count = len(deck_service.steps_for(0))

    for _ in range(step_count):
        await controller.advance()
    assert controller.state == PlaybackState(0, step_count)

    await controller.advance()
    assert controller.state == PlaybackState(1, 0)


@pytest.mark.asyncio
async def test_advance_at_end_of_presentation_does_nothing(controller, deck_service):
    deck_service.set_current_slide(2)
    await controller.start()
    await controller.advance()
    assert controller.state == PlaybackState(2, 1)
    assert controller.next_preview_label == "End of presentation"

    await controller.advance()
    assert controller.state == PlaybackState(2, 1)


@pytest.mark.asyncio
async def test_go_back_steps_then_previous_slide_at_step_zero(controller):
    await controller.start()
    await controller.advance()
    await controller.advance()
    await controller.advance()
    assert controller.state == PlaybackState(1, 0)

    await controller.go_back()
    assert controller.state == PlaybackState(0, 0)

    await controller.advance()
    await controller.go_back()
    assert controller.state == PlaybackState(0, 0)

    await controller.go_back()
    assert controller.state == PlaybackState(0, 0)


@pytest.mark.asyncio
async def test_on_key_only_matches_current_on_key_step(controller):
    await controller.start()
    assert not await controller.on_key("v")
    assert controller.state == PlaybackState(0, 0)

    for _ in range(3):
        await controller.advance()
    assert controller.state == PlaybackState(1, 0)
    assert not await controller.on_key("x")
    assert not await controller.on_key("V")
    assert await controller.on_key("v")
    assert controller.state == PlaybackState(1, 1)

    # All steps consumed: the key no longer matches
    assert not await controller.on_key("v")


@pytest.mark.asyncio
async def test_next_preview_label(controller):
    await controller.start()
    assert controller.next_preview_label == "Next Step (1/2)"
    await controller.advance()
    assert controller.next_preview_label == "Next Step (2/2)"
    await controller.advance()
    assert controller.next_preview_label == "Next Slide"


@pytest.mark.asyncio
async def test_request_advance_schedules_an_advance(controller):
    await controller.start()
    controller.render_state().on_advance()
    await settle()
    assert controller.state == PlaybackState(0, 1)


@pytest.mark.asyncio
async def test_every_local_change_is_broadcast_once(controller, remote):
    await controller.advance()
    await controller.advance()
    await controller.advance()
    await controller.go_back()

    assert navigates(remote) == [(0, 1), (0, 2), (1, 0), (0, 0)]


@pytest.mark.asyncio
async def test_state_change_publishes_event(controller, bus):
    changes = []
    bus.subscribe(EventType.PLAYBACK_STATE_CHANGED, changes.append)

    await controller.start()
    await controller.advance()

    assert [(e.slide_index, e.active_step, e.remote) for e in changes] == [(0, 0, False), (0, 1, False)]


# ===== Received messages =====

@pytest.mark.asyncio
async def test_received_navigate_is_applied_without_rebroadcast(controller, remote, bus):
    changes = []
    bus.subscribe(EventType.PLAYBACK_STATE_CHANGED, changes.append)

    remote.post({"type": "navigate", "slideIndex": 2, "activeStep": 1})
    await settle()

    assert controller.state == PlaybackState(2, 1)
    assert navigates(remote) == []
    assert changes[-1].remote is True
    assert controller.rendered[-1].slide.id == "outro"

    # The skip applies to that one change only
    await controller.go_back()
    assert navigates(remote) == [(2, 0)]


@pytest.mark.asyncio
async def test_redundant_navigate_does_not_swallow_next_broadcast(controller, remote):
    remote.post({"type": "navigate", "slideIndex": 0, "activeStep": 0})
    await settle()

    await controller.advance()
    assert navigates(remote) == [(0, 1)]


@pytest.mark.asyncio
async def test_received_step_is_clamped(controller, remote):
    remote.post({"type": "navigate", "slideIndex": 1, "activeStep": 9})
    await settle()
    assert controller.state == PlaybackState(1, 1)


@pytest.mark.asyncio
async def test_navigate_to_unknown_slide_is_ignored(controller, remote):
    remote.post({"type": "navigate", "slideIndex": 7, "activeStep": 0})
    await settle()
    assert controller.state == PlaybackState(0, 0)


@pytest.mark.asyncio
async def test_sync_request_is_answered_with_current_position(controller, remote):
    await controller.advance()
    drain(remote)

    remote.post({"type": "sync-request"})
    await settle()

    assert navigates(remote) == [(0, 1)]


@pytest.mark.asyncio
async def test_received_exit_leaves_presentation(controller, remote, bus):
    ended = []
    bus.subscribe(EventType.PRESENTATION_ENDED, ended.append)

    remote.post({"type": "exit"})
    await settle()

    assert controller.mode == PlaybackMode.IDLE
    assert controller.channel is None
    assert [e.remote for e in ended] == [True]
    assert drain(remote) == []


@pytest.mark.asyncio
async def test_exit_broadcasts_and_returns_to_idle(controller, remote, bus):
    ended = []
    bus.subscribe(EventType.PRESENTATION_ENDED, ended.append)

    await controller.exit()

    assert drain(remote) == [{"type": "exit"}]
    assert controller.mode == PlaybackMode.IDLE
    assert not controller.timer.running
    assert [e.remote for e in ended] == [False]

    # Channel released: later posts from the remote go nowhere
    assert remote.post({"type": "sync-request"}) == 0


@pytest.mark.asyncio
async def test_received_pointer_is_ignored_by_driver(controller, remote):
    remote.post({"type": "pointer", "x": 0.3, "y": 0.3, "visible": True})
    await settle()
    assert not controller.pointer.visible


# ===== Presenter features =====

@pytest.mark.asyncio
async def test_toggle_view(controller):
    await controller.start()
    assert controller.toggle_view() == ViewMode.AUDIENCE
    assert controller.toggle_view() == ViewMode.PRESENTER


@pytest.mark.asyncio
async def test_pointer_is_mirrored_only_while_active(controller, remote):
    controller.move_pointer(0.5, 0.5)
    assert drain(remote) == []

    assert controller.toggle_pointer()
    controller.move_pointer(0.5, 2.0)
    assert drain(remote) == [{"type": "pointer", "x": 0.5, "y": 1.0, "visible": True}]
    assert controller.pointer.visible

    controller.hide_pointer()
    assert drain(remote) == [{"type": "pointer", "x": 0.0, "y": 0.0, "visible": False}]

    assert not controller.toggle_pointer()
    assert drain(remote) == [{"type": "pointer", "x": 0.0, "y": 0.0, "visible": False}]


@pytest.mark.asyncio
async def test_notes_follow_current_slide(controller):
    await controller.start()
    assert [s.text for s in controller.note_segments] == ["Welcome ", "first point", " and ", "second point"]


@pytest.mark.asyncio
async def test_elapsed_starts_at_zero(controller):
    await controller.start()
    assert controller.elapsed == "00:00"


@pytest.mark.asyncio
async def test_config_can_skip_passenger_and_fullscreen(deck_service, hub, bus):
    class Host:
        passenger_open = False
        fullscreen = False
        opened = 0

        async def open_passenger(self):
            self.opened += 1

        def focus_passenger(self): ...
        def close_passenger(self): ...
        def request_fullscreen(self): self.fullscreen = True
        def exit_fullscreen(self): self.fullscreen = False

    host = Host()
    controller = PresentationController(
        deck_service, hub, bus, window_host=host,
        config=PresenterConfig(open_passenger_on_start=False, request_fullscreen=False)
    )
    await controller.start()

    assert host.opened == 0
    assert not host.fullscreen
    await controller.exit()
