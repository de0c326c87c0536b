import pytest

from api.socketio.channel_bridge import ChannelBridge, PRESENT_EVENT
from controllers.presentation_controller import PresentationController
from models.domain.playback import PlaybackState
from helpers import settle


class FakeSio:
    def __init__(self):
        self.emitted = []

    async def emit(self, event, data, to=None):
        self.emitted.append((event, data, to))


@pytest.fixture
def sio():
    return FakeSio()


@pytest.mark.asyncio
async def test_client_receives_what_other_windows_post(sio, hub):
    bridge = ChannelBridge(sio, hub, "room")
    bridge.attach("abc")
    window = hub.open_port("room", label="window")

    window.post({"type": "navigate", "slideIndex": 1, "activeStep": 0})
    await settle()

    assert sio.emitted == [(PRESENT_EVENT, {"type": "navigate", "slideIndex": 1, "activeStep": 0}, "abc")]
    bridge.close()


@pytest.mark.asyncio
async def test_client_messages_are_validated(sio, hub):
    bridge = ChannelBridge(sio, hub, "room")
    bridge.attach("abc")
    window = hub.open_port("room", label="window")

    assert await bridge.receive("abc", {"type": "sync-request"})
    assert not await bridge.receive("abc", {"type": "navigate", "slideIndex": "one"})
    assert not await bridge.receive("abc", "exit")
    assert not await bridge.receive("unknown", {"type": "exit"})

    assert window.inbox.get_nowait() == {"type": "sync-request"}
    assert window.inbox.empty()
    bridge.close()


@pytest.mark.asyncio
async def test_detach_closes_port(sio, hub):
    bridge = ChannelBridge(sio, hub, "room")
    bridge.attach("a")
    bridge.attach("b")
    assert hub.listener_count("room") == 2

    bridge.detach("a")
    await settle()

    assert bridge.client_count == 1
    assert hub.listener_count("room") == 1

    bridge.close()
    assert hub.listener_count("room") == 0


@pytest.mark.asyncio
async def test_remote_client_drives_presentation(sio, hub, bus, deck_service):
    controller = PresentationController(deck_service, hub, bus, channel_name="room")
    bridge = ChannelBridge(sio, hub, "room")
    bridge.attach("remote")

    await controller.start()
    await settle()
    sio.emitted.clear()

    await bridge.receive("remote", {"type": "navigate", "slideIndex": 1, "activeStep": 0})
    await settle()

    assert controller.state == PlaybackState(1, 0)
    # A received navigate is not echoed back
    assert sio.emitted == []

    await bridge.receive("remote", {"type": "exit"})
    await settle()

    assert not controller.is_presenting
    bridge.close()
