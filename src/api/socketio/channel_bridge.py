"""
Channel bridge - lets a browser window join the presentation channel

Each Socket.IO client gets its own ChannelPort on the hub, so it behaves like
one more window of the same origin: it receives every message the other
windows post (as "present" events) and what it emits on "present" is posted
to them. Inbound payloads are validated with decode_message before they
reach the hub; malformed ones are dropped.
"""

import asyncio
from typing import Dict, Tuple

from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.events import decode_message
from services.presentation_channel import ChannelHub, ChannelPort
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)

PRESENT_EVENT = "present"


class ChannelBridge:
    def __init__(self, sio, hub: ChannelHub, channel_name: str):
        self.sio = sio
        self.hub = hub
        self.channel_name = channel_name
        self._clients: Dict[str, Tuple[ChannelPort, asyncio.Task]] = {}

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def attach(self, sid: str) -> ChannelPort:
        port = self.hub.open_port(self.channel_name, label=f"sio:{sid}")
        task = create_tracked_task(
            self._relay(sid, port),
            category=TaskCategory.API,
            description=f"Channel relay to {sid}"
        )
        self._clients[sid] = (port, task)
        return port

    def detach(self, sid: str) -> None:
        entry = self._clients.pop(sid, None)
        if entry is None:
            return
        port, task = entry
        port.close()
        task.cancel()

    async def receive(self, sid: str, data) -> bool:
        """Post a client's message to the other windows; returns whether it was accepted"""
        entry = self._clients.get(sid)
        if entry is None:
            return False
        message = decode_message(data)
        if message is None:
            log.debug("Malformed channel message dropped", sid=sid)
            return False
        entry[0].post(message.to_wire())
        return True

    async def _relay(self, sid: str, port: ChannelPort) -> None:
        while not port.closed:
            wire = await port.inbox.get()
            await self.sio.emit(PRESENT_EVENT, wire, to=sid)

    def close(self) -> None:
        for sid in list(self._clients):
            self.detach(sid)


def register_channel_bridge(sio, hub: ChannelHub, channel_name: str) -> ChannelBridge:
    """Registers connect/disconnect/present handlers on `sio`"""
    bridge = ChannelBridge(sio, hub, channel_name)

    @sio.event
    async def connect(sid, environ, auth=None):
        client_ip = environ.get('REMOTE_ADDR', 'unknown')
        bridge.attach(sid)
        log.info(f"Client connected: {sid} from {client_ip}")

    @sio.event
    async def disconnect(sid, reason=None):
        bridge.detach(sid)
        log.info(f"Client disconnected: {sid}")

    @sio.on(PRESENT_EVENT)
    async def present(sid, data):
        await bridge.receive(sid, data)

    return bridge
