"""
Presentation Channel - Paired-window message passing

ChannelHub is the process-wide broker: endpoints opened on the same hub under
the same name see each other's messages (the same-origin BroadcastChannel
analogue). Delivery is fire-and-forget and ordered per receiver, and a
message is never delivered back to its sender.

PresentationChannel is one window's endpoint. It posts wire dicts to the
other endpoints and pumps its own inbox: each received dict is decoded into a
channel message event and published on the window's EventBus, where the
driver/passenger controllers react to it.

Example:
    hub = ChannelHub()
    driver = PresentationChannel(hub, driver_bus, role=WindowRole.DRIVER)
    passenger = PresentationChannel(hub, passenger_bus, role=WindowRole.PASSENGER)
    driver.start(); passenger.start()

    driver.post(NavigateMessage(2, 1))   # passenger_bus gets CHANNEL_NAVIGATE
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from models.config import DEFAULT_CHANNEL_NAME
from models.enums import WindowRole
from models.events import ChannelMessage, decode_message
from services.event_bus import EventBus
from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CHANNEL)


class ChannelPort:
    """
    Raw endpoint on a hub topic.

    Holds an inbox of wire dicts; the owner drains it. Closing detaches the
    port from its topic: nothing more is queued and sends are dropped.
    """

    def __init__(self, hub: "ChannelHub", name: str, label: str):
        self._hub = hub
        self.name = name
        self.label = label
        self.inbox: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def post(self, wire: Dict[str, Any]) -> int:
        """Queue `wire` on every other open port of the topic; returns receiver count"""
        if self.closed:
            log.debug("Post on closed port dropped", port=self.label, type=wire.get("type"))
            return 0
        return self._hub._deliver(self, wire)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._hub._detach(self)

    def __repr__(self) -> str:
        return f"ChannelPort({self.name!r}, {self.label!r}, closed={self.closed})"


class ChannelHub:
    """Registry of named topics; one per process"""

    def __init__(self):
        self._topics: Dict[str, List[ChannelPort]] = {}

    def open_port(self, name: str = DEFAULT_CHANNEL_NAME, label: str = "port") -> ChannelPort:
        port = ChannelPort(self, name, label)
        self._topics.setdefault(name, []).append(port)
        log.debug("Channel port opened", channel=name, port=label, listeners=len(self._topics[name]))
        return port

    def listener_count(self, name: str = DEFAULT_CHANNEL_NAME) -> int:
        return len(self._topics.get(name, []))

    def _deliver(self, sender: ChannelPort, wire: Dict[str, Any]) -> int:
        receivers = [p for p in self._topics.get(sender.name, []) if p is not sender and not p.closed]
        if not receivers:
            log.debug("No listeners, message dropped", channel=sender.name, type=wire.get("type"))
            return 0

        for port in receivers:
            # Each receiver gets its own copy, like a structured clone
            port.inbox.put_nowait(dict(wire))
        return len(receivers)

    def _detach(self, port: ChannelPort) -> None:
        ports = self._topics.get(port.name, [])
        if port in ports:
            ports.remove(port)
        if not ports:
            self._topics.pop(port.name, None)
        log.debug("Channel port closed", channel=port.name, port=port.label)


class PresentationChannel:
    """
    One window's end of the presentation channel.

    Outbound: post(message) serializes to the wire dict and hands it to the
    hub. Inbound: the pump decodes each wire dict and publishes the resulting
    event on `event_bus`. Unknown or malformed dicts are skipped.
    """

    def __init__(
        self,
        hub: ChannelHub,
        event_bus: EventBus,
        role: WindowRole,
        name: str = DEFAULT_CHANNEL_NAME
    ):
        self.hub = hub
        self.event_bus = event_bus
        self.role = role
        self.name = name
        self._port = hub.open_port(name, label=role.name.lower())
        self._pump_task: Optional[asyncio.Task] = None

    @property
    def closed(self) -> bool:
        return self._port.closed

    def post(self, message: ChannelMessage) -> int:
        """Fire-and-forget send; returns how many endpoints received it"""
        wire = message.to_wire()
        delivered = self._port.post(wire)
        if delivered:
            log.debug("Message posted", role=self.role.name, type=wire["type"], receivers=delivered)
        return delivered

    def start(self) -> asyncio.Task:
        """Start the inbox pump as a tracked task"""
        if self._pump_task is None or self._pump_task.done():
            self._pump_task = create_tracked_task(
                self.run(),
                category=TaskCategory.CHANNEL,
                description=f"Channel pump ({self.role.name.lower()}:{self.name})"
            )
        return self._pump_task

    async def run(self) -> None:
        """Pump inbox until closed"""
        try:
            while not self.closed:
                wire = await self._port.inbox.get()
                await self._dispatch(wire)
        except asyncio.CancelledError:
            log.debug("Channel pump cancelled", role=self.role.name)
            raise

    async def deliver_pending(self) -> int:
        """Dispatch everything already queued, without waiting; returns count handled"""
        handled = 0
        while not self.closed and not self._port.inbox.empty():
            await self._dispatch(self._port.inbox.get_nowait())
            handled += 1
        return handled

    async def _dispatch(self, wire: Any) -> None:
        if self.closed:
            return

        message = decode_message(wire)
        if message is None:
            log.debug("Ignoring unknown channel message", role=self.role.name, wire=wire)
            return

        await self.event_bus.publish(message)

    def close(self) -> None:
        """Release the subscription; queued and later messages are not applied"""
        if self.closed:
            return
        self._port.close()
        if self._pump_task and not self._pump_task.done():
            current = None
            try:
                current = asyncio.current_task()
            except RuntimeError:
                pass
            if self._pump_task is not current:
                self._pump_task.cancel()
        log.info("Presentation channel closed", role=self.role.name, channel=self.name)
