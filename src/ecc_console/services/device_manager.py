"""Device lifecycle handling and per-device call-state sessions."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from ..models.schemas import LogEvent, LogLevel
from .call_state_tracker import CallStateTracker, OutputSink
from .errors import UnsupportedDeviceError
from .sdk_base import CallControl, DeviceHandle, HeadsetSDK, Subscription

logger = logging.getLogger(__name__)


class DeviceSession:
    """Call control and state tracker for one attached device."""

    def __init__(self, device: DeviceHandle, call_control: CallControl, tracker: CallStateTracker):
        self.device = device
        self.call_control = call_control
        self.tracker = tracker
        self._subscriptions: list[Subscription] = []

    def open(self) -> None:
        """Reset the tracker and subscribe it to the device's state streams."""
        self.tracker.reset(self.device)
        control = self.call_control
        device = self.device
        self._subscriptions = [
            control.ongoing_calls.subscribe(
                lambda count: self.tracker.on_ongoing_calls_update(count, device)
            ),
            control.mute_state.subscribe(lambda mute: self.tracker.on_mute_update(mute, device)),
            control.hold_state.subscribe(lambda hold: self.tracker.on_hold_update(hold, device)),
            control.ringing.subscribe(
                lambda ringing: self.tracker.on_ringing_update(ringing, device)
            ),
        ]

    def close(self) -> None:
        """Dispose stream subscriptions and unbind the tracker."""
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions = []
        self.tracker.unbind(self.device)


class DeviceManager:
    """Owns one DeviceSession per attached device that supports call control.

    The most recently attached device is the active one; keyboard commands
    are forwarded to it.
    """

    def __init__(
        self,
        sdk: HeadsetSDK,
        sink: Optional[OutputSink] = None,
        sdk_log_level: LogLevel = LogLevel.ERROR,
    ):
        """Initialize device manager.

        Args:
            sdk: Headset SDK providing device events and call control
            sink: Output sink handed to each session's tracker
            sdk_log_level: Minimum level of SDK log events to report
        """
        self.sdk = sdk
        self.sink = sink
        self.sdk_log_level = sdk_log_level
        self._sessions: dict[str, DeviceSession] = {}
        self._pending: set[asyncio.Task] = set()
        self._listeners: list[Subscription] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._generations: dict[str, int] = {}

    @property
    def sessions(self) -> list[DeviceSession]:
        return list(self._sessions.values())

    @property
    def active_session(self) -> Optional[DeviceSession]:
        if not self._sessions:
            return None
        return next(reversed(self._sessions.values()))

    def attach(self) -> None:
        """Subscribe to SDK events. Must run before the SDK starts discovery.

        Device events may arrive on SDK threads. Both kinds are handed to the
        event loop in delivery order, so sessions are only touched there.
        """
        if self._listeners:
            return
        self._loop = asyncio.get_running_loop()
        self._listeners = [
            self.sdk.log_events.subscribe(self.on_log_event),
            self.sdk.device_added.subscribe(self._schedule_device_added),
            self.sdk.device_removed.subscribe(self._schedule_device_removed),
        ]

    async def on_device_added(self, device: DeviceHandle) -> Optional[DeviceSession]:
        """Set up call control and state tracking for a newly attached device."""
        print(
            f"> Device attached/detected: {device.name} "
            f"(Product ID: {device.product_id}, Serial #: {device.serial_number})"
        )
        generation = self._generations.get(device.id, 0)

        try:
            call_control = await self.sdk.create_call_control(device)
        except UnsupportedDeviceError as e:
            logger.warning(f"Skipping {device.name}: {e}")
            return None

        if self._generations.get(device.id, 0) != generation:
            logger.info(f"{device.name} detached during setup")
            return None

        previous = self._sessions.pop(device.id, None)
        if previous is not None:
            previous.close()

        session = DeviceSession(device, call_control, CallStateTracker(self.sink))
        session.open()
        self._sessions[device.id] = session
        logger.info(f"Easy Call Control ready for {device.name}")
        return session

    def on_device_removed(self, device: DeviceHandle) -> None:
        """Tear down the session of a detached device."""
        print(
            f"< Device detached/reboots: {device.name} "
            f"(Product ID: {device.product_id}, Serial #: {device.serial_number})"
        )
        # Invalidates any setup still awaiting call control
        self._generations[device.id] = self._generations.get(device.id, 0) + 1

        session = self._sessions.pop(device.id, None)
        if session is None:
            return
        session.close()

        active = self.active_session
        if active is not None:
            logger.info(f"Active device is now {active.device.name}")

    def on_log_event(self, event: LogEvent) -> None:
        """Report SDK log events at or above the configured level."""
        if event.level.rank < self.sdk_log_level.rank:
            return
        if event.level == LogLevel.ERROR:
            logger.error(f"SDK: {event.message}")
        elif event.level == LogLevel.WARNING:
            logger.warning(f"SDK: {event.message}")
        else:
            logger.info(f"SDK: {event.message}")

    async def wait_idle(self) -> None:
        """Wait until all pending device events have been handled."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Dispose all listeners and sessions."""
        await self.wait_idle()
        for listener in self._listeners:
            listener.dispose()
        self._listeners = []
        for session in list(self._sessions.values()):
            session.close()
        self._sessions.clear()

    def _schedule_device_added(self, device: DeviceHandle) -> None:
        self._schedule(self.on_device_added, device)

    def _schedule_device_removed(self, device: DeviceHandle) -> None:
        self._schedule(self._remove_device, device)

    async def _remove_device(self, device: DeviceHandle) -> None:
        self.on_device_removed(device)

    def _schedule(
        self,
        handler: Callable[[DeviceHandle], Awaitable[object]],
        device: DeviceHandle,
    ) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is not self._loop:
            # Delivered on an SDK thread
            self._loop.call_soon_threadsafe(self._schedule, handler, device)
            return
        task = self._loop.create_task(handler(device))
        self._pending.add(task)
        task.add_done_callback(self._on_event_done)

    def _on_event_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Device event handling failed: {error}")
