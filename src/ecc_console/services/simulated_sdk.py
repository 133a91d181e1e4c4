"""In-process headset SDK that simulates Easy Call Control devices."""

import itertools
import logging
import threading
from collections.abc import Callable
from typing import Generic, Optional, TypeVar

from ..models.schemas import DeviceInfo, LogEvent, LogLevel
from ..models.state import HoldState, MuteState
from .errors import CallControlError, UnsupportedDeviceError
from .sdk_base import DeviceHandle

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class SimulatedSubscription:
    """Subscription handle for SimulatedEventStream."""

    def __init__(self, stream: "SimulatedEventStream", callback: Callable):
        self._stream = stream
        self._callback = callback

    def dispose(self) -> None:
        self._stream._remove(self._callback)


class SimulatedEventStream(Generic[T]):
    """Thread-safe push stream.

    With an initial value the stream behaves like a behavior subject: new
    subscribers immediately receive the current value.
    """

    def __init__(self, initial: object = _UNSET):
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[T], None]] = []
        self._current = initial

    @property
    def value(self) -> Optional[T]:
        return None if self._current is _UNSET else self._current

    def subscribe(self, callback: Callable[[T], None]) -> SimulatedSubscription:
        with self._lock:
            self._callbacks.append(callback)
            current = self._current
        if current is not _UNSET:
            callback(current)
        return SimulatedSubscription(self, callback)

    def publish(self, value: T) -> None:
        with self._lock:
            if self._current is not _UNSET:
                self._current = value
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(value)

    def _remove(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


class SimulatedCallControl:
    """Easy Call Control for a simulated headset.

    Commands update the four state streams the way a headset would and
    raise CallControlError when a command makes no sense in the current
    state.
    """

    def __init__(self, device: DeviceHandle):
        self.device = device
        self._lock = threading.Lock()
        self._closed = False
        self._ongoing_calls = SimulatedEventStream(0)
        self._mute_state = SimulatedEventStream(MuteState.NO_ONGOING_CALLS)
        self._hold_state = SimulatedEventStream(HoldState.NO_ONGOING_CALLS)
        self._ringing = SimulatedEventStream(False)

    @property
    def ongoing_calls(self) -> SimulatedEventStream[int]:
        return self._ongoing_calls

    @property
    def mute_state(self) -> SimulatedEventStream[MuteState]:
        return self._mute_state

    @property
    def hold_state(self) -> SimulatedEventStream[HoldState]:
        return self._hold_state

    @property
    def ringing(self) -> SimulatedEventStream[bool]:
        return self._ringing

    def close(self) -> None:
        """Mark the device as gone; later commands fail."""
        self._closed = True

    async def signal_incoming_call(self) -> None:
        with self._lock:
            self._check_open()
            if self._ringing.value:
                raise CallControlError("An incoming call is already ringing")
            self._ringing.publish(True)

    async def accept_incoming_call(self) -> None:
        with self._lock:
            self._check_open()
            if not self._ringing.value:
                raise CallControlError("No incoming call to accept")
            self._ringing.publish(False)
            self._add_call()

    async def reject_incoming_call(self) -> None:
        with self._lock:
            self._check_open()
            if not self._ringing.value:
                raise CallControlError("No incoming call to reject")
            self._ringing.publish(False)

    async def start_call(self) -> None:
        with self._lock:
            self._check_open()
            self._add_call()

    async def end_call(self) -> None:
        with self._lock:
            self._check_open()
            calls = self._ongoing_calls.value
            if not calls:
                raise CallControlError("No ongoing call to end")
            self._ongoing_calls.publish(calls - 1)
            if calls == 1:
                self._mute_state.publish(MuteState.NO_ONGOING_CALLS)
                self._hold_state.publish(HoldState.NO_ONGOING_CALLS)

    async def hold(self) -> None:
        with self._lock:
            self._check_open()
            if self._hold_state.value != HoldState.ACTIVE:
                raise CallControlError("No active call to put on hold")
            self._hold_state.publish(HoldState.ON_HOLD)

    async def resume(self) -> None:
        with self._lock:
            self._check_open()
            if self._hold_state.value != HoldState.ON_HOLD:
                raise CallControlError("No call on hold to resume")
            self._hold_state.publish(HoldState.ACTIVE)

    async def mute(self) -> None:
        with self._lock:
            self._check_open()
            self._check_ongoing("mute")
            self._mute_state.publish(MuteState.MUTED)

    async def unmute(self) -> None:
        with self._lock:
            self._check_open()
            self._check_ongoing("unmute")
            self._mute_state.publish(MuteState.UNMUTED)

    def _add_call(self) -> None:
        self._ongoing_calls.publish(self._ongoing_calls.value + 1)
        if self._mute_state.value == MuteState.NO_ONGOING_CALLS:
            self._mute_state.publish(MuteState.UNMUTED)
        self._hold_state.publish(HoldState.ACTIVE)

    def _check_ongoing(self, action: str) -> None:
        if not self._ongoing_calls.value:
            raise CallControlError(f"Cannot {action}: no ongoing call")

    def _check_open(self) -> None:
        if self._closed:
            raise CallControlError(f"{self.device.name} is disconnected")


class SimulatedHeadsetSDK:
    """Headset SDK backed by simulated devices.

    Devices attached before start() are announced once discovery starts,
    so listeners subscribed between construction and start() see every
    device.
    """

    def __init__(self, app_id: str, app_name: str, partner_key: Optional[str] = None):
        self.app_id = app_id
        self.app_name = app_name
        self.partner_key = partner_key
        self._device_added: SimulatedEventStream[DeviceInfo] = SimulatedEventStream()
        self._device_removed: SimulatedEventStream[DeviceInfo] = SimulatedEventStream()
        self._log_events: SimulatedEventStream[LogEvent] = SimulatedEventStream()
        self._devices: dict[str, DeviceInfo] = {}
        self._ecc_support: dict[str, bool] = {}
        self._controls: dict[str, SimulatedCallControl] = {}
        self._ids = itertools.count(1)
        self._started = False

    @property
    def device_added(self) -> SimulatedEventStream[DeviceInfo]:
        return self._device_added

    @property
    def device_removed(self) -> SimulatedEventStream[DeviceInfo]:
        return self._device_removed

    @property
    def log_events(self) -> SimulatedEventStream[LogEvent]:
        return self._log_events

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def devices(self) -> list[DeviceInfo]:
        return list(self._devices.values())

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        if not self.partner_key:
            self._log(LogLevel.WARNING, "No partner key configured")
        self._log(LogLevel.INFO, f"Device discovery started for {self.app_name} ({self.app_id})")
        for device in list(self._devices.values()):
            self._device_added.publish(device)

    async def stop(self) -> None:
        if not self._started:
            return
        for device in list(self._devices.values()):
            self.detach(device)
        self._started = False
        self._log(LogLevel.INFO, "Device discovery stopped")

    def attach(
        self,
        name: str,
        product_id: int = 0x0001,
        serial_number: Optional[str] = None,
        supports_ecc: bool = True,
    ) -> DeviceInfo:
        """Plug in a simulated headset.

        Args:
            name: Display name of the device
            product_id: USB product ID
            serial_number: Serial number; generated when omitted
            supports_ecc: Whether call control can be created for it

        Returns:
            The attached device
        """
        index = next(self._ids)
        device = DeviceInfo(
            id=f"sim-{index}",
            name=name,
            product_id=product_id,
            serial_number=serial_number or f"SIM{index:06d}",
        )
        self._devices[device.id] = device
        self._ecc_support[device.id] = supports_ecc
        logger.debug(f"Simulated device attached: {device.describe()}")
        if self._started:
            self._device_added.publish(device)
        return device

    def detach(self, device: DeviceHandle) -> None:
        """Unplug a simulated headset."""
        known = self._devices.pop(device.id, None)
        if known is None:
            return
        self._ecc_support.pop(device.id, None)
        logger.debug(f"Simulated device detached: {known.describe()}")
        control = self._controls.pop(device.id, None)
        if control is not None:
            control.close()
        if self._started:
            self._device_removed.publish(known)

    async def create_call_control(self, device: DeviceHandle) -> SimulatedCallControl:
        if device.id not in self._devices:
            self._log(LogLevel.ERROR, f"Call control requested for unknown device {device.name}")
            raise UnsupportedDeviceError(f"{device.name} is not attached")
        if not self._ecc_support[device.id]:
            raise UnsupportedDeviceError(f"{device.name} does not support Easy Call Control")
        control = SimulatedCallControl(device)
        self._controls[device.id] = control
        return control

    def call_control_for(self, device: DeviceHandle) -> Optional[SimulatedCallControl]:
        return self._controls.get(device.id)

    def _log(self, level: LogLevel, message: str) -> None:
        self._log_events.publish(LogEvent(level=level, message=message))
