"""Interfaces of the headset SDK consumed by the ECC console."""

from collections.abc import Callable
from typing import Protocol, TypeVar

from ..models.schemas import LogEvent
from ..models.state import HoldState, MuteState

T_co = TypeVar("T_co", covariant=True)


class Subscription(Protocol):
    """Handle returned by a stream subscription."""

    def dispose(self) -> None:
        """Stop delivering values to the subscriber."""
        ...


class EventStream(Protocol[T_co]):
    """Push-based stream of values delivered on SDK threads."""

    def subscribe(self, callback: Callable[[T_co], None]) -> Subscription:
        """Register a callback for every value the stream produces."""
        ...


class DeviceHandle(Protocol):
    """Opaque reference to a physical headset."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def product_id(self) -> int: ...

    @property
    def serial_number(self) -> str | None: ...


class CallControl(Protocol):
    """Easy Call Control surface of a single headset.

    The four state streams report independently and in no particular
    order relative to each other. Commands complete asynchronously and
    raise CallControlError when the device rejects them.
    """

    @property
    def ongoing_calls(self) -> EventStream[int]: ...

    @property
    def mute_state(self) -> EventStream[MuteState]: ...

    @property
    def hold_state(self) -> EventStream[HoldState]: ...

    @property
    def ringing(self) -> EventStream[bool]: ...

    async def signal_incoming_call(self) -> None: ...

    async def start_call(self) -> None: ...

    async def accept_incoming_call(self) -> None: ...

    async def reject_incoming_call(self) -> None: ...

    async def end_call(self) -> None: ...

    async def hold(self) -> None: ...

    async def resume(self) -> None: ...

    async def mute(self) -> None: ...

    async def unmute(self) -> None: ...


class HeadsetSDK(Protocol):
    """Device discovery and call-control factory.

    Listeners must be subscribed before start() so no attach event is
    missed.
    """

    @property
    def device_added(self) -> EventStream[DeviceHandle]: ...

    @property
    def device_removed(self) -> EventStream[DeviceHandle]: ...

    @property
    def log_events(self) -> EventStream[LogEvent]: ...

    async def start(self) -> None:
        """Begin device discovery."""
        ...

    async def stop(self) -> None:
        """Stop discovery and release SDK resources."""
        ...

    async def create_call_control(self, device: DeviceHandle) -> CallControl:
        """Create call control for a device.

        Raises:
            UnsupportedDeviceError: If the device has no ECC support
        """
        ...
