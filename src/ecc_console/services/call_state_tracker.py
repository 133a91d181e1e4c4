"""Shadow of a single headset's call-control state."""

import logging
import threading
from collections.abc import Callable
from typing import Any, Optional

from pydantic import StrictBool, TypeAdapter

from ..models.schemas import TransitionRecord
from ..models.state import CallState, HoldState, MuteState
from .sdk_base import DeviceHandle

logger = logging.getLogger(__name__)
transitions_logger = logging.getLogger("ecc_console.transitions")

OutputSink = Callable[[str], None]

_ringing_adapter = TypeAdapter(StrictBool)


def log_sink(text: str) -> None:
    """Default output sink: the transitions logger."""
    transitions_logger.info(text)


class CallStateTracker:
    """Tracks one device's call state and reports field changes.

    Each of the four update callbacks compares the incoming value with the
    stored one and, when it differs, stores it and emits exactly one
    transition record. Callbacks may be invoked concurrently from SDK
    threads; every compare-then-write runs under a single lock.

    The tracker is unbound until reset() is called. Updates received while
    unbound, or tagged with a device other than the bound one, are ignored.
    """

    def __init__(self, sink: Optional[OutputSink] = None):
        """Initialize tracker.

        Args:
            sink: Receives the text of each transition record. Defaults to
                the ``ecc_console.transitions`` logger.
        """
        self._sink = sink or log_sink
        self._lock = threading.Lock()
        self._state = CallState()
        self._device: Optional[DeviceHandle] = None

    @property
    def device(self) -> Optional[DeviceHandle]:
        """Currently bound device, if any."""
        return self._device

    @property
    def is_bound(self) -> bool:
        return self._device is not None

    def snapshot(self) -> CallState:
        """Return a copy of the current state."""
        with self._lock:
            return self._state.model_copy()

    def reset(self, device: DeviceHandle) -> None:
        """Restore default state and bind to a device.

        Args:
            device: Device whose call control was (re-)established
        """
        with self._lock:
            self._state = CallState()
            self._device = device
        logger.debug(f"Call state reset for {device.name}")

    def unbind(self, device: DeviceHandle) -> None:
        """Release the binding if it belongs to the given device."""
        with self._lock:
            if self._device is None or self._device != device:
                return
            self._device = None
        logger.debug(f"Call state tracking stopped for {device.name}")

    def on_ongoing_calls_update(self, new_count: int, device: Optional[DeviceHandle] = None) -> None:
        self._update("ongoing_calls", "ongoingCalls", new_count, device)

    def on_mute_update(self, new_mute: MuteState, device: Optional[DeviceHandle] = None) -> None:
        self._update("mute", "mute", MuteState(new_mute), device)

    def on_hold_update(self, new_hold: HoldState, device: Optional[DeviceHandle] = None) -> None:
        self._update("hold", "hold", HoldState(new_hold), device)

    def on_ringing_update(self, new_ringing: bool, device: Optional[DeviceHandle] = None) -> None:
        ringing = _ringing_adapter.validate_python(new_ringing)
        self._update("ringing", "ringing", ringing, device)

    def _update(
        self,
        attr: str,
        label: str,
        value: Any,
        device: Optional[DeviceHandle],
    ) -> None:
        """Compare one field against the snapshot and record a change."""
        with self._lock:
            bound = self._device
            if bound is None:
                logger.debug(f"Ignoring {label} update while unbound")
                return
            if device is not None and device != bound:
                logger.debug(f"Ignoring {label} update from {device.name}")
                return

            old = getattr(self._state, attr)
            if old == value:
                return

            setattr(self._state, attr, value)
            record = TransitionRecord(
                device_name=bound.name,
                field=label,
                old=old,
                new=value,
                snapshot=self._state.model_copy(),
            )

        # Sink runs outside the lock.
        self._sink(record.format())
