"""Services package for device handling, call-state tracking and commands."""

from .call_state_tracker import CallStateTracker, log_sink
from .command_dispatcher import CommandDispatcher
from .device_manager import DeviceManager, DeviceSession
from .errors import (
    CallControlError,
    ECCError,
    NoActiveDeviceError,
    UnknownKeyError,
    UnsupportedDeviceError,
)
from .key_reader import KeyReader, read_keys
from .keymap import DEFAULT_KEYMAP, load_keymap, parse_keymap
from .sdk_base import CallControl, DeviceHandle, EventStream, HeadsetSDK, Subscription
from .simulated_sdk import SimulatedCallControl, SimulatedEventStream, SimulatedHeadsetSDK

__all__ = [
    "CallControl",
    "CallControlError",
    "CallStateTracker",
    "CommandDispatcher",
    "DEFAULT_KEYMAP",
    "DeviceHandle",
    "DeviceManager",
    "DeviceSession",
    "ECCError",
    "EventStream",
    "HeadsetSDK",
    "KeyReader",
    "NoActiveDeviceError",
    "SimulatedCallControl",
    "SimulatedEventStream",
    "SimulatedHeadsetSDK",
    "Subscription",
    "UnknownKeyError",
    "UnsupportedDeviceError",
    "load_keymap",
    "log_sink",
    "parse_keymap",
    "read_keys",
]
