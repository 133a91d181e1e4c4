"""Data models and schemas for the ECC console."""

from .schemas import CallCommand, DeviceInfo, LogEvent, LogLevel, TransitionRecord
from .state import CallState, HoldState, MuteState

__all__ = [
    "CallCommand",
    "CallState",
    "DeviceInfo",
    "HoldState",
    "LogEvent",
    "LogLevel",
    "MuteState",
    "TransitionRecord",
]
