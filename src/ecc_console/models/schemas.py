"""Pydantic schemas for devices, SDK diagnostics and transition records."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .state import CallState


class DeviceInfo(BaseModel):
    """Identity of an attached headset."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    product_id: int
    serial_number: Optional[str] = None

    def describe(self) -> str:
        return f"{self.name} (Product ID: {self.product_id}, Serial #: {self.serial_number})"


class LogLevel(str, Enum):
    """Severity of an SDK log event, ordered from least to most severe."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)


class LogEvent(BaseModel):
    """Diagnostic message emitted by the headset SDK."""

    level: LogLevel
    message: str

    def __str__(self) -> str:
        return f"[{self.level.value}] {self.message}"


class TransitionRecord(BaseModel):
    """A single observed change of one call-state field."""

    device_name: str
    field: str
    old: Any
    new: Any
    snapshot: CallState

    def format(self) -> str:
        return (
            f"{self.device_name}: {self.field}: {self.new} (was: {self.old}) "
            f"| {self.snapshot.describe()}"
        )

    def __str__(self) -> str:
        return self.format()


class CallCommand(str, Enum):
    """Call-control commands a user can send to the active headset.

    Values match the method names of the device's call control.
    """

    SIGNAL_INCOMING_CALL = "signal_incoming_call"
    START_CALL = "start_call"
    ACCEPT_INCOMING_CALL = "accept_incoming_call"
    REJECT_INCOMING_CALL = "reject_incoming_call"
    END_CALL = "end_call"
    HOLD = "hold"
    RESUME = "resume"
    MUTE = "mute"
    UNMUTE = "unmute"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()
