"""Console sample for headset Easy Call Control."""

from .models import CallState, HoldState, MuteState
from .services import CallStateTracker, CommandDispatcher, DeviceManager

__version__ = "1.0.0"

__all__ = [
    "CallState",
    "CallStateTracker",
    "CommandDispatcher",
    "DeviceManager",
    "HoldState",
    "MuteState",
    "__version__",
]
