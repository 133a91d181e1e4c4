"""Forwarding of keyboard commands to the active headset."""

import logging
from typing import Optional

from ..models.schemas import CallCommand
from .device_manager import DeviceManager
from .errors import NoActiveDeviceError, UnknownKeyError
from .keymap import DEFAULT_KEYMAP

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Maps keystrokes to call-control commands on the active device.

    Results are not inspected: a command that the device rejects raises
    from execute() with the device's own exception.
    """

    def __init__(self, device_manager: DeviceManager, keymap: Optional[dict[str, CallCommand]] = None):
        """Initialize dispatcher.

        Args:
            device_manager: Source of the active device session
            keymap: Key bindings, defaults to DEFAULT_KEYMAP
        """
        self.device_manager = device_manager
        self.keymap = dict(keymap) if keymap is not None else dict(DEFAULT_KEYMAP)

    def resolve(self, key: str) -> CallCommand:
        """Look up the command bound to a key.

        Raises:
            UnknownKeyError: If the key has no binding
        """
        command = self.keymap.get(key)
        if command is None:
            command = self.keymap.get(key.lower())
        if command is None:
            raise UnknownKeyError(key)
        return command

    async def execute(self, command: CallCommand) -> None:
        """Send a command to the active device's call control.

        Raises:
            NoActiveDeviceError: If no ECC device is attached
            CallControlError: If the device rejects the command
        """
        session = self.device_manager.active_session
        if session is None:
            raise NoActiveDeviceError("No headset with call control attached")

        logger.info(f"{command.label} -> {session.device.name}")
        method = getattr(session.call_control, command.value)
        await method()

    async def dispatch(self, key: str) -> CallCommand:
        """Resolve a key and execute its command."""
        command = self.resolve(key)
        await self.execute(command)
        return command

    def help_text(self) -> str:
        lines = ["Press a key, then Enter:"]
        for key, command in self.keymap.items():
            lines.append(f"\t'{key}': {command.label}")
        lines.append("\t'?': Show this menu")
        lines.append("\t'q': Quit")
        return "\n".join(lines)
