"""Exceptions raised by ECC console services."""


class ECCError(Exception):
    """Base exception for the ECC console."""

    pass


class CallControlError(ECCError):
    """Raised when a headset rejects a call-control command."""

    pass


class UnsupportedDeviceError(ECCError):
    """Raised when a device does not support Easy Call Control."""

    pass


class NoActiveDeviceError(ECCError):
    """Raised when a command is issued while no ECC device is attached."""

    pass


class UnknownKeyError(ECCError):
    """Raised when a keystroke has no command binding."""

    def __init__(self, key: str):
        super().__init__(f"No command bound to key {key!r}")
        self.key = key
