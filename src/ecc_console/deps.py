"""Service construction and wiring."""

import logging
from typing import Optional

from .services import (
    CommandDispatcher,
    DeviceManager,
    SimulatedHeadsetSDK,
    load_keymap,
)
from .services.call_state_tracker import OutputSink
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def get_sdk(settings: Settings = None) -> SimulatedHeadsetSDK:
    """Get headset SDK instance with the configured devices plugged in.

    Args:
        settings: Application settings (injected)

    Returns:
        Headset SDK instance; discovery is not started yet
    """
    if settings is None:
        settings = get_settings()

    sdk = SimulatedHeadsetSDK(
        app_id=settings.app_id,
        app_name=settings.app_name,
        partner_key=settings.partner_key,
    )
    for product_id, name in enumerate(settings.simulated_devices, start=1):
        sdk.attach(name, product_id=product_id)
    logger.info(f"Simulated SDK ready with {len(settings.simulated_devices)} device(s)")
    return sdk


def get_device_manager(
    sdk: SimulatedHeadsetSDK, settings: Settings = None, sink: Optional[OutputSink] = None
) -> DeviceManager:
    """Get device manager for an SDK.

    Args:
        sdk: Headset SDK instance
        settings: Application settings (injected)
        sink: Output sink for transition records

    Returns:
        Device manager instance
    """
    if settings is None:
        settings = get_settings()

    return DeviceManager(sdk, sink=sink, sdk_log_level=settings.sdk_log_level)


def get_command_dispatcher(device_manager: DeviceManager, settings: Settings = None) -> CommandDispatcher:
    """Get command dispatcher with the configured key bindings.

    Args:
        device_manager: Device manager instance
        settings: Application settings (injected)

    Returns:
        Command dispatcher instance
    """
    if settings is None:
        settings = get_settings()

    return CommandDispatcher(device_manager, load_keymap(settings.keymap_path))
