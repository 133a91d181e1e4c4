"""Console application entry point."""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Optional

from .deps import get_command_dispatcher, get_device_manager, get_sdk
from .logging_config import setup_logging
from .services import CommandDispatcher, ECCError, read_keys
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def run_key_loop(dispatcher: CommandDispatcher, keys: AsyncIterator[str]) -> None:
    """Forward keystrokes to the active device until 'q' or end of input.

    Command failures are reported and the loop keeps running.
    """
    async for key in keys:
        if key.lower() == "q":
            break
        if key == "?":
            print(dispatcher.help_text())
            continue

        try:
            await dispatcher.dispatch(key)
        except ECCError as e:
            logger.error(f"{e}")
        except Exception as e:
            logger.error(f"Command failed: {e}")


async def run(settings: Settings, keys: Optional[AsyncIterator[str]] = None) -> None:
    """Run the console until input ends.

    Args:
        settings: Application settings
        keys: Keystroke source, defaults to standard input
    """
    print(f"{settings.app_name} starting. Press 'q' or Ctrl+C to end.\n")

    sdk = get_sdk(settings)
    device_manager = get_device_manager(sdk, settings)
    dispatcher = get_command_dispatcher(device_manager, settings)

    # Listeners first, then discovery
    device_manager.attach()
    await sdk.start()
    await device_manager.wait_idle()
    print("Now listening for headsets...\n")
    print(dispatcher.help_text())

    try:
        await run_key_loop(dispatcher, keys if keys is not None else read_keys())
    finally:
        await device_manager.close()
        await sdk.stop()
        logger.info(f"{settings.app_name} stopped")


def main() -> None:
    """Entry point for the ``ecc-console`` script."""
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
