"""Console keystroke input."""

import asyncio
import logging
import sys
import threading
from collections.abc import AsyncIterator, Callable
from typing import Optional

logger = logging.getLogger(__name__)


class KeyReader:
    """Reads keystrokes on a daemon thread and hands them to the event loop.

    Each non-empty input line yields its first character. Iteration ends
    when the input reaches end of file.
    """

    def __init__(self, readline: Optional[Callable[[], str]] = None):
        """Initialize key reader.

        Args:
            readline: Blocking line reader, defaults to sys.stdin.readline
        """
        self._readline = readline or sys.stdin.readline
        self._keys: Optional[asyncio.Queue[Optional[str]]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._worker_thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the reader thread."""
        if self._worker_thread is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._keys = asyncio.Queue()
        self._worker_thread = threading.Thread(target=self._reader_worker, daemon=True)
        self._worker_thread.start()

    async def __aiter__(self) -> AsyncIterator[str]:
        self.start()
        while True:
            key = await self._keys.get()
            if key is None:
                return
            yield key

    def _reader_worker(self) -> None:
        """Worker thread blocking on console input."""
        try:
            while True:
                line = self._readline()
                if not line:
                    break
                line = line.strip()
                if line:
                    self._emit(line[0])
        except Exception as e:
            logger.error(f"Key reader error: {e}")
        finally:
            self._emit(None)

    def _emit(self, key: Optional[str]) -> None:
        try:
            self._loop.call_soon_threadsafe(self._keys.put_nowait, key)
        except RuntimeError:
            # Event loop already closed
            pass


def read_keys(readline: Optional[Callable[[], str]] = None) -> AsyncIterator[str]:
    """Iterate over console keystrokes."""
    return KeyReader(readline).__aiter__()
