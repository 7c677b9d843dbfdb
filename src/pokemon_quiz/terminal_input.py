"""
Line input that cooperates with the event loop.

On a terminal the stdin file descriptor is watched by the event loop, so the
timer ticker keeps running while the player types and Ctrl-C is never stuck
behind a blocked thread. Pipes, files and in-memory streams are read on a
worker thread instead.
"""

import asyncio
import codecs
import os
import sys
from typing import Optional, TextIO

from .logging_config import setup_logger

logger = setup_logger(__name__)


class LineReader:
    """Reads one line at a time from a text stream, without the trailing newline."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin
        encoding = getattr(self.stream, "encoding", None) or "utf-8"
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._eof = False

    def _terminal_fd(self) -> Optional[int]:
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    async def readline(self) -> str:
        """
        Wait for the next line of input.

        Raises:
            EOFError: When the input is exhausted
        """
        fd = self._terminal_fd()
        if fd is not None:
            try:
                return await self._read_terminal_line(fd)
            except NotImplementedError:
                logger.debug("Event loop cannot watch stdin, reading on a thread")

        line = await asyncio.to_thread(self.stream.readline)
        if not line:
            raise EOFError("End of input")
        return line.rstrip("\r\n")

    async def _read_terminal_line(self, fd: int) -> str:
        while "\n" not in self._pending:
            if self._eof:
                if not self._pending:
                    raise EOFError("End of input")
                line, self._pending = self._pending, ""
                return line
            await self._wait_readable(fd)
            chunk = os.read(fd, 4096)
            if chunk:
                self._pending += self._decoder.decode(chunk)
            else:
                self._pending += self._decoder.decode(b"", final=True)
                self._eof = True

        line, self._pending = self._pending.split("\n", 1)
        return line.rstrip("\r")

    async def _wait_readable(self, fd: int):
        loop = asyncio.get_running_loop()
        ready = loop.create_future()

        def on_readable():
            if not ready.done():
                ready.set_result(None)

        loop.add_reader(fd, on_readable)
        try:
            await ready
        finally:
            loop.remove_reader(fd)
