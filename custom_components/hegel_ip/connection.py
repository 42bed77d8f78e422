"""
Connection management for Hegel amplifiers.

Keeps a single, lazily opened TCP session to the amplifier's IP control
port and writes carriage-return terminated commands over it. The device
is treated as write-only: bytes it sends back are accumulated but never
interpreted.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
import socket
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

_LOGGER = logging.getLogger(__name__)

COMMAND_TERMINATOR = "\r"
READ_CHUNK_SIZE = 1024
DEFAULT_TIMEOUT = 1.5


class HegelConnectionError(OSError):
    """Base class for errors raised by HegelConnection."""


class HegelConnectTimeoutError(HegelConnectionError, TimeoutError):
    """Connecting, or waiting for a concurrent connect, took too long."""


class HegelNotConnectedError(HegelConnectionError):
    """A connect reported success but no usable transport is held."""


class HegelWriteError(HegelConnectionError):
    """The transport failed while writing a command."""


class ConnectionState(enum.StrEnum):
    """Lifecycle of the transport handle."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class HegelConnection:
    """Manage the single TCP session to a Hegel amplifier."""

    def __init__(  # noqa: PLR0913
        self,
        host: str,
        port: int,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        log: Callable[[str], None] | None = None,
        warn: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize the connection manager without touching the network.

        Args:
            host: Hostname or IP address of the amplifier.
            port: TCP control port.
            timeout: Seconds allowed for a connect attempt, and for waiting
                on an attempt started by another caller.
            debug: Route verbose traffic messages through ``log``.
            log: Callback for informational messages.
            warn: Callback for warnings.

        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.debug = debug
        self._log = log or _LOGGER.info
        self._warn = warn or _LOGGER.warning
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._read_task: asyncio.Task | None = None
        # Set while a connect attempt is in flight; waiters block on it
        self._attempt: asyncio.Event | None = None
        # Bumped per established session and per close, so a stale reader or
        # an abandoned connect can't touch a newer handle
        self._generation = 0
        self._buffer = bytearray()
        self.last_activity: float | None = None

    def _trace(self, msg: str) -> None:
        if self.debug:
            self._log(f"[HegelConnection] {msg}")
        else:
            _LOGGER.debug("%s", msg)

    @property
    def is_connected(self) -> bool:
        """Return True if a live, non-closing transport is held."""
        return self._writer is not None and not self._writer.is_closing()

    @property
    def state(self) -> ConnectionState:
        """Return the current lifecycle state."""
        if self._attempt is not None:
            return ConnectionState.CONNECTING
        if self.is_connected:
            return ConnectionState.CONNECTED
        return ConnectionState.DISCONNECTED

    @property
    def inbound_buffer(self) -> bytes:
        """Return the bytes received since the current session was opened."""
        return bytes(self._buffer)

    async def ensure_connected(self) -> None:
        """Make sure a session is open, joining an in-flight attempt if any."""
        if self.is_connected:
            return
        if self._attempt is not None:
            await self._wait_for_attempt(self._attempt)
            return
        await self._open()

    async def _wait_for_attempt(self, attempt: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(attempt.wait(), timeout=self.timeout)
        except TimeoutError as err:
            msg = f"Timed out waiting for connection to {self.host}:{self.port}"
            raise HegelConnectTimeoutError(msg) from err
        if not self.is_connected:
            msg = f"Connection to {self.host}:{self.port} was not established"
            raise HegelConnectTimeoutError(msg)

    async def _open(self) -> None:
        """Run one connect attempt bounded by the configured timeout."""
        attempt = asyncio.Event()
        self._attempt = attempt
        generation = self._generation
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        try:
            try:
                reader, writer = await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port),
                    timeout=self.timeout,
                )
            except TimeoutError as err:
                self._warn(
                    f"Connect to {self.host}:{self.port} timed out "
                    f"after {self.timeout:g}s"
                )
                msg = f"Connect to {self.host}:{self.port} timed out"
                raise HegelConnectTimeoutError(msg) from err
            except OSError as err:
                self._trace(f"socket error: {err}")
                # The deadline, not the transport error, ends a failed attempt
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                self._warn(f"Connect to {self.host}:{self.port} failed: {err}")
                msg = f"Connect to {self.host}:{self.port} timed out"
                raise HegelConnectTimeoutError(msg) from err
            if generation != self._generation:
                # Disconnected while the connect was pending
                writer.transport.abort()
                self._trace("dropped connection opened after disconnect")
                msg = f"Connection to {self.host}:{self.port} closed while connecting"
                raise HegelNotConnectedError(msg)
            self._attach(reader, writer)
        finally:
            if self._attempt is attempt:
                self._attempt = None
            attempt.set()

    def _attach(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        sock = writer.get_extra_info("socket")
        if sock is not None:
            try:
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            except OSError as err:
                self._trace(f"could not set TCP_NODELAY: {err}")
        self._reader = reader
        self._writer = writer
        self._buffer = bytearray()
        self._generation += 1
        self._read_task = asyncio.create_task(
            self._read_loop(reader, self._generation), name="hegel_reader"
        )
        self._trace(f"connected to {self.host}:{self.port}")

    async def _read_loop(self, reader: asyncio.StreamReader, generation: int) -> None:
        """Drain inbound bytes until the device closes the session."""
        try:
            while True:
                data = await reader.read(READ_CHUNK_SIZE)
                if not data:
                    break
                self.last_activity = time.time()
                self._buffer.extend(data)
                self._trace(f"<< {data!r}")
        except OSError as err:
            self._trace(f"socket error: {err}")
        self._trace("socket closed")
        if generation == self._generation and self._writer is not None:
            self._release(self._writer)

    def _release(self, writer: asyncio.StreamWriter) -> None:
        self._reader = None
        self._writer = None
        self._read_task = None
        writer.transport.abort()

    async def send(self, command: str) -> None:
        """
        Send one command, connecting first if needed.

        The command is trimmed and terminated with a single carriage return.
        Returns once the bytes have been handed to the transport and the
        write buffer has drained.

        Raises:
            ValueError: The command is empty.
            HegelConnectTimeoutError: No session could be established in time.
            HegelNotConnectedError: No usable session after connecting.
            HegelWriteError: The transport failed during the write.

        """
        cmd = command.strip()
        if not cmd:
            msg = "Command must not be empty"
            raise ValueError(msg)
        await self.ensure_connected()
        writer = self._writer
        if writer is None or writer.is_closing():
            msg = f"Not connected to {self.host}:{self.port}"
            raise HegelNotConnectedError(msg)
        self._trace(f">> {cmd}")
        try:
            writer.write((cmd + COMMAND_TERMINATOR).encode())
            await writer.drain()
        except OSError as err:
            self._warn(f"Failed to send {cmd!r} to {self.host}:{self.port}: {err}")
            msg = f"Failed to send {cmd!r}"
            raise HegelWriteError(msg) from err

    def close_nowait(self) -> None:
        """
        Abort the session immediately; a no-op when idle.

        A connect still in flight is abandoned: its waiters are released and
        the transport it eventually yields is aborted instead of attached.
        """
        self._generation += 1
        attempt = self._attempt
        if attempt is not None:
            self._trace("abandoning connect in flight")
            self._attempt = None
            attempt.set()
        writer = self._writer
        if writer is None:
            return
        self._trace("disconnecting")
        task = self._read_task
        self._release(writer)
        if task is not None and not task.done():
            task.cancel()

    async def disconnect(self) -> None:
        """Abort the session and wait for the reader and socket to wind down."""
        writer = self._writer
        task = self._read_task
        self.close_nowait()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if writer is not None:
            with contextlib.suppress(OSError):
                await writer.wait_closed()
