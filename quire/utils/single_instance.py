"""
Cross-process primitives used to keep a single primary instance.

- InstanceLock: process-wide named lock, held by the primary for its lifetime
- PrimaryWindowLocator: finds the primary's window endpoint by its well-known name
- PrimaryServer: the primary's side of the endpoint, answering forwarded requests

The request/reply format is one msgspec JSON document per line.
"""

from functools import partial
from pathlib import Path
from typing import Callable

from loguru import logger
from PySide6.QtCore import QLockFile, QObject
from PySide6.QtNetwork import QLocalServer, QLocalSocket

from quire.models.forward_request import (
    MESSAGE_TERMINATOR,
    ForwardReply,
    ForwardRequest,
    decode_reply,
    decode_request,
    encode_message,
)
from quire.utils.constants import (
    INSTANCE_CONNECT_TIMEOUT_MS,
    MAIN_WINDOW_CLASS_NAME,
)
from quire.utils.exception import InvalidForwardRequest


class InstanceLock:
    """
    Named lock telling whether a primary instance is already running.

    Backed by a QLockFile. QLockFile itself takes over a lock whose owning
    process is gone, so a crashed primary never blocks the next start.
    """

    def __init__(self, lock_file: Path) -> None:
        self._lock_file = lock_file
        self._lock = QLockFile(str(lock_file))
        # A dead owner makes the lock stale, its age never does
        self._lock.setStaleLockTime(0)

    def acquire(self) -> bool:
        """
        Try to create the lock.

        :return: False if another live process already holds it, True otherwise.
            Any other lock error is reported as True, so a broken lock never
            keeps the application from starting.
        """
        if self._lock.tryLock(0):
            logger.debug(f"Created instance lock {self._lock_file}")
            return True

        error = self._lock.error()
        if error == QLockFile.LockError.LockFailedError:
            logger.info(f"Instance lock {self._lock_file} is held by another process")
            return False

        logger.warning(f"Unable to create instance lock {self._lock_file}: {error}")
        return True

    @property
    def is_held(self) -> bool:
        """True while this process owns the lock."""
        return self._lock.isLocked()

    def release(self) -> None:
        if self._lock.isLocked():
            self._lock.unlock()


class PrimaryWindowHandle:
    """Open connection to the primary instance's window."""

    def __init__(self, socket: QLocalSocket) -> None:
        self._socket = socket

    def send(
        self, request: ForwardRequest, reply_timeout_ms: int
    ) -> ForwardReply | None:
        """
        Write the request and wait for the primary's reply.

        :raises ConnectionError: If the request could not be written
        :return: The reply, or None if the primary did not answer in time
        """
        socket = self._socket
        payload = encode_message(request)
        if socket.write(payload) != len(payload):
            raise ConnectionError(socket.errorString())
        if socket.bytesToWrite() and not socket.waitForBytesWritten(reply_timeout_ms):
            raise ConnectionError(socket.errorString())

        buffer = bytearray()
        while MESSAGE_TERMINATOR not in buffer:
            if not socket.waitForReadyRead(reply_timeout_ms):
                break
            buffer += socket.readAll().data()
        socket.disconnectFromServer()

        if not buffer:
            logger.warning("Primary instance did not reply to the forwarded request")
            return None
        return decode_reply(bytes(buffer).split(MESSAGE_TERMINATOR, 1)[0])

    def close(self) -> None:
        """Drop the connection without sending anything."""
        self._socket.abort()


class PrimaryWindowLocator:
    """Looks up the primary instance's window by its well-known name."""

    def __init__(
        self,
        server_name: str = MAIN_WINDOW_CLASS_NAME,
        connect_timeout_ms: int = INSTANCE_CONNECT_TIMEOUT_MS,
    ) -> None:
        self.server_name = server_name
        self.connect_timeout_ms = connect_timeout_ms

    def find(self) -> PrimaryWindowHandle | None:
        socket = QLocalSocket()
        socket.connectToServer(self.server_name)
        if socket.waitForConnected(self.connect_timeout_ms):
            return PrimaryWindowHandle(socket)
        socket.abort()
        return None


class PrimaryServer(QObject):
    """
    Endpoint a primary instance exposes under the well-known window name.

    Each connection carries a single ForwardRequest line. The request goes to
    ``handler`` and its ForwardReply is written back before disconnecting.
    """

    def __init__(
        self,
        handler: Callable[[ForwardRequest], ForwardReply],
        server_name: str = MAIN_WINDOW_CLASS_NAME,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.server_name = server_name
        self._handler = handler
        self._server = QLocalServer(self)
        self._server.newConnection.connect(self._on_new_connection)
        self._buffers: dict[QLocalSocket, bytearray] = {}

    def listen(self) -> bool:
        """
        Start serving under ``server_name``.

        Refuses to take the name over while another process still answers on
        it. Only a socket file left behind by a crashed primary is removed.

        :return: True if this process is now listening
        """
        existing = PrimaryWindowLocator(self.server_name).find()
        if existing is not None:
            existing.close()
            logger.warning(
                f"Another instance already listens as {self.server_name}, not taking over"
            )
            return False
        QLocalServer.removeServer(self.server_name)
        if not self._server.listen(self.server_name):
            logger.warning(
                f"Could not listen as {self.server_name}: {self._server.errorString()}"
            )
            return False
        logger.info(f"Listening for other instances as {self.server_name}")
        return True

    def close(self) -> None:
        self._server.close()

    def _on_new_connection(self) -> None:
        while self._server.hasPendingConnections():
            socket = self._server.nextPendingConnection()
            if socket is None:
                return
            self._buffers[socket] = bytearray()
            socket.readyRead.connect(partial(self._on_ready_read, socket))
            socket.disconnected.connect(partial(self._on_disconnected, socket))

    def _on_disconnected(self, socket: QLocalSocket) -> None:
        self._buffers.pop(socket, None)
        socket.deleteLater()

    def _on_ready_read(self, socket: QLocalSocket) -> None:
        buffer = self._buffers.get(socket)
        if buffer is None:
            return
        buffer += socket.readAll().data()
        if MESSAGE_TERMINATOR not in buffer:
            return

        line = bytes(buffer).split(MESSAGE_TERMINATOR, 1)[0]
        del self._buffers[socket]
        try:
            request = decode_request(line)
        except InvalidForwardRequest as e:
            logger.error(f"Rejected request from another instance: {e}")
            reply = ForwardReply(accepted=False)
        else:
            logger.info(
                f"Received request from another instance with {len(request.config.files)} file(s)"
            )
            reply = self._handler(request)

        socket.write(encode_message(reply))
        socket.flush()
        socket.disconnectFromServer()
