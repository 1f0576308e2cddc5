"""
Runs a primary instance endpoint in its own process for the hand-off tests.

Usage: primary_server_process.py <server name> <reply|silent>

Prints "ready" once listening. In "reply" mode every received request is
answered with ForwardReply(in_system_tray=True) and its files are printed as
one JSON line. In "silent" mode connections are accepted and never answered.
"""

import sys

import msgspec
from PySide6.QtCore import QCoreApplication
from PySide6.QtNetwork import QLocalServer, QLocalSocket

from quire.models.forward_request import ForwardReply, ForwardRequest
from quire.utils.single_instance import PrimaryServer


def handle_request(request: ForwardRequest) -> ForwardReply:
    print(msgspec.json.encode(request.config.files).decode(), flush=True)
    return ForwardReply(in_system_tray=True)


def main() -> None:
    server_name, mode = sys.argv[1], sys.argv[2]
    app = QCoreApplication(sys.argv)

    if mode == "silent":
        server = QLocalServer()
        QLocalServer.removeServer(server_name)
        listening = server.listen(server_name)
        connections: list[QLocalSocket] = []
        server.newConnection.connect(
            lambda: connections.append(server.nextPendingConnection())
        )
    else:
        primary_server = PrimaryServer(handle_request, server_name=server_name)
        listening = primary_server.listen()

    if not listening:
        sys.exit(1)
    print("ready", flush=True)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
