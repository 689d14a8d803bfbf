"""Group chat: a server relays every client's text to all other clients."""

from __future__ import annotations

import argparse
import itertools
import select
import socket
import sys
import threading
from collections.abc import Iterable
from typing import Sequence, TextIO

from netlab.reverse import BACKLOG, DEFAULT_HOST, LISTEN_HOST

BROADCAST_PORT = 7007
RECV_SIZE = 300
SEPARATOR = " : "
POLL_INTERVAL = 0.2


def format_message(username: str, line: str) -> str:
    """Prefix a line of chat with the name of the user who wrote it."""
    if not username:
        raise ValueError("username must not be empty")
    return f"{username}{SEPARATOR}{line}"


class BroadcastServer:
    """Accepts any number of clients and relays each one's text to the rest."""

    poll_interval: float = POLL_INTERVAL

    def __init__(
        self,
        host: str = LISTEN_HOST,
        port: int = BROADCAST_PORT,
        backlog: int = BACKLOG,
        output: TextIO | None = None,
    ) -> None:
        self.output = output if output is not None else sys.stdout
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(backlog)
        except OSError:
            self._listener.close()
            raise
        self._clients: dict[int, socket.socket] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._stopping = threading.Event()
        self._stopped = threading.Event()
        self._serving = False

    @property
    def address(self) -> tuple[str, int]:
        """The address the server listens on."""
        return self._listener.getsockname()

    @property
    def client_count(self) -> int:
        """Number of clients currently connected."""
        with self._lock:
            return len(self._clients)

    def __enter__(self) -> BroadcastServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _log(self, text: str) -> None:
        self.output.write(text + "\n")
        self.output.flush()

    def serve_forever(self) -> None:
        """Accept clients until shutdown() is called, one thread per client."""
        self._serving = True
        self._stopped.clear()
        try:
            while not self._stopping.is_set():
                try:
                    ready, _, _ = select.select(
                        [self._listener], [], [], self.poll_interval
                    )
                    if not ready:
                        continue
                    conn, _ = self._listener.accept()
                except (OSError, ValueError):
                    if self._stopping.is_set():
                        break
                    raise
                if self._stopping.is_set():
                    conn.close()
                    break
                client_id = next(self._ids)
                with self._lock:
                    self._clients[client_id] = conn
                self._log(f"{client_id} connected")
                threading.Thread(
                    target=self._handle, args=(client_id, conn), daemon=True
                ).start()
        finally:
            self._serving = False
            self._stopped.set()

    def _handle(self, client_id: int, conn: socket.socket) -> None:
        try:
            while True:
                try:
                    data = conn.recv(RECV_SIZE)
                except OSError:
                    break
                if not data:
                    break
                message = data.partition(b"\0")[0]
                if message:
                    self.broadcast(client_id, message)
        finally:
            with self._lock:
                self._clients.pop(client_id, None)
            conn.close()
            self._log(f"{client_id} disconnected")

    def broadcast(self, sender: int | None, data: bytes) -> int:
        """Send data to every client except ``sender``; return how many got it."""
        with self._lock:
            recipients = [
                conn for client_id, conn in self._clients.items() if client_id != sender
            ]
        delivered = 0
        for conn in recipients:
            try:
                conn.sendall(data)
            except OSError:
                continue
            delivered += 1
        return delivered

    def shutdown(self) -> None:
        """Stop accepting, disconnect every client and close the listener."""
        self._stopping.set()
        if self._serving:
            self._stopped.wait()
        with self._lock:
            connections = list(self._clients.values())
            self._clients.clear()
        for conn in connections:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            conn.close()
        self._listener.close()


def run_client(
    username: str,
    host: str,
    port: int,
    lines: Iterable[str],
    output: TextIO,
) -> str:
    """Chat as ``username``: send each line, echo what others send to ``output``.

    Once ``lines`` runs out the sending side is closed and the call waits for
    the server to close the connection. Returns all text received.
    """
    format_message(username, "")
    received: list[str] = []
    with socket.create_connection((host, port)) as sock:

        def pump() -> None:
            while True:
                try:
                    data = sock.recv(RECV_SIZE)
                except OSError:
                    return
                if not data:
                    return
                text = data.partition(b"\0")[0].decode(errors="replace")
                received.append(text)
                output.write(text)
                output.flush()

        receiver = threading.Thread(target=pump, daemon=True)
        receiver.start()
        try:
            for line in lines:
                sock.sendall(format_message(username, line).encode())
        finally:
            try:
                sock.shutdown(socket.SHUT_WR)
            except OSError:
                pass
            receiver.join()
    return "".join(received)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-broadcast", description="Group chat relayed through a server."
    )
    roles = parser.add_subparsers(dest="role", required=True)
    server_parser = roles.add_parser("server", help="relay messages between clients")
    server_parser.add_argument("--host", default=LISTEN_HOST, help="address to bind")
    server_parser.add_argument(
        "--port", type=int, default=BROADCAST_PORT, help="port (default 7007)"
    )
    client_parser = roles.add_parser("client", help="join the chat")
    client_parser.add_argument("username")
    client_parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    client_parser.add_argument(
        "--port", type=int, default=BROADCAST_PORT, help="port (default 7007)"
    )
    args = parser.parse_args(argv)

    try:
        if args.role == "server":
            with BroadcastServer(args.host, args.port) as server:
                try:
                    server.serve_forever()
                except KeyboardInterrupt:
                    pass
        else:
            format_message(args.username, "")
            print(f"{args.username} connected, start chatting", flush=True)
            run_client(args.username, args.host, args.port, sys.stdin, sys.stdout)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())