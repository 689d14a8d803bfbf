"""Turn-by-turn text chat between two peers over TCP."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Iterable, Iterator
from typing import Sequence, TextIO

from netlab.reverse import BACKLOG, BUFFER_SIZE, DEFAULT_HOST, LISTEN_HOST, MAX_MESSAGE

CHAT_PORT = 9090
STOP_WORD = "exit"


def _encode(line: str) -> bytes:
    data = line.encode()
    if not data:
        raise ValueError("message must not be empty")
    if len(data) > MAX_MESSAGE:
        raise ValueError(f"message longer than {MAX_MESSAGE} bytes")
    return data


def converse(
    sock: socket.socket,
    lines: Iterable[str],
    output: TextIO,
    speak_first: bool = True,
    stop_word: str | None = STOP_WORD,
) -> list[str]:
    """Alternate sending a line and receiving one until the chat ends.

    The chat ends when either side sends ``stop_word`` (never, if it is
    None), when ``lines`` runs out, or when the peer closes the connection.
    Each received message is written to ``output``; the received messages,
    without the stop word, are returned.
    """
    outgoing: Iterator[str] = iter(lines)
    received: list[str] = []

    def send_next() -> bool:
        line = next(outgoing, None)
        if line is None:
            return False
        sock.sendall(_encode(line))
        return line != stop_word

    def receive_one() -> bool:
        data = sock.recv(BUFFER_SIZE)
        if not data:
            return False
        message = data.partition(b"\0")[0].decode(errors="replace")
        if message == stop_word:
            return False
        received.append(message)
        output.write(f"Received : {message}\n")
        output.flush()
        return True

    steps = (send_next, receive_one) if speak_first else (receive_one, send_next)
    while all(step() for step in steps):
        pass
    return received


def _prompted_words(prompt: str) -> Iterator[str]:
    while True:
        print(prompt, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            return
        words = line.split()
        if words:
            yield words[0]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-chat", description="Chat with a peer one message at a time."
    )
    parser.add_argument("role", choices=["server", "client"])
    parser.add_argument("--host", help="address to bind or connect to")
    parser.add_argument("--port", type=int, default=CHAT_PORT, help="port (default 9090)")
    parser.add_argument(
        "--stop-word",
        default=STOP_WORD,
        help="word that ends the chat (default 'exit'); empty for none",
    )
    args = parser.parse_args(argv)
    stop_word = args.stop_word or None
    lines = _prompted_words("Send : ")

    try:
        if args.role == "server":
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
                listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                listener.bind((args.host or LISTEN_HOST, args.port))
                listener.listen(BACKLOG)
                conn, address = listener.accept()
                print(f"Now connected to {address[0]}")
                with conn:
                    converse(conn, lines, sys.stdout, False, stop_word)
        else:
            with socket.create_connection((args.host or DEFAULT_HOST, args.port)) as sock:
                converse(sock, lines, sys.stdout, True, stop_word)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())