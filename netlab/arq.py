"""Stop-and-wait and go-back-N acknowledgement exchanges over TCP."""

from __future__ import annotations

import argparse
import socket
import struct
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Sequence, TextIO

from netlab.reverse import BACKLOG, DEFAULT_HOST, LISTEN_HOST

ARQ_PORT = 9090
WINDOW = 5
TOTAL_FRAMES = 15
_INT = struct.Struct("<i")


def encode_int(value: int) -> bytes:
    """Pack a sequence number as a 4-byte little-endian signed integer."""
    return _INT.pack(value)


def decode_int(data: bytes) -> int:
    """Unpack a 4-byte little-endian signed integer."""
    if len(data) != _INT.size:
        raise ValueError(f"expected {_INT.size} bytes, got {len(data)}")
    return _INT.unpack(data)[0]


def _recv_int(sock: socket.socket) -> int | None:
    data = b""
    while len(data) < _INT.size:
        chunk = sock.recv(_INT.size - len(data))
        if not chunk:
            return None
        data += chunk
    return decode_int(data)


@dataclass
class StopAndWaitReceiver:
    """Accepts frames strictly in order and reports the next one expected.

    With ``limit`` set, receiving that sequence number starts the count over
    at zero.
    """

    limit: int | None = None
    expected: int = 0
    received: list[int] = field(default_factory=list)

    def receive(self, seq: int) -> int:
        """Take one frame and return the sequence number now expected."""
        if seq == self.expected:
            self.expected += 1
            self.received.append(seq)
        if self.limit is not None and seq == self.limit:
            self.expected = 0
        return self.expected


@dataclass
class GoBackNSender:
    """Tracks how far a go-back-N sender may send after each acknowledgement."""

    window: int = WINDOW
    total: int = TOTAL_FRAMES
    acked: int = 0
    sent_till: int = field(init=False)

    def __post_init__(self) -> None:
        if self.window <= 0:
            raise ValueError("window must be positive")
        self.sent_till = min(self.acked + self.window, self.total)

    @property
    def done(self) -> bool:
        return self.acked >= self.total

    def acknowledge(self, ack: int) -> bool:
        """Record an acknowledgement; return True once every frame is acknowledged."""
        self.acked = ack
        self.sent_till = min(ack + self.window, self.total)
        return self.done


def serve_stop_and_wait(
    conn: socket.socket, receiver: StopAndWaitReceiver, output: TextIO
) -> list[int]:
    """Answer each frame with the next expected number until the peer leaves.

    A receiver with a limit also ends the session once it answers zero.
    Returns the frames accepted in order.
    """
    while (seq := _recv_int(conn)) is not None:
        before = len(receiver.received)
        ack = receiver.receive(seq)
        if len(receiver.received) > before:
            output.write(f"Received : {seq}\n")
            output.flush()
        conn.sendall(encode_int(ack))
        if receiver.limit is not None and ack == 0:
            break
    return receiver.received


def run_stop_and_wait_client(
    sock: socket.socket, sequence: Iterable[int], output: TextIO
) -> list[int]:
    """Send frames one at a time, waiting for each acknowledgement.

    Stops when the sequence runs out, the peer closes, or it answers zero.
    Returns the acknowledgements received.
    """
    acks: list[int] = []
    for seq in sequence:
        sock.sendall(encode_int(seq))
        ack = _recv_int(sock)
        if ack is None or ack == 0:
            break
        acks.append(ack)
        output.write(f"Expected : {ack}\n")
        output.flush()
    return acks


def run_go_back_n_sender(
    sock: socket.socket, sender: GoBackNSender, output: TextIO
) -> list[int]:
    """Send window after window until every frame is acknowledged.

    Returns the acknowledgements received.
    """
    acks: list[int] = []
    while True:
        output.write(f"Sent till : {sender.sent_till}\n")
        output.flush()
        sock.sendall(encode_int(sender.sent_till))
        ack = _recv_int(sock)
        if ack is None:
            break
        acks.append(ack)
        output.write(f"Acknowledged till : {ack}\n")
        output.flush()
        if sender.acknowledge(ack):
            break
    return acks


def serve_go_back_n(
    conn: socket.socket, acks: Iterable[int], output: TextIO
) -> list[int]:
    """Answer each window with the next acknowledgement from ``acks``.

    Ends once the last frame is acknowledged, ``acks`` runs out, or the peer
    closes. Returns the window ends received.
    """
    answers: Iterator[int] = iter(acks)
    received: list[int] = []
    while (till := _recv_int(conn)) is not None:
        received.append(till)
        output.write(f"Received till : {till}\n")
        output.flush()
        ack = next(answers, None)
        if ack is None:
            break
        conn.sendall(encode_int(ack))
        if ack == TOTAL_FRAMES:
            break
    return received


def _prompted_ints(prompt: str) -> Iterator[int]:
    while True:
        print(prompt, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            return
        words = line.split()
        if words:
            yield int(words[0])


def _serve(host: str, port: int, handler) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(BACKLOG)
        conn, _ = listener.accept()
        with conn:
            handler(conn)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-arq", description="Stop-and-wait and go-back-N exchanges."
    )
    parser.add_argument(
        "role", choices=["stop-server", "stop-client", "gbn-server", "gbn-client"]
    )
    parser.add_argument("--host", help="address to bind or connect to")
    parser.add_argument("--port", type=int, default=ARQ_PORT, help="port (default 9090)")
    parser.add_argument(
        "--limit", type=int, help="stop-and-wait: sequence number that restarts the count"
    )
    parser.add_argument("--window", type=int, default=WINDOW, help="go-back-N window size")
    parser.add_argument(
        "--total", type=int, default=TOTAL_FRAMES, help="go-back-N number of frames"
    )
    args = parser.parse_args(argv)
    out = sys.stdout

    try:
        if args.role == "stop-server":
            receiver = StopAndWaitReceiver(limit=args.limit)
            _serve(
                args.host or LISTEN_HOST,
                args.port,
                lambda conn: serve_stop_and_wait(conn, receiver, out),
            )
        elif args.role == "gbn-server":
            _serve(
                args.host or LISTEN_HOST,
                args.port,
                lambda conn: serve_go_back_n(conn, _prompted_ints("Ack till : "), out),
            )
        else:
            with socket.create_connection((args.host or DEFAULT_HOST, args.port)) as sock:
                if args.role == "stop-client":
                    run_stop_and_wait_client(sock, _prompted_ints("Send : "), out)
                else:
                    sender = GoBackNSender(window=args.window, total=args.total)
                    run_go_back_n_sender(sock, sender, out)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())