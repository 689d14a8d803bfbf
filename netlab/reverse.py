"""String-reversal service over TCP and UDP."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Sequence

BUFFER_SIZE = 100
MAX_MESSAGE = BUFFER_SIZE - 1
TCP_PORT = 9002
UDP_PORT = 8080
DEFAULT_HOST = "127.0.0.1"
LISTEN_HOST = "0.0.0.0"
BACKLOG = 5


def reverse_message(data: bytes) -> bytes:
    """Reverse the bytes of a message, up to its first NUL byte."""
    text, _, _ = bytes(data).partition(b"\0")
    return text[::-1]


def _encode(message: str | bytes) -> bytes:
    data = message.encode() if isinstance(message, str) else bytes(message)
    if not data:
        raise ValueError("message must not be empty")
    if len(data) > MAX_MESSAGE:
        raise ValueError(f"message longer than {MAX_MESSAGE} bytes")
    return data


def serve_tcp(listener: socket.socket) -> bytes:
    """Accept one connection on a listening socket and answer it reversed."""
    conn, _ = listener.accept()
    with conn:
        reply = reverse_message(conn.recv(BUFFER_SIZE))
        conn.sendall(reply)
    return reply


def _read_until_closed(sock: socket.socket) -> bytes:
    chunks: list[bytes] = []
    remaining = BUFFER_SIZE
    while remaining > 0:
        chunk = sock.recv(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def tcp_reverse(
    message: str | bytes, host: str = DEFAULT_HOST, port: int = TCP_PORT
) -> bytes:
    """Send a message to a TCP reversal server and return its answer."""
    data = _encode(message)
    with socket.create_connection((host, port)) as sock:
        sock.sendall(data)
        return _read_until_closed(sock)


def serve_udp(sock: socket.socket) -> bytes:
    """Answer one datagram on a bound UDP socket with its reversal."""
    data, address = sock.recvfrom(BUFFER_SIZE)
    reply = reverse_message(data)
    sock.sendto(reply, address)
    return reply


def udp_reverse(
    message: str | bytes, host: str = DEFAULT_HOST, port: int = UDP_PORT
) -> bytes:
    """Send a datagram to a UDP reversal server and return its answer."""
    data = _encode(message)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(data, (host, port))
        reply, _ = sock.recvfrom(BUFFER_SIZE)
    return reply.partition(b"\0")[0]


def _run_server(protocol: str, host: str, port: int) -> None:
    if protocol == "tcp":
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((host, port))
            listener.listen(BACKLOG)
            serve_tcp(listener)
    else:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind((host, port))
            serve_udp(sock)
    print("Reversed message sent")


def _run_client(protocol: str, host: str, port: int) -> None:
    print("Enter a string : ", end="", flush=True)
    words = sys.stdin.readline().split()
    if not words:
        raise ValueError("no string given")
    ask = tcp_reverse if protocol == "tcp" else udp_reverse
    reply = ask(words[0], host, port)
    print()
    print(f"Reversed string : {reply.decode(errors='replace')}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-reverse", description="Reverse strings over the network."
    )
    parser.add_argument(
        "role", choices=["tcp-server", "tcp-client", "udp-server", "udp-client"]
    )
    parser.add_argument("--host", help="address to bind or connect to")
    parser.add_argument("--port", type=int, help="port (TCP 9002, UDP 8080)")
    args = parser.parse_args(argv)

    protocol, _, side = args.role.partition("-")
    port = args.port if args.port is not None else (
        TCP_PORT if protocol == "tcp" else UDP_PORT
    )
    try:
        if side == "server":
            _run_server(protocol, args.host or LISTEN_HOST, port)
        else:
            _run_client(protocol, args.host or DEFAULT_HOST, port)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())