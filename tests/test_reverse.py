import io
import socket
from concurrent.futures import ThreadPoolExecutor

import pytest

from netlab.reverse import (
    MAX_MESSAGE,
    main,
    reverse_message,
    serve_tcp,
    serve_udp,
    tcp_reverse,
    udp_reverse,
)


@pytest.fixture
def tcp_listener():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    listener.settimeout(10)
    yield listener
    listener.close()


@pytest.fixture
def udp_server_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(10)
    yield sock
    sock.close()


def test_reverse_simple():
    assert reverse_message(b"hello") == b"olleh"


@pytest.mark.parametrize("data", [b"a", b"ab", b"abc", b"network", b"x y z"])
def test_reverse_is_involution(data):
    once = reverse_message(data)
    assert len(once) == len(data)
    assert reverse_message(once) == data


def test_reverse_stops_at_nul():
    assert reverse_message(b"abc\0junk") == reverse_message(b"abc")
    assert reverse_message(b"\0abc") == b""


def test_tcp_round_trip(tcp_listener):
    port = tcp_listener.getsockname()[1]
    with ThreadPoolExecutor(max_workers=1) as pool:
        served = pool.submit(serve_tcp, tcp_listener)
        reply = tcp_reverse("hello", "127.0.0.1", port)
        assert served.result(timeout=10) == reply
    assert reply == reverse_message(b"hello")


def test_udp_round_trip(udp_server_socket):
    port = udp_server_socket.getsockname()[1]
    with ThreadPoolExecutor(max_workers=1) as pool:
        served = pool.submit(serve_udp, udp_server_socket)
        reply = udp_reverse(b"datagram", "127.0.0.1", port)
        assert served.result(timeout=10) == reply
    assert reverse_message(reply) == b"datagram"


@pytest.mark.parametrize("client", [tcp_reverse, udp_reverse])
def test_too_long_message_rejected(client):
    with pytest.raises(ValueError):
        client("x" * (MAX_MESSAGE + 1), "127.0.0.1", 9)


@pytest.mark.parametrize("client", [tcp_reverse, udp_reverse])
def test_empty_message_rejected(client):
    with pytest.raises(ValueError):
        client("", "127.0.0.1", 9)


def test_main_tcp_client_uses_first_word(tcp_listener, monkeypatch, capsys):
    port = tcp_listener.getsockname()[1]
    monkeypatch.setattr("sys.stdin", io.StringIO("hello world\n"))
    with ThreadPoolExecutor(max_workers=1) as pool:
        served = pool.submit(serve_tcp, tcp_listener)
        assert main(["tcp-client", "--host", "127.0.0.1", "--port", str(port)]) == 0
        served.result(timeout=10)
    out = capsys.readouterr().out
    assert f"Reversed string : {reverse_message(b'hello').decode()}" in out


def test_main_udp_client(udp_server_socket, monkeypatch, capsys):
    port = udp_server_socket.getsockname()[1]
    monkeypatch.setattr("sys.stdin", io.StringIO("abcdef\n"))
    with ThreadPoolExecutor(max_workers=1) as pool:
        served = pool.submit(serve_udp, udp_server_socket)
        assert main(["udp-client", "--host", "127.0.0.1", "--port", str(port)]) == 0
        served.result(timeout=10)
    out = capsys.readouterr().out
    assert f"Reversed string : {reverse_message(b'abcdef').decode()}" in out


def test_main_client_without_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n"))
    assert main(["tcp-client", "--port", "9"]) == 1
    assert "error" in capsys.readouterr().err