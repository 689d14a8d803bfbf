import io
import socket
from concurrent.futures import ThreadPoolExecutor

import pytest

from netlab.chat import converse


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()


def _run_both(client_call, server_call):
    with ThreadPoolExecutor(max_workers=1) as pool:
        server_future = pool.submit(server_call)
        client_result = client_call()
        return client_result, server_future.result(timeout=5)


def test_client_ends_with_stop_word(pair):
    client, server = pair
    client_out, server_out = io.StringIO(), io.StringIO()
    client_got, server_got = _run_both(
        lambda: converse(client, ["hello", "exit"], client_out, True, "exit"),
        lambda: converse(server, ["world"], server_out, False, "exit"),
    )
    assert client_got == ["world"]
    assert server_got == ["hello"]
    assert client_out.getvalue() == "Received : world\n"
    assert server_out.getvalue() == "Received : hello\n"


def test_server_stop_word_ends_client(pair):
    client, server = pair
    client_got, server_got = _run_both(
        lambda: converse(client, ["hello", "more"], io.StringIO(), True, "exit"),
        lambda: converse(server, ["exit"], io.StringIO(), False, "exit"),
    )
    assert client_got == []
    assert server_got == ["hello"]


def test_custom_stop_word(pair):
    client, server = pair
    client_got, server_got = _run_both(
        lambda: converse(client, ["hi", "BYE"], io.StringIO(), True, "BYE"),
        lambda: converse(server, ["exit", "unused"], io.StringIO(), False, "BYE"),
    )
    assert client_got == ["exit"]
    assert server_got == ["hi"]


def test_no_stop_word_runs_until_lines_end(pair):
    client, server = pair

    def client_side():
        try:
            return converse(client, ["a", "b"], io.StringIO(), True, None)
        finally:
            client.shutdown(socket.SHUT_WR)

    client_got, server_got = _run_both(
        client_side,
        lambda: converse(server, ["x", "exit"], io.StringIO(), False, None),
    )
    assert client_got == ["x", "exit"]
    assert server_got == ["a", "b"]


def test_peer_closing_ends_chat(pair):
    client, server = pair
    server.close()
    out = io.StringIO()
    assert converse(client, ["never"], out, False, "exit") == []
    assert out.getvalue() == ""


def test_empty_message_rejected(pair):
    client, _ = pair
    with pytest.raises(ValueError):
        converse(client, [""], io.StringIO(), True, "exit")


def test_overlong_message_rejected(pair):
    client, _ = pair
    with pytest.raises(ValueError):
        converse(client, ["x" * 150], io.StringIO(), True, "exit")