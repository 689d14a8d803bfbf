# netlab

Small networking exercises in plain Python, each with a library API and a
command:

| Module             | Command            | What it does                                        |
|--------------------|--------------------|-----------------------------------------------------|
| `netlab.dvr`       | `netlab-dvr`       | distance-vector routing tables from a cost matrix   |
| `netlab.fib`       | `netlab-fib`       | Fibonacci numbers by Binet's formula                |
| `netlab.reverse`   | `netlab-reverse`   | a word sent over TCP or UDP comes back reversed     |
| `netlab.chat`      | `netlab-chat`      | two peers take turns sending words                  |
| `netlab.arq`       | `netlab-arq`       | stop-and-wait and go-back-N acknowledgement exchanges |
| `netlab.broadcast` | `netlab-broadcast` | a server relays each client's text to all the others |

It needs Python 3.10 or later and nothing outside the standard library.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Commands

Run a server side in one terminal and its client in another. Every command
takes `--help`. Errors (a refused connection, bad input) are printed to
standard error and the command exits with status 1.

### netlab-dvr

Reads a node count and then that many rows of integer link costs from
standard input, and prints, for every node, the next hop and distance to
every other node. `-u` / `--updates` also lists each table update as it is
made.

```
printf '3\n0 1 5\n1 0 1\n5 1 0\n' | netlab-dvr --updates
```

### netlab-fib

```
netlab-fib        # prints 34, the 9th number
netlab-fib 20
```

### netlab-reverse

```
netlab-reverse tcp-server        # port 9002
netlab-reverse tcp-client
netlab-reverse udp-server        # port 8080
netlab-reverse udp-client
```

`--host` and `--port` choose the address. The client sends the first word
of the line it reads (at most 99 bytes); the server answers that one request
with the word reversed and exits.

### netlab-chat

```
netlab-chat server
netlab-chat client
```

Port 9090 by default (`--host`, `--port`). The client speaks first, then
the two sides alternate one word at a time. Either side ends the chat by
sending the stop word, `exit` unless `--stop-word` says otherwise; an empty
`--stop-word` turns it off. The server takes a single client.

### netlab-arq

```
netlab-arq stop-server [--limit N]
netlab-arq stop-client
netlab-arq gbn-server
netlab-arq gbn-client [--window 5] [--total 15]
```

Port 9090 by default (`--host`, `--port`). Sequence numbers travel as
4-byte little-endian integers.

- Stop-and-wait: the client sends the numbers typed in; the server accepts
  only the one it expects and answers with the next it expects. With
  `--limit`, receiving that number starts the count over at zero and the
  session ends. The client stops when it is answered zero.
- Go-back-N: the client sends how far its window reaches; the operator at
  the server types how far frames are acknowledged. The client slides its
  window until all `--total` frames are acknowledged; the server finishes
  once acknowledgement 15 is typed.

### netlab-broadcast

```
netlab-broadcast server [--host 0.0.0.0] [--port 7007]
netlab-broadcast client alice [--host 127.0.0.1] [--port 7007]
```

The server accepts any number of clients and relays every message a client
sends to all the other connected clients, logging connections and
disconnections. Each client line goes out as `alice : <line>`. Stop the
server with Ctrl-C.

## Using it from Python

```python
from netlab.dvr import distance_vector, format_tables, parse_matrix
from netlab.fib import fib
from netlab.reverse import reverse_message

print(fib(9))                       # 34
print(reverse_message(b"hello"))    # b'olleh'

tables, updates = distance_vector(parse_matrix("3 0 1 5 1 0 1 5 1 0"))
print(format_tables(tables))
```

- `netlab.dvr`: `distance_vector(matrix)` returns the tables (lists of
  `Route(via, distance)`) and the `Update(source, destination, via)` records
  in the order they were made; it raises `ValueError` for a matrix that is
  not square.
- `netlab.reverse`: `serve_tcp(listener)` and `serve_udp(sock)` answer one
  request on a socket you set up; `tcp_reverse(message, host, port)` and
  `udp_reverse(message, host, port)` are the clients.
- `netlab.chat`: `converse(sock, lines, output, speak_first, stop_word)`
  runs one side of a chat on a connected socket and returns what was
  received.
- `netlab.arq`: `StopAndWaitReceiver` and `GoBackNSender` hold the protocol
  state; `serve_stop_and_wait`, `run_stop_and_wait_client`,
  `run_go_back_n_sender` and `serve_go_back_n` drive them over a socket;
  `encode_int` and `decode_int` pack the sequence numbers.
- `netlab.broadcast`: `BroadcastServer` (a context manager with
  `serve_forever()`, `broadcast(sender, data)` and `shutdown()`),
  `run_client(username, host, port, lines, output)` and
  `format_message(username, line)`.

## Limits

The reverse, chat and ARQ servers each serve one client and then exit; they
are exercises, not long-running services. Messages carry no framing beyond
a single read, so a message is limited to what one read delivers.