"""Integration test fixtures.

Provides local TCP servers for exercising the transport over real sockets:
one that accepts connections and never answers, and a scripted HTTP server
whose replies (slow headers, redirects) are supplied by the test.
"""

import socket
import threading

import pytest


@pytest.fixture
def silent_server():
    """Yield a URL whose server accepts the connection but never responds."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    host, port = server.getsockname()

    accepted: list[socket.socket] = []
    stop = threading.Event()

    def accept_loop():
        server.settimeout(0.1)
        while not stop.is_set():
            try:
                conn, _ = server.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            accepted.append(conn)

    thread = threading.Thread(target=accept_loop, daemon=True)
    thread.start()

    yield f"http://{host}:{port}/models/table-qa"

    stop.set()
    thread.join(timeout=2)
    for conn in accepted:
        conn.close()
    server.close()


def read_http_request(conn: socket.socket) -> bytes:
    """Read one HTTP/1.1 request (head and Content-Length body) and return its head."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return data
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            break
        body += chunk
    return head


@pytest.fixture
def scripted_server():
    """
    Factory for a local HTTP server driven by a reply function.

    Call it with ``reply(conn, request_head, stop)``; it returns
    ``(base_url, request_lines)`` where request_lines collects the first line
    of every request the server received. Each connection is handled on its
    own thread; the reply function should give up once ``stop`` is set.
    """
    servers: list[socket.socket] = []
    threads: list[threading.Thread] = []
    connections: list[socket.socket] = []
    stop = threading.Event()

    def start(reply):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind(("127.0.0.1", 0))
        server.listen(8)
        server.settimeout(0.1)
        servers.append(server)
        host, port = server.getsockname()
        request_lines: list[bytes] = []

        def handle(conn):
            try:
                while not stop.is_set():
                    head = read_http_request(conn)
                    if not head:
                        return
                    request_lines.append(head.split(b"\r\n", 1)[0])
                    reply(conn, head, stop)
            except OSError:
                return

        def accept_loop():
            while not stop.is_set():
                try:
                    conn, _ = server.accept()
                except socket.timeout:
                    continue
                except OSError:
                    break
                conn.settimeout(None)
                connections.append(conn)
                handler = threading.Thread(target=handle, args=(conn,), daemon=True)
                handler.start()
                threads.append(handler)

        acceptor = threading.Thread(target=accept_loop, daemon=True)
        acceptor.start()
        threads.append(acceptor)
        return f"http://{host}:{port}", request_lines

    yield start

    stop.set()
    for conn in connections:
        try:
            conn.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        conn.close()
    for server in servers:
        server.close()
    for thread in threads:
        thread.join(timeout=2)
