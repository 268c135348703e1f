import json
import socket
import struct
import threading
import time

import pytest

from fileflock.chunker import Chunker
from fileflock.peer_server import handle_client, run_seeder

DATA = bytes(range(256)) * 4


def _read_all(sock):
    parts = []
    while True:
        piece = sock.recv(65536)
        if not piece:
            return b"".join(parts)
        parts.append(piece)


def _parse(reply):
    (size,) = struct.unpack("<Q", reply[:8])
    return size, reply[8:]


def _serve(index, file_path, chunk_size):
    """Send one request through handle_client and return the parsed reply."""
    server_end, client_end = socket.socketpair()
    client_end.sendall(struct.pack("<Q", index))
    handle_client(server_end, file_path, chunk_size)
    reply = _read_all(client_end)
    client_end.close()
    return _parse(reply)


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(DATA)
    return path


def test_handle_client_serves_requested_chunk(data_file):
    size, body = _serve(2, str(data_file), 100)
    assert body == DATA[200:300]
    assert body == Chunker.read_chunk(str(data_file), 200, 100)
    assert size == 100


def test_handle_client_serves_partial_tail(data_file):
    size, body = _serve(10, str(data_file), 100)
    assert body == DATA[1000:]
    assert body == Chunker.read_chunk(str(data_file), 1000, 100)
    assert size == 24


def test_handle_client_past_end_sends_empty(data_file):
    size, body = _serve(50, str(data_file), 100)
    assert size == 0
    assert body == b""
    assert Chunker.read_chunk(str(data_file), 5000, 100) == body


def test_handle_client_without_request_closes(data_file):
    server_end, client_end = socket.socketpair()
    client_end.shutdown(socket.SHUT_WR)
    handle_client(server_end, str(data_file), 100)
    assert client_end.recv(16) == b""
    assert server_end.fileno() == -1
    client_end.close()


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _connect_when_ready(port, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=timeout)
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)


def test_run_seeder_serves_chunks(tmp_path, data_file):
    meta = tmp_path / "meta.json"
    meta.write_text(json.dumps({"chunk_size": 300}), encoding="utf-8")
    port = _free_port()

    def serve():
        run_seeder(str(meta), str(data_file), port)

    threading.Thread(target=serve, daemon=True).start()

    with _connect_when_ready(port) as conn:
        conn.sendall(struct.pack("<Q", 1))
        size, body = _parse(_read_all(conn))
    assert body == DATA[300:600]
    assert body == Chunker.read_chunk(str(data_file), 300, 300)
    assert size == 300


def test_run_seeder_port_in_use_raises(tmp_path, data_file):
    meta = tmp_path / "meta.json"
    meta.write_text(json.dumps({"chunk_size": 300}), encoding="utf-8")
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as occupant:
        occupant.bind(("", 0))
        occupant.listen(1)
        port = occupant.getsockname()[1]
        with pytest.raises(OSError):
            run_seeder(str(meta), str(data_file), port)


def test_run_seeder_missing_metadata_raises(tmp_path, data_file):
    with pytest.raises(FileNotFoundError):
        run_seeder(str(tmp_path / "nope.json"), str(data_file), _free_port())