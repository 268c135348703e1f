"""Seeder side: serves chunks of a file to downloaders over TCP."""

from __future__ import annotations

import contextlib
import json
import socket
import struct
import sys
import threading

from fileflock.chunker import Chunker

WIRE_WORD = struct.Struct("<Q")
LISTEN_BACKLOG = 5


def _recv_exact(sock: socket.socket, count: int) -> bytes | None:
    parts = bytearray()
    while len(parts) < count:
        piece = sock.recv(count - len(parts))
        if not piece:
            return None
        parts.extend(piece)
    return bytes(parts)


def handle_client(client_socket: socket.socket, file_path: str, chunk_size: int) -> None:
    """Answer one chunk request on ``client_socket`` and close it."""
    with client_socket, contextlib.suppress(OSError):
        request = _recv_exact(client_socket, WIRE_WORD.size)
        if request is None:
            return
        (index,) = WIRE_WORD.unpack(request)
        try:
            chunk = Chunker.read_chunk(file_path, index * chunk_size, chunk_size)
        except (OSError, OverflowError, ValueError):
            chunk = b""
        client_socket.sendall(WIRE_WORD.pack(len(chunk)) + chunk)


def _load_chunk_size(metadata_path: str) -> int:
    with open(metadata_path, encoding="utf-8") as meta_file:
        metadata = json.load(meta_file)
    return int(metadata.get("chunk_size") or 0)


def run_seeder(metadata_path: str, file_path: str, port: int) -> None:
    """Serve chunks of ``file_path`` on ``port`` until the process ends."""
    chunk_size = _load_chunk_size(metadata_path)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("", port))
        server.listen(LISTEN_BACKLOG)
        print(f"[Seeder] Serving chunks from: {file_path} on port {port}", flush=True)

        while True:
            try:
                client, _ = server.accept()
            except OSError:
                print("[Seeder] Accept failed", file=sys.stderr)
                continue
            threading.Thread(
                target=handle_client,
                args=(client, file_path, chunk_size),
                daemon=True,
            ).start()