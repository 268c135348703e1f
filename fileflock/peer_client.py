"""Downloader side: fetches chunks from peers and assembles the file."""

from __future__ import annotations

import json
import socket
import sys
from typing import Any

from fileflock.peer_server import WIRE_WORD


def _recv_exact(sock: socket.socket, count: int) -> bytes:
    parts = bytearray()
    while len(parts) < count:
        piece = sock.recv(count - len(parts))
        if not piece:
            raise ConnectionError(f"peer closed the connection after {len(parts)} of {count} bytes")
        parts.extend(piece)
    return bytes(parts)


def fetch_chunk(ip: str, port: int, index: int) -> bytes:
    """Request chunk ``index`` from the peer at ``ip``:``port`` and return its bytes."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.connect((ip, port))
        sock.sendall(WIRE_WORD.pack(index))
        (size,) = WIRE_WORD.unpack(_recv_exact(sock, WIRE_WORD.size))
        return _recv_exact(sock, size)


def _load_metadata(metadata_path: str) -> dict[str, Any]:
    with open(metadata_path, encoding="utf-8") as meta_file:
        return json.load(meta_file)


def run_downloader(metadata_path: str, output_file: str) -> list[int]:
    """Download every chunk listed in the metadata into ``output_file``.

    Returns the indices of chunks that no peer could supply.
    """
    metadata = _load_metadata(metadata_path)
    chunk_size = int(metadata.get("chunk_size") or 0)
    total_chunks = int(metadata.get("total_chunks") or 0)
    peers = metadata.get("peers") or []

    failed: list[int] = []
    with open(output_file, "wb") as out:
        for index in range(total_chunks):
            chunk = None
            for peer in peers:
                ip = str(peer.get("ip", ""))
                port = int(peer.get("port") or 0)
                try:
                    chunk = fetch_chunk(ip, port, index)
                except (OSError, OverflowError, ValueError):
                    print("[Downloader] Connection failed", file=sys.stderr)
                    continue
                break

            if chunk is None:
                failed.append(index)
                print(f"[Downloader] Failed to download chunk {index}", file=sys.stderr)
                continue

            out.seek(index * chunk_size)
            out.write(chunk)
            print(f"[Downloader] Downloaded chunk {index + 1}/{total_chunks}")
    return failed