"""Splitting files into fixed-size chunks and describing them in a metadata file."""

from __future__ import annotations

import hashlib
import json
import os
from typing import Any

DEFAULT_CHUNK_SIZE = 512 * 1024


def _sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


class Chunker:
    """Hashes a file chunk by chunk and writes its JSON metadata."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk size must be positive")
        self.chunk_size = chunk_size

    def chunk_file(self, input_path: str | os.PathLike[str], output_meta_path: str | os.PathLike[str]) -> dict[str, Any]:
        """Hash ``input_path`` in chunks, write the metadata JSON and return it."""
        chunks: list[dict[str, Any]] = []
        with open(input_path, "rb") as source:
            blocks = iter(lambda: source.read(self.chunk_size), b"")
            for index, block in enumerate(blocks):
                chunks.append({"hash": _sha1_hex(block), "index": index})
            size = source.seek(0, os.SEEK_END)

        file_hash = _sha1_hex("".join(chunk["hash"] for chunk in chunks).encode("ascii"))

        metadata: dict[str, Any] = {
            "chunk_size": self.chunk_size,
            "file_hash": file_hash,
            "filename": os.fspath(input_path),
            "peers": [],
            "size": size,
            "total_chunks": len(chunks),
        }
        if chunks:
            metadata["chunks"] = chunks

        with open(output_meta_path, "w", encoding="utf-8") as out:
            json.dump(metadata, out, indent="\t", sort_keys=True)
        return metadata

    @staticmethod
    def read_chunk(filepath: str | os.PathLike[str], offset: int, size: int) -> bytes:
        """Return up to ``size`` bytes of ``filepath`` starting at ``offset``."""
        with open(filepath, "rb") as source:
            source.seek(offset)
            return source.read(size)