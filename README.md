# fileflock

fileflock shares a file between peers in fixed-size chunks. A JSON metadata
file lists the SHA-1 hash of each chunk, a hash of the whole file and the
peers to fetch from. Seeders serve chunks over TCP. A downloader asks the
peers in turn for each chunk and writes the chunk to its place in the output
file.

## Installation

```
pip install .
```

The package has no dependencies outside the standard library. To run the
tests, install the `test` extra and run `pytest`.

## Metadata

`fileflock.chunker.Chunker` hashes a file and writes its metadata. The chunk
size defaults to 512 KiB and must be positive (`ValueError` otherwise).

```python
from fileflock.chunker import Chunker

metadata = Chunker(chunk_size=512 * 1024).chunk_file("movie.mkv", "movie.json")
```

`chunk_file` writes the JSON to the second path and also returns it as a
dictionary. It holds:

- `chunks`: a list of `{"index": ..., "hash": ...}`, one per chunk, with the
  SHA-1 hex digest of the chunk's bytes. An empty file has no `chunks` key.
- `file_hash`: the SHA-1 hex digest of all chunk digests joined together.
- `filename`: the input path as given.
- `size`: the file size in bytes.
- `chunk_size` and `total_chunks`.
- `peers`: an empty list.

A missing input file raises `FileNotFoundError`. Before downloading, add the
seeders to `peers` by hand:

```json
"peers": [{"ip": "127.0.0.1", "port": 9000}]
```

`Chunker.read_chunk(path, offset, size)` returns up to `size` bytes of the
file from `offset`; fewer at the end of the file.

## Seeding

```
fileflock --seed movie.json movie.mkv 9000
```

The seeder reads `chunk_size` from the metadata, listens on all interfaces on
the given port and serves until the process is stopped. Each connection is
handled in its own thread and gets the requested chunk of the file. A chunk
that cannot be read (an index past the end, a missing file) is sent as zero
bytes. A port that is not a number is reported and the command exits with
status 1.

## Downloading

```
fileflock --download movie.json copy.mkv
```

The downloader creates (or truncates) the output file, then for every chunk
tries the peers in the order listed, taking the first that answers. It
prints each chunk as it arrives and reports on standard error each failed
connection and each chunk no peer could supply.

Run with too few arguments, `fileflock` prints its usage and exits with
status 1; an unknown mode prints `Unknown mode.`. The command can also be
started with `python -m fileflock.cli`.

## Wire protocol

The client sends a chunk index as an unsigned 64-bit little-endian integer.
The server replies with the chunk length in the same format, followed by the
chunk bytes, and then closes the connection.

## Library use

- `fileflock.peer_client.fetch_chunk(ip, port, index)` fetches one chunk from
  one peer. It raises `OSError` when the peer cannot be reached and
  `ConnectionError` when the peer closes the connection early.
- `fileflock.peer_client.run_downloader(metadata_path, output_file)` downloads
  a whole file and returns the indices of the chunks that failed.
- `fileflock.peer_server.handle_client(sock, file_path, chunk_size)` answers
  one request on an accepted socket and closes it.
- `fileflock.peer_server.run_seeder(metadata_path, file_path, port)` serves a
  file; it does not return.
- `fileflock.cli.main(argv)` runs the command and returns its exit status.

## What it does not do

- There is no command to create metadata; use `Chunker.chunk_file` from
  Python.
- Downloaded chunks are not checked against the hashes in the metadata.
- Peers are not discovered or announced; the `peers` list must be filled in
  by hand.