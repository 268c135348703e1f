"""Command-line entry point for seeding and downloading files."""

from __future__ import annotations

import sys

from fileflock.peer_client import run_downloader
from fileflock.peer_server import run_seeder

USAGE = (
    "Usage:\n"
    "  Seeder:   ./fileflock --seed <metadata.json> <filepath> <port>\n"
    "  Downloader: ./fileflock --download <metadata.json> <outputfile>"
)


def main(argv: list[str] | None = None) -> int:
    """Run the seeder or downloader according to ``argv``; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 3:
        print(USAGE)
        return 1

    mode = args[0]
    if mode == "--seed":
        if len(args) < 4:
            print(USAGE)
            return 1
        metadata_file, file_path, port_text = args[1], args[2], args[3]
        try:
            port = int(port_text)
        except ValueError:
            print(f"Invalid port: {port_text}", file=sys.stderr)
            return 1
        print(f"[Main] Port passed: {port}", flush=True)
        run_seeder(metadata_file, file_path, port)
    elif mode == "--download":
        run_downloader(args[1], args[2])
    else:
        print("Unknown mode.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())