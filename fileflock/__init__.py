"""Chunked peer-to-peer file sharing: chunk metadata, a TCP seeder and a downloader."""

__version__ = "0.1.0"