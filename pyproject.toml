[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fileflock"
version = "0.1.0"
description = "Chunked peer-to-peer file sharing: hash files in fixed-size chunks, seed them over TCP and download them from peers."
requires-python = ">=3.10"
dependencies = []
keywords = ["p2p", "file-sharing", "chunking", "sha1", "seeder", "downloader", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fileflock = "fileflock.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fileflock"]

[tool.pytest.ini_options]
addopts = "-ra"
