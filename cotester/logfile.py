"""Read run logs from disk

Logs archived by the backend may be zstd compressed; these are transparently decompressed.
"""

import logging
from typing import BinaryIO

import zstd


COMPRESS_EXT = '.zst'
# Logs are always assumed to be using this character map
CHARMAP = 'UTF-8'


def decode(data: bytes) -> str:
    """Decode a raw log, replacing (rather than failing on) bytes that are not valid."""
    return data.decode(CHARMAP, errors='replace')


def read_stream(f: BinaryIO, compressed: bool = False) -> str:
    data = f.read()
    if compressed:
        data = zstd.decompress(data)
    return decode(data)


def read_log(fn: str) -> str:
    """Return the contents of a log file, decompressing it if its name ends in .zst"""
    compressed = fn.endswith(COMPRESS_EXT)
    logging.debug('Reading %slog file %s', 'compressed ' if compressed else '', fn)
    with open(fn, 'rb') as f:
        return read_stream(f, compressed)


def write_compressed(fn: str, text: str):
    """Store a log as a zstd-compressed file."""
    if not fn.endswith(COMPRESS_EXT):
        raise RuntimeError(f'Compressed log file name must end in {COMPRESS_EXT}: {fn}')
    with open(fn, 'wb') as f:
        f.write(zstd.compress(text.encode(CHARMAP)))
