import os
import logging
import numpy as np
from typing import BinaryIO, Iterable

from stlread.cursor import ByteCursor
from stlread.binary import read_binary
from stlread.text import read_text
from stlread.errors import TruncatedStreamError, UnsupportedFormatError
from stlread.geometry.mesh import StlMesh, StlFormat

logger = logging.getLogger(__name__)

SNIFF_PREFIX = 'solid'
ALL_FORMATS = (StlFormat.BINARY, StlFormat.ASCII)


# Format detection

def sniff_format(cursor: ByteCursor) -> StlFormat:
    try:
        prefix = cursor.read_exact(len(SNIFF_PREFIX), 'format prefix')
        fmt = StlFormat.ASCII if prefix.decode('utf-8') == SNIFF_PREFIX else StlFormat.BINARY
    except (TruncatedStreamError, UnicodeDecodeError):  # short streams are left to the binary decoder
        fmt = StlFormat.BINARY
    cursor.rewind()
    return fmt


# Readers

def read_stl(f: BinaryIO, formats: Iterable[StlFormat] = ALL_FORMATS) -> StlMesh:
    """Parse an STL mesh from an open, seekable binary stream.

    The stream is rewound to offset 0 after format detection, so it is read from
    the start regardless of its current position. Sharing one stream between
    concurrent calls is not supported; callers must serialize access themselves.
    Pass ``formats=(StlFormat.BINARY,)`` to reject ASCII input.
    """
    formats = tuple(formats)
    cursor = ByteCursor(f)
    cursor.rewind()
    fmt = sniff_format(cursor)
    logger.debug("Detected %s STL", fmt.name)
    if fmt not in formats:
        raise UnsupportedFormatError(fmt, formats)

    match fmt:
        case StlFormat.BINARY: mesh = read_binary(cursor)
        case StlFormat.ASCII: mesh = read_text(cursor)
    logger.debug("Read %d triangles", len(mesh))
    return mesh

def read_file(path: str | os.PathLike, formats: Iterable[StlFormat] = ALL_FORMATS) -> StlMesh:
    with ByteCursor.open(path) as cursor:
        return read_stl(cursor.stream, formats)


# Loaders

def load_stl(path: str | os.PathLike) -> tuple[np.ndarray, np.ndarray]:
    mesh = read_file(path)
    vertices = mesh.vertices
    normals = mesh.normals[:, None].repeat(3, axis=1)
    return vertices, normals
