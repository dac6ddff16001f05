import struct
import logging
import numpy as np

from stlread.cursor import ByteCursor
from stlread.errors import TruncatedStreamError
from stlread.geometry.mesh import StlMesh, Triangle, BinaryHeader

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_SIZE = 50  # 12 normal + 36 vertices + 2 attribute
RECORD_DTYPE = np.dtype([('normal', '<f4', (3,)), ('vertices', '<f4', (3, 3)), ('attribute', '<u2')])

def record_field(offset: int) -> str:
    if offset < 12:
        return 'normal'
    elif offset < 48:
        return f'vertex {(offset - 12) // 12}'
    else:
        return 'attribute'

def read_records(cursor: ByteCursor, num_triangles: int) -> np.ndarray:
    try:
        data = cursor.read_exact(num_triangles * RECORD_SIZE, 'triangles')
    except TruncatedStreamError as e:
        idx, offset = divmod(e.received, RECORD_SIZE)
        raise TruncatedStreamError(f'triangle {idx} {record_field(offset)}', expected=e.expected, received=e.received) from e
    return np.frombuffer(data, dtype=RECORD_DTYPE, count=num_triangles)

def read_binary(cursor: ByteCursor) -> StlMesh:
    header = cursor.read_exact(HEADER_SIZE, 'header')
    num_triangles = struct.unpack('<I', cursor.read_exact(COUNT_SIZE, 'triangle count'))[0]
    logger.debug("Binary STL declares %d triangles", num_triangles)

    records = read_records(cursor, num_triangles)
    triangles = tuple(Triangle(normal=tuple(normal), points=tuple(tuple(p) for p in points))
                      for normal, points in zip(records['normal'].tolist(), records['vertices'].tolist()))
    return StlMesh(header=BinaryHeader(header), triangles=triangles)
