import logging
import numpy as np

from stlread.cursor import ByteCursor
from stlread.errors import TruncatedStreamError, StlSyntaxError, StlEncodingError
from stlread.geometry.mesh import StlMesh, Triangle, TextHeader, Vec3

logger = logging.getLogger(__name__)


# Line helpers

def next_line(cursor: ByteCursor, expected: str) -> tuple[str, list[str]]:
    while True:
        raw = cursor.readline()
        if not raw:
            raise TruncatedStreamError(expected, line=cursor.line_number + 1)
        try:
            line = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise StlEncodingError(cursor.line_number, e.reason) from e
        if tokens := line.split():  # blank lines carry no grammar
            return line, tokens

def expect_keyword(cursor: ByteCursor, keyword: str) -> None:
    line, tokens = next_line(cursor, f"'{keyword}'")
    if tokens != keyword.split():
        raise StlSyntaxError(f"Expected '{keyword}'", cursor.line_number, line)

def parse_vec3(tokens: list[str], line_number: int, line: str) -> Vec3:
    if len(tokens) != 3:
        raise StlSyntaxError(f"Expected 3 coordinates, got {len(tokens)}", line_number, line)
    try:
        values = [float(x) for x in tokens]
    except ValueError as e:
        raise StlSyntaxError("Invalid number", line_number, line) from e
    with np.errstate(over='ignore'):  # out-of-range values narrow to inf
        return tuple(np.array(values, dtype=np.float32).tolist())


# Grammar

def read_facet(cursor: ByteCursor, line: str, tokens: list[str]) -> Triangle:
    if tokens[:2] != ['facet', 'normal']:
        raise StlSyntaxError("Expected 'facet normal' or 'endsolid'", cursor.line_number, line)
    normal = parse_vec3(tokens[2:], cursor.line_number, line)

    expect_keyword(cursor, 'outer loop')
    points = []
    for _ in range(3):
        line, tokens = next_line(cursor, "'vertex'")
        if tokens[0] != 'vertex':
            raise StlSyntaxError("Expected 'vertex'", cursor.line_number, line)
        points.append(parse_vec3(tokens[1:], cursor.line_number, line))
    expect_keyword(cursor, 'endloop')
    expect_keyword(cursor, 'endfacet')
    return Triangle(normal=normal, points=tuple(points))

def read_text(cursor: ByteCursor) -> StlMesh:
    line, tokens = next_line(cursor, "'solid'")
    if tokens[0] != 'solid':
        raise StlSyntaxError("Expected 'solid'", cursor.line_number, line)
    name = line.strip().removeprefix('solid').strip()
    logger.debug("ASCII STL solid %r", name)

    triangles: list[Triangle] = []
    while True:
        line, tokens = next_line(cursor, "'facet normal' or 'endsolid'")
        if tokens[0].startswith('endsolid'):
            break
        triangles.append(read_facet(cursor, line, tokens))

    return StlMesh(header=TextHeader(name), triangles=tuple(triangles))
