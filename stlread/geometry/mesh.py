import numpy as np
from enum import Enum
from typing import Iterator
from dataclasses import dataclass

Vec3 = tuple[float, float, float]

class StlFormat(Enum):
    BINARY = 'binary'
    ASCII = 'ascii'


# Header dataclasses

@dataclass(frozen=True)
class TextHeader:
    name: str

@dataclass(frozen=True)
class BinaryHeader:
    data: bytes

    def __post_init__(self):
        if len(self.data) != 80:
            raise ValueError(f"Binary STL header must be exactly 80 bytes, got {len(self.data)}")

Header = TextHeader | BinaryHeader


# Geometry dataclasses

def as_vec3(values, attr_path: str) -> Vec3:
    values = tuple(float(x) for x in values)
    if len(values) != 3:
        raise ValueError(f"Attribute {attr_path} must have exactly 3 values")
    return values

@dataclass(frozen=True)
class Triangle:
    normal: Vec3
    points: tuple[Vec3, Vec3, Vec3]

    def __post_init__(self):
        object.__setattr__(self, 'normal', as_vec3(self.normal, 'normal'))
        points = tuple(as_vec3(p, f'points[{i}]') for i, p in enumerate(self.points))
        if len(points) != 3:
            raise ValueError(f"Triangle must have exactly 3 points, got {len(points)}")
        object.__setattr__(self, 'points', points)

@dataclass(frozen=True)
class StlMesh:
    header: Header
    triangles: tuple[Triangle, ...]

    def __post_init__(self):
        object.__setattr__(self, 'triangles', tuple(self.triangles))

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    @property
    def format(self) -> StlFormat:
        match self.header:
            case TextHeader(): return StlFormat.ASCII
            case BinaryHeader(): return StlFormat.BINARY
            case _: raise TypeError(f"Invalid STL header type {type(self.header).__name__}")

    @property
    def vertices(self) -> np.ndarray:
        return np.array([t.points for t in self.triangles], dtype=np.float32).reshape(-1, 3, 3)

    @property
    def normals(self) -> np.ndarray:
        return np.array([t.normal for t in self.triangles], dtype=np.float32).reshape(-1, 3)
