import os
import io
from typing import BinaryIO, Self

from stlread.errors import TruncatedStreamError

READ_CHUNK_SIZE = 1 << 20  # bounds each transport read, whatever the requested length

class ByteCursor:
    def __init__(self, stream: BinaryIO, owns_stream: bool = False) -> None:
        self.stream = stream
        self.owns_stream = owns_stream
        self.line_number = 0

    @classmethod
    def open(cls, path: str | os.PathLike) -> Self:
        return cls(open(path, 'rb'), owns_stream=True)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def close(self) -> None:
        if self.owns_stream:
            self.stream.close()

    def read_exact(self, length: int, stage: str) -> bytes:
        chunks: list[bytes] = []
        received = 0
        while received < length:
            chunk = self.stream.read(min(length - received, READ_CHUNK_SIZE))
            if not chunk:
                raise TruncatedStreamError(stage, expected=length, received=received)
            chunks.append(chunk)
            received += len(chunk)
        return b''.join(chunks)

    def readline(self) -> bytes:
        line = self.stream.readline()
        if line:
            self.line_number += 1
        return line

    def rewind(self) -> None:
        if not self.stream.seekable():
            raise io.UnsupportedOperation("STL source must be seekable to rewind after format detection")
        self.stream.seek(0)
        self.line_number = 0
