import io
import tempfile
import unittest
from pathlib import Path
from stlread.cursor import ByteCursor, READ_CHUNK_SIZE
from stlread.errors import TruncatedStreamError

class TrickleStream(io.RawIOBase):
    """Raw stream that hands out at most one byte per read call."""
    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.pos >= len(self.data) or len(buffer) == 0:
            return 0
        buffer[0] = self.data[self.pos]
        self.pos += 1
        return 1


class TestByteCursor(unittest.TestCase):
    def test_read_exact(self):
        """Test that read_exact returns exactly the requested bytes and advances."""
        cursor = ByteCursor(io.BytesIO(b'abcdefgh'))
        self.assertEqual(cursor.read_exact(3, 'first'), b'abc')
        self.assertEqual(cursor.read_exact(5, 'second'), b'defgh')
        self.assertEqual(cursor.read_exact(0, 'empty'), b'')

    def test_read_exact_joins_short_reads(self):
        """Test that short reads from the transport are accumulated."""
        cursor = ByteCursor(TrickleStream(b'0123456789'))
        self.assertEqual(cursor.read_exact(10, 'digits'), b'0123456789')

    def test_read_exact_bounds_transport_reads(self):
        """Test that a large request is split into reads no bigger than the chunk size."""
        class RecordingStream(io.BytesIO):
            def __init__(self, data):
                super().__init__(data)
                self.requests = []

            def read(self, size=-1):
                self.requests.append(size)
                return super().read(size)

        stream = RecordingStream(b'x' * (READ_CHUNK_SIZE + 5))
        with self.assertRaises(TruncatedStreamError) as ctx:
            ByteCursor(stream).read_exact(0xFFFFFFFF * 50, 'records')
        self.assertEqual(ctx.exception.received, READ_CHUNK_SIZE + 5)
        self.assertTrue(all(0 < size <= READ_CHUNK_SIZE for size in stream.requests))

    def test_read_exact_truncated(self):
        """Test that end-of-stream fails instead of returning a partial read."""
        cursor = ByteCursor(io.BytesIO(b'abc'))
        with self.assertRaises(TruncatedStreamError) as ctx:
            cursor.read_exact(5, 'field')
        self.assertEqual(ctx.exception.stage, 'field')
        self.assertEqual(ctx.exception.expected, 5)
        self.assertEqual(ctx.exception.received, 3)
        self.assertIn('field', str(ctx.exception))

    def test_rewind(self):
        """Test that rewind returns to offset 0 and resets the line counter."""
        cursor = ByteCursor(io.BytesIO(b'one\ntwo\n'))
        self.assertEqual(cursor.readline(), b'one\n')
        self.assertEqual(cursor.line_number, 1)
        cursor.rewind()
        self.assertEqual(cursor.line_number, 0)
        self.assertEqual(cursor.read_exact(3, 'word'), b'one')

    def test_rewind_not_seekable(self):
        """Test that rewinding a non-seekable stream raises an I/O error."""
        cursor = ByteCursor(TrickleStream(b'solid'))
        with self.assertRaises(io.UnsupportedOperation):
            cursor.rewind()
        with self.assertRaises(OSError):
            cursor.rewind()

    def test_readline_counts_lines(self):
        """Test that line numbers count every line read, including blank ones."""
        cursor = ByteCursor(io.BytesIO(b'a\n\nb'))
        self.assertEqual([cursor.readline() for _ in range(4)], [b'a\n', b'\n', b'b', b''])
        self.assertEqual(cursor.line_number, 3)

    def test_open_closes_owned_file(self):
        """Test that a cursor opened from a path closes its file, but not caller streams."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'data.bin'
            path.write_bytes(b'xyz')
            with ByteCursor.open(path) as cursor:
                self.assertEqual(cursor.read_exact(3, 'data'), b'xyz')
            self.assertTrue(cursor.stream.closed)

        stream = io.BytesIO(b'xyz')
        with ByteCursor(stream) as cursor:
            cursor.read_exact(1, 'data')
        self.assertFalse(stream.closed)

    def test_open_missing_file(self):
        """Test that open failures propagate as the underlying OSError."""
        with self.assertRaises(FileNotFoundError):
            ByteCursor.open('nonexistent.stl')


if __name__ == '__main__':
    unittest.main()
