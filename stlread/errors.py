class StlError(Exception):
    """Base class for every STL parse failure."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TruncatedStreamError(StlError, EOFError):
    """The stream ended before a fixed-size field or an expected line was read."""
    def __init__(self, stage: str, expected: int | None = None, received: int | None = None, line: int | None = None):
        if expected is not None:
            message = f"Unexpected end of stream reading {stage}: expected {expected} bytes, got {received}"
        elif line is not None:
            message = f"Unexpected end of stream at line {line}: expected {stage}"
        else:
            message = f"Unexpected end of stream: expected {stage}"
        super().__init__(message)
        self.stage = stage
        self.expected = expected
        self.received = received
        self.line = line


class StlSyntaxError(StlError, ValueError):
    """A text line does not match the ASCII STL grammar."""
    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(f"Line {line_number}: {message}: {line.strip()!r}")
        self.line_number = line_number
        self.line = line


class StlEncodingError(StlError, ValueError):
    """A text line is not valid UTF-8."""
    def __init__(self, line_number: int, reason: str):
        super().__init__(f"Line {line_number}: invalid UTF-8 ({reason})")
        self.line_number = line_number


class UnsupportedFormatError(StlError, ValueError):
    """The detected STL encoding is not one the caller accepts."""
    def __init__(self, detected, accepted):
        names = ', '.join(fmt.name for fmt in accepted)
        super().__init__(f"Detected {detected.name} STL, but only {names} is accepted")
        self.detected = detected
        self.accepted = tuple(accepted)
