"""Exception hierarchy shared by the envquack readers."""


class ReaderError(Exception):
    """Base exception for reader errors."""

    pass


class SourceReadError(ReaderError):
    """Raised when a source file is missing or cannot be read."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class SourceFormatError(ReaderError):
    """Raised when a structured document cannot be decoded."""

    pass


class MalformedInstructionError(ReaderError):
    """Raised for a single Dockerfile instruction that cannot be interpreted."""

    pass


__all__ = [
    "MalformedInstructionError",
    "ReaderError",
    "SourceFormatError",
    "SourceReadError",
]
