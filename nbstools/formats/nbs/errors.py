"""Errors raised when nbs data can't be decoded. They all derive from
ValueError, like every other kind of invalid input found by the loaders"""


class NBSError(ValueError):
    pass


class UnexpectedEndOfData(NBSError):
    """A read would have gone past the end of the buffer"""

    def __init__(self, position: int, remaining: int) -> None:
        super().__init__(
            f"Unexpected end of data while reading at byte {position} "
            f"({remaining} bytes left)"
        )
        self.position = position
        self.remaining = remaining


class UnsupportedFormatVariant(NBSError):
    """The data uses a layout (or asks for a configuration) that this codec
    knows about but does not handle"""
