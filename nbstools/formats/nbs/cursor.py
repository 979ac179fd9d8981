"""Sequential little-endian readers and writers over in-memory buffers.

Every part of an nbs file is read (and written) strictly in order, there is
no seeking and no offset table, so both classes only ever move forward. The
one exception is a failed read or write, which puts the cursor back where it
was."""

from __future__ import annotations

from io import BytesIO
from typing import Any

import construct as c

from .construct import String
from .errors import UnexpectedEndOfData


class ByteReader:
    def __init__(self, data: bytes) -> None:
        self._size = len(data)
        self._stream = BytesIO(data)

    @property
    def position(self) -> int:
        return self._stream.tell()

    @property
    def remaining(self) -> int:
        return self._size - self.position

    def at_end(self) -> bool:
        return self.remaining == 0

    def read_struct(self, subcon: c.Construct) -> Any:
        """Parse the given construct at the current position. If the buffer
        runs out before the construct is complete, the position is left
        untouched and UnexpectedEndOfData is raised"""
        start = self.position
        try:
            return subcon.parse_stream(self._stream)
        except c.StreamError:
            self._stream.seek(start)
            raise UnexpectedEndOfData(start, self._size - start) from None

    def read_u8(self) -> int:
        value: int = self.read_struct(c.Int8ul)
        return value

    def read_u16(self) -> int:
        value: int = self.read_struct(c.Int16ul)
        return value

    def read_u32(self) -> int:
        value: int = self.read_struct(c.Int32ul)
        return value

    def read_i8(self) -> int:
        value: int = self.read_struct(c.Int8sl)
        return value

    def read_i16(self) -> int:
        value: int = self.read_struct(c.Int16sl)
        return value

    def read_bool(self) -> bool:
        value: bool = self.read_struct(c.Flag)
        return value

    def read_bytes(self) -> bytes:
        """Read a u32 length followed by that many raw bytes"""
        value: bytes = self.read_struct(String)
        return value


class ByteWriter:
    """Append-only counterpart of ByteReader, write methods return the writer
    itself so calls can be chained"""

    def __init__(self) -> None:
        self._stream = BytesIO()

    @property
    def position(self) -> int:
        return self._stream.tell()

    def getvalue(self) -> bytes:
        return self._stream.getvalue()

    def write_struct(self, subcon: c.Construct, value: Any) -> ByteWriter:
        """Build the given construct at the end of the buffer. If a value does
        not fit its field, nothing is written and ValueError is raised"""
        start = self.position
        try:
            subcon.build_stream(value, self._stream)
        except c.FormatFieldError as e:
            self._stream.seek(start)
            self._stream.truncate()
            raise ValueError(
                f"Value does not fit its field while writing at byte {start} : {e}"
            ) from e

        return self

    def write_u8(self, value: int) -> ByteWriter:
        return self.write_struct(c.Int8ul, value)

    def write_u16(self, value: int) -> ByteWriter:
        return self.write_struct(c.Int16ul, value)

    def write_u32(self, value: int) -> ByteWriter:
        return self.write_struct(c.Int32ul, value)

    def write_i8(self, value: int) -> ByteWriter:
        return self.write_struct(c.Int8sl, value)

    def write_i16(self, value: int) -> ByteWriter:
        return self.write_struct(c.Int16sl, value)

    def write_bool(self, value: bool) -> ByteWriter:
        return self.write_struct(c.Flag, value)

    def write_bytes(self, value: bytes) -> ByteWriter:
        """Write a u32 length followed by the raw bytes"""
        return self.write_struct(String, value)
