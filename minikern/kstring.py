"""C-style string and memory routines working on NUL-terminated byte strings.

Every string argument is a bytes-like object; only the part before its first
NUL byte takes part, as a C string would.  Positions are returned as indexes,
and ``None`` stands for a null pointer.
"""

from __future__ import annotations

from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


def _cstr(s: BytesLike) -> bytes:
    data = bytes(s)
    end = data.find(0)
    return data if end < 0 else data[:end]


def _char(c: Union[int, bytes, bytearray]) -> int:
    if isinstance(c, (bytes, bytearray)):
        if len(c) != 1:
            raise ValueError("expected a single byte")
        return c[0]
    return c & 0xFF


def _signed(byte: int) -> int:
    return byte - 256 if byte >= 128 else byte


def _compare(a: bytes, b: bytes) -> int:
    """Compare byte by byte as signed chars, stopping at the first difference."""
    for x, y in zip(a, b):
        if x != y:
            return 1 if _signed(x) > _signed(y) else -1
    return 0


def _check_range(buffer: BytesLike, start: int, count: int) -> None:
    if start < 0 or count < 0 or start + count > len(buffer):
        raise IndexError(
            f"range [{start}, {start + count}) lies outside a buffer of {len(buffer)} bytes"
        )


def strlen(s: BytesLike) -> int:
    """Number of bytes before the terminating NUL."""
    return len(_cstr(s))


def strcmp(cs: BytesLike, ct: BytesLike) -> int:
    """Return -1, 0 or 1 as ``cs`` sorts before, equal to or after ``ct``."""
    return _compare(_cstr(cs) + b"\0", _cstr(ct) + b"\0")


def strncmp(cs: BytesLike, ct: BytesLike, count: int) -> int:
    """Like :func:`strcmp`, looking at no more than ``count`` bytes."""
    if count <= 0:
        return 0
    return _compare((_cstr(cs) + b"\0")[:count], (_cstr(ct) + b"\0")[:count])


def strchr(s: BytesLike, c: Union[int, bytes]) -> Optional[int]:
    """Index of the first ``c`` in ``s``; searching for NUL finds the terminator."""
    index = (_cstr(s) + b"\0").find(_char(c))
    return None if index < 0 else index


def strrchr(s: BytesLike, c: Union[int, bytes]) -> Optional[int]:
    """Index of the last ``c`` in ``s``; searching for NUL finds the terminator."""
    index = (_cstr(s) + b"\0").rfind(_char(c))
    return None if index < 0 else index


def strspn(cs: BytesLike, ct: BytesLike) -> int:
    """Length of the leading run of ``cs`` made only of bytes from ``ct``."""
    accept = set(_cstr(ct))
    data = _cstr(cs)
    return next((i for i, b in enumerate(data) if b not in accept), len(data))


def strcspn(cs: BytesLike, ct: BytesLike) -> int:
    """Length of the leading run of ``cs`` holding no byte from ``ct``."""
    reject = set(_cstr(ct))
    data = _cstr(cs)
    return next((i for i, b in enumerate(data) if b in reject), len(data))


def strpbrk(cs: BytesLike, ct: BytesLike) -> Optional[int]:
    """Index of the first byte of ``cs`` that occurs in ``ct``."""
    data = _cstr(cs)
    index = strcspn(data, ct)
    return None if index == len(data) else index


def strstr(cs: BytesLike, ct: BytesLike) -> Optional[int]:
    """Index of the first occurrence of ``ct`` in ``cs``; an empty ``ct`` matches at 0."""
    index = _cstr(cs).find(_cstr(ct))
    return None if index < 0 else index


def strcpy(src: BytesLike) -> bytes:
    """Copy of the C string held in ``src``."""
    return _cstr(src)


def strncpy(src: BytesLike, count: int) -> bytes:
    """Exactly ``count`` bytes: ``src`` cut short or padded with NULs."""
    if count <= 0:
        return b""
    return (_cstr(src) + b"\0" * count)[:count]


def strcat(dest: BytesLike, src: BytesLike) -> bytes:
    """The C string in ``dest`` followed by the one in ``src``."""
    return _cstr(dest) + _cstr(src)


def strncat(dest: BytesLike, src: BytesLike, count: int) -> bytes:
    """``dest`` followed by at most ``count`` bytes of ``src``."""
    return _cstr(dest) + _cstr(src)[: max(count, 0)]


def memcmp(cs: BytesLike, ct: BytesLike, count: int) -> int:
    """Compare the first ``count`` bytes of two buffers as signed chars."""
    if count < 0:
        raise ValueError("count must not be negative")
    if count > len(cs) or count > len(ct):
        raise IndexError("count exceeds the length of a buffer")
    return _compare(bytes(cs[:count]), bytes(ct[:count]))


def memchr(cs: BytesLike, c: Union[int, bytes], count: int) -> Optional[int]:
    """Index of the first ``c`` within the first ``count`` bytes of ``cs``."""
    if count <= 0:
        return None
    if count > len(cs):
        raise IndexError("count exceeds the length of the buffer")
    index = bytes(cs[:count]).find(_char(c))
    return None if index < 0 else index


def memset(buffer: bytearray, start: int, c: Union[int, bytes], count: int) -> None:
    """Fill ``count`` bytes of ``buffer`` from ``start`` with ``c``."""
    _check_range(buffer, start, count)
    buffer[start : start + count] = bytes([_char(c)]) * count


def memmove(buffer: bytearray, dest: int, src: int, n: int) -> None:
    """Copy ``n`` bytes inside ``buffer`` from ``src`` to ``dest``; ranges may overlap."""
    _check_range(buffer, src, n)
    _check_range(buffer, dest, n)
    buffer[dest : dest + n] = bytes(buffer[src : src + n])


class Tokenizer:
    """Successive tokens of one byte string, each split on its own delimiter set."""

    def __init__(self, data: BytesLike) -> None:
        self._data = _cstr(data)
        self._pos: Optional[int] = 0

    def token(self, delimiters: BytesLike) -> Optional[bytes]:
        """Next token, or ``None`` once the string is used up.

        An empty delimiter set ends the tokenizing at once.
        """
        if self._pos is None:
            return None
        delims = set(_cstr(delimiters))
        if not delims:
            self._pos = None
            return None
        data = self._data
        pos = self._pos
        while pos < len(data) and data[pos] in delims:
            pos += 1
        if pos == len(data):
            self._pos = None
            return None
        start = pos
        while pos < len(data) and data[pos] not in delims:
            pos += 1
        self._pos = pos + 1 if pos < len(data) else None
        return data[start:pos]