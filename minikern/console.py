"""Text-mode console driving a simulated video memory window."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from minikern.kstring import memmove

ERASE_CHAR = 0x0720
DEFAULT_ATTR = 0x07


class VideoType(enum.IntEnum):
    """Kind of display adapter found at boot."""

    MDA = 0x10
    CGA = 0x11
    EGAM = 0x20
    EGAC = 0x21


@dataclass(frozen=True)
class BootParams:
    """Screen information gathered during boot."""

    orig_x: int = 0
    orig_y: int = 0
    video_page: int = 0
    video_mode: int = 3
    video_cols: int = 80
    video_lines: int = 25
    ega_ax: int = 0
    ega_bx: int = 0
    ega_cx: int = 0


class Console:
    """A scrolling text console whose screen is a window into video memory."""

    def __init__(self, params: BootParams) -> None:
        self.columns = params.video_cols
        self.num_lines = params.video_lines
        self.size_row = self.columns * 2
        self.video_page = params.video_page
        self.erase_char = ERASE_CHAR
        self.attr = DEFAULT_ATTR

        ega_mono = (params.ega_bx & 0xFF) != 0x10
        if params.video_mode == 7:
            self.video_mem_base = 0xB0000
            self.port_reg, self.port_val = 0x3B4, 0x3B5
            if ega_mono:
                self.video_type = VideoType.EGAM
                self.video_mem_term = 0xB8000
                self.display_desc = "EGAm"
            else:
                self.video_type = VideoType.MDA
                self.video_mem_term = 0xB2000
                self.display_desc = "*MDA"
        else:
            self.video_mem_base = 0xB8000
            self.port_reg, self.port_val = 0x3D4, 0x3D5
            if ega_mono:
                self.video_type = VideoType.EGAC
                self.video_mem_term = 0xC0000
                self.display_desc = "EGAc"
            else:
                self.video_type = VideoType.CGA
                self.video_mem_term = 0xBA000
                self.display_desc = "*CGA"

        if self.columns <= 0 or self.num_lines <= 0:
            raise ValueError("screen needs at least one column and one line")
        if self.num_lines * self.size_row > self.video_mem_term - self.video_mem_base:
            raise ValueError("screen does not fit in video memory")

        self.memory = bytearray(self.video_mem_term - self.video_mem_base)
        self._registers: Dict[int, int] = {}

        start = self.size_row - 8
        for i, ch in enumerate(self.display_desc.encode("ascii")):
            self.memory[start + 2 * i] = ch

        self._origin = self.video_mem_base
        self._scr_end = self.video_mem_base + self.num_lines * self.size_row
        self._top = 0
        self._bottom = self.num_lines
        self._x = 0
        self._y = 0
        self._pos = self._origin

        self.gotoxy(params.orig_x, params.orig_y)
        self._set_cursor()

    @property
    def cursor(self) -> Tuple[int, int]:
        """Cursor position as (column, row)."""
        return self._x, self._y

    @property
    def origin(self) -> int:
        """Address in video memory of the top-left screen cell."""
        return self._origin

    @property
    def registers(self) -> Dict[int, int]:
        """Last values written to the CRT controller registers."""
        return dict(self._registers)

    def gotoxy(self, new_x: int, new_y: int) -> None:
        """Move the cursor; positions off the screen are ignored."""
        if new_x > self.columns or new_y >= self.num_lines or new_x < 0 or new_y < 0:
            return
        self._x = new_x
        self._y = new_y
        self._pos = self._origin + new_y * self.size_row + (new_x << 1)

    def cell(self, x: int, y: int) -> Tuple[str, int]:
        """Character and attribute shown at screen position (x, y)."""
        if not (0 <= x < self.columns and 0 <= y < self.num_lines):
            raise IndexError(f"cell ({x}, {y}) lies off the screen")
        offset = self._origin - self.video_mem_base + y * self.size_row + 2 * x
        return chr(self.memory[offset]), self.memory[offset + 1]

    def lines(self) -> List[str]:
        """Visible screen text, one string per row; empty cells read as spaces."""
        base = self._origin - self.video_mem_base
        rows = []
        for row in range(self.num_lines):
            start = base + row * self.size_row
            chars = self.memory[start : start + self.size_row : 2]
            rows.append(chars.decode("latin-1").replace("\0", " "))
        return rows

    def write(self, data: Union[bytes, bytearray, str]) -> None:
        """Print bytes, handling LF/VT/FF, CR, BS and DEL."""
        if isinstance(data, str):
            data = data.encode("latin-1", "replace")
        for c in bytes(data):
            if 31 < c < 127:
                if self._x >= self.columns:
                    self._x -= self.columns
                    self._pos -= self.size_row
                    self._lf()
                offset = self._pos - self.video_mem_base
                self.memory[offset] = c
                self.memory[offset + 1] = self.attr
                self._pos += 2
                self._x += 1
            elif c in (10, 11, 12):
                self._lf()
            elif c == 13:
                self._cr()
            elif c == 127:
                self._del()
            elif c == 8 and self._x:
                self._x -= 1
                self._pos -= 2
        self.gotoxy(self._x, self._y)
        self._set_cursor()

    def _outb_p(self, register: int, value: int) -> None:
        self._registers[register] = value & 0xFF

    def _set_origin(self) -> None:
        offset = self._origin - self.video_mem_base
        self._outb_p(12, (offset >> 9) & 0xFF)
        self._outb_p(13, (offset >> 1) & 0xFF)

    def _set_cursor(self) -> None:
        offset = self._pos - self.video_mem_base
        self._outb_p(14, (offset >> 9) & 0xFF)
        self._outb_p(15, (offset >> 1) & 0xFF)

    def _fill_words(self, address: int, count: int) -> None:
        start = address - self.video_mem_base
        self.memory[start : start + 2 * count] = (
            self.erase_char.to_bytes(2, "little") * count
        )

    def _scrup(self) -> None:
        base = self.video_mem_base
        if self._top == 0 and self._bottom == self.num_lines:
            self._origin += self.size_row
            self._pos += self.size_row
            self._scr_end += self.size_row
            if self._scr_end <= self.video_mem_term:
                self._fill_words(self._scr_end - self.size_row, self.columns)
            else:
                nbytes = (((self.num_lines - 1) * self.columns) >> 1) * 4
                memmove(self.memory, 0, self._origin - base, nbytes)
                self._fill_words(base + nbytes, self.columns)
                shift = self._origin - base
                self._scr_end -= shift
                self._pos -= shift
                self._origin = base
            self._set_origin()
        else:
            nbytes = (((self._bottom - self._top - 1) * self.columns) >> 1) * 4
            dest = self._origin + self.size_row * self._top
            src = dest + self.size_row
            memmove(self.memory, dest - base, src - base, nbytes)
            self._fill_words(dest + nbytes, self.columns)

    def _lf(self) -> None:
        if self._y + 1 < self._bottom:
            self._y += 1
            self._pos += self.size_row
            return
        self._scrup()

    def _cr(self) -> None:
        self._pos -= self._x << 1
        self._x = 0

    def _del(self) -> None:
        if self._x:
            self._pos -= 2
            self._x -= 1
            offset = self._pos - self.video_mem_base
            self.memory[offset : offset + 2] = self.erase_char.to_bytes(2, "little")