from itertools import pairwise

import pytest
from hypothesis import given, strategies as st

from minikern.console import BootParams, Console, VideoType


@pytest.fixture
def console():
    return Console(BootParams())


@pytest.mark.parametrize(
    "mode, bx, kind, desc",
    [
        (3, 0, VideoType.EGAC, "EGAc"),
        (3, 0x10, VideoType.CGA, "*CGA"),
        (7, 0, VideoType.EGAM, "EGAm"),
        (7, 0x10, VideoType.MDA, "*MDA"),
    ],
)
def test_display_detection(mode, bx, kind, desc):
    con = Console(BootParams(video_mode=mode, ega_bx=bx))
    assert con.video_type is kind
    assert con.display_desc == desc
    assert con.lines()[0].endswith(desc)


def test_port_and_base_for_colour(console):
    assert console.video_mem_base == 0xB8000
    assert console.port_reg == 0x3D4


def test_print_text(console):
    console.write(b"hello")
    assert console.lines()[0].startswith("hello")
    assert console.cursor == (5, 0)
    assert console.cell(0, 0) == ("h", 0x07)


def test_str_input(console):
    console.write("abc")
    assert console.lines()[0].startswith("abc")


def test_line_feed_keeps_column(console):
    console.write(b"ab\ncd")
    assert console.cursor == (4, 1)
    assert console.lines()[1][2:4] == "cd"


def test_carriage_return(console):
    console.write(b"abc\rX")
    assert console.lines()[0].startswith("Xbc")
    assert console.cursor == (1, 0)


def test_backspace_does_not_erase(console):
    console.write(b"abc\x08")
    assert console.cell(2, 0)[0] == "c"
    console.write(b"X")
    assert console.lines()[0].startswith("abX")


def test_delete_erases(console):
    console.write(b"abc\x7f")
    assert console.cell(2, 0) == (" ", 0x07)
    assert console.cursor == (2, 0)


def test_high_bytes_ignored(console):
    console.write(b"\xe9a")
    assert console.lines()[0].startswith("a")


def test_wrap_to_next_line(console):
    text = "x" * console.columns + "Y"
    console.write(text)
    assert console.cell(0, 1)[0] == "Y"
    assert console.cursor == (1, 1)


def test_scroll_up(console):
    for k in range(console.num_lines):
        console.write(f"line{k}\n\r")
    rows = console.lines()
    assert rows[0].startswith("line1 ")
    assert rows[console.num_lines - 2].startswith(f"line{console.num_lines - 1}")
    assert rows[-1].strip() == ""
    assert console.origin == console.video_mem_base + console.size_row


def test_scroll_wraps_to_memory_base():
    con = Console(BootParams(ega_bx=0x10))
    origins = [con.origin]
    last = ""
    for k in range(60):
        last = f"row{k}"
        con.write(f"{last}\n\r")
        origins.append(con.origin)
    assert any(b < a for a, b in pairwise(origins))
    assert con.lines()[con.num_lines - 2].startswith(last)
    assert con.origin + con.num_lines * con.size_row <= con.video_mem_term


def test_gotoxy_off_screen_ignored(console):
    console.gotoxy(3, 4)
    assert console.cursor == (3, 4)
    console.gotoxy(console.columns + 1, 0)
    console.gotoxy(0, console.num_lines)
    assert console.cursor == (3, 4)


def test_boot_cursor_position():
    con = Console(BootParams(orig_x=7, orig_y=2))
    assert con.cursor == (7, 2)
    con.write(b"Z")
    assert con.cell(7, 2)[0] == "Z"


def test_cell_off_screen(console):
    with pytest.raises(IndexError):
        console.cell(console.columns, 0)


def test_screen_must_fit_memory():
    with pytest.raises(ValueError):
        Console(BootParams(ega_bx=0x10, video_cols=200, video_lines=100))


def test_cursor_registers_match_cursor(console):
    console.write(b"ab\ncd")
    regs = console.registers
    x, y = console.cursor
    assert (regs[14] << 8 | regs[15]) == y * console.columns + x


@given(st.text(alphabet="ab \n\r\x08\x7f", max_size=300))
def test_cursor_stays_on_screen(text):
    con = Console(BootParams(video_cols=10, video_lines=4, ega_bx=0x10))
    con.write(text)
    x, y = con.cursor
    assert 0 <= x <= con.columns
    assert 0 <= y < con.num_lines
    assert con.video_mem_base <= con.origin
    assert con.origin + con.num_lines * con.size_row <= con.video_mem_term