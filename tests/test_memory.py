import pytest
from hypothesis import given, strategies as st

from minikern.memory import LOW_MEM, PAGE_SIZE, PAGING_PAGES, USED, PageMap, map_nr


def test_map_nr_of_low_memory_is_first_page():
    assert map_nr(LOW_MEM) == 0
    assert map_nr(LOW_MEM + PAGE_SIZE) == 1


@given(st.integers(0, PAGING_PAGES - 1), st.integers(0, PAGE_SIZE - 1))
def test_map_nr_ignores_offset_within_page(page, offset):
    assert map_nr(LOW_MEM + page * PAGE_SIZE + offset) == page


def test_fresh_map_is_empty():
    pages = PageMap()
    assert pages.high_memory == 0
    assert pages.free_pages() == PAGING_PAGES


def test_mem_init_frees_only_main_memory():
    pages = PageMap()
    start, end = 4 * 1024 * 1024, 16 * 1024 * 1024
    pages.mem_init(start, end)
    assert pages.high_memory == end
    assert pages.free_pages() == (end - start) // PAGE_SIZE
    assert pages.mem_map[map_nr(start) - 1] == USED
    assert pages.mem_map[map_nr(start)] == 0
    assert pages.mem_map[0] == USED


def test_mem_init_resets_previous_state():
    pages = PageMap()
    pages.mem_init(2 * 1024 * 1024, 16 * 1024 * 1024)
    pages.mem_init(4 * 1024 * 1024, 8 * 1024 * 1024)
    assert pages.free_pages() == (4 * 1024 * 1024) // PAGE_SIZE
    assert pages.mem_map[map_nr(8 * 1024 * 1024)] == USED


def test_mem_init_rejects_start_below_low_memory():
    with pytest.raises(ValueError):
        PageMap().mem_init(LOW_MEM - PAGE_SIZE, 8 * 1024 * 1024)


def test_mem_init_rejects_end_beyond_pageable_memory():
    with pytest.raises(ValueError):
        PageMap().mem_init(LOW_MEM, 32 * 1024 * 1024)


def test_mem_init_rejects_reversed_range():
    pages = PageMap()
    with pytest.raises(ValueError):
        pages.mem_init(8 * 1024 * 1024, 4 * 1024 * 1024)
    assert pages.high_memory == 0