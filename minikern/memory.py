"""Physical page bookkeeping: one reference count per page above low memory."""

from __future__ import annotations

LOW_MEM = 0x100000
PAGING_MEMORY = 15 * 1024 * 1024
PAGE_SHIFT = 12
PAGE_SIZE = 1 << PAGE_SHIFT
PAGING_PAGES = PAGING_MEMORY >> PAGE_SHIFT
USED = 100


def map_nr(addr: int) -> int:
    """Index in the page map of the page holding ``addr``."""
    return (addr - LOW_MEM) >> PAGE_SHIFT


class PageMap:
    """Reference counts for every pageable page; 0 marks a free page."""

    def __init__(self) -> None:
        self.high_memory = 0
        self.mem_map = bytearray(PAGING_PAGES)

    def mem_init(self, start_mem: int, end_mem: int) -> None:
        """Mark every page used, then free the pages in ``[start_mem, end_mem)``."""
        if start_mem < LOW_MEM:
            raise ValueError(f"start {start_mem:#x} lies below low memory {LOW_MEM:#x}")
        if end_mem < start_mem:
            raise ValueError("end of memory lies before its start")
        first = map_nr(start_mem)
        count = (end_mem - start_mem) >> PAGE_SHIFT
        if first + count > PAGING_PAGES:
            raise ValueError(f"end {end_mem:#x} lies beyond pageable memory")
        self.high_memory = end_mem
        self.mem_map[:] = bytes([USED]) * PAGING_PAGES
        self.mem_map[first : first + count] = bytes(count)

    def free_pages(self) -> int:
        """Number of pages not referenced by anyone."""
        return self.mem_map.count(0)