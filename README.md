# minikern

The parts of a small teaching kernel that can run without hardware, written
in plain Python with no dependencies outside the standard library.

- `minikern.kstring`: string and memory routines on NUL-terminated byte
  strings: `strlen`, `strcmp`, `strncmp`, `strchr`, `strrchr`, `strspn`,
  `strcspn`, `strpbrk`, `strstr`, `strcpy`, `strncpy`, `strcat`, `strncat`,
  `memcmp`, `memchr`, `memset`, `memmove`, and `Tokenizer` for splitting into
  tokens. Each one returns an index where a pointer would be expected, and
  `None` where a null pointer would be.
- `minikern.vsprintf`: `vsprintf(fmt, *args)` supports the flags `-+ #0`,
  widths and precisions (including `*`), and the conversions `c s o p x X d
  i u n %`. Integers use 32-bit semantics. `number` is the integer renderer,
  and `Flag` holds its flags. For `%n`, pass a callable, which is given the
  count of characters written so far.
- `minikern.console`: `Console` is a text console whose screen is a window
  into simulated video memory. `BootParams` describes the screen and
  `VideoType` the adapter. It handles printable characters, LF/VT/FF, CR, BS
  and DEL, scrolls, and wraps back to the start of video memory when the
  window runs off its end. Read the screen with `lines()` or `cell(x, y)`.
  `cursor`, `origin` and `registers` show its state.
- `minikern.tty`: `Tty` sits on a console. It has `write(data)` and
  `printk(fmt, *args)`.
- `minikern.memory`: `PageMap.mem_init(start, end)` marks every page as used
  and then frees the range `[start, end)`. `free_pages()` counts the free
  pages, and `map_nr(addr)` gives the page index of an address.
- `minikern.gates`: `encode_gate` builds a gate descriptor, and
  `InterruptTable` holds the 256 descriptors, set through `set_trap_gate`,
  `set_intr_gate` and `set_system_gate`. `sched_init` installs vector 0x80.
- `minikern.traps`: the fault messages are here. `handle_trap` and `die`
  raise `KernelDie`. `format_int3` produces the breakpoint register dump,
  `trap_init` fills the exception gates, and `unmask_pic` computes the new
  interrupt masks.
- `minikern.boot`: `memory_layout(ext_mem_k)` splits memory into the buffer
  cache and main memory. `start_kernel` runs the whole start-up and prints the
  greeting lines.
- `minikern.imagebuild`: `build_image` and the `minikern-build` command join
  a boot sector, setup code and a system into one disk image.

## Installing

```
pip install .
```

## Formatting

```python
from minikern.vsprintf import vsprintf

vsprintf("%08x|%-5d|%s", 0xBEEF, 42, b"hi")   # '0000beef|42   |hi'
```

## A console

```python
from minikern.console import BootParams, Console
from minikern.tty import Tty

tty = Tty(Console(BootParams()))
tty.printk("this is line %d\n\r", 1)
print("\n".join(tty.console.lines()))
```

## Starting the kernel

```python
from minikern.boot import start_kernel

layout, pages, idt, tty = start_kernel(ext_mem_k=15 * 1024)
print(layout.main_memory_start, layout.memory_end, pages.free_pages())
```

## Building a disk image

```
minikern-build bootsect setup system > Image
minikern-build bootsect setup system FLOPPY > Image
```

- The boot sector must be exactly 512 bytes. The root device is written into
  bytes 508 and 509.
- Setup may take up at most four sectors, and is padded with zeros to fill
  them.
- The system may be at most 128 KiB.
- If the optional fourth argument is `FLOPPY`, the root device is recorded as
  `(0, 0)`. Any other value names a device node whose device number is used.
  Without it, the default `(3, 6)` is used.

Progress messages and errors go to standard error. If the arguments or the
inputs are wrong, the command exits with status 1.

## What it does not do

Nothing here runs on real hardware.

- The console writes to a `bytearray` and records register writes in a
  dictionary. It does not drive a display.
- There is no keyboard input, no process scheduling and no system call
  handling.
- `start_kernel` installs gates that point at made-up handler addresses.
  It has no real entry code behind them.

## Running the tests

```
pip install ".[test]"
pytest
```