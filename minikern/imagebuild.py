"""Assemble a boot image from boot sector, setup code and kernel system."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

SYS_SIZE = 0x2000
DEFAULT_MAJOR_ROOT = 3
DEFAULT_MINOR_ROOT = 6
SETUP_SECTS = 4
SECTOR_SIZE = 512
_READ_SIZE = 1024
USAGE = "Usage: build bootsect setup system [rootdev] [> image]"

PathLike = Union[str, os.PathLike]


class BuildError(Exception):
    """The image cannot be built."""


def _signed_byte(value: int) -> int:
    value &= 0xFF
    return value - 256 if value >= 128 else value


def root_device(spec: Optional[str]) -> Tuple[int, int]:
    """Root device (major, minor): default, ``FLOPPY`` or taken from a device node."""
    if spec is None:
        major, minor = DEFAULT_MAJOR_ROOT, DEFAULT_MINOR_ROOT
    elif spec == "FLOPPY":
        major, minor = 0, 0
    else:
        try:
            rdev = os.stat(spec).st_rdev
        except OSError as exc:
            raise BuildError(f"{spec}: {exc.strerror}\nCouldn't stat root device") from exc
        # Each number is stored in a single signed byte.
        major = _signed_byte(rdev & 0xFF00)
        minor = _signed_byte(rdev & 0x00FF)
    print(f"Root device is ({major}, {minor})", file=sys.stderr)
    if major not in (0, 2, 3):
        raise BuildError(f"Illegal root device (major = {major})\nBad root device --- major #")
    return major, minor


def _read(path: PathLike, what: str, limit: Optional[int] = None) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read() if limit is None else handle.read(limit)
    except OSError as exc:
        raise BuildError(f"Unable to open '{what}'") from exc


def build_image(
    boot: PathLike, setup: PathLike, system: PathLike, root: Optional[str] = None
) -> bytes:
    """Return the image: boot sector, setup padded to its sectors, then the system."""
    major, minor = root_device(root)

    boot_data = _read(boot, "boot", _READ_SIZE)
    print(f"Boot sector {len(boot_data)} bytes.", file=sys.stderr)
    if len(boot_data) != SECTOR_SIZE:
        raise BuildError("Boot block must be exactly 512 bytes")
    sector = bytearray(boot_data)
    sector[508] = minor & 0xFF
    sector[509] = major & 0xFF

    setup_data = _read(setup, "setup")
    setup_limit = SETUP_SECTS * SECTOR_SIZE
    if len(setup_data) > setup_limit:
        raise BuildError(f"Setup exceeds {SETUP_SECTS} sectors - rewrite build/boot/setup")
    print(f"Setup is {len(setup_data)} bytes.", file=sys.stderr)

    system_data = _read(system, "system")
    print(f"System is {len(system_data)} bytes.", file=sys.stderr)
    if len(system_data) > SYS_SIZE * 16:
        raise BuildError("System is too big")

    return bytes(sector) + setup_data.ljust(setup_limit, b"\0") + system_data


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Write the image to standard output; return the exit status."""
    args: List[str] = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (3, 4):
        print(USAGE, file=sys.stderr)
        return 1
    root = args[3] if len(args) == 4 else None
    try:
        image = build_image(Path(args[0]), Path(args[1]), Path(args[2]), root)
    except BuildError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.buffer.write(image)
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())