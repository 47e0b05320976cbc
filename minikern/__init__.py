"""A small teaching kernel in software: string routines, printk, console, page map, gates and image builder."""

__version__ = "0.1.0"

__all__ = [
    "kstring",
    "vsprintf",
    "console",
    "tty",
    "memory",
    "gates",
    "traps",
    "boot",
    "imagebuild",
]