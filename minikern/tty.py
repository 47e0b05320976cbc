"""Terminal layer and kernel print on top of the console."""

from __future__ import annotations

from typing import Any, Union

from minikern.console import Console
from minikern.vsprintf import vsprintf


class Tty:
    """A terminal that hands everything it is given to its console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def write(self, data: Union[bytes, bytearray, str]) -> None:
        """Print raw bytes on the console."""
        self.console.write(data)

    def printk(self, fmt: str, *args: Any) -> int:
        """Format and print a message; return the number of characters formatted."""
        text = vsprintf(fmt, *args)
        self.write(text.encode("latin-1", "replace"))
        return len(text)