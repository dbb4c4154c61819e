"""CHIP-8 interpreter errors.

Every fault is raised to the caller. The interpreter never skips, retries or
resets on its own; the host decides whether to halt, reset or report.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all interpreter faults."""


class RomTooLarge(Chip8Error):
    """ROM does not fit between the program start and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes, only {capacity} bytes available")


class InvalidOpcode(Chip8Error):
    """No decode rule matches the instruction."""

    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"invalid opcode {opcode:#06x}{where}")


class StackOverflow(Chip8Error):
    """Subroutine call with a full stack."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"stack overflow (capacity {capacity})")


class StackUnderflow(Chip8Error):
    """Subroutine return with an empty stack."""

    def __init__(self):
        super().__init__("stack underflow (return with empty stack)")


class MemoryOutOfBounds(Chip8Error):
    """Fetch or data access outside 0x000-0xFFF."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"memory access of {length} byte(s) at {address:#05x} is out of bounds"
        )
