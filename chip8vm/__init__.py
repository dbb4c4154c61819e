"""CHIP-8 interpreter package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, execute_decoded, fetch, step, load_rom, tick_timers
from chip8vm.decode import DecodedInstruction, Operation, classify, decode
from chip8vm.constants import *
from chip8vm.errors import (
    Chip8Error, RomTooLarge, InvalidOpcode, StackOverflow, StackUnderflow, MemoryOutOfBounds
)
from chip8vm.quirks import Quirks, QUIRK_PRESETS, COSMAC_VIP, MODERN, SCHIP, get_quirks
from chip8vm.interpreter import Interpreter, Mode

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "execute_decoded",
    "step",
    "load_rom",
    "tick_timers",
    "DecodedInstruction",
    "Operation",
    "classify",
    "decode",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "MEMORY_SIZE",
    "MAX_ROM_SIZE",
    "Chip8Error",
    "RomTooLarge",
    "InvalidOpcode",
    "StackOverflow",
    "StackUnderflow",
    "MemoryOutOfBounds",
    "Quirks",
    "QUIRK_PRESETS",
    "COSMAC_VIP",
    "MODERN",
    "SCHIP",
    "get_quirks",
    "Interpreter",
    "Mode",
]
