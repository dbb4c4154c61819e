"""CHIP-8 instruction decoding."""

from enum import IntEnum

from chex import dataclass

from chip8vm.errors import InvalidOpcode


class Operation(IntEnum):
    """The 35 baseline CHIP-8 operations."""
    CLEAR_SCREEN = 0                 # 00E0
    RETURN = 1                       # 00EE
    MACHINE_CALL = 2                 # 0NNN
    JUMP = 3                         # 1NNN
    CALL = 4                         # 2NNN
    SKIP_IF_EQUAL_IMMEDIATE = 5      # 3XNN
    SKIP_IF_NOT_EQUAL_IMMEDIATE = 6  # 4XNN
    SKIP_IF_EQUAL_REGISTER = 7       # 5XY0
    SET_IMMEDIATE = 8                # 6XNN
    ADD_IMMEDIATE = 9                # 7XNN
    SET_REGISTER = 10                # 8XY0
    OR = 11                          # 8XY1
    AND = 12                         # 8XY2
    XOR = 13                         # 8XY3
    ADD_REGISTER = 14                # 8XY4
    SUBTRACT = 15                    # 8XY5
    SHIFT_RIGHT = 16                 # 8XY6
    SUBTRACT_REVERSE = 17            # 8XY7
    SHIFT_LEFT = 18                  # 8XYE
    SKIP_IF_NOT_EQUAL_REGISTER = 19  # 9XY0
    SET_INDEX = 20                   # ANNN
    JUMP_WITH_OFFSET = 21            # BNNN
    RANDOM = 22                      # CXNN
    DRAW = 23                        # DXYN
    SKIP_IF_KEY = 24                 # EX9E
    SKIP_IF_NOT_KEY = 25             # EXA1
    GET_DELAY_TIMER = 26             # FX07
    WAIT_FOR_KEY = 27                # FX0A
    SET_DELAY_TIMER = 28             # FX15
    SET_SOUND_TIMER = 29             # FX18
    ADD_TO_INDEX = 30                # FX1E
    FONT_CHARACTER = 31              # FX29
    BCD = 32                         # FX33
    STORE_REGISTERS = 33             # FX55
    LOAD_REGISTERS = 34              # FX65


# Opcodes fully determined by the first nibble
_BY_OPCODE = {
    0x1: Operation.JUMP,
    0x2: Operation.CALL,
    0x3: Operation.SKIP_IF_EQUAL_IMMEDIATE,
    0x4: Operation.SKIP_IF_NOT_EQUAL_IMMEDIATE,
    0x6: Operation.SET_IMMEDIATE,
    0x7: Operation.ADD_IMMEDIATE,
    0xA: Operation.SET_INDEX,
    0xB: Operation.JUMP_WITH_OFFSET,
    0xC: Operation.RANDOM,
    0xD: Operation.DRAW,
}

# 0x0xxx, keyed by the whole instruction
_SYSTEM = {
    0x00E0: Operation.CLEAR_SCREEN,
    0x00EE: Operation.RETURN,
}

# 0x8xxx, keyed by the last nibble
_ALU = {
    0x0: Operation.SET_REGISTER,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD_REGISTER,
    0x5: Operation.SUBTRACT,
    0x6: Operation.SHIFT_RIGHT,
    0x7: Operation.SUBTRACT_REVERSE,
    0xE: Operation.SHIFT_LEFT,
}

# 0xExxx, keyed by the last byte
_KEY = {
    0x9E: Operation.SKIP_IF_KEY,
    0xA1: Operation.SKIP_IF_NOT_KEY,
}

# 0xFxxx, keyed by the last byte
_MISC = {
    0x07: Operation.GET_DELAY_TIMER,
    0x0A: Operation.WAIT_FOR_KEY,
    0x15: Operation.SET_DELAY_TIMER,
    0x18: Operation.SET_SOUND_TIMER,
    0x1E: Operation.ADD_TO_INDEX,
    0x29: Operation.FONT_CHARACTER,
    0x33: Operation.BCD,
    0x55: Operation.STORE_REGISTERS,
    0x65: Operation.LOAD_REGISTERS,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    operation: Operation
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def classify(instruction: int) -> Operation:
    """Map a 16-bit instruction to its operation, or raise InvalidOpcode."""
    instruction = int(instruction) & 0xFFFF
    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF

    if opcode in _BY_OPCODE:
        return _BY_OPCODE[opcode]
    if opcode == 0x0:
        return _SYSTEM.get(instruction, Operation.MACHINE_CALL)
    if opcode == 0x5 and n == 0:
        return Operation.SKIP_IF_EQUAL_REGISTER
    if opcode == 0x9 and n == 0:
        return Operation.SKIP_IF_NOT_EQUAL_REGISTER
    if opcode == 0x8 and n in _ALU:
        return _ALU[n]
    if opcode == 0xE and nn in _KEY:
        return _KEY[nn]
    if opcode == 0xF and nn in _MISC:
        return _MISC[nn]

    raise InvalidOpcode(instruction)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        operation=classify(instruction),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
