"""CHIP-8 ALU operations (8xxx).

Each ``alu_*`` helper maps the (VX, VY) pair to a (result, flag) pair on plain
8-bit integers. A flag of ``None`` leaves VF untouched.
"""

from typing import Optional

from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, 0


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, 0


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, 0


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_right(value: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right, VF = bit shifted out."""
    return value >> 1, value & 1


def alu_shift_left(value: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left, VF = bit shifted out."""
    return (value << 1) & 0xFF, (value & 0x80) >> 7


def _write_result(state: EmulatorState, x: int, result: int, flag: Optional[int]) -> EmulatorState:
    # VF is written last so the flag wins when X is F
    new_V = state.V.at[x].set(result)
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    return state.replace(V=new_V)


def make_alu_instruction(alu_fn):
    """Factory for two-operand ALU instructions."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, flag = alu_fn(vx, vy)
        return _write_result(state, instruction.x, result, flag)
    return alu_instruction


def make_logic_instruction(alu_fn):
    """Factory for OR/AND/XOR, which only touch VF under the logic_resets_flag quirk."""
    def logic_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, flag = alu_fn(vx, vy)
        if not state.quirks.logic_resets_flag:
            flag = None
        return _write_result(state, instruction.x, result, flag)
    return logic_instruction


def make_shift_instruction(shift_fn):
    """Factory for shifts; the source register depends on the shift_uses_vy quirk."""
    def shift_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        source = instruction.y if state.quirks.shift_uses_vy else instruction.x
        result, flag = shift_fn(int(state.V[source]))
        return _write_result(state, instruction.x, result, flag)
    return shift_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_logic_instruction(alu_or)
execute_alu_and = make_logic_instruction(alu_and)
execute_alu_xor = make_logic_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_right = make_shift_instruction(alu_shift_right)
execute_alu_shift_left = make_shift_instruction(alu_shift_left)
