"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
import numpy as np
from chip8vm.state import EmulatorState, create_state, check_memory_range
from chip8vm.decode import DecodedInstruction, Operation, decode
from chip8vm.constants import PROGRAM_START, MAX_ROM_SIZE
from chip8vm.errors import RomTooLarge
from chip8vm.instructions.system import execute_clear_screen, execute_return, execute_machine_call
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8vm.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor,
    execute_alu_add, execute_alu_sub_xy, execute_alu_sub_yx,
    execute_alu_shift_right, execute_alu_shift_left
)
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Operation.CLEAR_SCREEN: execute_clear_screen,
    Operation.RETURN: execute_return,
    Operation.MACHINE_CALL: execute_machine_call,
    Operation.JUMP: execute_jump,
    Operation.CALL: execute_call,
    Operation.SKIP_IF_EQUAL_IMMEDIATE: execute_skip_if_equal_immediate,
    Operation.SKIP_IF_NOT_EQUAL_IMMEDIATE: execute_skip_if_not_equal_immediate,
    Operation.SKIP_IF_EQUAL_REGISTER: execute_skip_if_equal_register,
    Operation.SET_IMMEDIATE: execute_set,
    Operation.ADD_IMMEDIATE: execute_add,
    Operation.SET_REGISTER: execute_alu_set,
    Operation.OR: execute_alu_or,
    Operation.AND: execute_alu_and,
    Operation.XOR: execute_alu_xor,
    Operation.ADD_REGISTER: execute_alu_add,
    Operation.SUBTRACT: execute_alu_sub_xy,
    Operation.SHIFT_RIGHT: execute_alu_shift_right,
    Operation.SUBTRACT_REVERSE: execute_alu_sub_yx,
    Operation.SHIFT_LEFT: execute_alu_shift_left,
    Operation.SKIP_IF_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    Operation.SET_INDEX: execute_set_index,
    Operation.JUMP_WITH_OFFSET: execute_jump_with_offset,
    Operation.RANDOM: execute_random,
    Operation.DRAW: execute_display,
    Operation.SKIP_IF_KEY: execute_skip_if_key,
    Operation.SKIP_IF_NOT_KEY: execute_skip_if_not_key,
    Operation.GET_DELAY_TIMER: execute_get_delay_timer,
    Operation.WAIT_FOR_KEY: execute_wait_for_key,
    Operation.SET_DELAY_TIMER: execute_set_delay_timer,
    Operation.SET_SOUND_TIMER: execute_set_sound_timer,
    Operation.ADD_TO_INDEX: execute_add_to_index,
    Operation.FONT_CHARACTER: execute_font_character,
    Operation.BCD: execute_bcd_conversion,
    Operation.STORE_REGISTERS: execute_store_registers,
    Operation.LOAD_REGISTERS: execute_load_registers,
}


def execute_decoded(state: EmulatorState, decoded_instruction: DecodedInstruction) -> EmulatorState:
    """Apply an already decoded instruction."""
    return HANDLERS[decoded_instruction.operation](state, decoded_instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    return execute_decoded(state, decode(instruction))


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next big-endian instruction from memory and advance the PC."""
    pc = int(state.pc)
    check_memory_range(pc, 2)
    instruction = (int(state.memory[pc]) << 8) | int(state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> tuple[EmulatorState, DecodedInstruction]:
    """Fetch, decode and execute one instruction."""
    state, instruction = fetch(state)
    decoded_instruction = decode(instruction)
    return execute_decoded(state, decoded_instruction), decoded_instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers once, floored at zero."""
    return state.replace(
        delay_timer=jnp.asarray(max(int(state.delay_timer) - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(int(state.sound_timer) - 1, 0), dtype=jnp.uint8),
    )


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into a fresh CHIP-8 memory starting at 0x200.

    Registers, stack, display, timers and keypad are reset; the random key and
    quirks of ``state`` are kept.
    """
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data), MAX_ROM_SIZE)

    fresh = create_state(state.rng, quirks=state.quirks)
    rom_array = jnp.asarray(np.frombuffer(bytes(rom_data), dtype=np.uint8))
    new_memory = fresh.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return fresh.replace(memory=new_memory)
