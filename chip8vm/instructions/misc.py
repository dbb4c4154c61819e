"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, check_memory_range
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_CHAR_SIZE, FLAG_REGISTER, ADDRESS_MASK


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    total = int(state.I) + int(state.V[instruction.x])
    state = state.replace(I=jnp.asarray(total & 0xFFFF, dtype=jnp.uint16))
    if state.quirks.index_overflow_flag:
        state = state.replace(V=state.V.at[FLAG_REGISTER].set(int(total > ADDRESS_MASK)))
    return state


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With a key down, VX receives the lowest pressed key. Otherwise the PC is
    rewound onto this instruction and the state is flagged as awaiting a key,
    so the same instruction is fetched again on the next frame.
    """
    if bool(jnp.any(state.keypad)):
        pressed_key = jnp.argmax(state.keypad)
        return state.replace(
            V=state.V.at[instruction.x].set(pressed_key.astype(jnp.uint8)),
            awaiting_key=jnp.asarray(False),
        )

    return state.replace(pc=state.pc - 2, awaiting_key=jnp.asarray(True))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_CHAR_SIZE
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    address = int(state.I)
    check_memory_range(address, 3)

    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[address:address + 3].set(digits))


def _next_index(state: EmulatorState, address: int, count: int) -> jnp.ndarray:
    if state.quirks.load_store_increments_index:
        return jnp.asarray((address + count) & 0xFFFF, dtype=jnp.uint16)
    return state.I


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(address, count)

    new_memory = state.memory.at[address:address + count].set(state.V[:count])
    return state.replace(memory=new_memory, I=_next_index(state, address, count))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(address, count)

    new_V = state.V.at[:count].set(state.memory[address:address + count])
    return state.replace(V=new_V, I=_next_index(state, address, count))
