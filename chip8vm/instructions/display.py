"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, check_memory_range
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

# Shift amounts for the 8 pixels of a sprite row, most significant bit first
_ROW_SHIFTS = jnp.arange(7, -1, -1, dtype=jnp.uint8)
_COLUMNS = jnp.arange(8)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    height = instruction.n
    if height == 0:
        return state.replace(V=state.V.at[FLAG_REGISTER].set(0))

    address = int(state.I)
    check_memory_range(address, height)

    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    rows = jnp.arange(height)
    sprite_bytes = state.memory[address:address + height]
    bits = ((sprite_bytes[:, None] >> _ROW_SHIFTS) & 1).astype(jnp.bool_)  # (N, 8)

    if state.quirks.clip_sprites:
        in_screen = ((sprite_y + rows) < SCREEN_HEIGHT)[:, None] & ((sprite_x + _COLUMNS) < SCREEN_WIDTH)[None, :]
        bits = bits & in_screen

    xs = (sprite_x + _COLUMNS) % SCREEN_WIDTH
    ys = (sprite_y + rows) % SCREEN_HEIGHT
    sprite = jnp.zeros_like(state.display).at[xs[None, :], ys[:, None]].set(bits)

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8))
    )
