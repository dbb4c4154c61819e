"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Interpreter, COSMAC_VIP, MODERN


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def vip_state():
    """Provide a fresh state with COSMAC VIP quirks."""
    return create_state(quirks=COSMAC_VIP)


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern quirks."""
    return create_state(quirks=MODERN)


@pytest.fixture
def interpreter():
    """Provide an interpreter with an empty ROM loaded."""
    interp = Interpreter()
    interp.load(b"")
    return interp


NO_KEYS = [False] * 16


def keys_pressed(*keys):
    """Build a 16-entry key state with the given keys down."""
    return [index in keys for index in range(16)]


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*instructions):
    """Assemble 16-bit instructions into big-endian ROM bytes."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)
