"""Tests for control flow instructions."""

import pytest
from chip8vm import execute, create_state, SCHIP


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_jump_with_offset_uses_v0(self, fresh_state):
        """BNNN - Jump to NNN + V0."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0x10))
        state = state.replace(V=state.V.at[3].set(0x40))

        state = execute(state, 0xB300)

        assert state.pc == 0x310

    def test_jump_with_offset_schip_uses_vx(self):
        """BXNN - SUPER-CHIP quirk jumps to NNN + VX."""
        state = create_state(quirks=SCHIP)
        state = state.replace(V=state.V.at[0].set(0x10))
        state = state.replace(V=state.V.at[3].set(0x40))

        state = execute(state, 0xB300)

        assert state.pc == 0x340

    def test_jump_with_offset_is_not_masked(self, fresh_state):
        """BNNN - A target past 0xFFF is kept so the next fetch faults."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))

        state = execute(state, 0xBFFF)

        assert state.pc == 0x10FE


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x01))
        initial_pc = state.pc

        state = execute(state, 0x9120)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0x9120)
        assert state.pc == initial_pc


class TestKeySkips:
    """Test EX9E/EXA1."""

    @pytest.mark.parametrize("pressed, instruction, skips", [
        (True, 0xE49E, True),
        (False, 0xE49E, False),
        (True, 0xE4A1, False),
        (False, 0xE4A1, True),
    ])
    def test_skip_on_key(self, fresh_state, pressed, instruction, skips):
        state = fresh_state.replace(V=fresh_state.V.at[4].set(0x7))
        state = state.replace(keypad=state.keypad.at[0x7].set(pressed))
        initial_pc = state.pc

        state = execute(state, instruction)

        assert state.pc == initial_pc + (2 if skips else 0)

    def test_key_index_uses_low_nibble(self, fresh_state):
        """EX9E - VX above 0xF selects key VX & 0xF."""
        state = fresh_state.replace(V=fresh_state.V.at[4].set(0x1A))
        state = state.replace(keypad=state.keypad.at[0xA].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE49E)

        assert state.pc == initial_pc + 2
