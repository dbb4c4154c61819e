"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
import pytest
from chip8vm import execute, MemoryOutOfBounds
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        # Set coordinates: V0=10, V1=5
        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        # Draw sprite: D012 (draw at V0,V1 with height 2)
        state = execute(state, 0xD012)

        assert state.display[10, 5] == 1  # Top-left
        assert state.display[11, 5] == 1  # Top-right
        assert state.display[10, 6] == 1  # Bottom-left
        assert state.display[11, 6] == 1  # Bottom-right
        assert state.display[12, 5] == 0  # Outside sprite
        assert jnp.sum(state.display) == 4

        # No collision should occur
        assert state.V[15] == 0

    def test_full_row_drawn_twice_erases(self, fresh_state):
        """An 8x1 all-on sprite drawn twice leaves nothing and flags a collision."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xFF])
        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA300)

        state = execute(state, 0xD011)
        assert jnp.sum(state.display[20:28, 10]) == 8
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_partial_overlap_sets_collision(self, fresh_state):
        """Only one overlapping lit pixel is needed for VF = 1."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80, 0x01])
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)  # Single pixel at (0, 0)

        state = execute(state, 0xA301)
        state = execute(state, 0x60F9)  # V0 = 249 -> x = 57, bit 7 lands on x = 64 -> 0
        state = execute(state, 0xD011)

        assert state.display[0, 0] == 0
        assert state.V[15] == 1

    def test_zero_height_draws_nothing(self, fresh_state):
        state = fresh_state.replace(V=fresh_state.V.at[15].set(1))

        state = execute(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_font_glyph(self, fresh_state):
        """Drawing the '0' glyph from the built-in font."""
        state = execute(fresh_state, 0x6000)
        state = execute(state, 0xF029)
        state = execute(state, 0xD005)

        # 0xF0 0x90 0x90 0x90 0xF0
        assert jnp.sum(state.display[0:4, 0]) == 4
        assert state.display[0, 2] == 1
        assert state.display[1, 2] == 0
        assert state.display[3, 2] == 1


class TestScreenBoundaries:
    """Test sprite wrapping and clipping."""

    def test_start_coordinates_wrap(self, fresh_state):
        """VX/VY beyond the screen wrap to the opposite side."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = execute(state, 0x6046)  # V0 = 70 -> x = 6
        state = execute(state, 0x6123)  # V1 = 35 -> y = 3
        state = execute(state, 0xA300)

        state = execute(state, 0xD011)

        assert state.display[6, 3] == 1

    def test_pixels_wrap_by_default(self, vip_state):
        """Pixels past the right/bottom edge wrap around."""
        state = setup_sprite_in_memory(vip_state, 0x300, [0xFF, 0xFF])
        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x611F)  # V1 = 31
        state = execute(state, 0xA300)

        state = execute(state, 0xD012)

        assert state.display[60, 31] == 1
        assert state.display[63, 31] == 1
        assert state.display[0, 31] == 1   # wrapped horizontally
        assert state.display[3, 31] == 1
        assert state.display[60, 0] == 1   # wrapped vertically
        assert state.display[2, 0] == 1
        assert jnp.sum(state.display) == 16

    def test_pixels_clip_in_modern_mode(self, modern_state):
        """With clip_sprites, pixels past the edge are dropped."""
        state = setup_sprite_in_memory(modern_state, 0x300, [0xFF, 0xFF])
        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x611F)  # V1 = 31
        state = execute(state, 0xA300)

        state = execute(state, 0xD012)

        assert state.display[60, 31] == 1
        assert state.display[63, 31] == 1
        assert state.display[0, 31] == 0
        assert state.display[60, 0] == 0
        assert jnp.sum(state.display) == 4


def test_sprite_read_past_memory(fresh_state):
    """DXYN reading beyond 0xFFF faults."""
    state = execute(fresh_state, 0xAFFE)

    with pytest.raises(MemoryOutOfBounds):
        execute(state, 0xD013)
