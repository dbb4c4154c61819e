"""CHIP-8 behaviour variants (quirks).

Historical interpreters disagree on a handful of opcodes and real ROMs depend
on one variant or the other, so the variant is a configuration choice rather
than a single hardwired behaviour. The default is the original COSMAC VIP.
"""

from typing import Union

from flax.struct import dataclass


@dataclass(frozen=True)
class Quirks:
    """Opcode behaviour switches.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY into VX (VIP) instead of shifting VX in place
        load_store_increments_index: FX55/FX65 leave I at I + X + 1 afterwards (VIP)
        logic_resets_flag: 8XY1/8XY2/8XY3 reset VF to 0 (VIP)
        jump_uses_vx: BNNN jumps to NNN + VX instead of NNN + V0 (SUPER-CHIP)
        clip_sprites: DXYN drops pixels past the screen edge instead of wrapping them
        index_overflow_flag: FX1E sets VF when I passes 0xFFF (Amiga interpreter)
    """
    shift_uses_vy: bool = True
    load_store_increments_index: bool = True
    logic_resets_flag: bool = True
    jump_uses_vx: bool = False
    clip_sprites: bool = False
    index_overflow_flag: bool = False


COSMAC_VIP = Quirks()

MODERN = Quirks(
    shift_uses_vy=False,
    load_store_increments_index=False,
    logic_resets_flag=False,
    clip_sprites=True,
)

SCHIP = Quirks(
    shift_uses_vy=False,
    load_store_increments_index=False,
    logic_resets_flag=False,
    jump_uses_vx=True,
    clip_sprites=True,
)

QUIRK_PRESETS = {
    "vip": COSMAC_VIP,
    "modern": MODERN,
    "schip": SCHIP,
}


def get_quirks(quirks: Union[str, Quirks] = "vip") -> Quirks:
    """Resolve a preset name to a Quirks instance.

    Args:
        quirks: Preset name ("vip", "modern", "schip") or a Quirks instance

    Returns:
        The matching Quirks instance
    """
    if isinstance(quirks, Quirks):
        return quirks

    if quirks not in QUIRK_PRESETS:
        raise ValueError(
            f"Unknown quirk preset '{quirks}'. Available: {list(QUIRK_PRESETS.keys())}"
        )

    return QUIRK_PRESETS[quirks]
