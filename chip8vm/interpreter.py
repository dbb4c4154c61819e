"""Frame-stepped interpreter session over the pure emulator core.

The host drives an :class:`Interpreter` once per frame with the keypad state
and an instruction budget, then reads the framebuffer and sound flag back.
"""

from enum import Enum
from typing import Optional, Sequence, Union

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.constants import NUM_KEYS
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.emulator import execute_decoded, fetch, load_rom, tick_timers
from chip8vm.errors import Chip8Error, InvalidOpcode
from chip8vm.logging import InterpreterLogger
from chip8vm.quirks import Quirks, get_quirks
from chip8vm.state import EmulatorState, create_state


class Mode(Enum):
    """Observable interpreter modes."""
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"


class Interpreter:
    """Frame-stepped CHIP-8 interpreter session.

    Owns one emulator state and advances it in frames: the host supplies the
    keypad and an instruction budget through :meth:`tick`, then reads the
    framebuffer and the sound flag back. Faults are logged and raised; the
    interpreter never recovers from them on its own.
    """

    def __init__(
        self,
        quirks: Union[str, Quirks] = "vip",
        seed: int = 0,
        rng: Optional[jax.Array] = None,
        logger: Optional[InterpreterLogger] = None,
    ):
        """Create an interpreter session.

        Args:
            quirks: Quirk preset name ("vip", "modern", "schip") or a Quirks instance
            seed: Seed for the random opcode source, used when ``rng`` is None
            rng: JAX PRNG key to use as the random source
            logger: Logger for lifecycle events and faults (silent by default,
                faults are still raised)
        """
        self.quirks = get_quirks(quirks)
        self.logger = logger or InterpreterLogger()
        if rng is None:
            rng = jax.random.PRNGKey(seed)
        self.state: EmulatorState = create_state(rng, quirks=self.quirks)
        self._loaded = False

    def load(self, rom_data: bytes) -> None:
        """Copy a ROM to 0x200 and reset registers, stack, display and timers."""
        self.state = load_rom(self.state, rom_data)
        self._loaded = True
        self.logger.log_rom_loaded(len(rom_data), self.quirks)

    def tick(self, instructions_per_frame: int, key_state: Sequence[bool]) -> None:
        """Run one frame.

        Args:
            instructions_per_frame: Instruction budget for this frame
            key_state: 16 booleans, indexed by CHIP-8 key 0x0-0xF
        """
        self._require_loaded("tick")
        if instructions_per_frame < 0:
            raise ValueError(
                f"instructions_per_frame must be non-negative, got {instructions_per_frame}"
            )

        keypad = jnp.asarray(key_state, dtype=jnp.bool_)
        if keypad.shape != (NUM_KEYS,):
            raise ValueError(f"key_state must hold {NUM_KEYS} keys, got shape {keypad.shape}")
        self.state = self.state.replace(keypad=keypad)

        for _ in range(instructions_per_frame):
            self.execute_one()
            # Frozen on FX0A: the rest of the budget is dropped for this frame
            if self.mode is Mode.AWAITING_KEY:
                break

        self.state = tick_timers(self.state)

    def execute_one(self) -> DecodedInstruction:
        """Fetch, decode and execute the instruction at the program counter."""
        self._require_loaded("execute_one")
        pc = int(self.state.pc)
        try:
            state, instruction = fetch(self.state)
            try:
                decoded_instruction = decode(instruction)
            except InvalidOpcode as err:
                raise InvalidOpcode(err.opcode, pc) from err
            state = execute_decoded(state, decoded_instruction)
        except Chip8Error as err:
            self.logger.log_fault(err, pc)
            raise

        if bool(state.awaiting_key) and not bool(self.state.awaiting_key):
            self.logger.log_key_wait(decoded_instruction.x, pc)
        self.state = state
        return decoded_instruction

    def _require_loaded(self, operation: str) -> None:
        if not self._loaded:
            raise RuntimeError(f"load() must be called before {operation}()")

    @property
    def mode(self) -> Mode:
        """RUNNING, or AWAITING_KEY while frozen on FX0A."""
        return Mode.AWAITING_KEY if bool(self.state.awaiting_key) else Mode.RUNNING

    @property
    def framebuffer(self) -> np.ndarray:
        """Boolean (64, 32) framebuffer indexed as [x, y]."""
        return np.asarray(self.state.display)

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is nonzero."""
        return int(self.state.sound_timer) > 0

    @property
    def pc(self) -> int:
        """Address of the next instruction."""
        return int(self.state.pc)

    @property
    def index_register(self) -> int:
        """Index register I."""
        return int(self.state.I)

    @property
    def registers(self) -> np.ndarray:
        """Registers V0-VF as a numpy array."""
        return np.asarray(self.state.V)

    @property
    def memory(self) -> np.ndarray:
        """The 4KB address space as a numpy array."""
        return np.asarray(self.state.memory)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)
