# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Sequence

from alphabet_and_plugboard import ALPHABET, Alphabet, Plugboard
from debug import Debug
from errors import EmptyMessage, InvalidStartPositions, UnsupportedCharacter
from rotor_and_reflector import Reflector, Rotor

debug = Debug()

# notch offsets, fast / medium / slow
NOTCHES: tuple[int, int, int] = (16, 4, 21)


def cascade(right_at_notch: bool, middle_at_notch: bool) -> tuple[bool, bool, bool]:
    """Decide which rotors move this key-press, from the flags read *before* stepping.

    Returns ``(fast, medium, slow)``. The medium rotor also moves when it sits on
    its own notch, which is what produces the double step.
    """
    return True, right_at_notch or middle_at_notch, middle_at_notch


def parse_start_positions(positions: str, alphabet: Alphabet = ALPHABET) -> tuple[int, int, int]:
    """Map the three window symbols (fast rotor first) to rotor offsets."""
    if len(positions) != 3:
        raise InvalidStartPositions(positions, "must be exactly 3 symbols")
    try:
        fast, medium, slow = (alphabet.index_of(ch) for ch in positions)
    except UnsupportedCharacter as exc:
        raise InvalidStartPositions(positions, f"unsupported symbol {exc.symbol!r}") from exc
    return fast, medium, slow


class Enigma:
    def __init__(
        self,
        pb: Plugboard,
        rotors: Sequence[Rotor],
        reflector: Reflector,
        alphabet: Alphabet = ALPHABET,
    ) -> None:
        if len(rotors) != 3:
            raise ValueError("exactly three rotors required (fast, medium, slow)")

        self.alphabet   = alphabet
        self.pb         = pb
        self.fast, self.medium, self.slow = rotors
        self.reflector  = reflector
        self._start     = self.positions

    # ── key helpers ─────────────────────────────────────────────

    @property
    def rotors(self) -> tuple[Rotor, Rotor, Rotor]:
        return self.fast, self.medium, self.slow

    @property
    def positions(self) -> tuple[int, int, int]:
        return self.fast.position, self.medium.position, self.slow.position

    @property
    def window(self) -> str:
        """The three symbols currently showing, fast rotor first."""
        return "".join(self.alphabet.symbol_at(p) for p in self.positions)

    def set_positions(self, positions: Sequence[int]) -> None:
        if len(positions) != 3:
            raise ValueError(f"expected 3 rotor positions, got {len(positions)}")
        for rotor, pos in zip(self.rotors, positions):
            rotor.position = pos % rotor.size
        self._start = self.positions

    def rewind(self) -> None:
        """Return every rotor to the positions it started from."""
        for rotor, pos in zip(self.rotors, self._start):
            rotor.position = pos

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press, historic 3-rotor double-step."""
        step_F, step_M, step_S = cascade(self.fast.at_notch(), self.medium.at_notch())

        if step_F:
            self.fast.step()
        if step_M:
            self.medium.step()
        if step_S:
            self.slow.step()

    # ── encipher one symbol  ────────────────────────────────────

    def encode_char(self, letter: str) -> str:
        signal = self.alphabet.index_of(letter)
        self._step_rotors()
        debug.log("stepping", "Rotor pos %s", self.positions)

        signal = self.pb.swap(signal)

        for rotor in self.rotors:
            signal = rotor.forward(signal)

        signal = self.reflector.reflect(signal)

        for rotor in reversed(self.rotors):
            signal = rotor.backward(signal)

        signal = self.pb.swap(signal)
        out_ch = self.alphabet.symbol_at(signal)
        debug.log("encipher", "%r -> %r", letter, out_ch)
        return out_ch

    def encode_message(self, message: str) -> str:
        """Encipher (or decipher) *message*; nothing is produced unless every symbol is valid."""
        if not message:
            raise EmptyMessage()
        bad = self.alphabet.first_unsupported(message)
        if bad is not None:
            raise UnsupportedCharacter(bad)
        return "".join(self.encode_char(ch) for ch in message)

    def __repr__(self) -> str:
        return f"<Enigma window={self.window!r}>"


def build_machine(
    wirings: Sequence[Sequence[int]],
    plugboard_pairs: Sequence[str | tuple[str, str]],
    reflector: Reflector,
    start_positions: str,
    notches: Sequence[int] = NOTCHES,
) -> Enigma:
    """Validate everything up front and assemble a ready machine."""
    if len(wirings) != 3 or len(notches) != 3:
        raise ValueError("three wirings and three notches are required")
    offsets = parse_start_positions(start_positions)
    plugboard = Plugboard(plugboard_pairs)
    rotors = [
        Rotor(wiring, notch, pos)
        for wiring, notch, pos in zip(wirings, notches, offsets)
    ]
    return Enigma(plugboard, rotors, reflector)
