# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Sequence
from random import Random, SystemRandom

from alphabet_and_plugboard import SYMBOLS
from debug import Debug
from errors import FixedPointFound, InvalidReflector, NotAPermutation

debug = Debug()

SIZE = len(SYMBOLS)


# ─── randomness ─────────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Return deterministic RNG when *seed* is given, else CSPRNG."""
    return Random(seed) if seed is not None else SystemRandom()


# ─── wiring helpers ─────────────────────────────────────────────────────


def validate_wiring(candidate: Sequence[int], size: int = SIZE) -> list[int]:
    """Check *candidate* is a derangement of ``range(size)`` and return it as a list."""
    wiring = list(candidate)
    if len(wiring) != size:
        raise NotAPermutation(f"expected {size} entries, got {len(wiring)}")

    seen = [False] * size
    for value in wiring:
        if not (0 <= value < size):
            raise NotAPermutation(f"index {value} out of range")
        if seen[value]:
            raise NotAPermutation(f"index {value} appears twice")
        seen[value] = True

    for i, value in enumerate(wiring):
        if value == i:
            raise FixedPointFound(i)
    return wiring


def generate_wiring(rng: Random | SystemRandom, size: int = SIZE) -> list[int]:
    """Uniform random derangement of ``range(size)``, by rejection sampling."""
    wiring = list(range(size))
    attempts = 0
    while True:
        attempts += 1
        rng.shuffle(wiring)
        if all(w != i for i, w in enumerate(wiring)):
            debug.log("rotor", "derangement found after %d shuffles", attempts)
            return wiring


def generate_reflector(rng: Random | SystemRandom, size: int = SIZE) -> "Reflector":
    """Pair off shuffled contacts; an odd *size* leaves one contact wired to itself."""
    remaining = list(range(size))
    rng.shuffle(remaining)
    table = [-1] * size

    while len(remaining) >= 2:
        a, b = remaining.pop(), remaining.pop()
        table[a], table[b] = b, a
    if remaining:
        last = remaining.pop()
        table[last] = last

    return Reflector(table)


# ─── Rotor ──────────────────────────────────────────────────────────────


class Rotor:
    def __init__(self, wiring: Sequence[int], notch: int, position: int = 0) -> None:
        self._fwd: list[int] = validate_wiring(wiring)
        self.size = len(self._fwd)
        if not (0 <= notch < self.size):
            raise ValueError(f"notch {notch} out of range")

        # inverse lookup table: _rev[_fwd[k]] == k
        self._rev: list[int] = [0] * self.size
        for k, w in enumerate(self._fwd):
            self._rev[w] = k

        self.notch = notch
        self.position = position % self.size

    @property
    def wiring(self) -> tuple[int, ...]:
        return tuple(self._fwd)

    # ── stepping ---------------------------------------------------
    def at_notch(self) -> bool:
        return self.position == self.notch

    def step(self) -> None:
        self.position = (self.position + 1) % self.size
        debug.log("stepping", "Rotor pos %d, at_notch=%s", self.position, self.position == self.notch)

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        shift = (sig + self.position) % self.size
        return (self._fwd[shift] - self.position) % self.size

    def backward(self, sig: int) -> int:
        shift = (sig + self.position) % self.size
        return (self._rev[shift] - self.position) % self.size

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor pos={self.position} notch={self.notch}>"


# ─── Reflector ──────────────────────────────────────────────────────────


class Reflector:
    def __init__(self, table: Sequence[int]) -> None:
        table = list(table)
        size = len(table)
        if size != SIZE:
            raise InvalidReflector(f"Reflector table must have {SIZE} entries, got {size}")

        # ensure involution property (t[i] = j ⇒ t[j] = i)
        for i, j in enumerate(table):
            if not (0 <= j < size) or table[j] != i:
                raise InvalidReflector(f"Reflector is not an involution at {i}")

        fixed = [i for i, j in enumerate(table) if i == j]
        # an odd alphabet cannot be fully paired; exactly one contact is left over
        if len(fixed) != size % 2:
            raise InvalidReflector(
                f"Reflector must have exactly {size % 2} fixed point(s), found {len(fixed)}"
            )

        self.size = size
        self._map: list[int] = table
        self.fixed_point: int | None = fixed[0] if fixed else None

    @property
    def table(self) -> tuple[int, ...]:
        return tuple(self._map)

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        debug.log("reflector", "%d->%d", sig, mapped)
        return mapped

    def __repr__(self) -> str:
        return f"<Reflector fixed_point={self.fixed_point}>"
