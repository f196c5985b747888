# alphabet_and_plugboard.py
from __future__ import annotations

import string
from collections.abc import Sequence
from random import Random, SystemRandom

from debug import Debug
from errors import (
    DuplicateMapping,
    MalformedPair,
    SelfMapping,
    TooManyPairs,
    UnsupportedCharacter,
)

debug = Debug()

SYMBOLS = string.ascii_lowercase + string.ascii_uppercase + " "
MAX_PAIRS = 13


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Fixed bijection between the machine's symbols and ``0..len-1``."""

    __slots__ = ("symbols", "_index")

    def __init__(self, symbols: str) -> None:
        if len(set(symbols)) != len(symbols):
            raise ValueError("Alphabet symbols must be distinct")
        self.symbols: str = symbols
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(symbols)}

    # symbol → integer signal
    def index_of(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            debug.log("alphabet", "rejected %r", symbol)
            raise UnsupportedCharacter(symbol) from None

    # integer signal → symbol
    def symbol_at(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise IndexError(f"Signal {index} out of range 0–{hi}")
        return self.symbols[index]

    def first_unsupported(self, text: str) -> str | None:
        """Return the first symbol of *text* outside the alphabet, if any."""
        for ch in text:
            if ch not in self._index:
                return ch
        return None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __len__(self) -> int:
        return len(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet size={len(self.symbols)}>"


ALPHABET = Alphabet(SYMBOLS)


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    def __init__(
        self,
        pairs: Sequence[str | tuple[str, str]] = (),
        alphabet: Alphabet = ALPHABET,
    ) -> None:
        if len(pairs) > MAX_PAIRS:
            raise TooManyPairs(len(pairs), MAX_PAIRS)

        self.alphabet: Alphabet = alphabet
        self._map: list[int] = list(range(len(alphabet)))
        self.pairs: tuple[tuple[int, int], ...] = ()
        used: set[str] = set()
        accepted: list[tuple[int, int]] = []

        for raw in pairs:
            # normalise to (a, b)
            if len(raw) != 2:
                raise MalformedPair(raw)
            a, b = raw

            ia = alphabet.index_of(a)
            ib = alphabet.index_of(b)
            if a == b:
                raise SelfMapping(a)
            if a in used or b in used:
                raise DuplicateMapping(a if a in used else b)

            # passed validation → commit swap
            self._map[ia], self._map[ib] = ib, ia
            used.update((a, b))
            accepted.append((ia, ib))

        self.pairs = tuple(accepted)
        debug.log("plugboard", "built with %d pairs", len(self.pairs))

    def swap(self, signal: int) -> int:
        mapped = self._map[signal]
        debug.log("plugboard", "%d->%d", signal, mapped)
        return mapped

    # nicety for debugging
    def __repr__(self) -> str:
        sym = self.alphabet.symbol_at
        swaps = [f"{sym(a)}{sym(b)}" for a, b in self.pairs]
        return f"<Plugboard {' '.join(swaps)}>"


def random_pairs(
    rng: Random | SystemRandom,
    count: int,
    alphabet: Alphabet = ALPHABET,
) -> list[str]:
    """Return *count* disjoint plug pairs (capped at MAX_PAIRS)."""
    count = max(0, min(count, MAX_PAIRS, len(alphabet) // 2))
    pool = list(alphabet.symbols)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:count]

