# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every failure the cipher engine reports."""


# ── input symbols ─────────────────────────────────────────────────
class UnsupportedCharacter(EnigmaError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Unsupported character {symbol!r}")


class EmptyMessage(EnigmaError):
    def __init__(self) -> None:
        super().__init__("Message is empty")


class InvalidStartPositions(EnigmaError):
    def __init__(self, positions: str, reason: str) -> None:
        self.positions = positions
        super().__init__(f"Invalid start positions {positions!r}: {reason}")


# ── wirings ───────────────────────────────────────────────────────
class NotAPermutation(EnigmaError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Wiring is not a permutation: {reason}")


class FixedPointFound(EnigmaError):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Wiring maps {index} to itself")


class InvalidReflector(EnigmaError):
    pass


# ── plugboard ─────────────────────────────────────────────────────
class TooManyPairs(EnigmaError):
    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        super().__init__(f"{count} plugboard pairs given, at most {limit} allowed")


class MalformedPair(EnigmaError):
    def __init__(self, pair) -> None:
        self.pair = pair
        super().__init__(f"Pair {pair!r} must be exactly 2 symbols")


class SelfMapping(EnigmaError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Plugboard cannot map a symbol to itself: {symbol!r}")


class DuplicateMapping(EnigmaError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Character {symbol!r} already used in plugboard")


# ── key file ──────────────────────────────────────────────────────
class CorruptKeyFile(EnigmaError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Corrupt daily key: {reason}")
