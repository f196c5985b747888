# daily_key.py
"""Binary daily key: the three rotor wirings in fast / medium / slow order.

Each wiring is written as a length-prefixed byte string, an 8-byte
little-endian length (always 53) followed by one byte per contact::

    [len=53][53 bytes fast][len=53][53 bytes medium][len=53][53 bytes slow]

The reflector is not stored. It is derived from the key bytes, so every
machine built from the same key file uses the same reflector.
"""
from __future__ import annotations

import hashlib
import struct
from collections.abc import Sequence
from pathlib import Path
from random import Random, SystemRandom

from debug import Debug
from enigma import Enigma, build_machine
from errors import CorruptKeyFile
from rotor_and_reflector import (
    SIZE,
    Reflector,
    generate_reflector,
    generate_wiring,
    validate_wiring,
)

debug = Debug()

ROTOR_COUNT = 3
_LENGTH = struct.Struct("<Q")
_FRAME_SIZE = _LENGTH.size + SIZE
KEY_SIZE = ROTOR_COUNT * _FRAME_SIZE


def encode_wirings(wirings: Sequence[Sequence[int]]) -> bytes:
    if len(wirings) != ROTOR_COUNT:
        raise ValueError(f"expected {ROTOR_COUNT} wirings, got {len(wirings)}")
    out = bytearray()
    for wiring in wirings:
        wiring = validate_wiring(wiring)
        out += _LENGTH.pack(len(wiring))
        out += bytes(wiring)
    return bytes(out)


def generate_daily_key(rng: Random | SystemRandom) -> bytes:
    """Three independent derangements, serialised."""
    wirings = [generate_wiring(rng) for _ in range(ROTOR_COUNT)]
    key = encode_wirings(wirings)
    debug.log("daily_key", "generated %d-byte key", len(key))
    return key


def load_daily_key(data: bytes) -> list[list[int]]:
    """Parse and validate a daily key, returning ``[fast, medium, slow]`` wirings."""
    if len(data) != KEY_SIZE:
        raise CorruptKeyFile(f"expected {KEY_SIZE} bytes, got {len(data)}")

    wirings: list[list[int]] = []
    for offset in range(0, KEY_SIZE, _FRAME_SIZE):
        (length,) = _LENGTH.unpack_from(data, offset)
        if length != SIZE:
            raise CorruptKeyFile(f"wiring length prefix {length} at byte {offset}, expected {SIZE}")
        body = data[offset + _LENGTH.size : offset + _FRAME_SIZE]
        wirings.append(validate_wiring(body))

    debug.log("daily_key", "loaded %d wirings", len(wirings))
    return wirings


def reflector_for_key(data: bytes) -> Reflector:
    """Deterministic reflector bound to one daily key."""
    seed = int.from_bytes(hashlib.sha256(data).digest(), "big")
    return generate_reflector(Random(seed))


# ── file helpers ──────────────────────────────────────────────────


def write_daily_key(path: str | Path, rng: Random | SystemRandom) -> bytes:
    key = generate_daily_key(rng)
    Path(path).write_bytes(key)
    return key


def read_daily_key(path: str | Path) -> bytes:
    data = Path(path).read_bytes()
    load_daily_key(data)
    return data


def machine_from_key(
    data: bytes,
    pairs: Sequence[str | tuple[str, str]] = (),
    positions: str = "aaa",
) -> Enigma:
    """Build a machine from raw key bytes, plug pairs and window symbols."""
    wirings = load_daily_key(data)
    return build_machine(wirings, pairs, reflector_for_key(data), positions)
