import random
import struct

import pytest

from daily_key import (
    KEY_SIZE,
    encode_wirings,
    generate_daily_key,
    load_daily_key,
    machine_from_key,
    read_daily_key,
    reflector_for_key,
    write_daily_key,
)
from errors import CorruptKeyFile, FixedPointFound, NotAPermutation
from rotor_and_reflector import build_rng, generate_wiring

from fixture_key import FAST, MEDIUM, SLOW, WIRINGS


def _frame(wiring) -> bytes:
    return struct.pack("<Q", len(wiring)) + bytes(wiring)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def test_key_layout_is_three_length_prefixed_wirings():
    key = encode_wirings(WIRINGS)
    assert len(key) == KEY_SIZE == 3 * (8 + 53)
    assert key == _frame(FAST) + _frame(MEDIUM) + _frame(SLOW)
    assert key[:8] == (53).to_bytes(8, "little")
    assert list(key[8:61]) == FAST


def test_encode_wirings_requires_three():
    with pytest.raises(ValueError):
        encode_wirings(WIRINGS[:2])


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("seed", [0, 1, 42, 2024])
def test_generated_key_round_trips(seed):
    key = generate_daily_key(random.Random(seed))
    wirings = load_daily_key(key)

    rng = random.Random(seed)
    expected = [generate_wiring(rng) for _ in range(3)]
    assert wirings == expected
    assert encode_wirings(wirings) == key


def test_csprng_key_is_valid():
    key = generate_daily_key(build_rng(None))
    for wiring in load_daily_key(key):
        assert sorted(wiring) == list(range(53))
        assert all(w != i for i, w in enumerate(wiring))


# ---------------------------------------------------------------------------
# Rejection
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("size", [0, 159, KEY_SIZE - 1, KEY_SIZE + 1])
def test_wrong_size_is_corrupt(size):
    data = (encode_wirings(WIRINGS) * 2)[:size]
    with pytest.raises(CorruptKeyFile):
        load_daily_key(data)


def test_bad_length_prefix_is_corrupt():
    # same total size, but the first frame claims 52 entries
    data = struct.pack("<Q", 52) + bytes(FAST) + _frame(MEDIUM) + _frame(SLOW)
    with pytest.raises(CorruptKeyFile):
        load_daily_key(data)


def test_out_of_range_byte_is_not_a_permutation():
    bad = list(MEDIUM)
    bad[0] = 200
    with pytest.raises(NotAPermutation):
        load_daily_key(_frame(FAST) + _frame(bad) + _frame(SLOW))


def test_duplicate_byte_is_not_a_permutation():
    bad = list(SLOW)
    bad[1] = bad[0]
    with pytest.raises(NotAPermutation):
        load_daily_key(_frame(FAST) + _frame(MEDIUM) + _frame(bad))


def test_fixed_point_rejected():
    with pytest.raises(FixedPointFound):
        load_daily_key(_frame(FAST) + _frame(list(range(53))) + _frame(SLOW))


# ---------------------------------------------------------------------------
# Reflector bound to the key
# ---------------------------------------------------------------------------

def test_reflector_is_derived_deterministically():
    key = generate_daily_key(random.Random(5))
    assert reflector_for_key(key).table == reflector_for_key(bytes(key)).table
    other = generate_daily_key(random.Random(6))
    assert reflector_for_key(key).table != reflector_for_key(other).table


def test_two_machines_loading_the_same_key_file_interoperate(tmp_path):
    path = tmp_path / "daily_key.enigma"
    written = write_daily_key(path, random.Random(77))

    sender = machine_from_key(read_daily_key(path), ["ab", "XY"], "Kq ")
    receiver = machine_from_key(read_daily_key(path), ["ab", "XY"], "Kq ")
    assert read_daily_key(path) == written

    cipher = sender.encode_message("Meet me at the old mill at noon")
    assert receiver.encode_message(cipher) == "Meet me at the old mill at noon"


def test_read_daily_key_validates(tmp_path):
    path = tmp_path / "broken.enigma"
    path.write_bytes(b"\x00" * 10)
    with pytest.raises(CorruptKeyFile):
        read_daily_key(path)
