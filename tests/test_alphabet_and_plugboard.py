import random

import pytest

from alphabet_and_plugboard import ALPHABET, MAX_PAIRS, SYMBOLS, Alphabet, Plugboard, random_pairs
from errors import (
    DuplicateMapping,
    EnigmaError,
    MalformedPair,
    SelfMapping,
    TooManyPairs,
    UnsupportedCharacter,
)


# ---------------------------------------------------------------------------
# Alphabet
# ---------------------------------------------------------------------------

def test_alphabet_has_53_symbols():
    assert len(ALPHABET) == 53
    assert SYMBOLS[0] == "a" and SYMBOLS[26] == "A" and SYMBOLS[52] == " "


def test_index_and_symbol_are_mutual_inverses():
    for i in range(len(ALPHABET)):
        assert ALPHABET.index_of(ALPHABET.symbol_at(i)) == i


@pytest.mark.parametrize("bad", ["1", "!", "é", "\n"])
def test_index_of_rejects_unknown_symbol(bad):
    with pytest.raises(UnsupportedCharacter) as exc:
        ALPHABET.index_of(bad)
    assert exc.value.symbol == bad


def test_symbol_at_out_of_range():
    with pytest.raises(IndexError):
        ALPHABET.symbol_at(53)


def test_first_unsupported():
    assert ALPHABET.first_unsupported("Hello World") is None
    assert ALPHABET.first_unsupported("Hello, World") == ","


def test_duplicate_alphabet_symbols_rejected():
    with pytest.raises(ValueError):
        Alphabet("abca")


# ---------------------------------------------------------------------------
# Plugboard
# ---------------------------------------------------------------------------

def test_empty_plugboard_is_identity():
    pb = Plugboard()
    assert all(pb.swap(i) == i for i in range(53))


def test_swap_is_symmetric_and_self_inverse():
    pb = Plugboard(["ab", ("C", " "), "zY"])
    a, b = ALPHABET.index_of("a"), ALPHABET.index_of("b")
    assert pb.swap(a) == b and pb.swap(b) == a
    assert pb.swap(ALPHABET.index_of("C")) == 52
    for i in range(53):
        assert pb.swap(pb.swap(i)) == i


def test_paired_symbols_never_map_to_themselves():
    pairs = random_pairs(random.Random(7), MAX_PAIRS)
    pb = Plugboard(pairs)
    for a, b in pb.pairs:
        assert pb.swap(a) != a and pb.swap(b) != b


def test_thirteen_pairs_accepted():
    pb = Plugboard(random_pairs(random.Random(1), 13))
    assert len(pb.pairs) == 13


def test_fourteen_pairs_rejected():
    pairs = ["ab", "cd", "ef", "gh", "ij", "kl", "mn", "op", "qr", "st", "uv", "wx", "yz", "AB"]
    with pytest.raises(TooManyPairs):
        Plugboard(pairs)


def test_self_pair_rejected():
    with pytest.raises(SelfMapping) as exc:
        Plugboard(["ab", "xx"])
    assert exc.value.symbol == "x"


@pytest.mark.parametrize("pairs", [["ab", "bc"], ["ab", "ca"], ["ab", ("b", "a")]])
def test_symbol_in_two_pairs_rejected(pairs):
    with pytest.raises(DuplicateMapping):
        Plugboard(pairs)


@pytest.mark.parametrize("pair", ["a", "abc", ""])
def test_malformed_pair_rejected(pair):
    with pytest.raises(MalformedPair):
        Plugboard([pair])


def test_pair_with_unsupported_symbol_rejected():
    with pytest.raises(UnsupportedCharacter):
        Plugboard(["a1"])


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        Plugboard(["aa"])
    assert issubclass(TooManyPairs, EnigmaError)


def test_random_pairs_are_disjoint_and_capped():
    pairs = random_pairs(random.Random(3), 40)
    assert len(pairs) == MAX_PAIRS
    used = "".join(pairs)
    assert len(set(used)) == len(used)
