import pytest

from enigma import build_machine
from rotor_and_reflector import Reflector

from fixture_key import REFLECTOR_TABLE, WIRINGS


@pytest.fixture
def wirings():
    return [list(w) for w in WIRINGS]


@pytest.fixture
def reflector():
    return Reflector(REFLECTOR_TABLE)


@pytest.fixture
def make_machine(wirings, reflector):
    def _make(positions: str = "AAA", pairs=()):
        return build_machine(wirings, pairs, reflector, positions)

    return _make
