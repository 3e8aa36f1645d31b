"""
Tests for node id generators.
"""

import random

import pytest

from narytree import CounterIdGenerator, Node, RandomIdGenerator, default_id_generator, set_default_id_generator
from narytree.core.ids import to_base32


class TestBase32:
    """Base-32 rendering."""

    def test_small_values(self):
        assert to_base32(0) == "0"
        assert to_base32(31) == "V"
        assert to_base32(32) == "10"

    def test_large_value(self):
        assert to_base32(2**64 - 1) == "FVVVVVVVVVVVV"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base32(-1)


class TestRandomIdGenerator:
    """Random ids."""

    def test_seeded_generator_is_reproducible(self):
        first = RandomIdGenerator(rng=random.Random(7))
        second = RandomIdGenerator(rng=random.Random(7))

        assert [first() for _ in range(5)] == [second() for _ in range(5)]

    def test_ids_use_base32_alphabet(self):
        gen = RandomIdGenerator()

        for _ in range(100):
            assert set(gen()) <= set("0123456789ABCDEFGHIJKLMNOPQRSTUV")

    def test_minimum_bits(self):
        RandomIdGenerator(bits=32)
        with pytest.raises(ValueError, match="at least 32 bits"):
            RandomIdGenerator(bits=16)


class TestCounterIdGenerator:
    """Sequential ids."""

    def test_sequence(self):
        gen = CounterIdGenerator()

        assert [gen(), gen(), gen()] == ["node0", "node1", "node2"]

    def test_prefix_and_start(self):
        gen = CounterIdGenerator(prefix="state", start=5)

        assert gen() == "state5"


class TestDefaultGenerator:
    """Process default used by Node.new."""

    def test_override_and_restore(self):
        set_default_id_generator(CounterIdGenerator(prefix="fixed"))
        try:
            assert Node.new().id == "fixed0"
        finally:
            set_default_id_generator(None)

        assert isinstance(default_id_generator(), RandomIdGenerator)
