"""
Node id generators.

Ids are opaque strings. Generators are plain callables returning a fresh id,
so tests can inject a deterministic one:

    gen = CounterIdGenerator()
    Node.new("Root", id_generator=gen).id   # 'node0'
"""

from __future__ import annotations

import itertools
import random
import secrets
from typing import Callable, Optional

from narytree.config import load_settings

IdGenerator = Callable[[], str]

BASE32_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUV"
MIN_ID_BITS = 32


def to_base32(value: int) -> str:
    """Render a non-negative integer in base 32 (digits 0-9, A-V)."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 32)
        digits.append(BASE32_DIGITS[rem])
    return "".join(reversed(digits))


class RandomIdGenerator:
    """Random ids of ``bits`` bits of entropy, base-32 encoded.

    Collisions are not detected. With the default 64 bits the probability is
    negligible for any realistic tree size.
    """

    def __init__(self, bits: int = 64, rng: Optional[random.Random] = None):
        if bits < MIN_ID_BITS:
            raise ValueError(f"id generators need at least {MIN_ID_BITS} bits, got {bits}")
        self.bits = bits
        self._rng = rng

    def __call__(self) -> str:
        value = self._rng.getrandbits(self.bits) if self._rng is not None else secrets.randbits(self.bits)
        return to_base32(value)

    def __repr__(self) -> str:
        return f"RandomIdGenerator(bits={self.bits})"


class CounterIdGenerator:
    """Sequential ids: node0, node1, ..."""

    def __init__(self, prefix: str = "node", start: int = 0):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"

    def __repr__(self) -> str:
        return f"CounterIdGenerator(prefix={self.prefix!r})"


_default_generator: Optional[IdGenerator] = None


def default_id_generator() -> IdGenerator:
    """Return the generator ``Node.new`` uses when none is passed."""
    global _default_generator
    if _default_generator is None:
        _default_generator = RandomIdGenerator(bits=load_settings().id_bits)
    return _default_generator


def set_default_id_generator(generator: Optional[IdGenerator]) -> None:
    """Replace the default generator; ``None`` restores the random one."""
    global _default_generator
    _default_generator = generator


__all__ = [
    "CounterIdGenerator",
    "IdGenerator",
    "RandomIdGenerator",
    "default_id_generator",
    "set_default_id_generator",
    "to_base32",
]
