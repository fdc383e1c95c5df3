"""
Random number generation utilities.

All landscape randomness flows from a single master seed. Each stage derives
its own seed by hashing the master seed together with a fixed salt, so a
change in how many values one stage consumes never shifts another stage's
stream. Python's random and NumPy's random are not used anywhere in
generation code.
"""

from typing import Union

from ..core.alea_prng import AleaPRNG

Seed = Union[int, str]


def hash_string(text: str) -> int:
    """
    Hash a string to an unsigned 32-bit integer.

    Classic ``h = h * 31 + code`` rolling hash folded to 32 bits, then
    returned as its absolute signed value so it is usable as a noise seed.
    """
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def stage_seed(seed: Seed, salt: str) -> int:
    """
    Derive an independent seed for one generation stage.

    Args:
        seed: Master seed (integer or string)
        salt: Fixed, stage-specific salt such as ``"epic"``

    Returns:
        Non-negative integer seed
    """
    return hash_string(f"{seed}{salt}")


def create_prng(seed: Seed, salt: str = "") -> AleaPRNG:
    """
    Build a fresh Alea PRNG for a stage.

    Args:
        seed: Master seed
        salt: Stage salt; when empty the master seed is used directly

    Returns:
        AleaPRNG instance owned by the caller
    """
    if salt:
        return AleaPRNG(stage_seed(seed, salt))
    return AleaPRNG(seed)


def identity_seed(identity: str, mode: str = "dark") -> int:
    """
    Master seed for an external identity (e.g. a username) and render mode.
    """
    return hash_string(f"{identity.lower()}:{mode}")
