"""Shortcode generation utility

This module provides helpers for deriving short, printable codes from
a per-call seed. Seeds combine the owner id with a nanosecond timestamp,
so consecutive calls by the same owner never reuse a seed.

Functions:
    make_seed(owner_id) -> str:
        Build a fresh seed for an owner.

    generate_shortcode(seed, length=8) -> str:
        Derive a Base62 shortcode from a seed.

Example:
    >>> from tempshortener.utils import generate_shortcode, make_seed
    >>> code = generate_shortcode(make_seed("3f1c9a7e-0d2b-4c55-9a0e-5b8f2f1d6e44"))
    >>> len(code)
    8
"""

import random
import string
import time

import xxhash

from tempshortener.constants import Shortcode


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def make_seed(owner_id: str) -> str:
    """Build a generation seed from an owner id and a high-resolution timestamp.

    Args:
        owner_id (str):
            Identity of the link's creator. Only its first characters are used.

    Returns:
        str: owner prefix followed by the current time in nanoseconds.
    """
    return f'{owner_id[: Shortcode.SEED_OWNER_PREFIX]}{time.time_ns()}'


def generate_shortcode(seed: str, length: int = Shortcode.LENGTH) -> str:
    """Generate a short Base62 code from a seed.

    The seed is hashed into an integer. For every output character the hash
    picks a letter from the alphabet (hash modulo 62) and is then advanced by
    integer division plus a small random perturbation.

    The random term makes codes non-reproducible from the seed alone: the seed
    spreads codes across the code space, uniqueness itself is enforced by the
    registry, which retries with a fresh seed on collision.

    Args:
        seed (str):
            Non-empty seed, see `make_seed()`.

        length (int, optional):
            Length of the resulting code. Defaults to 8.

    Returns:
        str: An alphanumeric code of exactly `length` characters.

    Raises:
        TypeError: If seed is not a string or length is not an integer.
        ValueError: If seed is empty or length is not positive.

    Example:
        >>> code = generate_shortcode('3f1c9a7e1734612345678901234')
        >>> len(code)
        8
    """
    if not isinstance(seed, str):
        raise TypeError(f'Seed must be of type string (given type: {type(seed)}).')
    if not seed:
        raise ValueError(f'Seed must be a non-empty string (given value: {seed!r}).')
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    # NOTE: uses ultra-fast xxhash for hashing the seed
    seed_hash = xxhash.xxh64_intdigest(seed)

    characters = []
    for _ in range(length):
        characters.append(ALPHABET[seed_hash % BASE])
        seed_hash = seed_hash // BASE + random.randint(0, Shortcode.MAX_PERTURBATION)
    return ''.join(characters)
