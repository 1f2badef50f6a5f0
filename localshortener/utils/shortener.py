"""Shortcode generation utility

This module provides a helper function for generating random, fixed-length,
base62 shortcodes that don't collide with already existing ones.

Functions:
    generate_shortcode(exists, length=6):
        Generate a random shortcode suitable for use as a URL slug.

Example:
    >>> from localshortener.utils import generate_shortcode
    >>> taken = {'abc123'}
    >>> code = generate_shortcode(lambda code: code in taken)
    >>> len(code)
    6
"""

import string
import random
import logging

from localshortener.constants import Limits
from localshortener.types import ShortcodeExists


logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits  # 26 + 26 + 10 = base62

_rng = random.SystemRandom()


def generate_shortcode(exists: ShortcodeExists, length: int = Limits.SHORTCODE_LENGTH) -> str:
    """Generate a random shortcode which isn't taken yet.

    Every character is drawn uniformly from the Base62 alphabet. When the
    candidate collides with an existing shortcode the whole string is
    generated again.

    Args:
        exists (Callable[[str], bool]):
            Predicate returning True if a shortcode is already taken.

        length (int, optional):
            Length of the resulting shortcode.
            Defaults to 6.

    Returns:
        str: A fresh alphanumeric shortcode.

    NOTE:
        - The retry loop is unbounded. With 62^6 (~5.7e10) possible codes a
          collision is astronomically unlikely, so the loop effectively runs once.
        - Uses the OS entropy source (random.SystemRandom), so codes are not
          predictable from previously issued ones.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    attempts = 0
    while True:
        attempts += 1
        shortcode = ''.join(_rng.choice(ALPHABET) for _ in range(length))
        if not exists(shortcode):
            break
        logger.debug('Generated shortcode collides with an existing one. Retrying.', extra={'attempts': attempts})

    return shortcode
