"""Shortcode generation utility

This module provides a random short code generator producing fixed-length
codes drawn uniformly from the 52-letter Latin alphabet (a-z, A-Z).

Classes:
    CodeGenerator(seed=None, rng=None):
        Thread-safe random code generator with an injectable random source.

Example:
    >>> from fastshortener.utils import CodeGenerator
    >>> generator = CodeGenerator(seed=42)
    >>> code = generator.generate(8)
    >>> len(code)
    8
"""

import random
import string
import threading
from typing import Optional


ALPHABET = string.ascii_lowercase + string.ascii_uppercase
LETTER_IDX_BITS = 6  # 6 bits are enough to index 52 letters
LETTER_IDX_MASK = (1 << LETTER_IDX_BITS) - 1  # All 1-bits, as many as LETTER_IDX_BITS
RANDOM_BITS = 63
LETTER_IDX_MAX = RANDOM_BITS // LETTER_IDX_BITS  # Number of letter indices fitting in 63 bits


class CodeGenerator:
    """Generate random short codes.

    Each draw from the random source yields 63 bits, which are consumed
    6 bits at a time as alphabet indices. Indices outside the alphabet
    (52..63) are discarded so every letter stays equally likely. The pool
    is refilled only after all 10 indices of a draw are used up.

    The random source is owned by the generator instance and guarded by a
    lock, so one instance can be shared between threads. Codes are NOT
    cryptographically secure.

    Args:
        seed (Optional[int]):
            Seed for a fresh `random.Random` source. Ignored when `rng` is given.
        rng (Optional[random.Random]):
            Pre-initialized random source.

    Example:
        >>> CodeGenerator(seed=1).generate(8) == CodeGenerator(seed=1).generate(8)
        True
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._random = rng if rng is not None else random.Random(seed)
        self._lock = threading.Lock()

    def generate(self, length: int) -> str:
        """Generate a code of exactly `length` letters.

        Args:
            length (int): Number of characters in the code.

        Returns:
            str: Random code made of [a-zA-Z] characters.

        Raises:
            TypeError: If length is not an integer.
            ValueError: If length is not positive.
        """
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
        if length <= 0:
            raise ValueError(f'Length must be a positive integer (given value: {length}).')

        chars = []
        with self._lock:
            cache, remain = self._random.getrandbits(RANDOM_BITS), LETTER_IDX_MAX
            while len(chars) < length:
                if remain == 0:
                    cache, remain = self._random.getrandbits(RANDOM_BITS), LETTER_IDX_MAX
                idx = cache & LETTER_IDX_MASK
                if idx < len(ALPHABET):
                    chars.append(ALPHABET[idx])
                cache >>= LETTER_IDX_BITS
                remain -= 1

        return ''.join(chars)
