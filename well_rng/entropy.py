# well_rng/entropy.py
# Entropy sources consulted by Well1024aRng.from_entropy().
# A source is any object with words(count) returning `count` 32-bit ints.

import os


class OsEntropy:
    """Draws independent 32-bit words from os.urandom."""

    def words(self, count):
        raw = os.urandom(4 * count)
        return [int.from_bytes(raw[4 * k:4 * k + 4], 'big') for k in range(count)]
