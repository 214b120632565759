# well_rng/well1024a.py
# WELL1024a generator: 1024-bit state held as 32 unsigned 32-bit words.
# Update: linear recurrence over GF(2) built from XORs and shifts.
#
# Not cryptographically secure: the state can be recovered from outputs,
# see well_rng/attacker/recover.py.

import logging

import numpy as np

from .entropy import OsEntropy

logger = logging.getLogger(__name__)

R = 32
M1 = 3
M2 = 24
M3 = 10
MASK32 = (1 << 32) - 1

# 2**-32 as a single-precision literal
FACT = np.float32(2.3283064e-10)


class InvalidStateLength(ValueError):
    """Raised when a state snapshot does not hold exactly 32 words."""

    def __init__(self, actual, expected=R):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid state: expected {expected} words, got {actual}")


def mix_right(t, v):
    return v ^ (v >> t)


def mix_left(t, v):
    return (v ^ (v << t)) & MASK32


class Well1024aRng:
    """WELL1024a pseudorandom generator (Panneton, L'Ecuyer, Matsumoto).

    The buffer is circular: logical word ``k`` (0 oldest, 31 newest) lives in
    slot ``(index + k) % 32``. Build one with :meth:`from_seed`,
    :meth:`from_entropy` or :meth:`load`.

    Instances carry no lock. Guard a shared instance externally or give each
    thread its own generator.
    """

    def __init__(self, state):
        state = list(state)
        if len(state) != R:
            raise InvalidStateLength(len(state))
        self.data = [w & MASK32 for w in state]
        self.index = 0

    @classmethod
    def load(cls, state):
        """Restore a generator from a 32-word snapshot.

        The snapshot is usually the result of a previous :meth:`snapshot`
        call, which allows exact replay of the output stream.
        """
        return cls(state)

    @classmethod
    def from_seed(cls, seed):
        """Expand a 32-bit seed into ``[seed, seed + 1, ..., seed + 31]``.

        The expansion is weak on purpose and kept for compatibility: nearby
        seeds produce nearly identical, correlated initial states.
        """
        seed &= MASK32
        logger.debug(f"Seeding WELL1024a from {seed:08x}")
        return cls.load((seed + i) & MASK32 for i in range(R))

    @classmethod
    def from_entropy(cls, source=None):
        """Seed all 32 words from an entropy source (``os.urandom`` by default).

        Errors raised by the source propagate to the caller.
        """
        if source is None:
            source = OsEntropy()
        return cls.load(source.words(R))

    def snapshot(self):
        """Return the state as 32 words in logical (rotation-resolved) order."""
        return [self.data[(self.index + k) % R] for k in range(R)]

    def next_u32(self):
        data = self.data
        i = self.index

        z0 = data[(i + 31) % R]
        z1 = data[i] ^ mix_right(8, data[(i + M1) % R])
        z2 = mix_left(19, data[(i + M2) % R]) ^ mix_left(14, data[(i + M3) % R])

        data[i] = z1 ^ z2
        data[(i + 31) % R] = mix_left(11, z0) ^ mix_left(7, z1) ^ mix_left(13, z2)

        self.index = (i + 31) % R
        return data[self.index]

    def next_u64(self):
        """Two draws: the first supplies the high 32 bits."""
        hi = self.next_u32()
        lo = self.next_u32()
        return (hi << 32) | lo

    def next_f32(self):
        """One draw scaled by 2**-32 in single precision.

        The word is rounded to float32 before scaling, so words at or above
        0xFFFFFF80 come out as exactly 1.0.
        """
        return np.float32(self.next_u32()) * FACT

    def __repr__(self):
        return f"Well1024aRng(index={self.index})"
