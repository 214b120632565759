"""WELL1024a pseudorandom number generator, with an HTTP oracle and a state-recovery demo."""

from .entropy import OsEntropy
from .well1024a import InvalidStateLength, MASK32, Well1024aRng

__all__ = [
    "InvalidStateLength",
    "MASK32",
    "OsEntropy",
    "Well1024aRng",
]
