# well_rng/reveal.py
# How the oracle truncates a 32-bit output word before revealing it.
# Shared by the oracle (to mask) and the attacker (to know which bits it sees).

WORD_BITS = 32


def mask_output(x, bits, select='high'):
    if bits >= WORD_BITS:
        return x & ((1 << WORD_BITS) - 1)
    if select == 'high':
        return (x >> (WORD_BITS - bits)) & ((1 << bits) - 1)
    else:
        return x & ((1 << bits) - 1)


def revealed_positions(bits, select='high'):
    """Word bit positions behind bits 0..bits-1 of a masked output."""
    if bits >= WORD_BITS:
        return list(range(WORD_BITS))
    if select == 'high':
        return list(range(WORD_BITS - bits, WORD_BITS))
    return list(range(bits))


def hex_width(bits):
    return (bits + 3) // 4
