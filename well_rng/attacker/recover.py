# well_rng/attacker/recover.py
# Query oracle for outputs, build linear system over GF(2), solve for the 1024-bit
# WELL1024a state, then predict next output and validate via /validate

import argparse
import time
from functools import reduce

import requests

from well_rng.reveal import hex_width, mask_output, revealed_positions
from well_rng.well1024a import M1, M2, M3, MASK32, R, Well1024aRng

ORACLE = 'http://127.0.0.1:5000'
BITS = 32
STATE_BITS = R * BITS


# Symbolic words: a word is a list of 32 masks, entry b says which initial state
# bits (bit 32*k + b is bit b of logical word k) XOR together into bit b.
def sym_xor(*words):
    return [reduce(lambda a, c: a ^ c, bits) for bits in zip(*words)]


def sym_shr(w, t):
    return [w[b + t] if b + t < BITS else 0 for b in range(BITS)]


def sym_shl(w, t):
    return [w[b - t] if b >= t else 0 for b in range(BITS)]


def sym_mix_right(t, v):
    return sym_xor(v, sym_shr(v, t))


def sym_mix_left(t, v):
    return sym_xor(v, sym_shl(v, t))


class SymbolicWell:
    """WELL1024a recurrence over symbolic words, starting from unknown state."""

    def __init__(self):
        self.index = 0
        self.data = [[1 << (BITS * k + b) for b in range(BITS)] for k in range(R)]

    def next_word(self):
        data = self.data
        i = self.index

        z0 = data[(i + 31) % R]
        z1 = sym_xor(data[i], sym_mix_right(8, data[(i + M1) % R]))
        z2 = sym_xor(sym_mix_left(19, data[(i + M2) % R]),
                     sym_mix_left(14, data[(i + M3) % R]))

        data[i] = sym_xor(z1, z2)
        data[(i + 31) % R] = sym_xor(sym_mix_left(11, z0), sym_mix_left(7, z1),
                                     sym_mix_left(13, z2))

        self.index = (i + 31) % R
        return data[self.index]


class GF2System:
    """Incremental Gaussian elimination over GF(2) with integer row masks."""

    def __init__(self, nbits=STATE_BITS):
        self.nbits = nbits
        # leading column -> (row mask, rhs bit)
        self.pivots = {}
        self.consistent = True

    @property
    def rank(self):
        return len(self.pivots)

    @property
    def solved(self):
        return self.consistent and self.rank == self.nbits

    def add(self, row, rhs):
        """Add one equation; returns True if it raised the rank."""
        while row:
            col = row.bit_length() - 1
            pivot = self.pivots.get(col)
            if pivot is None:
                self.pivots[col] = (row, rhs)
                return True
            row ^= pivot[0]
            rhs ^= pivot[1]
        if rhs:
            self.consistent = False
        return False

    def solve(self):
        if not self.solved:
            return None
        sol = 0
        # each pivot row only holds bits below its column
        for col in sorted(self.pivots):
            row, rhs = self.pivots[col]
            lower = row ^ (1 << col)
            if (bin(lower & sol).count('1') & 1) != rhs:
                sol |= (1 << col)
        return sol


class StateRecovery:
    """Feeds observed outputs into a GF2System, one equation per revealed bit."""

    def __init__(self, output_bits=BITS, select='high'):
        self.positions = revealed_positions(output_bits, select)
        self.model = SymbolicWell()
        self.system = GF2System()
        self.samples = 0

    @property
    def done(self):
        return self.system.solved or not self.system.consistent

    def feed(self, value):
        word = self.model.next_word()
        for j, pos in enumerate(self.positions):
            self.system.add(word[pos], (value >> j) & 1)
        self.samples += 1

    def state(self):
        """The snapshot taken just before the first observation, or None."""
        sol = self.system.solve()
        if sol is None:
            return None
        return [(sol >> (BITS * k)) & MASK32 for k in range(R)]


def recover_state(observations, output_bits=BITS, select='high'):
    rec = StateRecovery(output_bits, select)
    for value in observations:
        rec.feed(value)
    return rec.state()


def recover_incremental(fetch, output_bits=BITS, select='high', max_samples=1024):
    # rank grows by at least one per observation until full,
    # so 1024 observations always suffice
    rec = StateRecovery(output_bits, select)
    while rec.samples < max_samples and not rec.done:
        rec.feed(fetch())
    return rec.state(), rec.samples


def predict_next(state, steps=0):
    rng = Well1024aRng.load(state)
    for _ in range(steps):
        rng.next_u32()
    return rng.next_u32()


def query_oracle(n, base=ORACLE):
    outs = []
    for _ in range(n):
        r = requests.get(base + '/get_output', timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def main(argv=None):
    parser = argparse.ArgumentParser(description='Recover WELL1024a state from oracle outputs')
    parser.add_argument('--oracle', default=ORACLE, help='oracle base URL')
    parser.add_argument('--output_bits', type=int, default=32, help='bits returned by oracle (<=32)')
    parser.add_argument('--select', choices=['high', 'low'], default='high', help='which bits the oracle reveals')
    parser.add_argument('--max_samples', type=int, default=1024, help='give up after this many outputs')
    args = parser.parse_args(argv)

    t0 = time.time()
    print(f"[attacker] Querying {args.oracle} until the state is determined (output_bits={args.output_bits})...")
    state, used = recover_incremental(lambda: query_oracle(1, args.oracle)[0],
                                      args.output_bits, args.select, args.max_samples)
    if state is None:
        print(f"[attacker] Failed to find unique solution after {used} outputs. "
              f"Try increasing max_samples or output_bits.")
        return 1

    print(f"[attacker] Recovered 1024-bit state from {used} outputs:")
    print(' '.join(format(w, '08x') for w in state))
    predicted = predict_next(state, steps=used)
    cand_hex = format(mask_output(predicted, args.output_bits, args.select), '0{}x'.format(hex_width(args.output_bits)))
    print(f"[attacker] Predicted next output: {cand_hex}")
    resp = requests.post(args.oracle + '/validate', json={'candidate': cand_hex}, timeout=5)
    result = resp.json()
    print("[attacker] Validate response:", result)
    print(f"[attacker] Done in {time.time() - t0:.2f}s")
    return 0 if result.get('ok') else 1


if __name__ == '__main__':
    raise SystemExit(main())
