# well_rng/experiments/run_experiments.py
# Automate experiments: vary the sample budget and output truncation, collect
# success/time statistics for WELL1024a state recovery.
# Runs in-process against freshly seeded generators, no oracle needed.

import argparse
import csv
import os
import time

from well_rng.attacker.recover import recover_incremental
from well_rng.reveal import mask_output
from well_rng.well1024a import Well1024aRng

FIELDS = ['samples', 'output_bits', 'trial', 'success', 'used', 'time_s']


def run_single(samples, output_bits, rng=None, select='high'):
    """Try to recover `rng`'s state from at most `samples` masked outputs."""
    if rng is None:
        rng = Well1024aRng.from_entropy()
    truth = rng.snapshot()
    t0 = time.time()
    state, used = recover_incremental(lambda: mask_output(rng.next_u32(), output_bits, select),
                                      output_bits, select, max_samples=samples)
    elapsed = time.time() - t0
    return state == truth, elapsed, used


def run_grid(samples_list, output_bits_list, trials, f, make_rng=None):
    """Write one CSV row per trial to `f`, flushing after each row."""
    make_rng = make_rng or Well1024aRng.from_entropy
    writer = csv.writer(f)
    for samples in samples_list:
        for output_bits in output_bits_list:
            for trial in range(trials):
                print(f"Running samples={samples}, output_bits={output_bits}, trial={trial}")
                success, elapsed, used = run_single(samples, output_bits, make_rng())
                writer.writerow([samples, output_bits, trial, int(success), used, f"{elapsed:.3f}"])
                f.flush()


def ensure_results_dir(path):
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--samples_list', type=str, default='32,33,36,64,128', help='comma list of sample budgets')
    parser.add_argument('--output_bits_list', type=str, default='32,16,8', help='comma list')
    parser.add_argument('--trials', type=int, default=10, help='repeats per combo')
    parser.add_argument('--out', default=None, help='CSV path (default results/experiments_<time>.csv)')
    args = parser.parse_args(argv)

    samples_list = [int(x) for x in args.samples_list.split(',')]
    output_bits_list = [int(x) for x in args.output_bits_list.split(',')]
    csv_path = args.out or os.path.join('results', f'experiments_{int(time.time())}.csv')
    ensure_results_dir(csv_path)
    with open(csv_path, 'w', newline='') as f:
        csv.writer(f).writerow(FIELDS)
        run_grid(samples_list, output_bits_list, args.trials, f)
    print("Experiments complete. CSV saved at:", csv_path)
    return csv_path


if __name__ == '__main__':
    main()
