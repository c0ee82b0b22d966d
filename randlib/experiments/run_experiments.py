# randlib/experiments/run_experiments.py
# Automate experiments: vary samples and output truncation, collect state-recovery
# success/time statistics. Runs the attack in-process against local generators.

import argparse
import csv
import logging
import os
import time

from randlib import config
from randlib.attacker.recover import observe_local, predict_next_from_state, recover_state, recovery_threshold
from randlib.lfsr import truncate_output
from randlib.seed import MASK128, Device, resolve_seed

logger = logging.getLogger(__name__)

RESULTS_DIR = 'results'
FIELDS = ['samples', 'output_bits', 'trial', 'success', 'expected', 'time_s']


def run_single(seed, samples, output_bits, select='high'):
    # success = the attacker predicts the generator's next output
    t0 = time.time()
    obs, rng = observe_local(seed, samples, output_bits, select)
    sol = recover_state(obs, output_bits, select)
    success = False
    if sol is not None:
        predicted = truncate_output(predict_next_from_state(sol, steps=samples), output_bits, select)
        success = predicted == truncate_output(rng.random(), output_bits, select)
    return success, time.time() - t0


def trial_seed(base_seed, trial):
    if base_seed is None:
        return resolve_seed(Device('urandom')) or 1
    return ((base_seed + trial) & MASK128) or 1


def run_sweep(samples_list, output_bits_list, trials, csv_path, base_seed=None, select='high'):
    os.makedirs(os.path.dirname(csv_path) or '.', exist_ok=True)
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(FIELDS)
        for samples in samples_list:
            for output_bits in output_bits_list:
                for trial in range(trials):
                    logger.info(f"Running samples={samples}, output_bits={output_bits}, trial={trial}")
                    success, elapsed = run_single(trial_seed(base_seed, trial), samples, output_bits, select)
                    expected = samples >= recovery_threshold(output_bits)
                    writer.writerow([samples, output_bits, trial, int(success), int(expected), f"{elapsed:.3f}"])
                    f.flush()
    return csv_path


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--samples_list', type=str, default='1,33,65,97,128', help='comma list')
    parser.add_argument('--output_bits_list', type=str, default='128,96,64,32,1', help='comma list')
    parser.add_argument('--trials', type=int, default=10, help='repeats per combo')
    parser.add_argument('--select', choices=('high', 'low'), default='high')
    parser.add_argument('--seed', type=lambda s: int(s, 0), default=None,
                        help='base seed for reproducible runs (default: fresh seed from /dev/urandom per trial)')
    parser.add_argument('--out', default=None, help='CSV path (default: results/experiments_<time>.csv)')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

    samples_list = [int(x) for x in args.samples_list.split(',')]
    output_bits_list = [int(x) for x in args.output_bits_list.split(',')]
    csv_path = args.out or os.path.join(RESULTS_DIR, f'experiments_{int(time.time())}.csv')
    run_sweep(samples_list, output_bits_list, args.trials, csv_path, args.seed, args.select)
    print("Experiments complete. CSV saved at:", csv_path)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
