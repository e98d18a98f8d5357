# examples/plot_thread_scaling.py
import numba
import matplotlib.pyplot as plt

from laserbounce.models.config import SimConfig
from laserbounce.mc.sampler import Sampler
from laserbounce.mc.trials import generate_trials
from laserbounce.simulation.run_tries import run_tries


def main():
    base = SimConfig(trials=1_000_000, tries=5, seed=42, skip_after_abort=False)
    trials = generate_trials(base.trials, base.xc_range, base.yc_range, base.r_range,
                             Sampler(base.seed))

    max_threads = int(numba.config.NUMBA_NUM_THREADS)
    threads = list(range(1, max_threads + 1))
    peaks, avgs = [], []
    for n in threads:
        cfg = SimConfig(threads=n, trials=base.trials, tries=base.tries, seed=base.seed,
                        skip_after_abort=False)
        res = run_tries(trials, cfg)
        peaks.append(res.peak_rate); avgs.append(res.average_rate)
        print(f"threads={n}: peak={res.peak_rate:.3f}, avg={res.average_rate:.3f} MT/s, P={res.probability:.4f}")

    plt.figure()
    plt.plot(threads, peaks, marker='o', label='peak')
    plt.plot(threads, avgs, marker='s', label='average')
    plt.xlabel('Threads'); plt.ylabel('Megatrials / sec')
    plt.title('Parallel throughput scaling')
    plt.legend(); plt.grid(True); plt.tight_layout()
    plt.show()

if __name__ == "__main__":
    main()
