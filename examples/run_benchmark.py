# examples/run_benchmark.py
from laserbounce.models.config import SimConfig
from laserbounce.report import print_report
from laserbounce.simulation.run_tries import run_simulation

if __name__ == "__main__":
    # 与参考构建相同的默认参数：8 线程、1e6 次试验、10 次 try
    result = run_simulation(SimConfig(), progress=True)
    print_report(result)
    print(f"seed={result.seed}, tries completed={result.tries_completed}/{result.num_tries}")
