class ThroughputTally:
    """每次 try 的吞吐量（megatrials/sec）：运行最大值、累加和、逐次记录"""

    def __init__(self):
        self.max_rate = 0.0
        self.sum_rate = 0.0
        self.rates = []

    def record(self, rate: float):
        rate = float(rate)
        self.rates.append(rate)
        self.sum_rate += rate
        if rate > self.max_rate:
            self.max_rate = rate

    @property
    def completed(self) -> int:
        return len(self.rates)

    def average(self, num_tries: int) -> float:
        # 与参考实现一致：除以配置的 try 总数，而不是实际完成的次数
        return self.sum_rate / num_tries if num_tries > 0 else 0.0


def megatrials_per_second(num_trials: int, elapsed_s: float) -> float:
    if num_trials == 0:
        return 0.0
    if elapsed_s <= 0.0:
        return float("inf")
    return float(num_trials) / elapsed_s / 1_000_000.0
