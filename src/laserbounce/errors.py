class LaserBounceError(Exception):
    """laserbounce 所有异常的基类"""


class ConfigError(LaserBounceError, ValueError):
    """仿真配置不合法（范围倒置、角度越界等）"""


class ParallelUnavailableError(LaserBounceError, RuntimeError):
    """运行环境不具备真正的多线程 parallel-for 能力"""
