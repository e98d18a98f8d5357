from enum import IntEnum

import numpy as np

# 单次试验的参数：圆盘中心 (xc, yc) 与半径 r，单精度
TrialRecord = np.dtype([
    ("xc", "f4"), ("yc", "f4"),   # 圆心
    ("r", "f4"),                  # 半径
])

# 内核里使用的整型编码（numba 把模块级常量当作编译期常量）
NO_INTERSECTION = 0
HIT = 1
ESCAPE = 2


class Outcome(IntEnum):
    NO_INTERSECTION = NO_INTERSECTION   # 未击中圆盘，或交点在光源后方
    HIT = HIT                           # 反射光以 t >= 0 落到平板上
    ESCAPE = ESCAPE                     # 反射光向上/向后逃逸，触发 abort
