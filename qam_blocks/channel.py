"""
AWGN Channel Simulation / 加性高斯白噪声信道仿真

Simulates the effects of Additive White Gaussian Noise (AWGN) on the
in-phase and quadrature components of transmitted symbols.
仿真加性高斯白噪声(AWGN)对发送符号同相与正交分量的影响。
"""

import numpy as np

from .gaussian import standard_normal
from .utils import noise_std_from_snr


class AWGNChannel:
    """
    Additive White Gaussian Noise Channel / 加性高斯白噪声信道

    I and Q are perturbed by independent Gaussian noise with the same
    standard deviation sigma = 1 / sqrt(2 * SNR_linear).

    I、Q分量受到独立同标准差的高斯噪声扰动，sigma = 1 / sqrt(2 * SNR线性值)。
    """

    def __init__(self, rng=None):
        """
        Initialize AWGN channel / 初始化AWGN信道

        Parameters / 参数:
        ----------------
        rng : np.random.Generator, optional
            Random source for the noise samples / 噪声样本随机源
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def simulate(self, i_component, q_component, snr_db):
        """
        Simulate channel with AWGN / 仿真带AWGN的信道

        Parameters / 参数:
        ----------------
        i_component, q_component : np.ndarray (float)
            Transmitted I/Q amplitudes / 发送的I/Q幅度
        snr_db : float
            Signal-to-noise ratio in dB (may be negative or +inf)
            信噪比（分贝，可为负或+inf）

        Returns / 返回:
        -------------
        (i_received, q_received) : tuple of np.ndarray
            Components corrupted by noise / 被噪声污染的分量
        """
        i_component = np.asarray(i_component, dtype=float)
        q_component = np.asarray(q_component, dtype=float)

        noise_std = noise_std_from_snr(snr_db)
        if noise_std <= 0:
            return i_component.copy(), q_component.copy()

        noise_i = noise_std * standard_normal(self.rng, i_component.shape)
        noise_q = noise_std * standard_normal(self.rng, q_component.shape)
        return i_component + noise_i, q_component + noise_q
