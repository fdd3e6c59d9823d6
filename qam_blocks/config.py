"""
Simulation Configuration / 仿真配置

Explicit parameter structure for one QAM transmission run.
单次QAM传输仿真的显式参数结构。
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .utils import noise_std_from_snr


class InvalidConfiguration(ValueError):
    """Raised before any symbol is generated / 在生成符号之前抛出的配置错误"""


def check_modulation_order(modulation_order) -> int:
    """
    Validate square M-QAM order / 校验方形M-QAM阶数

    M must be a power of 4 so that both sqrt(M) (levels per axis) and
    log2(M) (bits per symbol) are integers.
    M必须是4的幂，使每轴电平数sqrt(M)与每符号比特数log2(M)均为整数。

    Returns / 返回:
    -------------
    levels : int
        Levels per axis (>= 2) / 每轴电平数（>=2）
    """
    if isinstance(modulation_order, bool) or not isinstance(modulation_order, (int, np.integer)):
        raise InvalidConfiguration(
            f"Modulation order must be an integer, got {modulation_order!r}"
        )
    M = int(modulation_order)
    if M < 4 or M & (M - 1) != 0 or int(math.log2(M)) % 2 != 0:
        raise InvalidConfiguration(
            f"Modulation order must be a power of 4 (4, 16, 64, 256, ...), got {M}"
        )
    return math.isqrt(M)


@dataclass
class SimulationConfig:
    """
    Parameters of one simulation run / 单次仿真参数

    When num_symbols is given it overrides the bit budget; otherwise
    num_symbols = floor(num_bits / log2(M)).
    给定num_symbols时覆盖比特预算，否则按 floor(num_bits / log2(M)) 计算。
    """
    modulation_order: int = 16
    snr_db: float = 10.0
    num_bits: int = 1000
    num_symbols: Optional[int] = None
    waveform_length: int = 50
    seed: Optional[int] = None

    @property
    def levels(self) -> int:
        return check_modulation_order(self.modulation_order)

    @property
    def bits_per_symbol(self) -> int:
        return int(math.log2(self.modulation_order))

    @property
    def symbol_count(self) -> int:
        if self.num_symbols is not None:
            return int(self.num_symbols)
        return int(self.num_bits) // self.bits_per_symbol

    def validate(self) -> "SimulationConfig":
        """Check all fields, raise InvalidConfiguration on the first bad one."""
        check_modulation_order(self.modulation_order)

        if self.symbol_count < 1:
            if self.num_symbols is not None:
                raise InvalidConfiguration(
                    f"Number of symbols must be at least 1, got {self.num_symbols}"
                )
            raise InvalidConfiguration(
                f"{self.num_bits} bits give zero symbols at "
                f"{self.bits_per_symbol} bits/symbol ({self.modulation_order}-QAM)"
            )

        if self.waveform_length < 0:
            raise InvalidConfiguration(
                f"Waveform length must be non-negative, got {self.waveform_length}"
            )

        snr_db = float(self.snr_db)
        if math.isnan(snr_db) or snr_db == -math.inf:
            raise InvalidConfiguration(f"SNR must be a number or +inf dB, got {self.snr_db}")
        if math.isinf(noise_std_from_snr(snr_db)):
            raise InvalidConfiguration(
                f"SNR {self.snr_db} dB is too low, the noise level is not finite"
            )

        return self

    def make_rng(self) -> np.random.Generator:
        # Seedable source so runs are reproducible
        return np.random.default_rng(self.seed)
