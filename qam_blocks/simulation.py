"""
M-QAM Transmission Simulation / M-QAM传输仿真

Complete chain: Bits → Symbol Mapping → AWGN Channel → Decision → Error Rate.
完整链路：比特 → 符号映射 → AWGN信道 → 判决 → 误码率。
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .channel import AWGNChannel
from .config import SimulationConfig
from .modulator import Decision, QAMModulator, SymbolStream
from .utils import (
    calculate_bit_error_rate,
    calculate_symbol_error_rate,
    calculate_theoretical_ser,
    noise_std_from_snr,
)


@dataclass
class SimulationResult:
    """
    Outputs of one run / 单次仿真输出

    `ber` is the symbol error rate used as a stand-in for the bit error
    rate; `bit_error_rate` is the true bit-level comparison.
    `ber`为代替误码率的误符号率；`bit_error_rate`为真实的比特级比较结果。
    """
    config: SimulationConfig
    tx: SymbolStream
    noisy_i: np.ndarray
    noisy_q: np.ndarray
    decision: Decision
    noise_std: float
    symbol_error_rate: float
    bit_error_rate: float
    theoretical_ser: float

    @property
    def ber(self) -> float:
        """Symbol-error proxy for the bit error rate / 以误符号率近似的误码率"""
        return self.symbol_error_rate

    @property
    def waveform(self) -> np.ndarray:
        """Leading noisy I-values for the time-domain trace / 时域波形用的前若干个含噪I值"""
        return self.noisy_i[:self.config.waveform_length]

    @property
    def out_of_range(self) -> int:
        """Decisions that fell off the grid / 落在星座网格之外的判决数"""
        return int(np.count_nonzero(~self.decision.in_range))

    @property
    def nearest_point_ser(self) -> float:
        """SER when off-grid samples snap to the nearest edge point / 越界样本归入最近边缘点时的误符号率"""
        return calculate_symbol_error_rate(self.tx.indices, self.decision.clipped_index)

    def format_ber(self, digits: int = 5) -> str:
        """BER estimate as fixed-point text / 定点格式的误码率估计"""
        return f"{self.ber:.{digits}f}"

    def summary(self) -> str:
        """One-line human-readable report / 单行可读报告"""
        return (
            f"{self.config.modulation_order}-QAM at SNR {self.config.snr_db:g} dB: "
            f"BER ~ {self.format_ber()} "
            f"(symbol error rate, approximates the bit error rate; "
            f"{self.out_of_range} off-grid decisions counted as errors, "
            f"nearest-point SER {self.nearest_point_ser:.5f})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Metrics for the console report / 控制台报告用的指标"""
        return {
            'modulation_order': self.config.modulation_order,
            'snr_db': float(self.config.snr_db),
            'num_symbols': self.tx.num_symbols,
            'noise_std': float(self.noise_std),
            'ber_estimate': float(self.symbol_error_rate),
            'bit_error_rate': float(self.bit_error_rate),
            'ser_theory': float(self.theoretical_ser),
            'ser_nearest_point': float(self.nearest_point_ser),
            'out_of_range': self.out_of_range,
        }


def run_simulation(config: SimulationConfig, rng: Optional[np.random.Generator] = None) -> SimulationResult:
    """
    M-QAM over AWGN simulation / AWGN信道下的M-QAM仿真

    Parameters / 参数:
    ----------------
    config : SimulationConfig
        Run parameters, validated before any symbol is drawn
        仿真参数，在采样任何符号之前完成校验
    rng : np.random.Generator, optional
        Random source; defaults to one seeded from config.seed
        随机源，默认由config.seed生成

    Returns / 返回:
    -------------
    result : SimulationResult
    """
    config.validate()
    if rng is None:
        rng = config.make_rng()

    modulator = QAMModulator(config.modulation_order)
    channel = AWGNChannel(rng)

    # ==========================================
    # Transmitter Side / 发送端
    # ==========================================
    tx = modulator.generate(config.symbol_count, rng)

    # ==========================================
    # Channel / 信道
    # ==========================================
    noisy_i, noisy_q = channel.simulate(tx.i, tx.q, config.snr_db)

    # ==========================================
    # Receiver Side / 接收端
    # ==========================================
    decision = modulator.demodulate(noisy_i, noisy_q)

    ser = calculate_symbol_error_rate(tx.indices, decision.index)
    rx_bits = modulator.indices_to_bits(decision.clipped_index)
    ber_bits = calculate_bit_error_rate(tx.bits, rx_bits)

    return SimulationResult(
        config=config,
        tx=tx,
        noisy_i=noisy_i,
        noisy_q=noisy_q,
        decision=decision,
        noise_std=noise_std_from_snr(config.snr_db),
        symbol_error_rate=ser,
        bit_error_rate=ber_bits,
        theoretical_ser=calculate_theoretical_ser(config.modulation_order, config.snr_db),
    )


def simulate_error_curve(config: SimulationConfig, snr_db_list: Sequence[float],
                         trials: int = 20,
                         rng: Optional[np.random.Generator] = None) -> Dict[str, np.ndarray]:
    """
    Error rate versus SNR, averaged over repeated runs / 误码率随信噪比变化（多次平均）

    Every trial is an independent run of `run_simulation`; a single run is
    too noisy to show the trend.
    每次试验都是一次独立的仿真，单次结果波动过大，不足以显示趋势。

    Returns / 返回:
    -------------
    curve : dict of np.ndarray
        'snr_db', 'ber_estimate', 'bit_error_rate', 'ser_theory'
    """
    if trials < 1:
        raise ValueError(f"trials must be at least 1, got {trials}")
    config.validate()
    if rng is None:
        rng = config.make_rng()

    snr_values = np.asarray(snr_db_list, dtype=float)
    ser = np.zeros_like(snr_values)
    ber = np.zeros_like(snr_values)

    for k, snr_db in enumerate(snr_values):
        point = replace(config, snr_db=float(snr_db))
        for _ in range(trials):
            result = run_simulation(point, rng)
            ser[k] += result.symbol_error_rate
            ber[k] += result.bit_error_rate
    ser /= trials
    ber /= trials

    return {
        'snr_db': snr_values,
        'ber_estimate': ser,
        'bit_error_rate': ber,
        'ser_theory': np.asarray(calculate_theoretical_ser(config.modulation_order, snr_values)),
    }
