"""
Square M-QAM over AWGN Blocks / 方形M-QAM加性高斯白噪声信道仿真模块集

This package contains modular implementations of the components of a
teaching demo: random symbol generation, Gaussian noise sampling, AWGN
channel simulation, nearest-neighbour detection and error-rate estimation.

本包包含教学演示各组件的模块化实现：随机符号生成、高斯噪声采样、
AWGN信道仿真、最近邻判决以及误码率估计。
"""

from .config import InvalidConfiguration, SimulationConfig
from .converter import BitConverter
from .gaussian import box_muller, standard_normal
from .modulator import Decision, QAMModulator, SymbolStream
from .channel import AWGNChannel
from .simulation import SimulationResult, run_simulation, simulate_error_curve
from .utils import *

__version__ = "0.1.0"

__all__ = [
    'InvalidConfiguration',
    'SimulationConfig',
    'BitConverter',
    'box_muller',
    'standard_normal',
    'QAMModulator',
    'SymbolStream',
    'Decision',
    'AWGNChannel',
    'SimulationResult',
    'run_simulation',
    'simulate_error_curve',
    'snr_db_to_linear',
    'noise_std_from_snr',
    'calculate_symbol_error_rate',
    'calculate_bit_error_rate',
    'calculate_theoretical_ser',
    'q_function',
]
