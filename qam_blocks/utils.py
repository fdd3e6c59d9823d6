"""
Utility Functions for Digital Communications / 数字通信工具函数

SNR conversion, noise level and error-rate computation for square M-QAM.
方形M-QAM的信噪比换算、噪声电平与误码率计算。
"""

import math

import numpy as np


def snr_db_to_linear(snr_db):
    """
    Convert SNR from decibels to linear scale / 将信噪比由分贝转换为线性值

    SNR_linear = 10^(SNR_dB / 10)

    Evaluated in numpy so that out-of-range inputs saturate to inf or 0
    instead of raising OverflowError.
    使用numpy计算，超出范围的输入饱和为inf或0，而不是抛出OverflowError。
    """
    with np.errstate(over="ignore", under="ignore"):
        return np.power(10.0, np.asarray(snr_db, dtype=float) / 10.0)


def noise_std_from_snr(snr_db):
    """
    Per-axis noise standard deviation / 每轴噪声标准差

    Equal-energy two-dimensional AWGN model:
    sigma = 1 / sqrt(2 * SNR_linear), so the complex noise power is 1/SNR.

    等能量二维AWGN模型：sigma = 1 / sqrt(2 × SNR线性值)，复噪声功率为1/SNR。

    Parameters / 参数:
    ----------------
    snr_db : float
        Signal-to-noise ratio in dB / 信噪比（分贝）

    Returns / 返回:
    -------------
    sigma : float
        Noise standard deviation, 0 when SNR_linear overflows to inf and
        inf when it underflows to 0
        噪声标准差，SNR线性值上溢为inf时为0，下溢为0时为inf
    """
    snr_linear = float(snr_db_to_linear(snr_db))
    if math.isinf(snr_linear):
        return 0.0
    if snr_linear == 0.0:
        return math.inf
    return 1.0 / math.sqrt(2.0 * snr_linear)


def calculate_symbol_error_rate(tx_indices, rx_indices):
    """
    Calculate symbol error rate (SER) / 计算误符号率

    SER = (Number of wrong symbols) / (Total number of symbols)
    误符号率 = 错误符号数 / 符号总数

    Out-of-range decisions carry index -1 and never match a transmitted
    index, so they are always counted as errors. This figure is reported
    as the BER proxy of the demo.
    越界判决的索引为-1，与任何发送索引都不相等，因此总是计为错误。
    该值作为演示中的误码率近似值。

    Parameters / 参数:
    ----------------
    tx_indices : np.ndarray (int)
        Transmitted symbol indices / 发送符号索引
    rx_indices : np.ndarray (int)
        Decided symbol indices / 判决符号索引

    Returns / 返回:
    -------------
    ser : float
        Symbol error rate [0, 1] / 误符号率，范围[0,1]
    """
    tx_indices = np.asarray(tx_indices)
    rx_indices = np.asarray(rx_indices)
    if len(tx_indices) == 0:
        return 0.0
    errors = np.count_nonzero(tx_indices != rx_indices)
    return float(errors / len(tx_indices))


def calculate_bit_error_rate(tx_bits, rx_bits):
    """
    Calculate practical bit error rate (BER) / 计算实际误码率

    BER = (Number of bit errors) / (Total number of bits transmitted)
    误码率 = 错误比特数 / 传输总比特数
    """
    # Ensure same length / 确保长度一致
    min_length = min(len(tx_bits), len(rx_bits))
    tx_aligned = np.asarray(tx_bits[:min_length])
    rx_aligned = np.asarray(rx_bits[:min_length])

    errors = np.count_nonzero(tx_aligned != rx_aligned)
    return float(errors / min_length) if min_length > 0 else 0.0


def q_function(x):
    """Gaussian tail probability Q(x) = 0.5 * erfc(x / sqrt(2)) / 高斯右尾概率"""
    from scipy.special import erfc
    return 0.5 * erfc(np.asarray(x, dtype=float) / np.sqrt(2.0))


def calculate_theoretical_ser(modulation_order, snr_db):
    """
    Theoretical symbol error rate of square M-QAM / 方形M-QAM理论误符号率

    Decision boundaries sit halfway between adjacent odd levels (distance 1),
    so each axis errs with P = 2 (1 - 1/L) Q(1/sigma), and
    SER = 1 - (1 - P)^2. This is closed-form theory, not a detection count.

    判决边界位于相邻奇数电平中点（距离为1），每轴出错概率 P = 2(1 - 1/L)Q(1/sigma)，
    SER = 1 - (1 - P)^2。此为闭式理论值，而非判决计数。

    Parameters / 参数:
    ----------------
    modulation_order : int
        Constellation size M / 星座点数M
    snr_db : float or np.ndarray
        Signal-to-noise ratio in dB / 信噪比（分贝）

    Returns / 返回:
    -------------
    ser : float or np.ndarray
        Theoretical symbol error probability / 理论误符号概率
    """
    levels = np.sqrt(modulation_order)
    snr_db = np.asarray(snr_db, dtype=float)
    with np.errstate(divide="ignore"):
        sigma = 1.0 / np.sqrt(2.0 * snr_db_to_linear(snr_db))
        p_axis = 2.0 * (1.0 - 1.0 / levels) * q_function(1.0 / sigma)
    ser = 1.0 - (1.0 - p_axis) ** 2
    return float(ser) if ser.ndim == 0 else ser
