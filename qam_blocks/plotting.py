"""
Visualization / 可视化

Constellation diagram, received waveform and error-rate curve.
星座图、接收波形与误码率曲线。
"""

import os

import matplotlib.pyplot as plt
import numpy as np

from .modulator import QAMModulator


def plot_constellation(result, ax=None):
    """Scatter of received I/Q samples over the ideal points / 接收I/Q样本散点图（叠加理想星座点）"""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    ideal_i, ideal_q = QAMModulator(result.config.modulation_order).get_constellation()

    ax.scatter(result.noisy_i, result.noisy_q, c='blue', alpha=0.5, s=10, label='Received / 接收')
    ax.scatter(ideal_i, ideal_q, c='red', marker='x', s=40, label='Ideal / 理想')
    ax.set_title(f"{result.config.modulation_order}-QAM Constellation, "
                 f"SNR={result.config.snr_db:g} dB / 星座图")
    ax.set_xlabel("In-phase / 同相")
    ax.set_ylabel("Quadrature / 正交")
    ax.axhline(0, color='gray', linewidth=0.5)
    ax.axvline(0, color='gray', linewidth=0.5)
    ax.grid(True, alpha=0.3)
    ax.axis('equal')
    ax.legend(loc='upper right')
    return ax


def plot_waveform(result, ax=None):
    """Received I-values against sample index / 接收I值随采样序号变化"""
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    waveform = result.waveform
    ax.plot(np.arange(len(waveform)), waveform, color='blue')
    ax.set_title("Received Signal (Time Domain) / 接收信号（时域）")
    ax.set_xlabel("Sample Index / 采样序号")
    ax.set_ylabel("Amplitude / 幅度")
    ax.grid(True, alpha=0.3)
    return ax


def plot_error_curve(curve, ax=None, modulation_order=None):
    """
    Semilog error rate versus SNR / 误码率-信噪比半对数曲线

    Zero error rates cannot be drawn on a log axis and are left out.
    零误码率无法在对数坐标上绘制，因此被略去。
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))

    snr_db = curve['snr_db']
    for key, style, label in (
        ('ber_estimate', '--b*', 'SER (BER estimate) / 误符号率'),
        ('bit_error_rate', '--g*', 'BER (bit-level) / 误码率'),
        ('ser_theory', '-r+', 'SER theory / 理论误符号率'),
    ):
        values = np.asarray(curve[key], dtype=float)
        mask = values > 0
        ax.semilogy(snr_db[mask], values[mask], style, label=label)

    title = "Error Rate vs SNR / 误码率-信噪比"
    if modulation_order is not None:
        title = f"{modulation_order}-QAM " + title
    ax.set_title(title)
    ax.set_xlabel("SNR (dB)")
    ax.set_ylabel("Error Rate / 误码率")
    ax.grid(True, which='both', alpha=0.3)
    ax.legend()
    return ax


def _save_figure(filename, figsize, draw):
    """Draw on a fresh figure and write it; the figure is always closed / 在新图上绘制并保存，始终关闭图像"""
    fig, ax = plt.subplots(figsize=figsize)
    try:
        draw(ax)
        fig.tight_layout()
        fig.savefig(filename, dpi=150, bbox_inches='tight')
    finally:
        plt.close(fig)
    return filename


def save_figures(result, output_dir="generated", curve=None):
    """
    Save constellation, waveform and optional error curve as PNG
    将星座图、波形图及可选的误码率曲线保存为PNG

    Returns / 返回:
    -------------
    paths : list of str
        Written files / 已写入的文件
    """
    os.makedirs(output_dir, exist_ok=True)
    M = result.config.modulation_order
    tag = f"M{M}_SNR{result.config.snr_db:g}"

    paths = [
        _save_figure(os.path.join(output_dir, f"constellation_{tag}.png"), (6, 6),
                     lambda ax: plot_constellation(result, ax)),
        _save_figure(os.path.join(output_dir, f"waveform_{tag}.png"), (8, 4),
                     lambda ax: plot_waveform(result, ax)),
    ]

    if curve is not None:
        paths.append(_save_figure(os.path.join(output_dir, f"error_curve_M{M}.png"), (8, 5),
                                  lambda ax: plot_error_curve(curve, ax, modulation_order=M)))

    return paths
