"""
Square M-QAM Modulation/Demodulation Module / 方形M-QAM调制解调模块

Maps random bits to square M-QAM symbols and recovers symbol indices
by nearest-neighbour decision.
将随机比特映射为方形M-QAM符号，并通过最近邻判决恢复符号索引。
"""

from typing import NamedTuple

import numpy as np

from .config import InvalidConfiguration, check_modulation_order
from .converter import BitConverter


def _frozen(array):
    array.setflags(write=False)
    return array


class SymbolStream(NamedTuple):
    """Transmitted symbols of one run / 单次仿真的发送符号"""
    bits: np.ndarray
    indices: np.ndarray
    i: np.ndarray
    q: np.ndarray

    @property
    def num_symbols(self) -> int:
        return len(self.indices)


class Decision(NamedTuple):
    """Detector output / 判决器输出"""
    index: np.ndarray          # -1 where the decision fell outside the grid
    clipped_index: np.ndarray  # nearest valid constellation point
    in_range: np.ndarray


class QAMModulator:
    """
    Square M-QAM Modulator and Demodulator / 方形M-QAM调制解调器

    Each symbol carries log2(M) bits. The index val in [0, M) is split
    into an I column and a Q row (natural binary, no Gray coding):

    每个符号携带log2(M)比特。索引val被拆分为I列与Q行（自然二进制，非格雷码）：

        I = 2 * (val mod L) - L + 1
        Q = 2 * floor(val / L) - L + 1,   L = sqrt(M)

    Coordinates are the odd integers {-(L-1), ..., -1, 1, ..., L-1}.
    坐标取奇数集合 {-(L-1), ..., -1, 1, ..., L-1}。
    """

    def __init__(self, modulation_order: int = 16):
        """
        Initialize M-QAM modulator / 初始化M-QAM调制器

        Parameters / 参数:
        ----------------
        modulation_order : int, default=16
            Constellation size M, a power of 4 / 星座点数M，须为4的幂
        """
        self.levels = check_modulation_order(modulation_order)
        self.modulation_order = int(modulation_order)
        self.bits_per_symbol = int(np.log2(self.modulation_order))
        self.converter = BitConverter()

    def random_bits(self, num_symbols: int, rng) -> np.ndarray:
        """Fair random bits for num_symbols symbols / 生成等概随机比特"""
        return rng.integers(0, 2, size=num_symbols * self.bits_per_symbol, dtype=np.int8)

    def bits_to_indices(self, bit_stream: np.ndarray) -> np.ndarray:
        """Group bits MSB-first into symbol indices / 按高位在前分组为符号索引"""
        return self.converter.decode(bit_stream, self.bits_per_symbol)

    def indices_to_bits(self, indices: np.ndarray) -> np.ndarray:
        """Expand symbol indices into MSB-first bits / 将符号索引展开为高位在前的比特"""
        return self.converter.encode(indices, self.bits_per_symbol)

    def modulate(self, indices: np.ndarray) -> tuple:
        """
        Map symbol indices to I/Q coordinates / 将符号索引映射为I/Q坐标

        Parameters / 参数:
        ----------------
        indices : np.ndarray (int)
            Symbol indices in [0, M) / 符号索引

        Returns / 返回:
        -------------
        (i_component, q_component) : tuple of np.ndarray (float)
            In-phase and quadrature amplitudes / 同相与正交幅度
        """
        indices = np.asarray(indices, dtype=np.int64)
        L = self.levels
        i_component = 2.0 * (indices % L) - L + 1
        q_component = 2.0 * (indices // L) - L + 1
        return i_component, q_component

    def generate(self, num_symbols: int, rng) -> SymbolStream:
        """
        Generate a random symbol stream / 生成随机符号流

        Draws log2(M) fair bits per symbol and maps them, which gives I and
        Q independently uniform over the L odd levels.
        每符号采样log2(M)个等概比特并映射，使I、Q在L个奇数电平上独立均匀分布。
        """
        if num_symbols < 1:
            raise InvalidConfiguration(
                f"Number of symbols must be at least 1, got {num_symbols}"
            )
        bits = self.random_bits(num_symbols, rng)
        indices = self.bits_to_indices(bits)
        i_component, q_component = self.modulate(indices)
        return SymbolStream(
            bits=_frozen(bits),
            indices=_frozen(indices),
            i=_frozen(i_component),
            q=_frozen(q_component),
        )

    def demodulate(self, i_received: np.ndarray, q_received: np.ndarray) -> Decision:
        """
        Nearest-neighbour decision / 最近邻判决

        Inverts the mapping per axis: idx = round((x + L - 1) / 2).
        Noise may push a sample past the outer levels; such decisions are
        flagged out of range and get index -1 (always an error).
        逐轴求逆：idx = round((x + L - 1) / 2)。噪声可能把样本推出最外层电平，
        此类判决标记为越界且索引为-1（始终计为错误）。

        Parameters / 参数:
        ----------------
        i_received, q_received : np.ndarray (float)
            Received noisy I/Q samples / 接收的含噪I/Q样本

        Returns / 返回:
        -------------
        decision : Decision
            Decoded indices, clipped indices and range mask
            判决索引、截断后的索引与范围掩码
        """
        L = self.levels
        dec_i = np.rint((np.asarray(i_received, dtype=float) + L - 1) / 2.0)
        dec_q = np.rint((np.asarray(q_received, dtype=float) + L - 1) / 2.0)

        # Range check and clip in float, so huge samples never reach the int cast
        in_range = (dec_i >= 0) & (dec_i < L) & (dec_q >= 0) & (dec_q < L)
        clip_i = np.clip(dec_i, 0, L - 1).astype(np.int64)
        clip_q = np.clip(dec_q, 0, L - 1).astype(np.int64)
        clipped_index = clip_q * L + clip_i
        index = np.where(in_range, clipped_index, -1)

        return Decision(index=index, clipped_index=clipped_index, in_range=in_range)

    def get_constellation(self) -> tuple:
        """
        Return ideal constellation points / 返回理想星座图点

        Returns / 返回:
        -------------
        constellation : tuple (i_points, q_points)
            I and Q coordinates ordered by index 0..M-1 / 按索引0..M-1排列的I、Q坐标
        """
        return self.modulate(np.arange(self.modulation_order))
