"""
Bit / Symbol-Index Converter / 比特-符号索引转换器

Handles conversion between integer symbol indices and binary bit streams.
处理整数符号索引与二进制比特流之间的转换。
"""

import numpy as np


class BitConverter:
    """
    Index-bit converter, MSB first / 索引-比特转换器（高位在前）

    Each symbol index in [0, M) is written as log2(M) binary digits.
    Shifts are used instead of np.unpackbits so that orders above
    256-QAM (more than 8 bits per symbol) are supported.

    每个[0, M)内的符号索引写成log2(M)位二进制数。
    使用移位而非np.unpackbits，以支持高于256-QAM（每符号超过8比特）的阶数。
    """

    def encode(self, indices, bits_per_symbol):
        """
        Encode symbol indices to binary bit stream / 将符号索引编码为二进制比特流

        Parameters / 参数:
        ----------------
        indices : np.ndarray (int)
            Symbol indices in [0, 2**bits_per_symbol) / 符号索引
        bits_per_symbol : int
            Number of bits per symbol / 每符号比特数

        Returns / 返回:
        -------------
        bit_stream : np.ndarray (int, 0/1)
            Flattened binary bit stream / 展平的二进制比特流
        """
        indices = np.asarray(indices, dtype=np.int64).reshape(-1)
        shifts = np.arange(bits_per_symbol - 1, -1, -1)

        # (n_symbols, bits_per_symbol) bit matrix / 比特矩阵
        bit_matrix = (indices[:, None] >> shifts) & 1
        return bit_matrix.reshape(-1).astype(np.int8)

    def decode(self, bit_stream, bits_per_symbol):
        """
        Decode binary bit stream to symbol indices / 将二进制比特流解码为符号索引

        Parameters / 参数:
        ----------------
        bit_stream : np.ndarray (int, 0/1)
            Binary bit stream / 二进制比特流
        bits_per_symbol : int
            Number of bits per symbol / 每符号比特数

        Returns / 返回:
        -------------
        indices : np.ndarray (int)
            Reconstructed symbol indices / 重建的符号索引
        """
        bit_stream = np.asarray(bit_stream, dtype=np.int64).reshape(-1)

        # Ensure bit_stream length is multiple of bits_per_symbol / 确保长度是每符号比特数的倍数
        length = len(bit_stream)
        if length % bits_per_symbol != 0:
            padding = bits_per_symbol - (length % bits_per_symbol)
            bit_stream = np.concatenate([bit_stream, np.zeros(padding, dtype=np.int64)])

        bit_matrix = bit_stream.reshape(-1, bits_per_symbol)
        weights = 1 << np.arange(bits_per_symbol - 1, -1, -1)
        return bit_matrix @ weights
