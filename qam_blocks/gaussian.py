"""
Gaussian Noise Sampler / 高斯噪声采样器

Standard-normal samples from uniform draws via the Box-Muller transform.
利用Box-Muller变换由均匀分布采样生成标准正态分布样本。

    z = sqrt(-2 ln u) * cos(2 pi v),  u, v ~ U(0, 1)

Only the cosine branch is used; the paired sine sample is discarded.
仅使用余弦分支，丢弃成对的正弦样本。
"""

import numpy as np


def _nonzero_uniform(rng, size=None):
    """
    Draw uniforms in (0, 1), re-drawing exact zeros / 采样(0,1)均匀数，遇0重采

    Generator.random() samples [0, 1); a zero would feed log(0) below.
    Generator.random() 的取值区间为[0, 1)，0会导致下面出现log(0)。
    """
    if size is None:
        u = rng.random()
        while u == 0.0:
            u = rng.random()
        return u

    u = rng.random(size)
    zeros = u == 0.0
    while np.any(zeros):
        u[zeros] = rng.random(np.count_nonzero(zeros))
        zeros = u == 0.0
    return u


def box_muller(rng=None):
    """
    Infinite lazy stream of N(0, 1) samples / 无限惰性标准正态样本流

    Each sample draws two fresh uniforms, nothing else is carried over.
    每个样本重新采样两个均匀数，不保留其他状态。

    Parameters / 参数:
    ----------------
    rng : np.random.Generator, optional
        Uniform random source / 均匀随机源

    Yields / 生成:
    ------------
    sample : float
        Standard-normal sample / 标准正态样本
    """
    if rng is None:
        rng = np.random.default_rng()
    while True:
        u = _nonzero_uniform(rng)
        v = _nonzero_uniform(rng)
        yield float(np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v))


def standard_normal(rng, size):
    """
    Vectorised Box-Muller / 向量化Box-Muller

    Parameters / 参数:
    ----------------
    rng : np.random.Generator
        Uniform random source / 均匀随机源
    size : int or tuple
        Output shape / 输出形状

    Returns / 返回:
    -------------
    samples : np.ndarray (float)
        Independent N(0, 1) samples / 独立标准正态样本
    """
    u = _nonzero_uniform(rng, size)
    v = _nonzero_uniform(rng, size)
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)
