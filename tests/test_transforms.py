import math

import numpy as np
import pytest

from percepthash import ConfigError, EmptySampleError, perceptual_hash, wavelet_hash
from percepthash.hashes.perceptual import dct2
from percepthash.hashes.wavelet import haar_decompose
from percepthash.imaging.edges import sobel_magnitude
from percepthash.imaging.pixels import mean, median


def naive_dct(p):
    n = p.shape[0]
    out = np.zeros((n, n))
    for u in range(n):
        for v in range(n):
            s = 0.0
            for x in range(n):
                for y in range(n):
                    s += (
                        p[y, x]
                        * math.cos((2 * x + 1) * u * math.pi / (2 * n))
                        * math.cos((2 * y + 1) * v * math.pi / (2 * n))
                    )
            au = 1 / math.sqrt(2) if u == 0 else 1.0
            av = 1 / math.sqrt(2) if v == 0 else 1.0
            out[v, u] = au * av * s / 4
    return out


def test_dct2_matches_direct_summation():
    rng = np.random.default_rng(3)
    p = rng.integers(0, 256, size=(8, 8)).astype(np.float64)
    np.testing.assert_allclose(dct2(p), naive_dct(p), atol=1e-9)


def test_dct2_constant_has_only_dc():
    d = dct2(np.full((16, 16), 10.0))
    assert d[0, 0] == pytest.approx(10.0 * 16 * 16 / 2 / 4)
    d[0, 0] = 0.0
    np.testing.assert_allclose(d, 0.0, atol=1e-9)


def test_phash_dc_bit_is_always_zero(textured, noise_pair):
    for im in (textured, *noise_pair):
        assert perceptual_hash(im).bits[0] is False


def test_phash_rejects_bad_factor(textured):
    with pytest.raises(ConfigError):
        perceptual_hash(textured, highfreq_factor=0)


def test_haar_single_level():
    a = np.array([[1.0, 3.0], [5.0, 7.0]])
    out = haar_decompose(a, 1)
    # rows: [2, -1], [6, -1]; columns: [4, -1], [-2, 0]
    np.testing.assert_allclose(out, [[4.0, -1.0], [-2.0, 0.0]])


def test_haar_low_band_is_block_mean():
    rng = np.random.default_rng(5)
    a = rng.normal(size=(16, 16))
    low = haar_decompose(a, 4)[:4, :4]
    expected = a.reshape(4, 4, 4, 4).mean(axis=(1, 3))
    np.testing.assert_allclose(low, expected, atol=1e-12)


def test_haar_rejects_bad_target():
    with pytest.raises(ValueError):
        haar_decompose(np.zeros((12, 12)), 5)


def test_wavelet_mode_and_scale_validation(textured):
    with pytest.raises(ConfigError):
        wavelet_hash(textured, mode="db4")
    with pytest.raises(ConfigError):
        wavelet_hash(textured, scale=3)
    assert len(wavelet_hash(textured, scale=1)) == 64
    assert len(wavelet_hash(textured, hash_size=6, scale=2)) == 36


def test_statistics():
    assert mean(np.array([1.0, 2.0, 6.0])) == 3.0
    assert median(np.array([5.0, 1.0, 3.0])) == 3.0
    assert median(np.array([4.0, 1.0, 3.0, 2.0])) == 2.5
    with pytest.raises(EmptySampleError):
        mean(np.array([]))
    with pytest.raises(EmptySampleError):
        median(np.array([]))


def test_sobel_magnitude():
    step = np.zeros((5, 6))
    step[:, 3:] = 100.0
    out = sobel_magnitude(step)
    assert out.shape == step.shape
    # Border stays zero
    assert not out[0].any() and not out[-1].any()
    assert not out[:, 0].any() and not out[:, -1].any()
    # Response clamped at 255 across the edge, zero in flat areas
    assert out[2, 2] == 255 and out[2, 3] == 255
    assert out[2, 1] == 0
    assert sobel_magnitude(np.ones((2, 2))).sum() == 0
