from __future__ import annotations

import numpy as np

_SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
_SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)


def _correlate3(arr: np.ndarray, k: np.ndarray) -> np.ndarray:
    # Interior only: output is (h-2, w-2)
    return (
        k[0, 0] * arr[:-2, :-2]
        + k[0, 1] * arr[:-2, 1:-1]
        + k[0, 2] * arr[:-2, 2:]
        + k[1, 0] * arr[1:-1, :-2]
        + k[1, 1] * arr[1:-1, 1:-1]
        + k[1, 2] * arr[1:-1, 2:]
        + k[2, 0] * arr[2:, :-2]
        + k[2, 1] * arr[2:, 1:-1]
        + k[2, 2] * arr[2:, 2:]
    )


def sobel_magnitude(gray: np.ndarray) -> np.ndarray:
    """Gradient magnitude of a 2D intensity array, clamped to [0, 255].

    Border pixels are left at 0.
    """
    gray = np.asarray(gray, dtype=np.float64)
    out = np.zeros_like(gray)
    if gray.shape[0] < 3 or gray.shape[1] < 3:
        return out

    gx = _correlate3(gray, _SOBEL_X)
    gy = _correlate3(gray, _SOBEL_Y)
    out[1:-1, 1:-1] = np.clip(np.rint(np.hypot(gx, gy)), 0, 255)
    return out
