# pencel_map/metrics.py
from __future__ import annotations

"""
Colour distance metrics for palette matching.

Every metric maps (src[N,3] u8, cands[M,3] u8) -> float64 [N,M]. All are
symmetric, non-negative and zero only for identical RGB colours.

  redmean   : weighted RGB Euclidean, weights follow the mean red level (default)
  euclidean : plain RGB Euclidean
  lab       : Euclidean in CIE Lab (D65)
  ciede2000 : CIEDE2000 in CIE Lab (D65)
"""

from typing import Callable, Dict, List

import numpy as np
from numpy.typing import NDArray

from .colour_convert import delta_e2000_pair, rgb_to_lab
from .core_types import Colour, coerce_to_rgb_tuple
from .errors import InvalidParameterError

DistanceMatrix = Callable[[np.ndarray, np.ndarray], NDArray[np.float64]]


def _pairwise_rgb(src: np.ndarray, cands: np.ndarray):
    s = np.asarray(src, dtype=np.float64).reshape(-1, 3)[:, None, :]
    c = np.asarray(cands, dtype=np.float64).reshape(-1, 3)[None, :, :]
    return s, c


def redmean_distance_matrix(src: np.ndarray, cands: np.ndarray) -> NDArray[np.float64]:
    s, c = _pairwise_rgb(src, cands)
    rbar = 0.5 * (s[..., 0] + c[..., 0])
    dr = s[..., 0] - c[..., 0]
    dg = s[..., 1] - c[..., 1]
    db = s[..., 2] - c[..., 2]
    return np.sqrt(
        (2.0 + rbar / 256.0) * dr * dr
        + 4.0 * dg * dg
        + (2.0 + (255.0 - rbar) / 256.0) * db * db
    )


def euclidean_distance_matrix(src: np.ndarray, cands: np.ndarray) -> NDArray[np.float64]:
    s, c = _pairwise_rgb(src, cands)
    diff = s - c
    return np.sqrt(np.sum(diff * diff, axis=2))


def lab_distance_matrix(src: np.ndarray, cands: np.ndarray) -> NDArray[np.float64]:
    s_lab = rgb_to_lab(np.asarray(src).reshape(-1, 3))
    c_lab = rgb_to_lab(np.asarray(cands).reshape(-1, 3))
    diff = s_lab[:, None, :] - c_lab[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))


def ciede2000_distance_matrix(src: np.ndarray, cands: np.ndarray) -> NDArray[np.float64]:
    s_lab = rgb_to_lab(np.asarray(src).reshape(-1, 3))
    c_lab = rgb_to_lab(np.asarray(cands).reshape(-1, 3))
    out = np.empty((s_lab.shape[0], c_lab.shape[0]), dtype=np.float64)
    for i in range(s_lab.shape[0]):
        for j in range(c_lab.shape[0]):
            out[i, j] = delta_e2000_pair(s_lab[i], c_lab[j])
    # identical RGB must score exactly zero
    s_u8 = np.asarray(src).reshape(-1, 3)
    c_u8 = np.asarray(cands).reshape(-1, 3)
    same = np.all(s_u8[:, None, :] == c_u8[None, :, :], axis=2)
    out[same] = 0.0
    return out


METRICS: Dict[str, DistanceMatrix] = {
    "redmean": redmean_distance_matrix,
    "euclidean": euclidean_distance_matrix,
    "lab": lab_distance_matrix,
    "ciede2000": ciede2000_distance_matrix,
}


def get_metric(name: str) -> DistanceMatrix:
    key = name.strip().lower()
    if key not in METRICS:
        raise InvalidParameterError(
            f"unknown metric '{name}'. Available: {', '.join(metric_names())}"
        )
    return METRICS[key]


def metric_names() -> List[str]:
    return sorted(METRICS.keys())


def colour_distance(a: Colour, b: Colour, metric: str = "redmean") -> float:
    """Distance between two single colours (packed ints or RGB triples)."""
    fn = get_metric(metric)
    src = np.array([coerce_to_rgb_tuple(a)], dtype=np.uint8)
    cand = np.array([coerce_to_rgb_tuple(b)], dtype=np.uint8)
    return float(fn(src, cand)[0, 0])


__all__ = [
    "DistanceMatrix",
    "METRICS",
    "redmean_distance_matrix",
    "euclidean_distance_matrix",
    "lab_distance_matrix",
    "ciede2000_distance_matrix",
    "get_metric",
    "metric_names",
    "colour_distance",
]
