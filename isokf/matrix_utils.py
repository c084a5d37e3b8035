"""Block concatenation and covariance helpers for dense matrices."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

_log = logging.getLogger(__name__)

# Relative precision used for approximate matrix comparisons.
_APPROX_PRECISION = 1e-12


def _matrix(a: Any) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1) if arr.size else arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError("expected a matrix")
    return arr


def _vector(v: Any) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise ValueError("expected a vector")
    return arr


def _require_two(args: tuple) -> None:
    if len(args) < 2:
        raise TypeError("at least two blocks are required")


def negative_diag(a: Any) -> bool:
    """True if any diagonal entry is negative."""
    return bool((np.diag(_matrix(a)) < 0.0).any())


def is_symmetric(a: Any) -> bool:
    """True if the matrix equals its transpose up to a relative tolerance."""
    mat = _matrix(a)
    if mat.shape[0] != mat.shape[1]:
        return False
    diff = np.linalg.norm(mat - mat.T)
    return bool(diff <= _APPROX_PRECISION * np.linalg.norm(mat))


def is_positive_semidefinite(a: Any) -> bool:
    """True if the matrix is symmetric and has no negative eigenvalue."""
    mat = _matrix(a)
    if not np.all(np.isfinite(mat)) or not is_symmetric(mat):
        return False
    if mat.size == 0:
        return True
    eigenvalues = np.linalg.eigvalsh(symmetrize_covariance(mat))
    scale = max(float(np.abs(eigenvalues).max()), 1.0)
    return bool(eigenvalues.min() >= -_APPROX_PRECISION * scale)


def horcat(*args: Any) -> np.ndarray:
    """Place matrices side by side; with two blocks an empty one is skipped."""
    _require_two(args)
    mats = [_matrix(a) for a in args]
    if len(mats) == 2:
        if mats[0].size == 0:
            return mats[1]
        if mats[1].size == 0:
            return mats[0]
    if any(m.shape[0] != mats[0].shape[0] for m in mats):
        raise ValueError("dimension mismatch!")
    return np.hstack(mats)


def vertcat(*args: Any) -> np.ndarray:
    """Stack matrices on top of each other; with two blocks an empty one is skipped."""
    _require_two(args)
    mats = [_matrix(a) for a in args]
    if len(mats) == 2:
        if mats[0].size == 0:
            return mats[1]
        if mats[1].size == 0:
            return mats[0]
    if any(m.shape[1] != mats[0].shape[1] for m in mats):
        raise ValueError("dimension mismatch!")
    return np.vstack(mats)


def vertcat_vec(*args: Any) -> np.ndarray:
    """Join vectors end to end; with two vectors an empty one is skipped."""
    _require_two(args)
    vecs = [_vector(v) for v in args]
    if len(vecs) == 2:
        if vecs[0].size == 0:
            return vecs[1]
        if vecs[1].size == 0:
            return vecs[0]
    return np.concatenate(vecs)


def horcat_vec(*args: Any) -> np.ndarray:
    """Use equally long vectors as the columns of a matrix.

    With two vectors an empty one is skipped and the other returned as is.
    """
    _require_two(args)
    vecs = [_vector(v) for v in args]
    if len(vecs) == 2:
        if vecs[0].size == 0:
            return vecs[1]
        if vecs[1].size == 0:
            return vecs[0]
    if any(v.size != vecs[0].size for v in vecs):
        raise ValueError("dimension mismatch!")
    return np.column_stack(vecs)


def symmetrize_covariance(sigma: Any) -> np.ndarray:
    mat = _matrix(sigma)
    return 0.5 * (mat + mat.T)


def stabilize_covariance(sigma: Any, eps: float = 1e-12) -> np.ndarray:
    """Symmetrize and add ``eps`` to the diagonal."""
    mat = _matrix(sigma)
    return symmetrize_covariance(mat) + np.eye(*mat.shape) * eps


def split_sigma(sigma: Any, *args: int) -> tuple[np.ndarray, ...]:
    """Split a joint covariance into blocks for two, three or four parts.

    Two dims give (II, JJ, IJ); three give (II, JJ, KK, IJ, IK, JK); four give
    (II, JJ, KK, LL, IJ, IK, JK, IL, JL, KL).
    """
    mat = _matrix(sigma)
    if len(args) not in (2, 3, 4):
        raise TypeError("split_sigma takes two, three or four dimensions")
    dims = [int(d) for d in args]
    if any(d <= 0 for d in dims):
        raise ValueError("Dimension invalid")
    total = sum(dims)
    if mat.shape != (total, total):
        raise ValueError("dimension mismatch!")
    offsets = np.cumsum([0] + dims)
    blocks = [slice(offsets[k], offsets[k + 1]) for k in range(len(dims))]

    def block(r: int, c: int) -> np.ndarray:
        return mat[blocks[r], blocks[c]].copy()

    if len(dims) == 2:
        return block(0, 0), block(1, 1), block(0, 1)
    if len(dims) == 3:
        return block(0, 0), block(1, 1), block(2, 2), block(0, 1), block(0, 2), block(1, 2)
    return (
        block(0, 0), block(1, 1), block(2, 2), block(3, 3),
        block(0, 1), block(0, 2), block(1, 2),
        block(0, 3), block(1, 3), block(2, 3),
    )


def stack_sigma(sigma_ii: Any, sigma_jj: Any, sigma_ij: Any) -> np.ndarray:
    """Assemble a joint covariance from its diagonal blocks and cross block."""
    s_ii, s_jj, s_ij = _matrix(sigma_ii), _matrix(sigma_jj), _matrix(sigma_ij)
    if s_ij.size == 0:
        raise ValueError("empty Sigma_IJ!")
    if s_ii.shape[0] != s_ij.shape[0] or s_ij.shape[1] != s_jj.shape[1]:
        raise ValueError("dimension mismatch!")
    return np.block([[s_ii, s_ij], [s_ij.T, s_jj]])


def nearest_covariance(sigma: Any, eps: float = 1e-6) -> np.ndarray:
    """Replace negative eigenvalues by ``eps``; PSD input is returned unchanged."""
    mat = _matrix(sigma)
    eigenvalues, eigenvectors = np.linalg.eig(symmetrize_covariance(mat))
    d_real = eigenvalues.real
    v_real = eigenvectors.real
    if not (d_real < 0).any():
        return mat
    d_corrected = np.where(d_real < 0, eps, d_real)
    return v_real @ np.diag(d_corrected) @ np.linalg.inv(v_real)


def correct_covariance(sigma: Any) -> tuple[np.ndarray, bool]:
    """Stabilize a covariance and repair it if needed; returns it and whether it is PSD."""
    corrected = stabilize_covariance(sigma)
    if is_positive_semidefinite(corrected):
        return corrected, True
    _log.warning("correct_covariance(): covariance is not PSD")
    corrected = nearest_covariance(corrected, 1e-6)
    return corrected, is_positive_semidefinite(corrected)