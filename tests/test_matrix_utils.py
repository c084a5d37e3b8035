import numpy as np
import pytest

from isokf import matrix_utils as mu


def _spd(n, seed=0):
    rng = np.random.default_rng(seed)
    a = rng.normal(size=(n, n))
    return a @ a.T + n * np.eye(n)


def test_negative_diag():
    assert mu.negative_diag(np.diag([1.0, -2.0, 3.0]))
    assert not mu.negative_diag(np.eye(3))


def test_is_symmetric():
    assert mu.is_symmetric(_spd(4))
    assert not mu.is_symmetric(np.array([[1.0, 2.0], [0.0, 1.0]]))
    assert not mu.is_symmetric(np.ones((2, 3)))


def test_is_positive_semidefinite():
    assert mu.is_positive_semidefinite(_spd(3))
    assert not mu.is_positive_semidefinite(np.array([[1.0, 2.0], [2.0, 1.0]]))
    assert not mu.is_positive_semidefinite(np.array([[1.0, 1.0], [0.0, 1.0]]))


def test_horcat_two_and_shapes():
    a, b = np.ones((2, 3)), np.zeros((2, 1))
    c = mu.horcat(a, b)
    assert c.shape == (2, 4)
    np.testing.assert_array_equal(c[:, :3], a)
    np.testing.assert_array_equal(c[:, 3:], b)


def test_horcat_skips_empty():
    b = np.arange(6.0).reshape(2, 3)
    np.testing.assert_array_equal(mu.horcat(np.zeros((0, 0)), b), b)
    np.testing.assert_array_equal(mu.horcat(b, np.zeros((0, 0))), b)


def test_horcat_four_blocks_and_mismatch():
    blocks = [np.full((2, k), float(k)) for k in (1, 2, 3, 4)]
    c = mu.horcat(*blocks)
    assert c.shape == (2, 10)
    np.testing.assert_array_equal(c[:, 3:6], blocks[2])
    with pytest.raises(ValueError):
        mu.horcat(np.ones((2, 2)), np.ones((3, 2)))
    with pytest.raises(ValueError):
        mu.horcat(np.ones((2, 2)), np.ones((2, 2)), np.ones((3, 2)))


def test_vertcat():
    a, b, k = np.ones((1, 3)), np.zeros((2, 3)), np.full((1, 3), 5.0)
    c = mu.vertcat(a, b, k)
    assert c.shape == (4, 3)
    np.testing.assert_array_equal(c[3], k[0])
    np.testing.assert_array_equal(mu.vertcat(np.zeros((0, 0)), b), b)
    with pytest.raises(ValueError):
        mu.vertcat(np.ones((2, 2)), np.ones((2, 3)))


def test_vertcat_vec():
    v = mu.vertcat_vec([1.0, 2.0], [3.0], [4.0, 5.0])
    np.testing.assert_array_equal(v, [1.0, 2.0, 3.0, 4.0, 5.0])
    np.testing.assert_array_equal(mu.vertcat_vec([], [7.0]), [7.0])


def test_horcat_vec():
    m = mu.horcat_vec([1.0, 2.0], [3.0, 4.0], [5.0, 6.0])
    assert m.shape == (2, 3)
    np.testing.assert_array_equal(m[:, 1], [3.0, 4.0])
    np.testing.assert_array_equal(mu.horcat_vec([], [1.0, 2.0]), [1.0, 2.0])
    with pytest.raises(ValueError):
        mu.horcat_vec([1.0], [1.0, 2.0])


def test_too_few_blocks():
    with pytest.raises(TypeError):
        mu.horcat(np.eye(2))


def test_symmetrize_and_stabilize():
    a = np.array([[1.0, 2.0], [0.0, 1.0]])
    s = mu.symmetrize_covariance(a)
    assert mu.is_symmetric(s)
    np.testing.assert_allclose(s, s.T)
    st = mu.stabilize_covariance(a, 0.5)
    np.testing.assert_allclose(st, s + 0.5 * np.eye(2))


def test_split_stack_roundtrip_two():
    sigma = _spd(5)
    s_ii, s_jj, s_ij = mu.split_sigma(sigma, 2, 3)
    assert s_ii.shape == (2, 2) and s_jj.shape == (3, 3) and s_ij.shape == (2, 3)
    np.testing.assert_allclose(mu.stack_sigma(s_ii, s_jj, s_ij), sigma)


def test_split_three_and_four():
    sigma = _spd(6, seed=1)
    s_ii, s_jj, s_kk, s_ij, s_ik, s_jk = mu.split_sigma(sigma, 1, 2, 3)
    np.testing.assert_array_equal(s_kk, sigma[3:, 3:])
    np.testing.assert_array_equal(s_ik, sigma[:1, 3:])
    np.testing.assert_array_equal(s_jk, sigma[1:3, 3:])
    parts = mu.split_sigma(sigma, 1, 2, 2, 1)
    assert len(parts) == 10
    np.testing.assert_array_equal(parts[3], sigma[5:, 5:])
    np.testing.assert_array_equal(parts[9], sigma[3:5, 5:])


def test_split_errors():
    with pytest.raises(ValueError):
        mu.split_sigma(np.eye(4), 2, 3)
    with pytest.raises(ValueError):
        mu.split_sigma(np.eye(3), 0, 3)
    with pytest.raises(TypeError):
        mu.split_sigma(np.eye(3), 3)


def test_stack_errors():
    with pytest.raises(ValueError):
        mu.stack_sigma(np.eye(2), np.eye(2), np.zeros((0, 0)))
    with pytest.raises(ValueError):
        mu.stack_sigma(np.eye(2), np.eye(3), np.zeros((2, 2)))


def test_nearest_covariance():
    sigma = _spd(3)
    np.testing.assert_array_equal(mu.nearest_covariance(sigma), sigma)
    bad = np.array([[1.0, 2.0], [2.0, 1.0]])
    fixed = mu.nearest_covariance(bad, 1e-6)
    assert np.linalg.eigvalsh(mu.symmetrize_covariance(fixed)).min() > 0


def test_correct_covariance():
    sigma, ok = mu.correct_covariance(np.eye(3))
    assert ok
    np.testing.assert_allclose(sigma, np.eye(3), atol=1e-9)
    fixed, ok = mu.correct_covariance(np.array([[1.0, 2.0], [2.0, 1.0]]))
    assert ok
    assert mu.is_positive_semidefinite(fixed)