"""Fourier-cosine inversion of a characteristic function.

On a truncated interval [a, b] a density is expanded in the cosine basis

    f(x) ~ sum'_k F_k * cos(u_k * (x - a)),    u_k = k * pi / (b - a)
    F_k  = 2 / (b - a) * Re(phi(u_k) * exp(-i * u_k * a))

where the prime halves the k = 0 term.  The characteristic function
``phi`` is supplied already sampled at the frequencies of
:class:`credit_density.grid.FrequencyDomain`.  Integrating the basis in
closed form gives the distribution function and partial expectations from
the same coefficients.
"""

import logging
from typing import Callable, Iterator, Optional, Sequence, Tuple, Union
import numpy as np

from .config import DEFAULT_CHUNK_SIZE
from .grid import ValueDomain, compute_cp, compute_du
from .parallel import parallel_fill

logger = logging.getLogger(__name__)

XDomain = Union[ValueDomain, Sequence[float], np.ndarray]
Basis = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


def get_discrete_cf(x_min: float, x_max: float, cf: Sequence[complex]) -> Tuple[np.ndarray, np.ndarray]:
    """Cosine-expansion coefficients of a sampled characteristic function.

    Args:
        x_min: Lower truncation bound
        x_max: Upper truncation bound
        cf: Characteristic function at the frequency domain points

    Returns:
        Tuple of (angular frequencies u_k, real coefficients F_k with the
        k = 0 coefficient already halved)
    """
    cf = np.asarray(cf, dtype=complex)
    du = compute_du(x_min, x_max)
    cp = compute_cp(du)
    with np.errstate(invalid='ignore', over='ignore'):
        u = np.arange(cf.shape[0], dtype=float) * du
        coefficients = np.real(cf * np.exp(-1j * u * x_min)) * cp
    if coefficients.size > 0:
        coefficients[0] *= 0.5
    return u, coefficients


def _density_basis(u: np.ndarray, dx: np.ndarray, x: np.ndarray) -> np.ndarray:
    return np.cos(np.outer(dx, u))


def _cdf_basis(u: np.ndarray, dx: np.ndarray, x: np.ndarray) -> np.ndarray:
    # integral of cos(u_k * (y - a)) over [a, x]
    basis = np.empty((dx.shape[0], u.shape[0]))
    if u.shape[0] > 0:
        basis[:, 0] = dx
        basis[:, 1:] = np.sin(np.outer(dx, u[1:])) / u[1:]
    return basis


def _partial_expectation_basis(u: np.ndarray, dx: np.ndarray, x: np.ndarray) -> np.ndarray:
    # integral of y * cos(u_k * (y - a)) over [a, x]
    basis = np.empty((dx.shape[0], u.shape[0]))
    if u.shape[0] > 0:
        a = x - dx
        basis[:, 0] = 0.5 * (x ** 2 - a ** 2)
        angle = np.outer(dx, u[1:])
        basis[:, 1:] = (x[:, np.newaxis] * np.sin(angle) / u[1:]
                        + (np.cos(angle) - 1.0) / u[1:] ** 2)
    return basis


def _as_value_array(x_domain: XDomain) -> np.ndarray:
    if isinstance(x_domain, ValueDomain):
        return x_domain.to_array()
    return np.asarray(x_domain, dtype=float).reshape(-1)


def _expand(x_min: float, x_max: float, x_domain: XDomain, cf: Sequence[complex],
            basis: Basis, chunk_size: int, num_workers: Optional[int]) -> np.ndarray:
    x = _as_value_array(x_domain)
    u, coefficients = get_discrete_cf(x_min, x_max, cf)

    def _evaluate(chunk: slice) -> np.ndarray:
        x_chunk = x[chunk]
        with np.errstate(invalid='ignore', over='ignore', divide='ignore'):
            return basis(u, x_chunk - x_min, x_chunk) @ coefficients

    result = np.empty(x.shape[0])
    return parallel_fill(result, _evaluate, chunk_size, num_workers)


def compute_density(x_min: float, x_max: float, x_domain: XDomain, cf: Sequence[complex],
                    chunk_size: int = DEFAULT_CHUNK_SIZE,
                    num_workers: Optional[int] = None) -> np.ndarray:
    """Density at every point of ``x_domain`` as an array.

    Args:
        x_min: Lower truncation bound
        x_max: Upper truncation bound
        x_domain: Points at which to evaluate the density
        cf: Characteristic function sampled at the frequency domain points
        chunk_size: Output points per unit of parallel work
        num_workers: Threads used for evaluation (None = CPU count)

    Returns:
        Array of densities aligned with ``x_domain``
    """
    logger.debug("Inverting %d cf samples on [%s, %s]", len(cf), x_min, x_max)
    return _expand(x_min, x_max, x_domain, cf, _density_basis, chunk_size, num_workers)


def get_density(x_min: float, x_max: float, x_domain: XDomain, cf: Sequence[complex],
                chunk_size: int = DEFAULT_CHUNK_SIZE,
                num_workers: Optional[int] = None) -> Iterator[float]:
    """Lazily yield the density at every point of ``x_domain``, in order.

    The returned generator is single-use.
    """
    yield from compute_density(x_min, x_max, x_domain, cf,
                               chunk_size=chunk_size, num_workers=num_workers).tolist()


def get_cdf(x_min: float, x_max: float, x_domain: XDomain, cf: Sequence[complex],
            chunk_size: int = DEFAULT_CHUNK_SIZE,
            num_workers: Optional[int] = None) -> np.ndarray:
    """Distribution function P(X <= x) at every point of ``x_domain``."""
    return _expand(x_min, x_max, x_domain, cf, _cdf_basis, chunk_size, num_workers)


def get_partial_expectation(x_min: float, x_max: float, x_domain: XDomain, cf: Sequence[complex],
                            chunk_size: int = DEFAULT_CHUNK_SIZE,
                            num_workers: Optional[int] = None) -> np.ndarray:
    """Partial expectation E[X; X <= x] at every point of ``x_domain``."""
    return _expand(x_min, x_max, x_domain, cf, _partial_expectation_basis,
                   chunk_size, num_workers)
