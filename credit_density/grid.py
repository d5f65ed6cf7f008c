"""Frequency and loss-value grids for the cosine expansion.

The cosine expansion over ``[x_min, x_max]`` samples the characteristic
function at the angular frequencies

    u_k = k * pi / (x_max - x_min),    k = 0, ..., num_u - 1

and reconstructs the density on an evenly spaced loss grid covering the
same interval.  Frequencies are carried on the imaginary axis (``i * u_k``)
so that transforms written in moment-generating form, such as
``exp(-u * l)``, evaluate to characteristic-function values.
"""

from typing import Iterator
import numpy as np


def compute_du(x_min: float, x_max: float) -> float:
    """Frequency spacing pi / (x_max - x_min).

    A collapsed interval gives an infinite spacing rather than an error.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.pi / np.float64(x_max - x_min))


def compute_cp(du: float) -> float:
    """Cosine-expansion normalizing constant 2 / (x_max - x_min)."""
    return 2.0 * du / np.pi


def get_u(du: float, index: int) -> float:
    """Angular frequency of the index-th sample."""
    with np.errstate(invalid='ignore'):
        return float(np.float64(du) * index)


class FrequencyDomain:
    """Complex frequency samples for a cosine expansion over [x_min, x_max].

    Iterating yields ``num_u`` complex points ``i * u_k``.  The sequence is
    restartable: every iteration produces the same points.
    """

    def __init__(self, num_u: int, x_min: float, x_max: float):
        self.num_u = num_u
        self.x_min = x_min
        self.x_max = x_max
        self.du = compute_du(x_min, x_max)

    @property
    def frequencies(self) -> np.ndarray:
        """Real angular frequencies u_k as an array."""
        with np.errstate(invalid='ignore'):
            return np.arange(self.num_u, dtype=float) * self.du

    def to_array(self) -> np.ndarray:
        """Complex frequency points i * u_k as an array."""
        with np.errstate(invalid='ignore'):
            return 1j * self.frequencies

    def __len__(self) -> int:
        return self.num_u

    def __iter__(self) -> Iterator[complex]:
        for index in range(self.num_u):
            yield complex(0.0, get_u(self.du, index))

    def __repr__(self) -> str:
        return f"FrequencyDomain(num_u={self.num_u}, x_min={self.x_min}, x_max={self.x_max})"


class ValueDomain:
    """Evenly spaced loss points covering [x_min, x_max], both ends included.

    Restartable and a pure function of ``(num_x, x_min, x_max)``.
    """

    def __init__(self, num_x: int, x_min: float, x_max: float):
        self.num_x = num_x
        self.x_min = x_min
        self.x_max = x_max

    def to_array(self) -> np.ndarray:
        """Loss points as an array."""
        with np.errstate(invalid='ignore'):
            return np.linspace(self.x_min, self.x_max, self.num_x)

    def __len__(self) -> int:
        return self.num_x

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_array().tolist())

    def __repr__(self) -> str:
        return f"ValueDomain(num_x={self.num_x}, x_min={self.x_min}, x_max={self.x_max})"


def get_u_domain(num_u: int, x_min: float, x_max: float) -> FrequencyDomain:
    """Frequency sample points for the expansion over [x_min, x_max]."""
    return FrequencyDomain(num_u, x_min, x_max)


def get_x_domain(num_x: int, x_min: float, x_max: float) -> ValueDomain:
    """Loss sample points covering [x_min, x_max]."""
    return ValueDomain(num_x, x_min, x_max)
