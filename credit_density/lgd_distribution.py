"""LGD (Loss Given Default) transforms.

Each transform evaluates E[exp(-u * L)] for the loss L of a single default,
vectorized over complex frequencies ``u``:
- Constant: deterministic loss of amount l
- Gamma: Gamma-distributed loss with mean l and relative variance v
"""

from abc import ABC, abstractmethod
import numpy as np


class LGDTransform(ABC):
    """Abstract base class for loss-given-default transforms."""

    distribution_type = 'unknown'

    @abstractmethod
    def __call__(self, u: np.ndarray, l: float, lgd_variance: float = 0.0) -> np.ndarray:
        """Evaluate the transform of the loss on default.

        Args:
            u: Complex frequencies (any shape)
            l: Mean loss amount on default
            lgd_variance: Relative variance of the loss amount

        Returns:
            Complex array with the shape of ``u``
        """
        pass


class ConstantLGDTransform(LGDTransform):
    """Deterministic loss on default: exp(-u * l).

    Ignores ``lgd_variance``.
    """

    distribution_type = 'constant'

    def __call__(self, u: np.ndarray, l: float, lgd_variance: float = 0.0) -> np.ndarray:
        return np.exp(-np.asarray(u) * l)

    def __repr__(self) -> str:
        return "ConstantLGDTransform()"


class GammaLGDTransform(LGDTransform):
    """Gamma-distributed loss on default with mean l and relative variance v.

    Transform: (1 + v * u * l) ** (-1 / v).  A zero variance is the
    deterministic loss, exp(-u * l).
    """

    distribution_type = 'gamma'

    def __call__(self, u: np.ndarray, l: float, lgd_variance: float = 0.0) -> np.ndarray:
        u = np.asarray(u)
        if lgd_variance == 0:
            return np.exp(-u * l)
        return (1.0 + lgd_variance * u * l) ** (-1.0 / lgd_variance)

    def __repr__(self) -> str:
        return "GammaLGDTransform()"


def create_lgd_transform(lgd_type: str) -> LGDTransform:
    """Factory function to create LGD transforms.

    Args:
        lgd_type: Type of transform ('constant', 'gamma')

    Returns:
        LGDTransform instance

    Examples:
        >>> create_lgd_transform('constant')
        >>> create_lgd_transform('gamma')
    """
    lgd_type = lgd_type.lower()

    if lgd_type == 'constant':
        return ConstantLGDTransform()
    elif lgd_type == 'gamma':
        return GammaLGDTransform()
    else:
        raise ValueError(f"Unknown LGD transform type: {lgd_type}. "
                         f"Choose from: 'constant', 'gamma'")
