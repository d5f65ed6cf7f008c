"""Tests for parallel.py and config.py - work splitting and settings."""

import pytest
import numpy as np

from credit_density import DensityConfig, compute_x_min
from credit_density.parallel import get_chunks, parallel_fill


class TestChunks:
    """Tests for get_chunks."""

    def test_covers_range(self):
        """Test that chunks tile the range without overlap."""
        chunks = get_chunks(10, 3)
        assert [(c.start, c.stop) for c in chunks] == [(0, 3), (3, 6), (6, 9), (9, 10)]

    def test_empty(self):
        """Test that an empty range gives no chunks."""
        assert get_chunks(0, 4) == []

    def test_invalid_chunk_size(self):
        """Test that chunk_size must be positive."""
        with pytest.raises(ValueError, match="chunk_size"):
            get_chunks(10, 0)


class TestParallelFill:
    """Tests for parallel_fill."""

    def test_matches_serial(self):
        """Test that threaded evaluation equals direct evaluation."""
        x = np.linspace(0, 10, 1001)
        out = np.empty_like(x)
        parallel_fill(out, lambda chunk: np.sin(x[chunk]) * np.exp(-x[chunk]), 50, 4)
        assert np.allclose(out, np.sin(x) * np.exp(-x), rtol=1e-14, atol=0)

    def test_two_dimensional_output(self):
        """Test filling rows of a matrix."""
        out = np.empty((5, 3))
        parallel_fill(out, lambda chunk: np.full((chunk.stop - chunk.start, 3), chunk.start), 2, 2)
        assert np.array_equal(out[:, 0], [0, 0, 2, 2, 4])

    def test_empty_output(self):
        """Test that an empty output needs no work."""
        out = np.empty(0)
        assert parallel_fill(out, lambda chunk: 1 / 0, 4, 2).shape == (0,)

    def test_propagates_errors(self):
        """Test that a failing chunk raises in the caller."""
        def _fail(chunk):
            raise RuntimeError("chunk failed")

        with pytest.raises(RuntimeError, match="chunk failed"):
            parallel_fill(np.empty(10), _fail, 2, 3)


class TestDensityConfig:
    """Tests for DensityConfig."""

    def test_defaults(self):
        """Test the fixed output grid."""
        config = DensityConfig()
        assert config.num_x == 512
        assert config.x_max == 0.0
        assert config.num_workers is None

    def test_invalid_workers(self):
        """Test that num_workers must be positive."""
        with pytest.raises(ValueError, match="num_workers"):
            DensityConfig(num_workers=0)

    def test_invalid_chunk_size(self):
        """Test that chunk_size must be positive."""
        with pytest.raises(ValueError, match="chunk_size"):
            DensityConfig(chunk_size=0)

    def test_from_env(self, monkeypatch):
        """Test overriding worker settings from the environment."""
        monkeypatch.setenv("CREDIT_DENSITY_NUM_WORKERS", "3")
        monkeypatch.setenv("CREDIT_DENSITY_CHUNK_SIZE", "16")
        config = DensityConfig.from_env()
        assert config.num_workers == 3
        assert config.chunk_size == 16

    def test_from_env_unset(self, monkeypatch):
        """Test defaults when the environment is silent."""
        monkeypatch.delenv("CREDIT_DENSITY_NUM_WORKERS", raising=False)
        monkeypatch.delenv("CREDIT_DENSITY_CHUNK_SIZE", raising=False)
        assert DensityConfig.from_env() == DensityConfig()


class TestLossBounds:
    """Tests for compute_x_min."""

    def test_reference_portfolio(self):
        """Test -num_loans * pd * (1 + 3 * vol) * 3."""
        assert compute_x_min(100000.0, 0.02, 0.5) == pytest.approx(-15000.0)

    def test_zero_loans(self):
        """Test that an empty portfolio collapses the interval."""
        assert compute_x_min(0.0, 0.02, 0.5) == 0.0
