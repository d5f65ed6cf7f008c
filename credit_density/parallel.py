"""Chunked parallel-for over the leading axis of an output array.

Work is split into contiguous chunks, each evaluated by one task that writes
a disjoint slice of the output.  No value is reduced across chunks, so the
result is bit-identical for any worker count.  numpy releases the GIL inside
its vectorized kernels, which makes a thread pool sufficient.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from multiprocessing import cpu_count
from typing import Callable, List, Optional
import numpy as np


def get_chunks(length: int, chunk_size: int) -> List[slice]:
    """Split range(length) into contiguous slices of at most chunk_size."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    return [slice(start, min(start + chunk_size, length))
            for start in range(0, length, chunk_size)]


def parallel_fill(out: np.ndarray, func: Callable[[slice], np.ndarray],
                  chunk_size: int, num_workers: Optional[int] = None) -> np.ndarray:
    """Set ``out[chunk] = func(chunk)`` for every chunk of the leading axis.

    Args:
        out: Preallocated output array
        func: Evaluates one chunk; must only read shared state
        chunk_size: Number of leading-axis entries per task
        num_workers: Number of threads (None = CPU count)

    Returns:
        The filled ``out`` array
    """
    chunks = get_chunks(out.shape[0], chunk_size)
    workers = min(num_workers or cpu_count(), len(chunks))

    if workers <= 1:
        for chunk in chunks:
            out[chunk] = func(chunk)
        return out

    def _fill(chunk: slice) -> None:
        out[chunk] = func(chunk)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_fill, chunk) for chunk in chunks]
        for future in as_completed(futures):
            future.result()

    return out
