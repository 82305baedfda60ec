"""
Splitting a file list into per-worker batches
"""
from typing import List, Sequence, Tuple


Batch = Tuple[str, ...]


def partition(files: Sequence[str], worker_count: int) -> List[Batch]:
    """
    Split ``files`` into contiguous, disjoint batches

    The effective number of batches is ``min(worker_count, len(files))``.
    Every batch holds ``len(files) // batches`` files except the last one,
    which also takes the remainder.

    Args:
        files: Files to distribute
        worker_count: Number of available workers, at least 1

    Returns:
        List of batches; empty if ``files`` is empty

    Raises:
        ValueError: If worker_count is smaller than 1
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")

    effective = min(worker_count, len(files))
    if effective == 0:
        return []

    size = len(files) // effective
    batches = [tuple(files[i * size:(i + 1) * size]) for i in range(effective - 1)]
    batches.append(tuple(files[(effective - 1) * size:]))
    return batches
