"""
Index codec between multi-indices and flat component offsets.

Components of a rank-R tensor are stored in one flat array of 4^R entries.
A multi-index (i_0, ..., i_{R-1}) maps to its offset by reading the indices
as the digits of a base-4 number, most significant first:

    offset = Σ_k i_k · 4^(R-1-k)

This is the same ordering numpy uses for a C-contiguous array of shape
(4,) * R, so ``components.reshape((4,) * R)[i_0, ..., i_{R-1}]`` addresses the
same entry as ``components[index(indices, R)]``.

Examples:
    >>> index((1, 2), 2)
    6
    >>> index_to_indices(6, 2)
    (1, 2)
"""

import operator
from collections.abc import Sequence

from .constants import DIMENSION
from .exceptions import DomainError


def ipow(base: int, exponent: int) -> int:
    """
    Integer power for non-negative exponents.

    Raises:
        ValueError: If the exponent is negative.
    """
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, got {exponent}")

    result = 1
    for _ in range(exponent):
        result *= base
    return result


def flat_size(rank: int) -> int:
    """Number of components of a rank-``rank`` tensor (4^rank)"""
    if rank < 0:
        raise ValueError(f"Rank must be non-negative, got {rank}")
    return ipow(DIMENSION, rank)


def validate_indices(indices: Sequence[int], rank: int) -> tuple[int, ...]:
    """
    Check a multi-index against the tensor rank and the index range.

    Args:
        indices: One integer per index position.
        rank: Rank of the tensor being addressed.

    Returns:
        The multi-index as a tuple of plain ints.

    Raises:
        DomainError: If the length differs from ``rank`` or an entry lies
            outside [0, DIMENSION - 1].
        TypeError: If an entry is not an integer.
    """
    checked = tuple(operator.index(i) for i in indices)
    if len(checked) != rank:
        raise DomainError(f"Expected {rank} indices, got {len(checked)}")

    for position, value in enumerate(checked):
        if not 0 <= value < DIMENSION:
            raise DomainError(
                f"Index {value} at position {position} outside [0, {DIMENSION - 1}]"
            )
    return checked


def index(indices: Sequence[int], rank: int) -> int:
    """Convert a multi-index to its flat storage offset"""
    offset = 0
    for value in validate_indices(indices, rank):
        offset = offset * DIMENSION + value
    return offset


def index_to_indices(offset: int, rank: int) -> tuple[int, ...]:
    """
    Convert a flat storage offset back to its multi-index.

    Digits are extracted most significant first, so
    ``index(index_to_indices(n, rank), rank) == n`` for every valid offset.

    Raises:
        DomainError: If the offset lies outside [0, 4^rank).
    """
    offset = operator.index(offset)
    size = flat_size(rank)
    if not 0 <= offset < size:
        raise DomainError(f"Offset {offset} outside [0, {size})")

    indices = []
    for k in range(rank - 1, -1, -1):
        place = ipow(DIMENSION, k)
        indices.append(offset // place)
        offset %= place
    return tuple(indices)
