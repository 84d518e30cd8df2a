"""
Fixed constants and index conventions for point tensors.

Every tensor in this package lives at a single point of a 4-dimensional
spacetime, so the per-index range is fixed rather than configurable. This
module is the single place the rest of the package reads those conventions
from.

Index Conventions:
    - Indices run over 0, 1, 2, 3 (time first)
    - Contravariant (upper) indices: vector type, T^μ
    - Covariant (lower) indices: covector type, T_μ
    - UP/DOWN are synonyms for CONTRAVARIANT/COVARIANT

Abstract Labels:
    Positions can carry single-character labels for Einstein summation.
    The free labels "0", "." and "-" never contract, even when repeated;
    any other label repeated at exactly two positions is summed over.
"""

from enum import Enum
from typing import Any

DIMENSION = 4  # Spacetime dimension, range of every index

FREE_LABEL = "."  # Default label of every index position
FREE_LABELS = frozenset({"0", ".", "-"})
CLEAR_LABELS = None  # Passed to Tensor.label() to reset all labels


class IndexType(Enum):
    """
    Variance of a single tensor index.

    The integer values follow the usual sign convention: -1 for covariant
    (lower) and +1 for contravariant (upper) indices. ``DOWN`` and ``UP`` are
    aliases, so ``IndexType.UP is IndexType.CONTRAVARIANT``.

    Examples:
        >>> IndexType.parse("up")
        <IndexType.CONTRAVARIANT: 1>
        >>> IndexType.parse(-1)
        <IndexType.COVARIANT: -1>
    """

    COVARIANT = -1
    CONTRAVARIANT = 1
    DOWN = -1
    UP = 1

    @classmethod
    def parse(cls, value: Any) -> "IndexType":
        """
        Convert a member, a name ('covariant', 'up', ...) or a sign to IndexType.

        Raises:
            ValueError: If the value does not name an index type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"Invalid index type: {value!r}")

    @property
    def opposite(self) -> "IndexType":
        """Index type with the other variance"""
        return IndexType(-self.value)

    @property
    def symbol(self) -> str:
        """'^' for upper, '_' for lower indices"""
        return "^" if self is IndexType.CONTRAVARIANT else "_"
