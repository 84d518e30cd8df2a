"""
Error hierarchy for point tensor algebra.

Every error is a deterministic usage violation raised at the call boundary.
The concrete classes also derive from the matching builtin so callers that
only catch ``ValueError`` or ``IndexError`` keep working.
"""


class TensorAlgebraError(Exception):
    """Base class for pointtensor-specific exceptions."""


class DomainError(TensorAlgebraError, IndexError):
    """A multi-index entry outside [0, 3], a wrong-length multi-index or a bad flat offset."""


class RankMismatchError(TensorAlgebraError, ValueError):
    """Operands with incompatible rank or index types."""


class LabelCountMismatchError(TensorAlgebraError, ValueError):
    """Number of labels differs from the tensor rank."""

    def __init__(self, expected: int, got: int):
        super().__init__(f"Expected {expected} labels for a rank-{expected} tensor, got {got}")
        self.expected = expected
        self.got = got


class InvalidContractionPairError(TensorAlgebraError, ValueError):
    """Index positions (or a repeated label) that cannot be contracted."""
