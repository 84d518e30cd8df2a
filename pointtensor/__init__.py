"""
Point Tensor Algebra for Relativity Numerics
============================================

Tensor components at a single point of 4-dimensional spacetime, with
per-index covariant/contravariant variance and algebra following the
Einstein summation convention.

Core Capabilities:
    - Dense component storage addressed by multi-indices
    - Traces over any pair of index positions
    - Abstract index labels with automatic contraction of repeated labels
    - Scalar scaling, addition, subtraction and contracted products

Usage:
    >>> import numpy as np
    >>> from pointtensor import Tensor, IndexType
    >>> u = Tensor(1, [IndexType.UP])
    >>> u.components[:] = [1.0, 0.0, 0.0, 0.0]
    >>> g = Tensor.from_array(np.diag([-1.0, 1.0, 1.0, 1.0]), ["down", "down"])
    >>> float(g("ab") * u("a") * u("b"))  # g_ab u^a u^b
    -1.0

Scope:
    Metrics, connections, coordinate transformations, derivatives and grid
    iteration belong to calling code; this library is their algebraic core.
"""

__version__ = "0.2.0"

from .core import (
    CLEAR_LABELS,
    DIMENSION,
    FREE_LABEL,
    FREE_LABELS,
    DomainError,
    IndexType,
    InvalidContractionPairError,
    LabelCountMismatchError,
    RankMismatchError,
    Tensor,
    TensorAlgebraError,
)

__all__ = [
    "Tensor",
    "IndexType",
    "DIMENSION",
    "FREE_LABEL",
    "FREE_LABELS",
    "CLEAR_LABELS",
    "TensorAlgebraError",
    "DomainError",
    "RankMismatchError",
    "LabelCountMismatchError",
    "InvalidContractionPairError",
]
