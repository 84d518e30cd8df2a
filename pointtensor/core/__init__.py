"""Core point tensor algebra: index codec, storage, contraction and arithmetic"""

from .constants import CLEAR_LABELS, DIMENSION, FREE_LABEL, FREE_LABELS, IndexType
from .exceptions import (
    DomainError,
    InvalidContractionPairError,
    LabelCountMismatchError,
    RankMismatchError,
    TensorAlgebraError,
)
from .indexing import flat_size, index, index_to_indices, ipow
from .tensors import Tensor

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
    "ipow",
    "flat_size",
    "index",
    "index_to_indices",
]
