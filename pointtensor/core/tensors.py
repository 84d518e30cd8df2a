"""
Point tensor algebra with abstract index labels and Einstein summation.

This module provides the Tensor class, which holds the components of a tensor
at a single point of 4-dimensional spacetime together with the variance of
each index. It implements the algebra needed by relativity numerics built on
top of it: traces over index pairs, abstract index labelling with automatic
contraction, and arithmetic whose products follow the Einstein summation
convention.

Key Features:
    - Dense storage of 4^rank real components in a flat numpy array
    - Bounds-checked component access through the index codec
    - Positional contraction (trace) over any pair of index positions
    - Abstract labels: repeated labels are summed over automatically
    - Scalar scaling, addition, subtraction and outer products

Mathematical Conventions:
    - Indices run over 0, 1, 2, 3
    - Components are stored most-significant-index first, so the flat array
      reshaped to (4,) * rank is the usual nested component array
    - Contraction of positions i, j: C[...] = Σ_k T[..., k (at i), ..., k (at j), ...]
    - Products contract every label shared by exactly two positions

Examples:
    >>> delta = Tensor.delta()
    >>> float(delta.contract(0, 1))
    4.0

    >>> v = Tensor(1, [IndexType.UP])
    >>> w = Tensor(1, [IndexType.DOWN])
    >>> v.components[:] = [1.0, 2.0, 3.0, 4.0]
    >>> w.components[:] = [1.0, 0.0, 0.0, 1.0]
    >>> float(v("a") * w("a"))  # v^a w_a
    5.0

Out of Scope:
    Metrics, connection coefficients, coordinate transformations and grids
    are handled by calling code; a Tensor is always one point's components.
"""

import numbers
import operator
from collections.abc import Sequence
from typing import Any, Union

import numpy as np

from .constants import CLEAR_LABELS, DIMENSION, FREE_LABEL, FREE_LABELS, IndexType
from .exceptions import InvalidContractionPairError, LabelCountMismatchError, RankMismatchError
from .indexing import flat_size, index, index_to_indices
from .tensors_deprecate import _deprecated

MultiIndex = Union[int, Sequence[int]]
TypeSpec = Union[IndexType, str, int]


class Tensor:
    """
    Components of a rank-R tensor at one point, with per-index variance.

    A Tensor owns three sequences: the index types (fixed at construction),
    the abstract labels (changed only by :meth:`label`), and the 4^R
    components (zero on construction). No two instances ever share storage;
    every operation either returns a new Tensor or is an explicitly in-place
    operator (``*=``, ``+=``, ``-=``) that mutates only the receiver.

    Attributes:
        rank (int): Number of indices
        types (tuple[IndexType, ...]): Variance of each index position
        labels (tuple[str, ...]): Abstract index labels, "." when free
        components (np.ndarray): Writable flat view of the storage

    Examples:
        >>> # Mixed tensor T^a_b
        >>> T = Tensor(2, [IndexType.UP, IndexType.DOWN])
        >>> T[0, 0] = 1.0
        >>> T.get_component((0, 0))
        1.0

        >>> # Riemann-like tensor contracted twice: R^a_a^b_b
        >>> R = Tensor(4, ["up", "down", "up", "down"])
        >>> R("aabb").rank
        0
    """

    # Let numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, rank: int, types: Sequence[TypeSpec]):
        """
        Create a zero-filled tensor.

        Args:
            rank: Number of indices. Must be a non-negative integer.
            types: One index type per position; IndexType members, their
                names ("covariant", "up", ...) or signs (-1, +1).

        Raises:
            ValueError: If the rank is negative or a type is not recognised.
            RankMismatchError: If the number of types differs from the rank.
        """
        rank = operator.index(rank)
        if rank < 0:
            raise ValueError(f"Rank must be non-negative, got {rank}")

        parsed = tuple(IndexType.parse(t) for t in types)
        if len(parsed) != rank:
            raise RankMismatchError(f"Rank {rank} requires {rank} index types, got {len(parsed)}")

        self._rank = rank
        self._types = parsed
        self._labels = [FREE_LABEL] * rank
        self._components = np.zeros(flat_size(rank))

    @classmethod
    def _from_parts(
        cls, types: Sequence[IndexType], labels: Sequence[str], components: Any
    ) -> "Tensor":
        """Build a tensor owning copies of the given sequences"""
        tensor = cls(len(types), types)
        tensor._labels = list(labels)
        tensor._components[:] = np.ravel(components)
        return tensor

    @classmethod
    def from_array(cls, array: Any, types: Sequence[TypeSpec]) -> "Tensor":
        """
        Create a tensor from nested or flat component data.

        Args:
            array: Components with 4^rank entries, typically of shape
                (4,) * rank. Data is copied.
            types: One index type per position.

        Raises:
            ValueError: If the number of entries is wrong or the data
                contains NaN or infinite values.
        """
        values = np.asarray(array, dtype=float)
        tensor = cls(len(types), types)

        if values.size != tensor._components.size:
            raise ValueError(
                f"Expected {tensor._components.size} components for rank {tensor.rank}, "
                f"got {values.size}"
            )
        if not np.all(np.isfinite(values)):
            raise ValueError("Tensor components contain NaN or infinite values")

        tensor._components[:] = values.ravel()
        return tensor

    @classmethod
    def delta(cls) -> "Tensor":
        """Kronecker delta δ^a_b (identity map, one upper and one lower index)"""
        return cls.from_array(np.eye(DIMENSION), [IndexType.UP, IndexType.DOWN])

    # ------------------------------------------------------------------
    # Storage and component access
    # ------------------------------------------------------------------

    @property
    def rank(self) -> int:
        """Tensor rank"""
        return self._rank

    @property
    def types(self) -> tuple[IndexType, ...]:
        """Index types, one per position"""
        return self._types

    @property
    def labels(self) -> tuple[str, ...]:
        """Current abstract index labels"""
        return tuple(self._labels)

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the nested component array"""
        return (DIMENSION,) * self._rank

    @property
    def components(self) -> np.ndarray:
        """
        Writable flat view of all components.

        Low-level bulk access for trusted callers such as evolution loops that
        update every component at once. Writes through the view skip the
        per-index bounds checks of :meth:`set_component`. The view does not
        own the data and cannot be resized, so the storage size invariant
        holds whatever the caller does with it.
        """
        return self._components.view()

    @property
    def components_readonly(self) -> np.ndarray:
        """Read-only flat view of all components"""
        view = self._components.view()
        view.flags.writeable = False
        return view

    def as_array(self) -> np.ndarray:
        """Copy of the components as an array of shape (4,) * rank"""
        return self._components.reshape(self.shape).copy()

    def index(self, indices: Sequence[int]) -> int:
        """Flat storage offset of a multi-index"""
        return index(indices, self._rank)

    def index_to_indices(self, offset: int) -> tuple[int, ...]:
        """Multi-index stored at a flat offset"""
        return index_to_indices(offset, self._rank)

    def get_component(self, indices: MultiIndex) -> float:
        """
        Read one component.

        Args:
            indices: Multi-index with one entry in [0, 3] per position. An int
                is accepted for rank-1 tensors.

        Raises:
            DomainError: If the multi-index has the wrong length or an entry
                out of range.
        """
        return float(self._components[index(_as_multi_index(indices), self._rank)])

    def set_component(self, indices: MultiIndex, value: float) -> None:
        """Write one component, with the same checks as :meth:`get_component`"""
        offset = index(_as_multi_index(indices), self._rank)
        self._components[offset] = float(value)

    def __getitem__(self, indices: MultiIndex) -> float:
        return self.get_component(indices)

    def __setitem__(self, indices: MultiIndex, value: float) -> None:
        self.set_component(indices, value)

    def __float__(self) -> float:
        if self._rank != 0:
            raise RankMismatchError(f"Only rank-0 tensors convert to float, got rank {self._rank}")
        return float(self._components[0])

    def copy(self) -> "Tensor":
        """Deep copy of types, labels and components"""
        return self._from_parts(self._types, self._labels, self._components)

    def __copy__(self) -> "Tensor":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Tensor":
        return self.copy()

    # ------------------------------------------------------------------
    # Contraction
    # ------------------------------------------------------------------

    def contract(self, index1: int | None = None, index2: int | None = None) -> "Tensor":
        """
        Contract two index positions, or every repeated label.

        With two positions, computes the trace

            C[...] = Σ_k T[..., k (at index1), ..., k (at index2), ...]

        and returns a tensor of rank - 2 whose types and labels are the
        originals with both positions removed. Index variance is not checked.

        Without arguments, runs the label-driven pass of
        :meth:`contract_labels`.

        Args:
            index1: First index position.
            index2: Second index position, different from ``index1``.

        Returns:
            New Tensor with the contracted result.

        Raises:
            InvalidContractionPairError: If only one position is given, the
                positions are equal, or either is outside [0, rank).

        Examples:
            >>> # δ^a_a = 4
            >>> float(Tensor.delta().contract(0, 1))
            4.0
        """
        if index1 is None and index2 is None:
            return self.contract_labels()
        if index1 is None or index2 is None:
            raise InvalidContractionPairError("Positional contraction requires two index positions")

        index1, index2 = self._validate_contraction_pair(index1, index2)

        # Nested view matches the flat layout of the codec
        traced = np.trace(self._components.reshape(self.shape), axis1=index1, axis2=index2)

        kept = [k for k in range(self._rank) if k not in (index1, index2)]
        return self._from_parts(
            [self._types[k] for k in kept], [self._labels[k] for k in kept], traced
        )

    def _validate_contraction_pair(self, index1: int, index2: int) -> tuple[int, int]:
        index1 = operator.index(index1)
        index2 = operator.index(index2)

        for position in (index1, index2):
            if not 0 <= position < self._rank:
                raise InvalidContractionPairError(
                    f"Index position {position} outside [0, {self._rank}) for {self!r}"
                )
        if index1 == index2:
            raise InvalidContractionPairError(f"Cannot contract index {index1} with itself")
        return index1, index2

    def contract_labels(self) -> "Tensor":
        """
        Contract every pair of positions sharing a non-free label.

        Repeats positional contraction until no non-free label occurs twice,
        so a tensor labelled (a, a, b, b) is contracted twice in one call.
        The whole label set is validated before anything is summed.

        Returns:
            New Tensor; a plain copy if no label repeats.

        Raises:
            InvalidContractionPairError: If a label occurs at more than two
                positions, or pairs two indices of the same variance.
        """
        _check_label_pairs(self._types, self._labels)

        result = self.copy()
        pair = _first_label_pair(result._labels)
        while pair is not None:
            result = result.contract(*pair)
            pair = _first_label_pair(result._labels)
        return result

    # ------------------------------------------------------------------
    # Abstract index labels
    # ------------------------------------------------------------------

    def label(self, labels: Sequence[str] | None = CLEAR_LABELS) -> "Tensor":
        """
        Name the indices and contract repeated names.

        Labels "0", "." and "-" stay free even when repeated; any other
        label shared by two positions is summed over. The receiver keeps the
        new labels (so it can take part in later products) and a new tensor
        with the contractions applied is returned.

        Args:
            labels: Exactly ``rank`` single-character labels, e.g. "ab" or
                ["a", "b"], or CLEAR_LABELS to free every index.

        Returns:
            New Tensor, contracted over repeated labels.

        Raises:
            LabelCountMismatchError: If the number of labels differs from rank.
            InvalidContractionPairError: If a label is used more than twice
                or pairs indices of the same variance. The receiver's labels
                are left unchanged.
            ValueError: If a label is not a single character.

        Examples:
            >>> T = Tensor.delta()
            >>> float(T("aa"))  # δ^a_a
            4.0
            >>> T.labels
            ('a', 'a')
        """
        new_labels = self._checked_labels(labels)
        _check_label_pairs(self._types, new_labels)

        self._labels = new_labels
        return self.contract_labels()

    def __call__(self, labels: Sequence[str] | None = CLEAR_LABELS) -> "Tensor":
        return self.label(labels)

    def _checked_labels(self, labels: Sequence[str] | None) -> list[str]:
        if labels is CLEAR_LABELS:
            return [FREE_LABEL] * self._rank

        tokens = list(labels)
        if len(tokens) != self._rank:
            raise LabelCountMismatchError(self._rank, len(tokens))
        for token in tokens:
            if not isinstance(token, str) or len(token) != 1:
                raise ValueError(f"Index labels must be single characters, got {token!r}")
        return tokens

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_compatible(self, other: "Tensor") -> None:
        if self._rank != other._rank or self._types != other._types:
            raise RankMismatchError(
                f"Incompatible index structure: {self.signature} and {other.signature}"
            )

    def __mul__(self, other: Any) -> "Tensor":
        """
        Scale by a real number, or multiply by a tensor.

        The tensor product is the outer product, with types and labels
        concatenated in operand order, followed by :meth:`contract_labels`.

        Examples:
            >>> # T^a_b v^b
            >>> v = Tensor(1, ["up"])
            >>> v.components[:] = [1.0, 2.0, 3.0, 4.0]
            >>> Tv = Tensor.delta()("ab") * v("b")
            >>> Tv.rank, Tv.labels
            (1, ('a',))
        """
        if isinstance(other, Tensor):
            outer = np.multiply.outer(self._components, other._components)
            product = self._from_parts(
                self._types + other._types, self._labels + other._labels, outer
            )
            return product.contract_labels()
        if isinstance(other, numbers.Real):
            return self._from_parts(self._types, self._labels, self._components * float(other))
        return NotImplemented

    def __rmul__(self, other: Any) -> "Tensor":
        if isinstance(other, numbers.Real):
            return self * other
        return NotImplemented

    def __imul__(self, other: Any) -> "Tensor":
        # Tensor operands change the rank, so Python falls back to __mul__
        if isinstance(other, numbers.Real):
            self._components *= float(other)
            return self
        return NotImplemented

    def __neg__(self) -> "Tensor":
        return -1 * self

    def __add__(self, other: Any) -> "Tensor":
        """
        Component-wise sum; labels follow the left operand.

        Raises:
            RankMismatchError: If rank or index types (in order) differ.
        """
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_compatible(other)
        return self._from_parts(self._types, self._labels, self._components + other._components)

    def __iadd__(self, other: Any) -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_compatible(other)
        self._components += other._components
        return self

    def __sub__(self, other: Any) -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self + (-1) * other

    def __isub__(self, other: Any) -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.__iadd__((-1) * other)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    @property
    def signature(self) -> str:
        """Index structure as text, e.g. '^a_b' for T^a_b or '^._.' when unlabelled"""
        return "".join(t.symbol + label for t, label in zip(self._types, self._labels))

    def __str__(self) -> str:
        """String representation"""
        return f"Tensor(rank={self.rank}, indices='{self.signature}')"

    def __repr__(self) -> str:
        return self.__str__()

    # ------------------------------------------------------------------
    # Deprecated camel-case accessors
    # ------------------------------------------------------------------

    def getComponent(self, indices: MultiIndex) -> float:  # noqa: N802
        _deprecated("getComponent", "get_component")
        return self.get_component(indices)

    def setComponent(self, indices: MultiIndex, value: float) -> None:  # noqa: N802
        _deprecated("setComponent", "set_component")
        self.set_component(indices, value)

    def getComponents(self) -> np.ndarray:  # noqa: N802
        _deprecated("getComponents", "components")
        return self.components

    def getRank(self) -> int:  # noqa: N802
        _deprecated("getRank", "rank")
        return self.rank

    def getTypes(self) -> tuple[IndexType, ...]:  # noqa: N802
        _deprecated("getTypes", "types")
        return self.types

    def indexToIndices(self, offset: int) -> tuple[int, ...]:  # noqa: N802
        _deprecated("indexToIndices", "index_to_indices")
        return self.index_to_indices(offset)


def _as_multi_index(indices: MultiIndex) -> Sequence[int]:
    """Wrap a bare integer index so rank-1 tensors can be indexed as t[2]"""
    if isinstance(indices, (int, np.integer)):
        return (indices,)
    return indices


def _label_positions(labels: Sequence[str]) -> dict[str, list[int]]:
    """Positions of every non-free label"""
    positions: dict[str, list[int]] = {}
    for position, label in enumerate(labels):
        if label not in FREE_LABELS:
            positions.setdefault(label, []).append(position)
    return positions


def _check_label_pairs(types: Sequence[IndexType], labels: Sequence[str]) -> None:
    """
    Validate that repeated labels form contractible pairs.

    Raises:
        InvalidContractionPairError: If a label appears more than twice, or
            a repeated label joins two indices of the same variance.
    """
    for label, positions in _label_positions(labels).items():
        if len(positions) > 2:
            raise InvalidContractionPairError(
                f"Index {label!r} appears {len(positions)} times (max 2 allowed)"
            )
        if len(positions) == 2:
            first, second = positions
            if types[first] is types[second]:
                raise InvalidContractionPairError(
                    f"Index {label!r} pairs two {types[first].name.lower()} indices "
                    f"(positions {first} and {second})"
                )


def _first_label_pair(labels: Sequence[str]) -> tuple[int, int] | None:
    for positions in _label_positions(labels).values():
        if len(positions) == 2:
            return positions[0], positions[1]
    return None
