"""
Unit tests for tensor arithmetic.

Covers scalar scaling, addition, subtraction and contracted products,
including the algebraic identities they must satisfy:
- Addition is commutative and associative
- A + (-1)A vanishes
- Scaling distributes over addition
- Products of labelled vectors give inner products
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from pointtensor import IndexType, Tensor
from pointtensor.core.exceptions import InvalidContractionPairError, RankMismatchError


def random_tensor(rng, types):
    return Tensor.from_array(rng.normal(size=(4,) * len(types)), types)


@pytest.mark.unit
class TestScalarScale:
    """Test multiplication by real scalars"""

    def test_scale(self, mixed_tensor):
        scaled = mixed_tensor * 2.5

        assert scaled is not mixed_tensor
        assert scaled.types == mixed_tensor.types
        assert_allclose(scaled.components, 2.5 * mixed_tensor.components)

    def test_commutes(self, mixed_tensor):
        assert_array_equal((3 * mixed_tensor).components, (mixed_tensor * 3).components)

    def test_numpy_scalar_on_left(self, vector):
        scaled = np.float64(2.0) * vector

        assert isinstance(scaled, Tensor)
        assert_allclose(scaled.components, 2.0 * vector.components)

    def test_labels_preserved(self, identity):
        identity.label("ab")
        assert (identity * 2).labels == ("a", "b")

    def test_in_place(self, mixed_tensor):
        original = mixed_tensor.as_array()
        alias = mixed_tensor

        mixed_tensor *= -0.5

        assert mixed_tensor is alias
        assert_allclose(mixed_tensor.as_array(), -0.5 * original)

    def test_negation(self, vector):
        assert_array_equal((-vector).components, -vector.components)

    def test_unsupported_operand(self, vector):
        with pytest.raises(TypeError):
            vector * "2"
        with pytest.raises(TypeError):
            np.ones(4) * vector


@pytest.mark.unit
class TestAddition:
    """Test addition and subtraction"""

    def test_sum(self, rng):
        a = random_tensor(rng, ["up", "down"])
        b = random_tensor(rng, ["up", "down"])

        assert_allclose((a + b).components, a.components + b.components)

    def test_commutative(self, rng):
        a = random_tensor(rng, ["up", "down", "down"])
        b = random_tensor(rng, ["up", "down", "down"])

        assert_allclose((a + b).components, (b + a).components, rtol=1e-15)

    def test_associative(self, rng, numerical_tolerance):
        a, b, c = (random_tensor(rng, ["down", "up"]) for _ in range(3))

        assert_allclose(
            ((a + b) + c).components, (a + (b + c)).components, atol=numerical_tolerance
        )

    def test_additive_inverse(self, mixed_tensor):
        zero = mixed_tensor + (-1) * mixed_tensor
        assert_array_equal(zero.components, np.zeros(16))

    def test_scale_distributes(self, rng, numerical_tolerance):
        a = random_tensor(rng, ["up", "up"])
        b = random_tensor(rng, ["up", "up"])
        s = 1.75

        assert_allclose(
            (s * (a + b)).components, (s * a + s * b).components, atol=numerical_tolerance
        )

    def test_labels_follow_receiver(self, rng):
        a = random_tensor(rng, ["up"])
        b = random_tensor(rng, ["up"])
        a.label("a")
        b.label("b")

        assert (a + b).labels == ("a",)
        assert (b - a).labels == ("b",)

    def test_subtraction(self, rng):
        a = random_tensor(rng, ["down"])
        b = random_tensor(rng, ["down"])

        assert_allclose((a - b).components, a.components - b.components)

    def test_in_place_forms(self, rng):
        a = random_tensor(rng, ["up", "down"])
        b = random_tensor(rng, ["up", "down"])
        expected_sum = a.components + b.components
        alias = a

        a += b
        assert a is alias
        assert_allclose(a.components, expected_sum)

        a -= b
        assert a is alias
        assert_allclose(a.components, expected_sum - b.components, rtol=1e-14)

    def test_operands_unchanged(self, rng):
        a = random_tensor(rng, ["up"])
        b = random_tensor(rng, ["up"])
        before_a, before_b = a.as_array(), b.as_array()

        a + b
        a - b

        assert_array_equal(a.as_array(), before_a)
        assert_array_equal(b.as_array(), before_b)

    @pytest.mark.parametrize(
        "left, right",
        [
            (["up"], ["up", "down"]),
            (["up", "down"], ["down", "up"]),
            (["up"], ["down"]),
        ],
    )
    def test_mismatch(self, rng, left, right):
        a = random_tensor(rng, left)
        b = random_tensor(rng, right)
        before = a.as_array()

        with pytest.raises(RankMismatchError):
            a + b
        with pytest.raises(RankMismatchError):
            a - b
        with pytest.raises(RankMismatchError):
            a += b
        with pytest.raises(RankMismatchError):
            a -= b

        assert_array_equal(a.as_array(), before)

    def test_add_scalar_number_unsupported(self, vector):
        with pytest.raises(TypeError):
            vector + 1.0


@pytest.mark.unit
class TestMultiplication:
    """Test outer products with automatic contraction"""

    def test_outer_product(self, vector, covector):
        product = vector * covector

        assert product.rank == 2
        assert product.types == (IndexType.UP, IndexType.DOWN)
        assert_allclose(
            product.as_array(), np.outer(vector.components, covector.components), rtol=1e-15
        )

    def test_outer_product_concatenates_labels(self, vector, covector):
        product = vector("a") * covector("b")
        assert product.labels == ("a", "b")

    def test_outer_product_higher_rank(self, rng, mixed_tensor, vector):
        product = mixed_tensor * vector

        assert product.types == (IndexType.UP, IndexType.DOWN, IndexType.UP)
        assert_allclose(
            product.as_array(),
            np.einsum("ab,c->abc", mixed_tensor.as_array(), vector.as_array()),
            rtol=1e-14,
        )

    def test_inner_product(self, vector, covector):
        result = vector("a") * covector("a")

        assert result.rank == 0
        expected = sum(vector[k] * covector[k] for k in range(4))
        assert_allclose(float(result), expected, rtol=1e-14)

    def test_matrix_vector(self, mixed_tensor, vector):
        result = mixed_tensor("ab") * vector("b")

        assert result.rank == 1
        assert result.types == (IndexType.UP,)
        assert result.labels == ("a",)
        assert_allclose(result.components, mixed_tensor.as_array() @ vector.components)

    def test_scalar_tensor_product(self, vector):
        scalar = Tensor(0, [])
        scalar[()] = 3.0

        assert_allclose((scalar * vector).components, 3.0 * vector.components)
        assert (scalar * vector).types == vector.types

    def test_same_variance_labels_rejected(self, vector):
        other = vector.copy()

        with pytest.raises(InvalidContractionPairError):
            vector("a") * other("a")

    def test_tensor_in_place_multiply_rebinds(self, vector, covector):
        original = vector
        vector("a")
        covector("a")

        vector *= covector

        assert vector is not original
        assert vector.rank == 0
