import pytest
from underbar import MISSING, contains, every, reduce_, some, InvalidArgumentError


def add(a, b):
    return a + b


class TestReduce:
    """reduce_() with and without a seed"""

    def test_without_seed_uses_first_element(self):
        """Test sum without seed starts from the first element"""
        result = reduce_([1, 2, 3, 4], add)
        assert result == 10, f"Expected 10, got {result}"

    def test_with_seed_passes_every_element(self):
        """Test sum with seed passes all elements"""
        result = reduce_([1, 2, 3, 4], add, 10)
        assert result == 20, f"Expected 20, got {result}"

    def test_first_element_not_passed_without_seed(self):
        """Test first element is consumed as the seed"""
        calls = []

        def track(acc, item):
            calls.append((acc, item))
            return acc + item

        reduce_([1, 2, 3], track)
        assert calls == [(1, 2), (3, 3)]

    def test_falsy_seeds_are_still_seeds(self):
        """Test None, 0 and False count as supplied seeds"""
        calls = []
        reduce_([5], lambda acc, item: calls.append((acc, item)), None)
        assert calls == [(None, 5)], "None must count as a supplied seed"
        assert reduce_([1, 2], add, 0) == 3
        assert reduce_([], add, False) is False

    def test_explicit_missing_means_no_seed(self):
        """Test passing MISSING behaves like omitting the seed"""
        assert reduce_([1, 2, 3], add, MISSING) == 6

    def test_empty_without_seed_is_none(self):
        """Test empty collection without seed returns None"""
        assert reduce_([], add) is None

    def test_empty_with_seed_is_seed(self):
        """Test empty collection with seed returns the seed"""
        assert reduce_([], add, 7) == 7

    def test_single_element_without_seed(self):
        """Test single element without seed never calls the iterator"""
        calls = []
        assert reduce_([42], lambda a, b: calls.append(b)) == 42
        assert calls == [], "Iterator should not run for a single element"

    def test_reduce_mapping_values(self):
        """Test reduction over mapping values"""
        assert reduce_({"a": 1, "b": 2, "c": 3}, add, 0) == 6

    def test_accumulator_threads_previous_result(self):
        """Test each iterator call receives the previous result"""
        result = reduce_(["a", "b", "c"], lambda acc, item: acc + [item], [])
        assert result == ["a", "b", "c"]

    def test_iterator_errors_propagate(self):
        """Test iterator exceptions reach the caller unchanged"""
        def boom(acc, item):
            raise ValueError("stop")

        with pytest.raises(ValueError, match="stop"):
            reduce_([1, 2], boom)

    def test_non_callable_iterator(self):
        """Test non-callable iterator raises InvalidArgumentError"""
        with pytest.raises(InvalidArgumentError):
            reduce_([1, 2], None)


class TestContains:
    """contains() membership"""

    def test_found_and_missing(self):
        """Test present and absent targets"""
        assert contains([1, 2, 3], 2) is True
        assert contains([1, 2, 3], 5) is False

    def test_mapping_values(self):
        """Test membership checks mapping values, not keys"""
        assert contains({"a": 1, "b": 2}, 2) is True
        assert contains({"a": 1, "b": 2}, "a") is False, "Keys are not values"

    def test_strict_equality(self):
        """Test values of different types never match"""
        assert contains([1, 2], 1.0) is False
        assert contains([0], False) is False

    def test_nan_matches_only_itself(self):
        """Test NaN is only found when it is the same object"""
        assert contains([float("nan")], float("nan")) is False
        nan = float("nan")
        assert contains([0.5, nan], nan) is True

    def test_empty(self):
        """Test empty collection contains nothing"""
        assert contains([], None) is False


class TestEvery:
    """every() universal quantifier"""

    def test_all_pass(self):
        """Test all elements passing yields True"""
        assert every([2, 4, 6], lambda n: n % 2 == 0) is True

    def test_one_fails(self):
        """Test a single failure yields False"""
        assert every([2, 3, 6], lambda n: n % 2 == 0) is False

    def test_empty_is_true(self):
        """Test empty collection is vacuously True"""
        assert every([], lambda n: False) is True

    def test_default_predicate_is_identity(self):
        """Test omitted predicate tests element truthiness"""
        assert every([1, "a", [0]]) is True
        assert every([1, 0, 2]) is False

    def test_result_is_bool(self):
        """Test truthy predicate results normalize to True"""
        result = every([1, 2], lambda n: n)
        assert result is True, f"Expected a real bool, got {result!r}"

    def test_predicate_skipped_after_failure(self):
        """Test predicate stops being called after the first failure"""
        calls = []

        def predicate(n):
            calls.append(n)
            return n < 2

        assert every([1, 5, 0, 1], predicate) is False
        assert calls == [1, 5]


class TestSome:
    """some() existential quantifier"""

    def test_one_passes(self):
        """Test a single passing element yields True"""
        assert some([1, 3, 4], lambda n: n % 2 == 0) is True

    def test_none_pass(self):
        """Test no passing element yields False"""
        assert some([1, 3, 5], lambda n: n % 2 == 0) is False

    def test_empty_is_false(self):
        """Test empty collection yields False"""
        assert some([], lambda n: True) is False

    def test_default_predicate_is_identity(self):
        """Test omitted predicate tests element truthiness"""
        assert some([0, "", None, 3]) is True
        assert some([0, "", None]) is False

    def test_result_is_bool(self):
        """Test truthy predicate results normalize to True"""
        assert some(["x"], lambda v: v) is True

    def test_non_callable_predicate(self):
        """Test non-callable predicate raises InvalidArgumentError"""
        with pytest.raises(InvalidArgumentError):
            some([1], 5)
