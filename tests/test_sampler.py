import itertools
import random
from collections import Counter

import pytest

from sampler import sample_papers


def test_returns_three_distinct_items_from_larger_list() -> None:
    items = list(range(10))
    picked = sample_papers(items, rng=random.Random(7))

    assert len(picked) == 3
    assert len(set(picked)) == 3
    assert set(picked) <= set(items)


def test_single_item_list_returns_that_item() -> None:
    assert sample_papers(["only"], rng=random.Random(0)) == ["only"]


def test_empty_list_returns_empty() -> None:
    assert sample_papers([]) == []


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 10])
def test_size_is_min_of_k_and_n(n: int) -> None:
    assert len(sample_papers(list(range(n)), rng=random.Random(n))) == min(3, n)


def test_input_is_not_mutated() -> None:
    items = list(range(8))
    sample_papers(items, rng=random.Random(3))
    assert items == list(range(8))


def test_negative_k_rejected() -> None:
    with pytest.raises(ValueError):
        sample_papers([1, 2, 3], k=-1)


def test_inclusion_frequency_converges_to_k_over_n() -> None:
    rng = random.Random(1234)
    trials = 6000
    counts: Counter[int] = Counter()
    for _ in range(trials):
        counts.update(sample_papers(range(5), rng=rng))

    for item in range(5):
        assert counts[item] / trials == pytest.approx(3 / 5, abs=0.03)


def test_every_three_subset_of_five_occurs() -> None:
    rng = random.Random(42)
    seen = {frozenset(sample_papers(range(5), rng=rng)) for _ in range(2000)}

    expected = {frozenset(c) for c in itertools.combinations(range(5), 3)}
    assert seen == expected


def test_orderings_are_uniform() -> None:
    """Every ordering of a 3-element list shows up with roughly equal frequency."""
    rng = random.Random(99)
    trials = 6000
    orders = Counter(tuple(sample_papers("abc", rng=rng)) for _ in range(trials))

    assert len(orders) == 6
    for count in orders.values():
        assert count / trials == pytest.approx(1 / 6, abs=0.03)
