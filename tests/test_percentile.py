import math
import random

import pytest

from boundpercentiles import BoundPercentiles, PercentileStatus


def random_setup():
    lo = round(random.random() * 500)
    hi = round((1 + random.random()) * 500)
    eps = random.uniform(1e-4, 0.5)
    delta = (hi - lo) * eps
    return lo, hi, eps, delta


def test_empty_returns_none():
    est = BoundPercentiles(0, 100, 0.01)
    assert est.percentile(0) is None
    assert est.percentile(50) is None
    assert est.percentile(100) is None


def test_out_of_range_p_returns_none_with_data():
    est = BoundPercentiles(0, 100, 0.01)
    est.extend([1, 2, 3])
    assert est.percentile(-0.01) is None
    assert est.percentile(100.01) is None
    assert est.percentile(math.nan) is None


def test_query_distinguishes_empty_from_invalid():
    est = BoundPercentiles(0, 100, 0.01)
    assert est.query(50).status is PercentileStatus.EMPTY
    # Range check comes first
    assert est.query(150).status is PercentileStatus.INVALID
    est.insert(42)
    res = est.query(50)
    assert res.ok
    assert res.value == pytest.approx(42.5)
    assert est.query(-1).status is PercentileStatus.INVALID
    assert est.query(-1).value is None


def test_concrete_five_values():
    est = BoundPercentiles(0, 100, 0.01)
    est.extend([10, 20, 30, 40, 50])
    assert est.percentile(0) == pytest.approx(10.5)
    assert est.percentile(50) == pytest.approx(30.5)
    assert est.percentile(100) == pytest.approx(50.5)
    assert est.percentiles([0, 20, 40, 60, 80]) == pytest.approx([10.5, 10.5, 20.5, 30.5, 40.5])


def test_single_value_is_reported_within_resolution():
    random.seed(11)
    for _ in range(100):
        lo, hi, eps, delta = random_setup()
        est = BoundPercentiles(lo, hi, eps)
        value = round(lo + random.random() * (hi - lo))
        est.insert(value)
        for p in (0, 50, 100):
            assert abs(value - est.percentile(p)) <= delta


def test_ignores_out_of_lower_bound_by_default():
    random.seed(12)
    lo, hi, eps, _ = random_setup()
    est = BoundPercentiles(lo, hi, eps)
    est.insert(lo - 1)
    assert est.percentiles([0, 50, 100]) == [None, None, None]


def test_ignores_out_of_upper_bound_by_default():
    random.seed(13)
    lo, hi, eps, _ = random_setup()
    est = BoundPercentiles(lo, hi, eps)
    est.insert(hi + 1)
    assert est.percentiles([0, 50, 100]) == [None, None, None]


def test_trims_out_of_lower_bound():
    random.seed(14)
    lo, hi, eps, delta = random_setup()
    est = BoundPercentiles(lo, hi, eps, "trim")
    est.insert(lo - 1)
    for p in (0, 50, 100):
        assert abs(lo - est.percentile(p)) <= delta


@pytest.mark.parametrize("value_offset", [1, 0])
def test_trims_out_of_upper_bound_and_max(value_offset):
    random.seed(15)
    lo, hi, eps, delta = random_setup()
    est = BoundPercentiles(lo, hi, eps, "trim")
    est.insert(hi + value_offset)
    for p in (0, 50, 100):
        assert abs(hi - est.percentile(p)) <= delta


def test_monotone_in_p():
    random.seed(21)
    est = BoundPercentiles(-10, 10, 0.01)
    est.extend(random.gauss(0, 3) for _ in range(2000))
    values = est.percentiles([i / 2 for i in range(201)])
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_query_is_idempotent():
    random.seed(22)
    est = BoundPercentiles(0, 1, 0.05)
    est.extend(random.random() for _ in range(300))
    before = est.buckets
    first = [est.percentile(p) for p in (1, 25, 50, 75, 99)]
    second = [est.percentile(p) for p in (1, 25, 50, 75, 99)]
    assert first == second
    assert est.buckets == before


def test_sparse_buckets_are_skipped():
    est = BoundPercentiles(0, 10, 0.1)
    est.insert(0.5)
    est.insert(9.5)
    assert est.percentile(50) == pytest.approx(0.5)
    assert est.percentile(50.1) == pytest.approx(9.5)
