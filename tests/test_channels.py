import pytest

from tickmatch.channels import bounded_backpressure_demo, fan_in_sum, mpmc_worker_pool_demo


def test_fan_in_collects_all_values():
    assert fan_in_sum(3, 4) == sum(range(12))


def test_fan_in_with_no_producers_is_zero():
    assert fan_in_sum(0, 5) == 0


def test_fan_in_single_producer():
    assert fan_in_sum(1, 5) == sum(range(5))


def test_bounded_channel_consumes_everything():
    assert bounded_backpressure_demo(2, 20) == 20


def test_bounded_channel_with_zero_capacity_still_consumes():
    assert bounded_backpressure_demo(0, 5) == 5


def test_mpmc_worker_pool_returns_expected_square_sum():
    assert mpmc_worker_pool_demo(3, 10) == sum(x * x for x in range(10))


def test_mpmc_with_no_jobs_is_zero():
    assert mpmc_worker_pool_demo(3, 0) == 0


def test_mpmc_without_workers_raises():
    with pytest.raises(ValueError):
        mpmc_worker_pool_demo(0, 3)