from __future__ import annotations

import datetime

import pytest

from business.customer_invoices.reference import ReferenceGenerator

NOW = datetime.datetime(2026, 10, 19, 16, 33, 59)


def test_reference_layout() -> None:
    assert ReferenceGenerator(now=NOW).next(1) == "R261019163300001"


def test_references_are_short_and_unique_within_a_run() -> None:
    generator = ReferenceGenerator(now=NOW)

    references = [generator.next(index) for index in range(1, 10000)]

    assert all(len(reference) <= 16 for reference in references)
    assert len(set(references)) == len(references)


def test_indexes_beyond_four_digits_do_not_collide() -> None:
    generator = ReferenceGenerator(now=NOW)

    assert generator.next(1000) != generator.next(10000)
    assert len(generator.next(99999)) == 16


def test_reissuing_a_reference_fails() -> None:
    generator = ReferenceGenerator(now=NOW)
    generator.next(7)

    with pytest.raises(ValueError):
        generator.next(7)


def test_reference_longer_than_sixteen_fails() -> None:
    with pytest.raises(ValueError):
        ReferenceGenerator(now=NOW).next(100000)


def test_long_prefix_is_rejected() -> None:
    with pytest.raises(ValueError):
        ReferenceGenerator(prefix="INV", now=NOW)
