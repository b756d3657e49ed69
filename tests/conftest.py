"""Shared fixtures for the mini_apps test suite.

Provides seeded quiz engines, a predictable currency formatter and
a fresh bill-split calculator.
"""

import random
from decimal import Decimal

import pytest

from mini_apps.bill_split import SplitCalculator
from mini_apps.flag_quiz import QuizRoundEngine


COUNTRIES = [
    "Estonia", "France", "Germany", "Ireland", "Italy",
    "Nigeria", "Poland", "Russia", "Spain", "UK",
]


class RecordingFormatter:
    """CurrencyFormatter stand-in that renders amounts as 'XX 1.23 @locale'."""

    def __init__(self):
        self.calls = []

    def format(self, amount, locale_tag=None):
        self.calls.append((amount, locale_tag))
        return f"XX {Decimal(str(amount)).quantize(Decimal('0.01'))} @{locale_tag}"


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine(rng):
    return QuizRoundEngine(COUNTRIES, rng=rng)


@pytest.fixture
def formatter():
    return RecordingFormatter()


@pytest.fixture
def calc():
    return SplitCalculator()
