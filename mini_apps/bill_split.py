"""
bill_split.py
======================

割り勘計算ロジック。

状態として持つのは 3 つだけ:
- raw_amount_text: 入力された金額文字列（入力されたまま保持）
- people_count:    人数 (2〜99)
- tip_percentage:  チップ率 (0〜100)

チップ額・合計・1 人あたりは毎回いまの状態から計算し直し、キャッシュしない。

1 人あたりの金額は grand_total / (people_count + per_person_offset)。
per_person_offset のデフォルトは 2 で、人数 4 なら 6 で割る。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .currency import (
    CurrencyFormatter,
    amount_context,
    format_amount,
    format_as_currency,
    parse_amount,
)

logger = logging.getLogger(__name__)

PEOPLE_CHOICES = range(2, 100)
TIP_CHOICES = range(0, 101)

DEFAULT_PEOPLE = 2
DEFAULT_TIP = 20
DEFAULT_PER_PERSON_OFFSET = 2


def people_label(n: int) -> str:
    """人数ピッカーの表示文言"""
    return f"{n} {'person' if n == 1 else 'people'}"


def _clamp(value: int, choices: range) -> int:
    return max(choices[0], min(int(value), choices[-1]))


@dataclass
class SplitCalculator:
    """
    割り勘計算機。

    入力イベントは set_amount_text / set_people_count / set_tip_percentage で受け、
    範囲外の人数・チップ率は範囲内に丸める。
    """

    raw_amount_text: str = ""
    people_count: int = DEFAULT_PEOPLE
    tip_percentage: int = DEFAULT_TIP
    per_person_offset: int = DEFAULT_PER_PERSON_OFFSET
    default_people: int = DEFAULT_PEOPLE
    default_tip: int = DEFAULT_TIP

    def __post_init__(self):
        self.people_count = _clamp(self.people_count, PEOPLE_CHOICES)
        self.tip_percentage = _clamp(self.tip_percentage, TIP_CHOICES)

    # ------------------------------------------------------------
    # 入力イベント
    # ------------------------------------------------------------
    def set_amount_text(self, text: Optional[str]) -> None:
        self.raw_amount_text = text or ""

    def set_people_count(self, n: int) -> None:
        clamped = _clamp(n, PEOPLE_CHOICES)
        if clamped != n:
            logger.debug("people_count %s clamped to %s", n, clamped)
        self.people_count = clamped

    def set_tip_percentage(self, p: int) -> None:
        clamped = _clamp(p, TIP_CHOICES)
        if clamped != p:
            logger.debug("tip_percentage %s clamped to %s", p, clamped)
        self.tip_percentage = clamped

    def reset(self) -> None:
        """金額を空に、人数とチップ率を初期値に戻す。何度呼んでも同じ状態になる。"""
        self.raw_amount_text = ""
        self.people_count = _clamp(self.default_people, PEOPLE_CHOICES)
        self.tip_percentage = _clamp(self.default_tip, TIP_CHOICES)
        logger.info("bill split reset")

    # ------------------------------------------------------------
    # 計算
    # ------------------------------------------------------------
    @property
    def parsed_amount(self) -> Decimal:
        return parse_amount(self.raw_amount_text)

    # 桁数の多い金額でも丸めが起きないよう、入力の桁数に合わせた精度で計算する
    def tip_value(self) -> Decimal:
        amount = self.parsed_amount
        with amount_context(amount):
            return amount * self.tip_percentage / 100

    def grand_total(self) -> Decimal:
        amount = self.parsed_amount
        with amount_context(amount):
            return amount + self.tip_value()

    def per_person_share(self) -> Decimal:
        total = self.grand_total()
        with amount_context(total):
            return total / (self.people_count + self.per_person_offset)

    # ------------------------------------------------------------
    # 表示用
    # ------------------------------------------------------------
    def formatted_amount(
        self,
        locale_tag: Optional[str] = None,
        formatter: Optional[CurrencyFormatter] = None,
    ) -> str:
        """入力確定後に表示する金額。読めない入力はそのまま返る。"""
        return format_as_currency(self.raw_amount_text, locale_tag, formatter)

    def formatted_totals(
        self,
        locale_tag: Optional[str] = None,
        formatter: Optional[CurrencyFormatter] = None,
    ) -> dict:
        """チップ額・合計・1 人あたりを通貨表記でまとめて返す。"""
        return {
            "tip_value": format_amount(self.tip_value(), locale_tag, formatter),
            "grand_total": format_amount(self.grand_total(), locale_tag, formatter),
            "per_person_share": format_amount(self.per_person_share(), locale_tag, formatter),
        }
