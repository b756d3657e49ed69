"""
currency.py
======================

金額文字列のパースと通貨表記へのフォーマット。

- parse_amount(): 入力文字列から数字・"."・"," 以外を取り除き、"," を "." に
  置き換えて Decimal にする。空文字やパース失敗は Decimal(0)。例外は投げない。
- format_as_currency(): parse に失敗したら元の文字列をそのまま返す。
  成功したらロケールの通貨ルール（記号・区切り文字・小数桁）で表記する。

通貨フォーマット自体は CurrencyFormatter として差し替え可能にしてあり、
デフォルト実装は Babel を使う。
"""

from __future__ import annotations

import decimal
import logging
from decimal import Decimal, InvalidOperation
from typing import ContextManager, Optional, Protocol, Union

from babel import Locale, UnknownLocaleError, default_locale
from babel.numbers import format_currency, get_territory_currencies

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en_US"
FALLBACK_CURRENCY = "USD"

_AMOUNT_CHARS = frozenset("0123456789.,")

Number = Union[Decimal, int, float]


# ----------------------------------------------------------------------
#  パース
# ----------------------------------------------------------------------
def _parse_or_none(text: str) -> Optional[Decimal]:
    numeric = "".join(ch for ch in text if ch in _AMOUNT_CHARS).replace(",", ".")
    if not numeric:
        return None
    try:
        return Decimal(numeric)
    except InvalidOperation:
        return None


def amount_context(*amounts: Decimal) -> ContextManager[decimal.Context]:
    """
    桁数の多い金額でも丸めや quantize が失敗しないよう、精度を上げた Decimal コンテキストを返す。
    デフォルトの 28 桁では 27 桁以上の整数部をもつ金額の表記で InvalidOperation になる。
    """
    ctx = decimal.getcontext().copy()
    for amount in amounts:
        if amount.is_finite():
            ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 8, amount.adjusted() + 8)
    return decimal.localcontext(ctx)


def parse_amount(text: Optional[str]) -> Decimal:
    """
    入力文字列を金額として読む。読めなければ 0。

    例:
        "12.50"  -> Decimal("12.50")
        "12,50"  -> Decimal("12.50")
        "$ 8"    -> Decimal("8")
        "abc"    -> Decimal("0")
    """
    if not text:
        return Decimal(0)
    value = _parse_or_none(text)
    return Decimal(0) if value is None else value


# ----------------------------------------------------------------------
#  ロケール
# ----------------------------------------------------------------------
def active_locale(configured: Optional[str] = None) -> str:
    """
    表示に使うロケールタグを返す。

    優先順: 設定値 → ホスト環境 (LC_MONETARY / LANG など) → en_US
    """
    if configured:
        return configured
    return default_locale("LC_MONETARY") or FALLBACK_LOCALE


def _resolve_locale(locale_tag: Optional[str]) -> Locale:
    tag = active_locale(locale_tag)
    try:
        return Locale.parse(tag.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        logger.warning("unknown locale %r, falling back to %s", tag, FALLBACK_LOCALE)
        return Locale.parse(FALLBACK_LOCALE)


def currency_for_locale(locale: Locale) -> str:
    """ロケールの地域で現在使われている通貨コード。地域が無ければ USD。"""
    if not locale.territory:
        return FALLBACK_CURRENCY
    currencies = get_territory_currencies(locale.territory)
    return currencies[0] if currencies else FALLBACK_CURRENCY


# ----------------------------------------------------------------------
#  フォーマッター
# ----------------------------------------------------------------------
class CurrencyFormatter(Protocol):
    def format(self, amount: Number, locale_tag: Optional[str] = None) -> str:
        ...


class BabelCurrencyFormatter:
    """
    Babel による通貨フォーマッター。

    currency を指定しない場合はロケールの地域から通貨を決める
    （en_US → USD、de_DE → EUR、ja_JP → JPY）。
    """

    def __init__(self, currency: Optional[str] = None):
        self.currency = currency

    def format(self, amount: Number, locale_tag: Optional[str] = None) -> str:
        locale = _resolve_locale(locale_tag)
        currency = self.currency or currency_for_locale(locale)
        value = Decimal(str(amount))
        with amount_context(value):
            return format_currency(value, currency, locale=locale)


_default_formatter = BabelCurrencyFormatter()


def format_as_currency(
    text: str,
    locale_tag: Optional[str] = None,
    formatter: Optional[CurrencyFormatter] = None,
) -> str:
    """
    入力文字列を通貨表記に整形する。
    パースできなければ text をそのまま返す（空文字なら空文字）。
    """
    value = _parse_or_none(text) if text else None
    if value is None:
        return text
    try:
        return (formatter or _default_formatter).format(value, locale_tag)
    except InvalidOperation:
        logger.warning("could not format amount %r, showing it as typed", text)
        return text


def format_amount(
    amount: Number,
    locale_tag: Optional[str] = None,
    formatter: Optional[CurrencyFormatter] = None,
) -> str:
    """計算済みの金額を通貨表記にする。"""
    return (formatter or _default_formatter).format(amount, locale_tag)
