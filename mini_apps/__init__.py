"""
mini_apps パッケージ
======================

このパッケージは、国旗クイズと割り勘計算の 2 つのミニアプリの内部ロジックを提供する。

主な役割:
- 設定管理（config）
- ログ設定（logging_config）
- 国旗クイズのラウンド管理・採点（flag_quiz）
- 金額のパース・通貨フォーマット（currency）
- 割り勘計算（bill_split）
- 状態 → 画面内容への変換（views）
- UI コンポーネント（ui）

app.py は Streamlit のページ遷移のみを担当し、内部ロジックはすべて本パッケージから呼ぶ。
ui は streamlit を import するので、ここでは読み込まない。
"""

from .config import AppConfig
from .flag_quiz import AnswerOutcome, AnswerRecord, QuizRoundEngine
from .currency import (
    BabelCurrencyFormatter,
    CurrencyFormatter,
    active_locale,
    format_amount,
    format_as_currency,
    parse_amount,
)
from .bill_split import SplitCalculator, people_label
from .views import describe_bill_split, describe_flag_quiz
from .logging_config import setup_logging

__all__ = [
    "AppConfig",
    "AnswerOutcome",
    "AnswerRecord",
    "QuizRoundEngine",
    "BabelCurrencyFormatter",
    "CurrencyFormatter",
    "active_locale",
    "format_amount",
    "format_as_currency",
    "parse_amount",
    "SplitCalculator",
    "people_label",
    "describe_bill_split",
    "describe_flag_quiz",
    "setup_logging",
]
