"""
views.py
======================

エンジンの状態 → 画面に出す内容（ビューモデル）への変換。

Streamlit は操作ごとにスクリプトを再実行するので、
「イベントで状態を更新 → describe_*() で画面内容を作る → ui.py が描画」
という順番を毎回たどる。ここは Streamlit に依存しない純粋な関数だけを置く。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .bill_split import PEOPLE_CHOICES, TIP_CHOICES, SplitCalculator, people_label
from .currency import CurrencyFormatter, active_locale
from .flag_quiz import AnswerOutcome, QuizRoundEngine

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  国旗クイズ
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FlagChoice:
    index: int
    country: str
    image_path: Optional[Path]  # None なら国名テキストで代用


@dataclass(frozen=True)
class ResultAlert:
    title: str
    message: str
    correct: bool


@dataclass(frozen=True)
class FlagQuizView:
    prompt: str
    target_country: str
    choices: List[FlagChoice]
    score_text: str
    alert: Optional[ResultAlert] = None
    history_rows: List[dict] = field(default_factory=list)


def flag_image_path(country: str, flag_dir: Optional[Path]) -> Optional[Path]:
    """flag_dir/<Country>.png があればそのパス、無ければ None。"""
    if flag_dir is None:
        return None
    path = Path(flag_dir) / f"{country}.png"
    if path.is_file():
        return path
    logger.debug("flag image not found: %s", path)
    return None


def describe_flag_quiz(
    engine: QuizRoundEngine,
    *,
    flag_dir: Optional[Path] = None,
    last_outcome: Optional[AnswerOutcome] = None,
) -> FlagQuizView:
    """
    クイズ画面の内容を組み立てる。
    last_outcome があれば結果アラート（「Continue」待ち）を含める。
    """
    alert = None
    if last_outcome is not None:
        alert = ResultAlert(
            title=last_outcome.title,
            message=engine.score_message(),
            correct=last_outcome is AnswerOutcome.CORRECT,
        )

    choices = [
        FlagChoice(index=i, country=c, image_path=flag_image_path(c, flag_dir))
        for i, c in enumerate(engine.choices)
    ]

    history_rows = [
        {
            "Flag of": r.country,
            "You tapped": r.chosen,
            "Result": r.outcome.title,
        }
        for r in engine.history
    ]

    return FlagQuizView(
        prompt="Tap the flag of",
        target_country=engine.target_country,
        choices=choices,
        score_text=f"Total Score: {engine.score}",
        alert=alert,
        history_rows=history_rows,
    )


# ----------------------------------------------------------------------
#  割り勘
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class BillSplitView:
    amount_display: str
    people_label: str
    people_options: List[int]
    tip_label: str
    tip_options: List[int]
    tip_value: str
    grand_total: str
    per_person_share: str
    locale: str


def describe_bill_split(
    calc: SplitCalculator,
    *,
    locale_tag: Optional[str] = None,
    formatter: Optional[CurrencyFormatter] = None,
) -> BillSplitView:
    """割り勘画面の内容を組み立てる。ロケールは毎回ここで読み直す。"""
    locale = active_locale(locale_tag)
    totals = calc.formatted_totals(locale, formatter)
    return BillSplitView(
        amount_display=calc.formatted_amount(locale, formatter),
        people_label=people_label(calc.people_count),
        people_options=list(PEOPLE_CHOICES),
        tip_label=f"Tip percentage: {calc.tip_percentage}%",
        tip_options=list(TIP_CHOICES),
        tip_value=totals["tip_value"],
        grand_total=totals["grand_total"],
        per_person_share=totals["per_person_share"],
        locale=locale,
    )
