"""
flag_quiz.py
======================

国旗当てクイズのラウンド管理と採点ロジック。

要件:
- 国リストをシャッフルし、先頭 3 カ国を選択肢として表示
- 正解インデックスは {0, 1, 2} から一様ランダム
- 正解で +5、不正解で -3（スコアはマイナスもあり得る）
- 回答してもラウンドは進まない。「Continue」で new_round() を呼ぶのは UI 側
- reset() はスコアを 0 に戻してから新しいラウンドを始める

乱数は random.Random 互換のオブジェクトを注入できるので、
テストでは seed 固定の Random を渡せば出題が再現できる。
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .config import CHOICES_PER_ROUND, DEFAULT_COUNTRIES

logger = logging.getLogger(__name__)


class AnswerOutcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @property
    def title(self) -> str:
        """結果アラートのタイトル文言"""
        if self is AnswerOutcome.CORRECT:
            return "Correct"
        return "Wrong, try again!"


@dataclass(frozen=True)
class AnswerRecord:
    """1 回の回答の記録（出題国・押した国・結果）"""

    country: str
    chosen: str
    outcome: AnswerOutcome


class QuizRoundEngine:
    """
    国旗クイズのエンジン。

    主な機能:
    - new_round(): シャッフルと正解の再抽選
    - submit_answer(): 採点してスコアを更新
    - reset(): スコアと履歴をクリアして新しいラウンド
    """

    def __init__(
        self,
        countries: Optional[Sequence[str]] = None,
        *,
        rng: Optional[random.Random] = None,
        correct_delta: int = 5,
        incorrect_delta: int = -3,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.correct_delta = correct_delta
        self.incorrect_delta = incorrect_delta

        self.countries: List[str] = []
        self.correct_answer_index = 0
        self.score = 0
        self.history: List[AnswerRecord] = []

        self.new_round(DEFAULT_COUNTRIES if countries is None else countries)

    # ------------------------------------------------------------
    # ラウンド
    # ------------------------------------------------------------
    def new_round(self, country_set: Optional[Sequence[str]] = None) -> None:
        """
        国リストをシャッフルし、正解インデックスを選び直す。
        country_set を省略すると現在の国リストをそのまま使う。
        """
        pool = list(self.countries if country_set is None else country_set)
        if len(pool) < CHOICES_PER_ROUND:
            raise ValueError(
                f"国旗クイズには最低 {CHOICES_PER_ROUND} カ国が必要です: {pool!r}"
            )

        self.rng.shuffle(pool)
        self.countries = pool
        self.correct_answer_index = self.rng.randrange(CHOICES_PER_ROUND)
        logger.debug(
            "new round: target=%s choices=%s", self.target_country, self.choices
        )

    @property
    def choices(self) -> List[str]:
        """画面に並べる 3 カ国（表示順）"""
        return self.countries[:CHOICES_PER_ROUND]

    @property
    def target_country(self) -> str:
        """「Tap the flag of ...」に出す国名"""
        return self.countries[self.correct_answer_index]

    # ------------------------------------------------------------
    # 回答
    # ------------------------------------------------------------
    def submit_answer(self, choice_index: int) -> AnswerOutcome:
        """
        押された国旗を採点してスコアを更新する。

        正解インデックス以外はすべて不正解扱い（例外は投げない）。
        ラウンドは進めないので、結果表示のあと呼び出し側で new_round() する。
        """
        if choice_index == self.correct_answer_index:
            outcome = AnswerOutcome.CORRECT
            self.score += self.correct_delta
        else:
            outcome = AnswerOutcome.INCORRECT
            self.score += self.incorrect_delta

        if 0 <= choice_index < len(self.countries):
            chosen = self.countries[choice_index]
        else:
            chosen = ""
        self.history.append(AnswerRecord(self.target_country, chosen, outcome))

        logger.info(
            "answer %s: chose=%r target=%s score=%d",
            outcome.value, chosen, self.target_country, self.score,
        )
        return outcome

    def score_message(self) -> str:
        """結果アラートの本文"""
        return f"Your score is {self.score}"

    # ------------------------------------------------------------
    # リセット
    # ------------------------------------------------------------
    def reset(self) -> None:
        """スコアと履歴を消し、新しいラウンドを始める。"""
        self.score = 0
        self.history.clear()
        self.new_round()
        logger.info("flag quiz reset")
