"""
app.py
======================

国旗クイズ & 割り勘アプリ（Streamlit）エントリーポイント。

特徴:
- ホーム画面 + メニュー構成
- 国旗クイズ（GUESS THE FLAG）/ 割り勘（WeSplit）/ 使い方
- 状態は st.session_state に 1 セッション 1 つずつ保持
- 操作のたびに「イベントで状態更新 → views.describe_*() → ui.render_*()」

前提:
- assets/flags/<Country>.png があれば国旗画像を表示（無ければ国名ボタン）
- config.toml があれば読み込む（無くてもデフォルト値で動く）
- 環境変数 MINI_APPS_LOCALE で通貨表示のロケールを上書きできる
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import streamlit as st

from mini_apps.bill_split import SplitCalculator
from mini_apps.config import AppConfig
from mini_apps.flag_quiz import AnswerOutcome, QuizRoundEngine
from mini_apps.logging_config import setup_logging
from mini_apps.ui import (
    AMOUNT_KEY,
    PEOPLE_KEY,
    TIP_KEY,
    clear_split_widgets,
    render_flag_page,
    render_split_page,
)
from mini_apps.views import describe_bill_split, describe_flag_quiz

logger = logging.getLogger("mini_apps.app")


# ----------------------------------------------------------------------
#  アプリ設定読み込み
# ----------------------------------------------------------------------
def load_app_config() -> AppConfig:
    """
    AppConfig をセッションに保持して返す。
    初回読み込み時にロガーも設定する。
    """
    if "app_config" in st.session_state:
        return st.session_state["app_config"]

    try:
        cfg = AppConfig.load()
    except ValueError as e:
        st.error(f"設定を読み込めませんでした: {e}")
        st.stop()

    setup_logging(cfg.log_level)
    logger.info("config loaded: locale=%s offset=%d", cfg.locale, cfg.per_person_offset)
    st.session_state["app_config"] = cfg
    return cfg


# ----------------------------------------------------------------------
#  エンジン / 計算機のラッパー
# ----------------------------------------------------------------------
def get_flag_engine() -> QuizRoundEngine:
    """QuizRoundEngine をセッションに保持して返す。"""
    if "flag_engine" not in st.session_state:
        cfg = load_app_config()
        st.session_state["flag_engine"] = QuizRoundEngine(
            cfg.countries,
            correct_delta=cfg.correct_delta,
            incorrect_delta=cfg.incorrect_delta,
        )
    return st.session_state["flag_engine"]  # type: ignore[return-value]


def get_split_calculator() -> SplitCalculator:
    """SplitCalculator をセッションに保持して返す。"""
    if "split_calculator" not in st.session_state:
        cfg = load_app_config()
        st.session_state["split_calculator"] = SplitCalculator(
            people_count=cfg.default_people,
            tip_percentage=cfg.default_tip,
            per_person_offset=cfg.per_person_offset,
            default_people=cfg.default_people,
            default_tip=cfg.default_tip,
        )
    return st.session_state["split_calculator"]  # type: ignore[return-value]


def set_page(page: str) -> None:
    st.session_state["page"] = page


def get_page() -> str:
    return st.session_state.get("page", load_app_config().default_page)


def go_home_button() -> None:
    if st.button("🏠 ホームに戻る", width="stretch"):
        set_page("home")
        st.rerun()


# ----------------------------------------------------------------------
#  ページ: ホーム
# ----------------------------------------------------------------------
def render_home_page() -> None:
    cfg = load_app_config()
    st.markdown(f"## {cfg.app_name}")

    engine = get_flag_engine()
    calc = get_split_calculator()
    st.write(f"- 国旗クイズのスコア: **{engine.score}**")
    st.write(f"- 割り勘: **{calc.people_count} 人 / チップ {calc.tip_percentage}%**")

    st.write("---")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("🏳️ GUESS THE FLAG", width="stretch"):
            set_page("flag")
            st.rerun()
    with col2:
        if st.button("🧾 WeSplit", width="stretch"):
            set_page("split")
            st.rerun()

    st.write("")
    if st.button("❓ 使い方", width="stretch"):
        set_page("help")
        st.rerun()


# ----------------------------------------------------------------------
#  ページ: 国旗クイズ
# ----------------------------------------------------------------------
def render_flag_main_page() -> None:
    cfg = load_app_config()
    engine = get_flag_engine()

    # 回答後〜Continue までは結果を保持
    last_outcome: Optional[AnswerOutcome] = st.session_state.get("flag_last_outcome")

    view = describe_flag_quiz(engine, flag_dir=cfg.flag_dir, last_outcome=last_outcome)
    ui_result = render_flag_page(view)

    if ui_result["tapped"] is not None and last_outcome is None:
        st.session_state["flag_last_outcome"] = engine.submit_answer(ui_result["tapped"])
        st.rerun()
    elif ui_result["clicked_continue"]:
        st.session_state["flag_last_outcome"] = None
        engine.new_round()
        st.rerun()
    elif ui_result["clicked_reset"]:
        st.session_state["flag_last_outcome"] = None
        engine.reset()
        st.rerun()

    go_home_button()


# ----------------------------------------------------------------------
#  ページ: 割り勘
# ----------------------------------------------------------------------
def apply_split_inputs(calc: SplitCalculator, values: Dict[str, Any]) -> None:
    """ウィジェットの値を SplitCalculator に反映する。"""
    if values.get("amount_text") is not None:
        calc.set_amount_text(values["amount_text"])
    if values.get("people_count") is not None:
        calc.set_people_count(values["people_count"])
    if values.get("tip_percentage") is not None:
        calc.set_tip_percentage(values["tip_percentage"])


def render_split_main_page() -> None:
    cfg = load_app_config()
    calc = get_split_calculator()

    # 今回の再実行で変わったウィジェット値を先に反映し、合計を最新にする
    apply_split_inputs(
        calc,
        {
            "amount_text": st.session_state.get(AMOUNT_KEY),
            "people_count": st.session_state.get(PEOPLE_KEY),
            "tip_percentage": st.session_state.get(TIP_KEY),
        },
    )

    view = describe_bill_split(calc, locale_tag=cfg.locale)
    ui_result = render_split_page(
        view,
        amount_text=calc.raw_amount_text,
        people_count=calc.people_count,
        tip_percentage=calc.tip_percentage,
    )

    if ui_result["clicked_reset"]:
        calc.reset()
        clear_split_widgets()
        st.rerun()

    apply_split_inputs(calc, ui_result)

    go_home_button()


# ----------------------------------------------------------------------
#  ページ: 使い方
# ----------------------------------------------------------------------
def render_help_page() -> None:
    cfg = load_app_config()
    st.markdown("## ❓ 使い方")

    st.markdown(
        f"""
### GUESS THE FLAG
1. 画面上部に表示された国の国旗を、3 つの中から選んでタップします。
2. 正解なら {cfg.correct_delta:+d} 点、不正解なら {cfg.incorrect_delta:+d} 点。結果を確認したら「Continue」で次の問題へ。
3. 右上の ↺ でスコアを 0 に戻して最初からやり直せます。

### WeSplit
1. 金額を入力します（"12,50" のようにカンマ区切りの小数も可）。
2. 人数とチップ率を選ぶと、合計と 1 人あたりの金額が表示されます。
3. 右上の ⟳ で金額・人数 ({cfg.default_people})・チップ率 ({cfg.default_tip}%) を初期値に戻します。
        """
    )

    st.info(
        f"1 人あたりの金額は「人数 + {cfg.per_person_offset}」で割って計算しています"
        "（config.toml の [bill_split] per_person_offset で変更できます）。"
    )

    go_home_button()


# ----------------------------------------------------------------------
#  メイン
# ----------------------------------------------------------------------
def main() -> None:
    st.set_page_config(
        page_title="Mini Apps",
        page_icon="🏳️",
        layout="centered",
    )

    load_app_config()

    page = get_page()

    if page == "flag":
        render_flag_main_page()
    elif page == "split":
        render_split_main_page()
    elif page == "help":
        render_help_page()
    else:
        # デフォルトはホーム
        set_page("home")
        render_home_page()


if __name__ == "__main__":
    main()
