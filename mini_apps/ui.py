"""
ui.py
======================

Streamlit ベースの UI コンポーネントをまとめたモジュール。

責務:
- スマホ幅を主ターゲットとしたレイアウトとスタイル
- 国旗クイズ画面の描画（出題国・国旗ボタン・スコア・結果アラート）
- 割り勘画面の描画（金額入力・人数・チップ率・合計・1 人あたり）

ここでは「見た目」と「ユーザー操作の入力」を扱い、
採点や計算などのロジックは flag_quiz.py / bill_split.py に任せる。
描画する内容は views.py のビューモデルで受け取る。

戻り値として「何が押されたか」「どの値が新たに選ばれたか」を返す。
"""

from __future__ import annotations

import html
from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

from .bill_split import people_label
from .views import BillSplitView, FlagQuizView

# ----------------------------------------------------------------------
#  テーマ定義
# ----------------------------------------------------------------------


THEMES: Dict[str, Dict[str, str]] = {
    "flag": {
        "bg_top": "#0a3d91",
        "bg_bottom": "#000000",
        "text": "#ffffff",
        "accent": "#ff9500",  # タイトルのオレンジ
        "surface": "#ffffff22",
        "border": "#000000",
    },
    "split": {
        "bg_top": "#1a3373",
        "bg_bottom": "#4d66e6",
        "text": "#ffffff",
        "accent": "#ffffff",
        "surface": "#ffffffcc",
        "border": "#d1d1d6",
    },
}

# 国旗ボタンのキー（ラウンドをまたいで同じキーを使う）
FLAG_BUTTON_KEY = "flag_choice_{}"
AMOUNT_KEY = "split_amount"
PEOPLE_KEY = "split_people"
TIP_KEY = "split_tip"
SPLIT_WIDGET_KEYS = (AMOUNT_KEY, PEOPLE_KEY, TIP_KEY)


# ----------------------------------------------------------------------
#  CSS 生成
# ----------------------------------------------------------------------
def _generate_css(theme: Dict[str, str]) -> str:
    """テーマに応じたグローバル CSS を生成する。"""

    return f"""
    <style>
    .stApp {{
        background: linear-gradient(to bottom, {theme['bg_top']}, {theme['bg_bottom']});
        color: {theme['text']};
    }}

    .ma-title {{
        text-align: center;
        font-weight: 800;
        font-size: 1.9rem;
        color: {theme['accent']};
        text-shadow: 0 0 5px #00000088;
        margin-bottom: 0.5rem;
    }}

    .ma-prompt {{
        text-align: center;
        font-weight: 700;
        font-size: 1.5rem;
        color: {theme['text']};
    }}

    .ma-target {{
        text-align: center;
        font-size: 2.2rem;
        color: {theme['text']};
        margin-bottom: 0.75rem;
    }}

    .ma-flag img {{
        border-radius: 999px;
        border: 1px solid {theme['border']};
        box-shadow: 0 0 2px {theme['border']};
    }}

    .ma-score {{
        text-align: center;
        font-weight: 900;
        font-size: 1.6rem;
        color: {theme['text']};
        margin-top: 1rem;
    }}

    .ma-section {{
        color: {theme['text']};
        font-size: 0.85rem;
        text-transform: uppercase;
        margin-top: 0.75rem;
    }}

    .ma-amount {{
        background: {theme['surface']};
        color: #1c1c1e;
        padding: 0.6rem 0.9rem;
        border-radius: 10px;
        font-weight: 600;
    }}

    .ma-safe-bottom {{
        height: 80px; /* スマホ下部 UI に埋もれないための余白 */
    }}
    </style>
    """


def _inject_theme(theme_key: str) -> None:
    st.markdown(_generate_css(THEMES[theme_key]), unsafe_allow_html=True)


# ----------------------------------------------------------------------
#  公開 API: 国旗クイズ
# ----------------------------------------------------------------------
def render_flag_page(view: FlagQuizView) -> Dict[str, Any]:
    """
    国旗クイズ画面を描画し、ユーザー操作の結果を返す。

    戻り値:
        {
          "tapped": Optional[int],     # 新たに押された国旗 index (なければ None)
          "clicked_continue": bool,    # 結果アラートの Continue
          "clicked_reset": bool,
        }
    """
    _inject_theme("flag")

    tapped: Optional[int] = None
    clicked_continue = False
    clicked_reset = False

    col_title, col_reset = st.columns([4, 1])
    with col_title:
        st.markdown("<div class='ma-title'>GUESS THE FLAG</div>", unsafe_allow_html=True)
    with col_reset:
        if st.button("↺", key="flag_reset", help="Reset score"):
            clicked_reset = True

    st.markdown(f"<div class='ma-prompt'>{html.escape(view.prompt)}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='ma-target'>{html.escape(view.target_country)}</div>", unsafe_allow_html=True)

    # 結果表示中は国旗を押せないようにする
    answering = view.alert is None

    for choice in view.choices:
        if choice.image_path is not None:
            st.markdown("<div class='ma-flag'>", unsafe_allow_html=True)
            st.image(str(choice.image_path), width=240)
            st.markdown("</div>", unsafe_allow_html=True)
            label = f"Flag {choice.index + 1}"
        else:
            # 画像が無い場合は国名で代用
            label = choice.country

        if st.button(
            label,
            key=FLAG_BUTTON_KEY.format(choice.index),
            width="stretch",
            disabled=not answering,
        ):
            tapped = choice.index

    # ----------------------------------------
    # 結果アラート
    # ----------------------------------------
    if view.alert is not None:
        box = st.success if view.alert.correct else st.error
        box(f"**{view.alert.title}**\n\n{view.alert.message}")
        if st.button("Continue", key="flag_continue", type="primary", width="stretch"):
            clicked_continue = True

    st.markdown(f"<div class='ma-score'>{html.escape(view.score_text)}</div>", unsafe_allow_html=True)

    if view.history_rows:
        with st.expander("Round history"):
            st.dataframe(pd.DataFrame(view.history_rows), hide_index=True)

    st.markdown("<div class='ma-safe-bottom'></div>", unsafe_allow_html=True)

    return {
        "tapped": tapped,
        "clicked_continue": clicked_continue,
        "clicked_reset": clicked_reset,
    }


# ----------------------------------------------------------------------
#  公開 API: 割り勘
# ----------------------------------------------------------------------
def render_split_page(
    view: BillSplitView,
    *,
    amount_text: str,
    people_count: int,
    tip_percentage: int,
) -> Dict[str, Any]:
    """
    割り勘画面を描画し、入力値を返す。

    amount_text / people_count / tip_percentage はウィジェットの初期値。
    2 回目以降の再実行では Streamlit がキーごとに値を保持する。

    戻り値:
        {
          "amount_text": str,
          "people_count": int,
          "tip_percentage": int,
          "clicked_reset": bool,
        }
    """
    _inject_theme("split")

    clicked_reset = False

    col_title, col_reset = st.columns([4, 1])
    with col_title:
        st.markdown("<div class='ma-title'>WeSplit</div>", unsafe_allow_html=True)
    with col_reset:
        if st.button("⟳", key="split_reset", help="Reset to defaults"):
            clicked_reset = True

    # ----------------------------------------
    # 金額・人数
    # ----------------------------------------
    new_amount = st.text_input(
        "Amount",
        value=amount_text,
        key=AMOUNT_KEY,
        placeholder="Amount",
        label_visibility="collapsed",
    )
    if amount_text:
        # 入力確定後の通貨表記。読めない入力はそのまま出るのでエスケープする
        st.markdown(
            f"<div class='ma-amount'>{html.escape(view.amount_display)}</div>",
            unsafe_allow_html=True,
        )

    options = view.people_options
    new_people = st.selectbox(
        "Number of people",
        options,
        index=options.index(people_count) if people_count in options else 0,
        key=PEOPLE_KEY,
        format_func=people_label,
    )

    # ----------------------------------------
    # チップ
    # ----------------------------------------
    st.markdown("<div class='ma-section'>How much tip?</div>", unsafe_allow_html=True)
    st.markdown(view.tip_label)
    new_tip = st.select_slider(
        "Tip percentage",
        options=view.tip_options,
        value=tip_percentage,
        key=TIP_KEY,
        format_func=lambda p: f"{p}%",
    )

    # ----------------------------------------
    # 結果
    # ----------------------------------------
    st.markdown("<div class='ma-section'>Amount per person</div>", unsafe_allow_html=True)
    st.markdown(f"### {view.per_person_share}")

    st.markdown("<div class='ma-section'>Total amount</div>", unsafe_allow_html=True)
    st.markdown(f"### {view.grand_total}")
    st.caption(f"Tip: {view.tip_value} · {view.locale}")

    st.markdown("<div class='ma-safe-bottom'></div>", unsafe_allow_html=True)

    return {
        "amount_text": new_amount or "",
        "people_count": int(new_people),
        "tip_percentage": int(new_tip),
        "clicked_reset": clicked_reset,
    }


def clear_split_widgets() -> None:
    """リセット時、ウィジェットが保持している値を捨てて初期値から描画し直させる。"""
    for key in SPLIT_WIDGET_KEYS:
        st.session_state.pop(key, None)
