"""
config.py
=========

アプリ全体で利用する設定値を一元管理する。
国旗クイズ・割り勘計算・ロケール・ログレベル・ファイルパスなど
すべてこのクラスを通じて取得する。

読み込み順（後勝ち）:
1. AppConfig のデフォルト値
2. ルートの config.toml（存在する場合のみ）
3. 環境変数 MINI_APPS_LOCALE / MINI_APPS_LOG_LEVEL
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml


# ------------------------------------------------------------
# 基本パス定義
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
ASSETS_DIR = ROOT_DIR / "assets"
CONFIG_PATH = ROOT_DIR / "config.toml"

DEFAULT_COUNTRIES: List[str] = [
    "Estonia", "France", "Germany", "Ireland", "Italy",
    "Nigeria", "Poland", "Russia", "Spain", "UK",
]

# 1 ラウンドで表示する国旗の数
CHOICES_PER_ROUND = 3

_INT_FIELDS = (
    "correct_delta",
    "incorrect_delta",
    "default_people",
    "default_tip",
    "per_person_offset",
)


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    アプリ設定クラス。

    - 国旗クイズの出題国と加点・減点
    - 割り勘の初期値と 1 人あたり計算のオフセット
    - 通貨表示に使うロケール（None ならホスト環境から取得）
    - ログレベル
    """

    # ---------- アプリ ----------
    app_name: str = "Mini Apps"
    default_page: str = "home"
    log_level: str = "INFO"

    # ---------- 国旗クイズ ----------
    countries: List[str] = field(default_factory=lambda: list(DEFAULT_COUNTRIES))
    correct_delta: int = 5
    incorrect_delta: int = -3
    flag_dir: Path = ASSETS_DIR / "flags"

    # ---------- 割り勘 ----------
    default_people: int = 2
    default_tip: int = 20
    # 1 人あたりの金額は people_count + このオフセットで割る
    per_person_offset: int = 2
    locale: Optional[str] = None

    # ============================================================
    # 初期化処理
    # ============================================================

    def __post_init__(self):
        self.flag_dir = Path(self.flag_dir)
        self.log_level = str(self.log_level).upper()
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.countries, list) or not all(
            isinstance(c, str) for c in self.countries
        ):
            raise ValueError(f"countries は国名（文字列）のリスト: {self.countries!r}")
        for name in _INT_FIELDS:
            value = getattr(self, name)
            # toml の true/false は bool で来るので int とは区別する
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} は整数: {value!r}")
        if self.locale is not None and not isinstance(self.locale, str):
            raise ValueError(f"locale は文字列: {self.locale!r}")
        if len(self.countries) < CHOICES_PER_ROUND:
            raise ValueError(
                f"countries には最低 {CHOICES_PER_ROUND} カ国が必要です: {self.countries!r}"
            )
        if self.per_person_offset < 0:
            raise ValueError(f"per_person_offset は 0 以上: {self.per_person_offset}")
        if not 0 <= self.default_tip <= 100:
            raise ValueError(f"default_tip は 0〜100: {self.default_tip}")
        if not 2 <= self.default_people <= 99:
            raise ValueError(f"default_people は 2〜99: {self.default_people}")

    # ============================================================
    # 読み込み
    # ============================================================

    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> "AppConfig":
        """
        config.toml と環境変数から AppConfig を組み立てる。

        config.toml が無い場合はデフォルト値のみ。
        壊れた toml は ValueError として呼び出し側に伝える。
        """
        path = CONFIG_PATH if path is None else Path(path)
        env = os.environ if environ is None else environ

        data: Dict[str, Any] = {}
        if path.exists():
            try:
                data = toml.load(path)
            except toml.TomlDecodeError as e:
                raise ValueError(f"config.toml を読み込めません: {path}: {e}") from e

        kwargs: Dict[str, Any] = {}
        kwargs.update(_pick(data.get("app"), {"name": "app_name", "default_page": "default_page"}))
        kwargs.update(_pick(data.get("logging"), {"level": "log_level"}))
        kwargs.update(
            _pick(
                data.get("flag_quiz"),
                {
                    "countries": "countries",
                    "correct_delta": "correct_delta",
                    "incorrect_delta": "incorrect_delta",
                    "flag_dir": "flag_dir",
                },
            )
        )
        kwargs.update(
            _pick(
                data.get("bill_split"),
                {
                    "default_people": "default_people",
                    "default_tip": "default_tip",
                    "per_person_offset": "per_person_offset",
                    "locale": "locale",
                },
            )
        )

        # flag_dir の相対パスはリポジトリルート基準
        if "flag_dir" in kwargs and not Path(kwargs["flag_dir"]).is_absolute():
            kwargs["flag_dir"] = ROOT_DIR / kwargs["flag_dir"]

        # 環境変数が最優先
        if env.get("MINI_APPS_LOCALE"):
            kwargs["locale"] = env["MINI_APPS_LOCALE"]
        if env.get("MINI_APPS_LOG_LEVEL"):
            kwargs["log_level"] = env["MINI_APPS_LOG_LEVEL"]

        return cls(**kwargs)


# ------------------------------------------------------------
# 内部関数
# ------------------------------------------------------------

def _pick(section: Any, mapping: Dict[str, str]) -> Dict[str, Any]:
    """toml のセクションから mapping にあるキーだけを AppConfig の引数名で取り出す。"""
    if not isinstance(section, dict):
        return {}
    return {attr: section[key] for key, attr in mapping.items() if key in section}
