"""
logging_config.py
=================

パッケージ全体のロガー設定。
各モジュールは logging.getLogger(__name__) を使い、ここで
"mini_apps" 名前空間のハンドラーをまとめて設定する。
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    "mini_apps" ロガーを設定する。

    Streamlit は操作のたびにスクリプトを再実行するので、
    既存ハンドラーを消してから付け直し、ログの重複を防ぐ。
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("mini_apps")
    logger.setLevel(level)

    # 前回のハンドラーは閉じてから外す（FileHandler のファイルを開いたままにしない）
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
