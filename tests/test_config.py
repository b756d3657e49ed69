"""Tests for mini_apps.config and mini_apps.logging_config."""

import logging

import pytest

from mini_apps.config import DEFAULT_COUNTRIES, ROOT_DIR, AppConfig
from mini_apps.logging_config import setup_logging


# ===================================================================
# AppConfig
# ===================================================================

class TestAppConfigDefaults:

    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.countries == DEFAULT_COUNTRIES
        assert cfg.correct_delta == 5
        assert cfg.incorrect_delta == -3
        assert cfg.default_people == 2
        assert cfg.default_tip == 20
        assert cfg.per_person_offset == 2
        assert cfg.locale is None

    def test_countries_not_shared_between_instances(self):
        a = AppConfig()
        a.countries.append("Japan")
        assert "Japan" not in AppConfig().countries

    def test_too_few_countries(self):
        with pytest.raises(ValueError):
            AppConfig(countries=["France", "Spain"])

    def test_negative_offset(self):
        with pytest.raises(ValueError):
            AppConfig(per_person_offset=-1)

    def test_tip_out_of_range(self):
        with pytest.raises(ValueError):
            AppConfig(default_tip=120)

    @pytest.mark.parametrize("people", [0, 1, 100])
    def test_people_out_of_range(self, people):
        with pytest.raises(ValueError):
            AppConfig(default_people=people)


class TestAppConfigLoad:

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = AppConfig.load(tmp_path / "config.toml", environ={})
        assert cfg == AppConfig()

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            """
[app]
name = "Flags & Bills"

[logging]
level = "debug"

[flag_quiz]
countries = ["Japan", "Korea", "China", "India"]
correct_delta = 3

[bill_split]
per_person_offset = 0
locale = "de_DE"
""",
            encoding="utf-8",
        )
        cfg = AppConfig.load(path, environ={})
        assert cfg.app_name == "Flags & Bills"
        assert cfg.log_level == "DEBUG"
        assert cfg.countries == ["Japan", "Korea", "China", "India"]
        assert cfg.correct_delta == 3
        assert cfg.incorrect_delta == -3
        assert cfg.per_person_offset == 0
        assert cfg.locale == "de_DE"

    def test_relative_flag_dir_is_repo_relative(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[flag_quiz]\nflag_dir = "images/flags"\n', encoding="utf-8")
        cfg = AppConfig.load(path, environ={})
        assert cfg.flag_dir == ROOT_DIR / "images" / "flags"

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[bill_split]\nlocale = "de_DE"\n', encoding="utf-8")
        cfg = AppConfig.load(
            path,
            environ={"MINI_APPS_LOCALE": "ja_JP", "MINI_APPS_LOG_LEVEL": "warning"},
        )
        assert cfg.locale == "ja_JP"
        assert cfg.log_level == "WARNING"

    def test_broken_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[app\nname = ", encoding="utf-8")
        with pytest.raises(ValueError):
            AppConfig.load(path, environ={})

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[flag_quiz]\ncountries = ["Japan"]\n', encoding="utf-8")
        with pytest.raises(ValueError):
            AppConfig.load(path, environ={})

    @pytest.mark.parametrize(
        "body",
        [
            '[flag_quiz]\ncorrect_delta = "5"\n',
            '[flag_quiz]\ncountries = "ABCD"\n',
            '[flag_quiz]\ncountries = ["Japan", "Korea", 3]\n',
            '[bill_split]\ndefault_people = 1\n',
            '[bill_split]\ndefault_tip = true\n',
            '[bill_split]\nper_person_offset = 1.5\n',
            '[bill_split]\nlocale = 5\n',
        ],
    )
    def test_wrongly_typed_values_raise(self, tmp_path, body):
        path = tmp_path / "config.toml"
        path.write_text(body, encoding="utf-8")
        with pytest.raises(ValueError):
            AppConfig.load(path, environ={})

    def test_shipped_config_loads(self):
        cfg = AppConfig.load(ROOT_DIR / "config.toml", environ={})
        assert cfg.countries == DEFAULT_COUNTRIES
        assert cfg.per_person_offset == 2


# ===================================================================
# setup_logging
# ===================================================================

class TestSetupLogging:

    def teardown_method(self):
        logger = logging.getLogger("mini_apps")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_level_from_string(self):
        setup_logging("debug")
        assert logging.getLogger("mini_apps").level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger("mini_apps").level == logging.INFO

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(logging.INFO)
        setup_logging(logging.INFO)
        assert len(logging.getLogger("mini_apps").handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "mini_apps.log"
        setup_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("mini_apps.flag_quiz").info("hello")
        for handler in logging.getLogger("mini_apps").handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        for handler in logging.getLogger("mini_apps").handlers:
            handler.close()

    def test_repeated_setup_closes_file_handler(self, tmp_path):
        setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"))
        first = next(
            h for h in logging.getLogger("mini_apps").handlers
            if isinstance(h, logging.FileHandler)
        )
        setup_logging(logging.INFO, log_file=str(tmp_path / "second.log"))
        assert first.stream is None
        assert first not in logging.getLogger("mini_apps").handlers
