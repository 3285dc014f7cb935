"""Tests for user config load/save and field validation."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

from booktop.config import (
    _config_to_dict,
    _dict_to_config,
    _safe_get,
    get_config_path,
    load_config,
    save_config,
)
from booktop.models import UserConfig


class TestSafeGet:
    def test_returns_value_of_expected_type(self):
        assert _safe_get({"a": "x"}, "a", "d", str) == "x"

    def test_wrong_type_returns_default(self):
        assert _safe_get({"a": 3}, "a", "d", str) == "d"

    def test_missing_key_returns_default(self):
        assert _safe_get({}, "a", "d", str) == "d"


class TestDictConversion:
    def test_round_trip(self, sample_config):
        config = sample_config(
            default_bookcase="~/books.yaml",
            theme_name="solarized-dark",
            tag_separator=";",
            default_sort="author",
            sort_on_start=True,
        )
        assert _dict_to_config(_config_to_dict(config)) == config

    def test_invalid_sort_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="booktop.config"):
            config = _dict_to_config({"default_sort": "date"})
        assert config.default_sort == "title"
        assert "default_sort" in caplog.text

    def test_wrong_types_fall_back(self):
        config = _dict_to_config({"sort_on_start": "yes", "theme_name": 7, "tag_separator": 1})
        assert config == UserConfig()


class TestLoadSave:
    def test_missing_file_returns_defaults(self):
        assert not get_config_path().exists()
        assert load_config() == UserConfig()

    def test_save_then_load(self, _isolate_config_dir):
        config = UserConfig(theme_name="catppuccin-mocha", default_bookcase="/tmp/b.yaml")
        assert save_config(config) is True
        assert get_config_path().parent == _isolate_config_dir
        assert load_config() == config

    def test_invalid_json_returns_defaults(self, caplog):
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="booktop.config"):
            assert load_config() == UserConfig()
        assert "invalid JSON" in caplog.text

    def test_undecodable_file_returns_defaults(self, caplog):
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_bytes(b'{"theme_name": "\xff"}')
        with caplog.at_level(logging.WARNING, logger="booktop.config"):
            assert load_config() == UserConfig()
        assert "UTF-8" in caplog.text

    def test_non_object_json_returns_defaults(self):
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert load_config() == UserConfig()

    def test_save_failure_returns_false(self):
        with patch("booktop.io_utils.os.replace", side_effect=OSError("read-only")):
            assert save_config(UserConfig()) is False
        assert not get_config_path().exists()
