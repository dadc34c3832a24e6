import logging

import pytest

from dict_enhance.common.errors import ConfigError, FileError
from dict_enhance.glossary import sources
from dict_enhance.glossary.sources import EdictFormat, Japanese3Format, load_glossary


def test_trim_edict_gloss_removes_framing_and_entl_tag():
    assert sources.trim_edict_gloss("/to eat/to consume/EntL1234567X/") == "to eat/to consume"
    assert sources.trim_edict_gloss("/(n) mountain/EntL1234567/") == "(n) mountain"
    assert sources.trim_edict_gloss("/plain gloss/") == "plain gloss"


def test_edict_loads_kanji_and_kana_only_lines(tmp_path):
    path = tmp_path / "edict2"
    path.write_text(
        "食べる;喰べる(P) [たべる(P)] /(v1,vt) to eat/EntL1358280X/\n"
        "ハイパー /(pref) hyper-/EntL1000000/\n",
        encoding="utf-8",
    )

    table = EdictFormat().load(path)

    assert table.source_id == "edict2"
    assert table.get("食べる") == "(v1,vt) to eat"
    assert table.get("喰べる") == "(v1,vt) to eat"
    assert table.get("ハイパー") == "(pref) hyper-"
    assert "たべる" not in table
    assert table.skipped == 0


def test_edict_skips_malformed_lines_with_warning(tmp_path, caplog):
    path = tmp_path / "edict2"
    path.write_text(
        "lonelyfield\n"
        "空 [から] /EntL1234567X/\n"
        "木 [き] /tree/EntL1/\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="dict_enhance.glossary.sources"):
        table = EdictFormat().load(path)

    assert len(table) == 1
    assert table.skipped == 2
    assert "line 1" in caplog.text
    assert "lonelyfield" in caplog.text
    assert "line 2" in caplog.text


def test_edict_last_write_wins(tmp_path):
    path = tmp_path / "edict2"
    path.write_text("木 [き] /first/\n木 [こ] /second/\n", encoding="utf-8")

    assert EdictFormat().load(path).get("木") == "second"


def test_japanese3_skips_lines_without_headword_or_gloss(tmp_path):
    path = tmp_path / "japanese3-data"
    path.write_text(
        "岳|たけ|peak; mountain\n"
        "|よみ|orphan gloss\n"
        "嶽|たけ|\n"
        "素晴らしい|すばらしい|wonderful|splendid\n",
        encoding="utf-8",
    )

    table = Japanese3Format().load(path)

    assert dict(table.entries) == {
        "岳": "peak; mountain",
        "素晴らしい": "wonderful|splendid",
    }
    assert table.skipped == 2


def test_unreadable_glossary_raises_file_error(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(FileError) as excinfo:
        load_glossary("edict2", missing)
    assert excinfo.value.path == missing
    assert "nope" in str(excinfo.value)


def test_unknown_source_is_a_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_glossary("jmdict", tmp_path / "x")
