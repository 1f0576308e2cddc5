from pathlib import Path

from quire.utils.languages import (
    LangType,
    lang_type_from_name,
    localization_path_from_code,
)


def test_lang_type_from_name() -> None:
    assert lang_type_from_name("cpp") is LangType.CPP
    assert lang_type_from_name("CPP") is LangType.CPP
    assert lang_type_from_name("normal") is LangType.TEXT


def test_lang_type_from_alias() -> None:
    assert lang_type_from_name("c++") is LangType.CPP
    assert lang_type_from_name("py") is LangType.PYTHON
    assert lang_type_from_name("txt") is LangType.TEXT


def test_lang_type_from_unknown_name() -> None:
    assert lang_type_from_name("") is LangType.EXTERNAL
    assert lang_type_from_name("klingon") is LangType.EXTERNAL


def test_localization_path_from_code(tmp_path: Path) -> None:
    (tmp_path / "german.xml").touch()
    assert localization_path_from_code("de-at", folder=tmp_path) == str(
        tmp_path / "german.xml"
    )


def test_localization_path_missing_file(tmp_path: Path) -> None:
    assert localization_path_from_code("de", folder=tmp_path) == ""


def test_localization_path_unknown_code(tmp_path: Path) -> None:
    assert localization_path_from_code("xx", folder=tmp_path) == ""


def test_bundled_localization_files() -> None:
    assert Path(localization_path_from_code("en-us")).name == "english.xml"
    assert Path(localization_path_from_code("fr")).name == "french.xml"
