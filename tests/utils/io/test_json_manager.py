"""Unit tests for the JsonManager utility module.

These tests verify JSON file loading and in-memory decoding, including
missing files and malformed documents."""

import pytest  # type: ignore

from src.utils.io.json_manager import JsonManager


def test_load_json_file(tmp_path):
    """A well-formed file is decoded."""
    filepath = tmp_path / "data.json"
    filepath.write_text('{"Asia/Tokyo": ["2025-01-01"]}', encoding="utf-8")
    result = JsonManager.load(str(filepath))
    if result != {"Asia/Tokyo": ["2025-01-01"]}:
        raise AssertionError(f"Unexpected content: {result}")


def test_load_file_not_found(tmp_path):
    """Loading a non-existent file returns None."""
    result = JsonManager.load(str(tmp_path / "not_exists.json"))
    if result is not None:
        raise AssertionError("Expected None for non-existent file")


def test_load_json_decode_error(tmp_path):
    """A malformed file returns None instead of raising."""
    filepath = tmp_path / "malformed.json"
    filepath.write_text("{ invalid json ")
    if JsonManager.load(str(filepath)) is not None:
        raise AssertionError("Expected load to return None for malformed JSON")


@pytest.mark.parametrize("invalid_path", [None, "", "   "])
def test_load_invalid_path(invalid_path):
    """Blank paths return None."""
    if JsonManager.load(invalid_path) is not None:
        raise AssertionError("Expected None for a blank filepath")


def test_loads_payload():
    """In-memory documents are decoded; malformed ones yield None."""
    if JsonManager.loads('[{"date": "2025-01-01"}]') != [{"date": "2025-01-01"}]:
        raise AssertionError("Expected the decoded array")
    if JsonManager.loads("<html>oops</html>") is not None:
        raise AssertionError("Expected None for a malformed payload")
