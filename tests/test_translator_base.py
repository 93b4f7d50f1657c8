"""
Tests for the shared BaseTranslator behaviour: language mapping,
validation and chunking.
"""

import httpx
import pytest

from html_translate.exceptions import InvalidSourceOrTargetLanguageError, RequestError
from html_translate.google import GoogleTranslator
from html_translate.languages import GOOGLE_LANGUAGES_TO_CODES
from html_translate.translator import join_chunks, split_text


def test_split_text_short_input_is_one_piece():
    assert split_text("hello", 10) == [("hello", "")]


def test_split_text_prefers_newlines_then_spaces():
    pieces = split_text("aaaa bbbb\ncccc dddd", 12)
    assert pieces == [("aaaa bbbb", "\n"), ("cccc dddd", "")]

    pieces = split_text("aaaa bbbb cccc", 10)
    assert pieces == [("aaaa bbbb", " "), ("cccc", "")]


def test_split_text_hard_cut_without_whitespace():
    pieces = split_text("x" * 25, 10)
    assert [p for p, _ in pieces] == ["x" * 10, "x" * 10, "x" * 5]
    assert all(sep == "" for _, sep in pieces)


def test_split_and_join_restore_layout():
    text = "first line here\nsecond line here\nthird"
    pieces = split_text(text, 20)
    assert all(len(p) <= 20 for p, _ in pieces)
    assert join_chunks([p for p, _ in pieces], [s for _, s in pieces]) == text


def test_map_language_to_code():
    with GoogleTranslator(target="de") as translator:
        assert translator.map_language_to_code("auto", "French") == ("auto", "fr")
        assert translator.is_language_supported("german")
        assert translator.is_language_supported("de")
        assert not translator.is_language_supported("elvish")


def test_supported_languages_listing():
    with GoogleTranslator(target="de") as translator:
        assert "english" in translator.get_supported_languages()
        assert translator.get_supported_languages(as_dict=True) == GOOGLE_LANGUAGES_TO_CODES


def test_missing_target_is_rejected():
    with pytest.raises(InvalidSourceOrTargetLanguageError):
        GoogleTranslator(source="en", target="")


def test_batch_with_same_languages_makes_no_requests(mock_client):
    def handler(request):
        raise AssertionError("no request expected")

    translator = GoogleTranslator(source="de", target="german", client=mock_client(handler))
    assert translator.translate_batch(["eins", "zwei"]) == ["eins", "zwei"]


def test_batch_propagates_transport_errors(mock_client):
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(500)))

    with pytest.raises(RequestError) as exc_info:
        translator.translate_batch(["a", "b"])
    assert exc_info.value.status_code == 500


def test_repr():
    with GoogleTranslator(source="en", target="de") as translator:
        assert repr(translator) == "GoogleTranslator(source='en', target='de')"


def test_split_inside_long_whitespace_run_keeps_layout():
    text = "aaaa" + " " * 25 + "bbbb"
    pieces = split_text(text, 10)

    assert [p for p, _ in pieces] == ["aaaa" + " " * 6, "bbbb"]
    assert all(len(p) <= 10 for p, _ in pieces)
    assert join_chunks([p for p, _ in pieces], [s for _, s in pieces]) == text
