"""Tests for property line tokenization."""

from vcardimport.tokenizer import tokenize_line


def test_element_params_and_value():
    line = tokenize_line("TEL;TYPE=CELL;type=pref:+1 555 0100")
    assert line.element == "TEL"
    assert line.params == ["TYPE=CELL", "type=pref"]
    assert line.value == "+1 555 0100"


def test_value_keeps_colons_after_the_first():
    element, params, value = tokenize_line("URL:https://example.com:8080/x")
    assert element == "URL"
    assert params == []
    assert value == "https://example.com:8080/x"


def test_case_is_preserved():
    assert tokenize_line("item1.URL:x").element == "item1.URL"


def test_line_without_colon_is_empty():
    assert tokenize_line("GARBAGE;TYPE=X") == ("", [], "")


def test_empty_value():
    assert tokenize_line("NOTE:") == ("NOTE", [], "")
