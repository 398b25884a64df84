"""Tests for line ending normalization and unfolding."""

from vcardimport.normalizer import normalize_text


def test_crlf_and_lone_cr_become_lf():
    assert normalize_text("A:1\r\nB:2\rC:3\n") == "A:1\nB:2\nC:3\n"


def test_folded_line_is_joined_without_leading_whitespace():
    assert normalize_text("NOTE:Hello\n World") == "NOTE:HelloWorld"


def test_fold_keeps_space_written_before_the_break():
    assert normalize_text("NOTE:Hello \n World") == "NOTE:Hello World"


def test_tab_fold_and_crlf_fold():
    assert normalize_text("FN:Jo\r\n\thn") == "FN:John"


def test_only_one_whitespace_character_is_removed():
    assert normalize_text("NOTE:a\n  b") == "NOTE:a b"


def test_quoted_printable_break_between_equals_is_collapsed():
    assert normalize_text("NOTE;ENCODING=QUOTED-PRINTABLE:=41=\r\n=42") == (
        "NOTE;ENCODING=QUOTED-PRINTABLE:=41=42"
    )


def test_equals_followed_by_plain_line_is_not_joined():
    assert normalize_text("A:x=\nB:y") == "A:x=\nB:y"
