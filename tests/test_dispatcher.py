"""Tests for property dispatch into the record builder."""

import os
from datetime import date, datetime, timedelta, timezone

import pytest

from vcardimport.decoder import DecodedValue
from vcardimport.dispatcher import _HANDLERS, Property, dispatch, unescape_note
from vcardimport.errors import DateParseError
from vcardimport.record import DEFAULT_GROUP_KEY, Address, NameParts, RecordBuilder


def _apply(element, value, params=(), is_raw=False):
    builder = RecordBuilder()
    dispatch(builder, element, DecodedValue(list(params), value, is_raw))
    return builder


def test_every_property_has_a_handler():
    assert set(_HANDLERS) == set(Property)


def test_lookup_ignores_case():
    assert Property.lookup("tel") is Property.TEL
    assert Property.lookup("x-skype-username") is Property.X_SKYPE_USERNAME
    assert Property.lookup("X-UNKNOWN") is None
    assert Property.lookup("") is None


def test_full_name():
    assert _apply("fn", "John Doe").full_name == "John Doe"


def test_name_parts():
    builder = _apply("N", "Doe;John;;Mr.;Jr.")
    assert builder.name == NameParts("Doe", "John", "", "Mr.", "Jr.")


def test_name_missing_trailing_parts_are_empty():
    assert _apply("N", "Doe;John").name == NameParts(lastname="Doe", firstname="John")


def test_address_is_grouped_by_params():
    builder = _apply("ADR", ";;123 Main St;Springfield;IL;12345;USA", ["TYPE=HOME"])
    assert builder.addresses == {
        "TYPE=HOME": [Address(street="123 Main St", city="Springfield", region="IL",
                              zip="12345", country="USA")]
    }


def test_phone_without_params_uses_default_key():
    builder = RecordBuilder()
    dispatch(builder, "TEL", DecodedValue([], "111", False))
    dispatch(builder, "TEL", DecodedValue([], "222", False))
    assert builder.phones == {DEFAULT_GROUP_KEY: ["111", "222"]}


def test_group_keys_keep_first_seen_order_and_case():
    builder = RecordBuilder()
    dispatch(builder, "EMAIL", DecodedValue(["TYPE=WORK"], "a@work", False))
    dispatch(builder, "EMAIL", DecodedValue(["TYPE=home"], "b@home", False))
    dispatch(builder, "EMAIL", DecodedValue(["TYPE=WORK"], "c@work", False))
    dispatch(builder, "EMAIL", DecodedValue(["TYPE=HOME"], "d@home", False))

    assert list(builder.emails) == ["TYPE=WORK", "TYPE=home", "TYPE=HOME"]
    assert builder.emails["TYPE=WORK"] == ["a@work", "c@work"]


def test_multiple_params_join_in_order():
    builder = _apply("URL", "https://example.com", ["TYPE=WORK", "PREF=1"])
    assert builder.urls == {"TYPE=WORK;PREF=1": ["https://example.com"]}


@pytest.mark.parametrize("element,attribute", [
    ("REV", "revision"),
    ("VERSION", "version"),
    ("ORG", "organization"),
    ("TITLE", "title"),
    ("GEO", "geo"),
    ("GENDER", "gender"),
])
def test_scalar_properties(element, attribute):
    assert getattr(_apply(element, "value"), attribute) == "value"


def test_birthday_date():
    assert _apply("BDAY", "1985-04-12").birthday == date(1985, 4, 12)
    assert _apply("BDAY", "19850412").birthday == date(1985, 4, 12)


def test_birthday_without_year():
    assert _apply("BDAY", "--0412").birthday == date(1900, 4, 12)


def test_birthday_date_time():
    assert _apply("BDAY", "1985-04-12T10:30:00Z").birthday == datetime(
        1985, 4, 12, 10, 30, tzinfo=timezone.utc
    )
    assert _apply("BDAY", "19850412T103000+0200").birthday == datetime(
        1985, 4, 12, 10, 30, tzinfo=timezone(timedelta(hours=2))
    )


def test_birthday_reduced_precision():
    assert _apply("BDAY", "1985-04").birthday == date(1985, 4, 1)
    assert _apply("BDAY", "1985").birthday == date(1985, 1, 1)


def test_birthday_fractional_seconds():
    assert _apply("BDAY", "1985-04-12T10:30:00.000Z").birthday == datetime(
        1985, 4, 12, 10, 30, tzinfo=timezone.utc
    )
    assert _apply("BDAY", "1985-04-12T10:30:00.250").birthday == datetime(
        1985, 4, 12, 10, 30, 0, 250000
    )


def test_birthday_colon_offset_and_utc_without_seconds():
    assert _apply("BDAY", "1985-04-12T10:30:00+02:00").birthday == datetime(
        1985, 4, 12, 10, 30, tzinfo=timezone(timedelta(hours=2))
    )
    assert _apply("BDAY", "1985-04-12T10:30Z").birthday == datetime(
        1985, 4, 12, 10, 30, tzinfo=timezone.utc
    )


def test_bad_birthday_raises():
    with pytest.raises(DateParseError) as excinfo:
        _apply("BDAY", "not-a-date")
    assert excinfo.value.value == "not-a-date"


def test_empty_birthday_raises():
    with pytest.raises(DateParseError):
        _apply("BDAY", "")


def test_photo_reference():
    builder = _apply("PHOTO", "http://example.com/me.jpg", ["VALUE=URI"])
    assert builder.photo == "http://example.com/me.jpg"
    assert builder.raw_photo is None


def test_raw_logo():
    builder = _apply("LOGO", b"\x00\x01", ["TYPE=PNG"], is_raw=True)
    assert builder.raw_logo == b"\x00\x01"
    assert builder.logo is None


def test_photo_last_form_wins():
    builder = RecordBuilder()
    dispatch(builder, "PHOTO", DecodedValue(["ENCODING=b"], b"\xff\xd8", True))
    dispatch(builder, "PHOTO", DecodedValue(["VALUE=URI"], "http://example.com/me.jpg", False))
    assert builder.photo == "http://example.com/me.jpg"
    assert builder.raw_photo is None

    dispatch(builder, "PHOTO", DecodedValue(["ENCODING=b"], b"\xff\xd8", True))
    assert builder.raw_photo == b"\xff\xd8"
    assert builder.photo is None


def test_note_unescaping():
    note = _apply("NOTE", r"Line one\nLine two\, with comma\: colon").note
    assert note == "Line one" + os.linesep + "Line two, with comma: colon"


def test_unescape_note_handles_colon_before_newline():
    assert unescape_note(r"a\:\nb") == "a:" + os.linesep + "b"


def test_categories_are_split_and_trimmed():
    assert _apply("CATEGORIES", "Friends, Work ,Family").categories == ["Friends", "Work", "Family"]


def test_nicknames_and_skype_accumulate():
    builder = RecordBuilder()
    dispatch(builder, "NICKNAME", DecodedValue([], "Johnny", False))
    dispatch(builder, "X-SKYPE", DecodedValue([], "john.doe", False))
    dispatch(builder, "X-SKYPE-USERNAME", DecodedValue([], "jdoe", False))
    dispatch(builder, "NICKNAME", DecodedValue([], "JD", False))

    assert builder.nicknames == ["Johnny", "JD"]
    assert builder.skype_handles == ["john.doe", "jdoe"]


def test_android_custom_nickname():
    builder = _apply("X-ANDROID-CUSTOM", "vnd.android.cursor.item/nickname;Bobby;1;;;;;;;;;;;;;")
    assert builder.nicknames == ["Bobby"]


def test_android_custom_other_mimetype_is_ignored():
    builder = _apply("X-ANDROID-CUSTOM", "vnd.android.cursor.item/relation;Alice;1")
    assert builder.nicknames == []


def test_item_url_strips_label_markers():
    assert _apply("item2.URL", "_$!<https://example.org>!$_").items == {
        "2": {"URL": "https://example.org"}
    }


def test_item_url_unescapes_colons():
    assert _apply("item1.URL", r"http\://example.com").items == {
        "1": {"URL": "http://example.com"}
    }


def test_item_url_with_several_segments_is_kept_split():
    assert _apply("item12.URL", "a;b").items == {"12": {"URL": ("a", "b")}}


def test_other_item_parts_are_ignored():
    builder = _apply("item1.X-ABLabel", "_$!<HomePage>!$_")
    assert builder.items == {}
    assert builder.urls == {}


def test_item_pattern_is_case_sensitive():
    builder = _apply("ITEM1.URL", "https://example.org")
    assert builder.items == {}


def test_item_index_is_limited_to_two_digits():
    assert _apply("item123.URL", "https://example.org").items == {}


def test_unknown_and_empty_elements_are_ignored():
    builder = RecordBuilder()
    dispatch(builder, "X-UNKNOWN", DecodedValue([], "x", False))
    dispatch(builder, "", DecodedValue([], "", False))
    assert builder == RecordBuilder()
