"""Tests for the command-line entry point."""

import json
import logging

import pytest

from vcardimport.main import main

CARD = (
    "BEGIN:VCARD\r\n"
    "VERSION:3.0\r\n"
    "FN:Jane Doe\r\n"
    "TEL;TYPE=CELL:(650) 253-0000\r\n"
    "END:VCARD\r\n"
)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("vcardimport")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def _write(tmp_path, content):
    path = tmp_path / "contacts.vcf"
    path.write_text(content, encoding="utf-8", newline="")
    return path


def test_main_exports_csv_and_json(tmp_path):
    vcf = _write(tmp_path, CARD)
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"
    log_path = tmp_path / "run.log"

    main([
        "--input", str(vcf),
        "--csv", str(csv_path),
        "--json", str(json_path),
        "--log-file", str(log_path),
        "--log-level", "DEBUG",
    ])

    assert csv_path.exists()
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data[0]["phones"] == {"TYPE=CELL": ["(650) 253-0000"]}
    log_text = log_path.read_text(encoding="utf-8")
    assert "Contact 1: Jane Doe" in log_text
    assert "IMPORT SUMMARY" in log_text


def test_main_normalizes_phones(tmp_path):
    vcf = _write(tmp_path, CARD)
    json_path = tmp_path / "out.json"

    main([
        "--input", str(vcf),
        "--json", str(json_path),
        "--normalize-phones",
        "--phone-region", "US",
        "--log-file", str(tmp_path / "run.log"),
    ])

    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data[0]["phones"] == {"TYPE=CELL": ["+16502530000"]}


def test_main_missing_input_exits_with_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--input", str(tmp_path / "missing.vcf"), "--log-file", str(tmp_path / "run.log")])
    assert excinfo.value.code == 1


def test_main_bad_birthday_exits_with_error(tmp_path):
    vcf = _write(tmp_path, CARD.replace("VERSION:3.0", "BDAY:someday"))
    json_path = tmp_path / "out.json"

    with pytest.raises(SystemExit) as excinfo:
        main(["--input", str(vcf), "--json", str(json_path), "--log-file", str(tmp_path / "run.log")])

    assert excinfo.value.code == 1
    assert not json_path.exists()
