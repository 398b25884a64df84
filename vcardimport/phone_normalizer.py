"""
E.164 normalization of the phone numbers held by parsed records.

Numbers without an international prefix are interpreted in a default
region; numbers starting with '+' are parsed on their own. Group keys and
their order are kept, only the numbers change.

Dependencies:
    - phonenumbers: Third-party library for phone number parsing and formatting
    - locale: Standard library for locale detection
    - dataclasses: Standard library, used to copy frozen records
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import locale
import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

import phonenumbers
from phonenumbers import NumberParseException

from vcardimport.record import Record

logger = logging.getLogger("vcardimport")

DEFAULT_REGION = "US"


def detect_region_from_locale() -> Optional[str]:
    """
    Guess the phone region from the system locale (e.g. "en_GB" -> "GB").

    :return: 2-letter country code, or None when the locale has none
    """
    try:
        locale_code, _ = locale.getlocale()
    except ValueError as e:
        logger.debug(f"Could not read system locale: {e}")
        return None

    if not locale_code or '_' not in locale_code:
        return None

    country_code = locale_code.rsplit('_', 1)[-1].upper()
    if len(country_code) != 2:
        return None
    logger.debug(f"Detected region from locale: {country_code}")
    return country_code


def validate_region_code(region_code: Optional[str]) -> bool:
    """
    Check that a region code is an uppercase 2-letter code known to phonenumbers.

    :param region_code: Region code to validate
    :return: True if valid, False otherwise
    """
    if not region_code or len(region_code) != 2:
        return False
    if not region_code.isalpha() or not region_code.isupper():
        return False
    return region_code in phonenumbers.SUPPORTED_REGIONS


def get_default_region(provided_region: Optional[str] = None) -> str:
    """
    Resolve the region used for numbers without a country code.

    Priority: a valid provided code, then the locale, then DEFAULT_REGION.

    :param provided_region: Region code given on the command line
    :return: Valid 2-letter region code
    """
    if provided_region:
        candidate = provided_region.strip().upper()
        if validate_region_code(candidate):
            logger.info(f"Using provided region code: {candidate}")
            return candidate
        logger.warning(f"Invalid region code '{provided_region}', falling back to detection")

    detected = detect_region_from_locale()
    if detected and validate_region_code(detected):
        logger.info(f"Using auto-detected region code: {detected}")
        return detected

    logger.warning(
        f"Could not determine phone region automatically, "
        f"falling back to {DEFAULT_REGION}. "
        f"Consider specifying --phone-region explicitly."
    )
    return DEFAULT_REGION


def _parse_and_format_phone(phone_number: str, region: Optional[str]) -> Optional[str]:
    try:
        parsed = phonenumbers.parse(phone_number, region)
    except NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def normalize_phone_to_e164(
    phone_number: str,
    default_region: str = DEFAULT_REGION
) -> Optional[str]:
    """
    Normalize a phone number to E.164 (e.g. "0646432757" in NL -> "+31646432757").

    :param phone_number: Original phone number string
    :param default_region: Region for numbers without a country code
    :return: Normalized number, or None if it is not a valid number
    """
    if not phone_number or not phone_number.strip():
        return None

    phone_number = phone_number.strip()
    normalized = _parse_and_format_phone(phone_number, default_region)
    if normalized is None and phone_number.startswith('+'):
        normalized = _parse_and_format_phone(phone_number, None)

    if normalized is None:
        logger.debug(f"Could not normalize phone number: {phone_number}")
    return normalized


def normalize_record_phones(
    record: Record,
    default_region: str = DEFAULT_REGION
) -> Tuple[Record, int, int]:
    """
    Normalize every phone number of a record.

    Numbers that cannot be normalized keep their original text.

    :param record: Parsed record
    :param default_region: Region for numbers without a country code
    :return: Tuple of (new record, normalized count, failed count)
    """
    if not record.phones:
        return record, 0, 0

    normalized_count = 0
    failed_count = 0
    phones: Dict[str, Tuple[str, ...]] = {}

    for key, numbers in record.phones.items():
        converted = []
        for number in numbers:
            normalized = normalize_phone_to_e164(number, default_region)
            if normalized:
                normalized_count += 1
                converted.append(normalized)
            else:
                failed_count += 1
                logger.debug(
                    f"Keeping original number '{number}' for contact "
                    f"'{record.display_name}'"
                )
                converted.append(number)
        phones[key] = tuple(converted)

    return replace(record, phones=MappingProxyType(phones)), normalized_count, failed_count


def normalize_records_phones(
    records: List[Record],
    default_region: str = DEFAULT_REGION
) -> Tuple[List[Record], Dict[str, int]]:
    """
    Normalize phone numbers for a list of records.

    :param records: Parsed records
    :param default_region: Region for numbers without a country code
    :return: Tuple of (normalized records, statistics dictionary)
    """
    stats = {
        'total_contacts': len(records),
        'contacts_with_phones': 0,
        'total_phones': 0,
        'normalized_phones': 0,
        'failed_normalizations': 0
    }

    normalized_records = []
    for record in records:
        if record.phones:
            stats['contacts_with_phones'] += 1
            stats['total_phones'] += sum(len(numbers) for numbers in record.phones.values())

        normalized, normalized_count, failed_count = normalize_record_phones(record, default_region)
        stats['normalized_phones'] += normalized_count
        stats['failed_normalizations'] += failed_count
        normalized_records.append(normalized)

    logger.info(
        f"Phone normalization statistics: "
        f"{stats['normalized_phones']}/{stats['total_phones']} phones normalized, "
        f"{stats['failed_normalizations']} failed"
    )

    return normalized_records, stats
