#!/usr/bin/env python3
"""
Main entry point for the vCard import tool.

This module provides the command-line interface: it parses a vCard file,
logs what was found, and optionally normalizes phone numbers and exports
the records to CSV or JSON.

Dependencies:
    - argparse: Standard library for command-line argument parsing
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - vcardimport.vcard_parser: Local module for vCard parsing
    - vcardimport.phone_normalizer: Local module for E.164 normalization
    - vcardimport.csv_exporter: Local module for CSV/JSON export
    - vcardimport.logger: Local module for logging configuration
"""
# pylint: disable=logging-fstring-interpolation, broad-except

import argparse
import sys
from logging import Logger
from pathlib import Path
from typing import Any, Dict, List, Optional

from vcardimport.csv_exporter import export_records_to_csv, export_records_to_json
from vcardimport.errors import DateParseError, FileAccessError, VCardError
from vcardimport.logger import log_record, log_statistics, setup_logger
from vcardimport.phone_normalizer import get_default_region, normalize_records_phones
from vcardimport.record import Record
from vcardimport.vcard_parser import parse_vcard_file


def _create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    :return: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description='Import contacts from a vCard (.vcf) file',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--input', '-i',
        type=str,
        required=True,
        help='Path to input vCard file (.vcf)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Log file path (default: timestamped file in logs/)'
    )

    parser.add_argument(
        '--csv',
        '--export-csv',
        type=str,
        dest='csv_output',
        help='Export contacts to CSV file (provide path)'
    )

    parser.add_argument(
        '--json',
        '--export-json',
        type=str,
        dest='json_output',
        help='Export contacts to JSON file (provide path)'
    )

    parser.add_argument(
        '--normalize-phones',
        action='store_true',
        default=False,
        help='Normalize phone numbers to E.164 format in exports'
    )

    parser.add_argument(
        '--phone-region',
        type=str,
        default=None,
        metavar='CODE',
        help='2-letter country code for phone number parsing '
             '(e.g., US, GB, NL). If not provided, will auto-detect from '
             'system locale.'
    )

    return parser


def _collect_statistics(records: List[Record]) -> Dict[str, Any]:
    """
    Count what the parsed records contain.

    :param records: Parsed records
    :return: Statistics dictionary for log_statistics
    """
    return {
        'total_contacts': len(records),
        'contacts_with_phones': sum(1 for r in records if r.phones),
        'contacts_with_emails': sum(1 for r in records if r.emails),
        'contacts_with_photos': sum(1 for r in records if r.photo or r.raw_photo),
    }


def _handle_phone_normalization(
    records: List[Record],
    normalize_phones: bool,
    phone_region: Optional[str],
    stats: Dict[str, Any],
    logger: Logger
) -> List[Record]:
    """
    Normalize phone numbers if requested.

    :param records: Records to normalize
    :param normalize_phones: Whether to normalize
    :param phone_region: Region code given on the command line
    :param stats: Statistics dictionary, updated in place
    :param logger: Logger instance
    :return: Records with normalized phones
    """
    if not normalize_phones:
        return records

    region = get_default_region(phone_region)
    logger.info(f"Normalizing phone numbers to E.164 format (region: {region})...")
    normalized, phone_stats = normalize_records_phones(records, default_region=region)
    stats['normalized_phones'] = phone_stats['normalized_phones']
    stats['total_phones'] = phone_stats['total_phones']
    return normalized


def _handle_exports(args: argparse.Namespace, records: List[Record], logger: Logger) -> None:
    """
    Write the CSV and JSON exports that were requested.

    :param args: Parsed command-line arguments
    :param records: Records to export
    :param logger: Logger instance
    """
    if args.csv_output:
        csv_path = Path(args.csv_output)
        logger.info(f"Exporting {len(records)} contacts to CSV: {csv_path}")
        export_records_to_csv(records, csv_path)

    if args.json_output:
        json_path = Path(args.json_output)
        logger.info(f"Exporting {len(records)} contacts to JSON: {json_path}")
        export_records_to_json(records, json_path)


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = setup_logger(log_level=args.log_level, log_file=log_file)

    try:
        input_path = Path(args.input)
        logger.info(f"Reading contacts from {input_path}")
        records = list(parse_vcard_file(input_path))

        if not records:
            logger.warning(f"No complete vCards found in {input_path}")

        for index, record in enumerate(records, 1):
            log_record(logger, index, record)

        stats = _collect_statistics(records)
        records = _handle_phone_normalization(
            records, args.normalize_phones, args.phone_region, stats, logger
        )

        _handle_exports(args, records, logger)
        log_statistics(logger, stats)

        logger.info("vCard import completed successfully!")

    except FileAccessError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except DateParseError as e:
        logger.error(f"Invalid birthday in input, nothing imported: {e}")
        sys.exit(1)
    except VCardError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
