#!/usr/bin/env python3
"""
Nexmo SMS Sender - Main Module

Command line tool that sends one SMS message (text, unicode, binary or
WAP Push) through the Nexmo REST API and optionally logs the outcome to
a MySQL database.

Usage:
    python sms_sender.py Acme 15551234567 "Hello"
    python sms_sender.py Acme 15551234567 --type binary --body-hex 0011 --udh-hex 0500
    python sms_sender.py Acme 15551234567 --type wappush --title News --url https://example.com
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler

# Import configuration
from config import (
    NEXMO_API_KEY, NEXMO_API_SECRET, NEXMO_BASE_URL, ENDPOINT_FORMAT,
    REQUEST_TIMEOUT, SSL_VERIFY_PEER,
    MYSQL_HOST, MYSQL_USER, MYSQL_PASSWORD, MYSQL_DATABASE, MYSQL_TABLE,
    LOG_LEVEL, LOG_TO_CONSOLE, LOG_MAX_BYTES, LOG_BACKUP_COUNT
)

# Import library modules
from nexmo_sms import NexmoClient, NexmoError, ProviderError


# MySQL Configuration
MYSQL_CONFIG = {
    'host': MYSQL_HOST,
    'user': MYSQL_USER,
    'password': MYSQL_PASSWORD,
    'database': MYSQL_DATABASE,
    'table': MYSQL_TABLE,
}


def setup_logging():
    """Setup rotating file logging with UTF-8 support."""
    logger = logging.getLogger('NexmoSMS')
    logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    # Create logs directory if it doesn't exist
    log_dir = 'logs'
    os.makedirs(log_dir, exist_ok=True)

    # Rotating file handler (supports UTF-8 for Unicode characters)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, 'service.log'),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if LOG_TO_CONSOLE:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Send an SMS message through Nexmo")
    parser.add_argument('sender', help="Sender address, numeric or alphanumeric")
    parser.add_argument('recipient', help="Recipient number in international format")
    parser.add_argument('text', nargs='?', help="Message text (text and unicode types)")
    parser.add_argument('--type', default='text',
                        help="Message type: text, unicode, binary or wappush")
    parser.add_argument('--body-hex', help="Binary message body, hex encoded")
    parser.add_argument('--udh-hex', help="Binary message User Data Header, hex encoded")
    parser.add_argument('--title', help="WAP Push title")
    parser.add_argument('--url', help="WAP Push url")
    parser.add_argument('--format', dest='endpoint_format', default=ENDPOINT_FORMAT,
                        choices=['json', 'xml'], help="Response format requested from Nexmo")
    parser.add_argument('--log-db', action='store_true',
                        help="Store the outcome in the MySQL database")
    return parser.parse_args(argv)


def build_message(args):
    """Collect the message fields for the requested type from the arguments."""
    message_type = args.type.lower()
    if message_type == 'binary':
        try:
            return {
                'body': bytes.fromhex(args.body_hex or ''),
                'udh': bytes.fromhex(args.udh_hex or ''),
            }
        except ValueError as e:
            raise SystemExit(f"Invalid hex value: {e}")
    if message_type == 'wappush':
        return {'title': args.title, 'url': args.url}
    return {'text': args.text}


def main(argv=None):
    """Send one message and return the process exit code."""
    args = parse_args(argv)
    logger = setup_logging()

    client = NexmoClient(NEXMO_API_KEY, NEXMO_API_SECRET, {
        'endpoint_format': args.endpoint_format,
        'base_url': NEXMO_BASE_URL,
        'timeout': REQUEST_TIMEOUT,
        'verify_tls_peer': SSL_VERIFY_PEER,
    })

    record = {
        'sender': args.sender,
        'recipient': args.recipient,
        'type': args.type.lower(),
        'message': args.text or args.url or args.body_hex,
        'created_at': datetime.now(),
    }

    exit_code = 0
    try:
        response = client.send_sms(args.sender, args.recipient, build_message(args), args.type)
        record['status'] = 'sent'
        record['message_id'] = ','.join(response.message_ids)
        for outcome in response.messages:
            print(f"[OK] {outcome.message_id or '-'} status={outcome.status}")
    except ProviderError as e:
        logger.error(f"[FAIL] Nexmo rejected the message: [{e.status}] {e.error_text}")
        record['status'] = 'failed'
        record['error_message'] = str(e.error_text)[:255]
        exit_code = 2
    except NexmoError as e:
        logger.error(f"[FAIL] {e}")
        record['status'] = 'failed'
        record['error_message'] = str(e)[:255]
        exit_code = 1

    if args.log_db:
        try:
            if not client.log_sms(MYSQL_CONFIG, record):
                exit_code = exit_code or 3
        except Exception as e:
            logger.error(f"Cannot log SMS to MySQL: {e}")
            exit_code = exit_code or 3

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
