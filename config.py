"""
Configuration file for Nexmo SMS Sender
Edit these values according to your setup
"""

import os

# Nexmo API Credentials
NEXMO_API_KEY = os.getenv('NEXMO_API_KEY', '')
NEXMO_API_SECRET = os.getenv('NEXMO_API_SECRET', '')  # Never commit the real secret

# Nexmo Endpoint Configuration
NEXMO_BASE_URL = 'https://rest.nexmo.com'
ENDPOINT_FORMAT = 'json'  # Options: json, xml
REQUEST_TIMEOUT = 60  # Maximum seconds to wait for the Nexmo server
SSL_VERIFY_PEER = True  # Verify the Nexmo server certificate

# MySQL Database Configuration (used with --log-db)
MYSQL_HOST = '127.0.0.1'
MYSQL_USER = 'root'
MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD', 'root')  # Change this to your MySQL password
MYSQL_DATABASE = 'smsd'
MYSQL_TABLE = 'sent_sms'

# Logging Settings
LOG_LEVEL = 'INFO'  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_TO_CONSOLE = True  # Set to False to log to file only
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per log file
LOG_BACKUP_COUNT = 10  # Keep 10 backup files
