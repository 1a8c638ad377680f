# payroll_ledger/config.py

import os
import logging

# --- Storage Configuration ---
HOME_ENV_VAR = "PAYROLL_LEDGER_HOME"


def data_home(environ=None) -> str:
    """Root for data, reports and logs: $PAYROLL_LEDGER_HOME, else ~/.payroll_ledger."""
    environ = os.environ if environ is None else environ
    configured = environ.get(HOME_ENV_VAR)
    if configured:
        return os.path.abspath(os.path.expanduser(configured))
    return os.path.join(os.path.expanduser("~"), ".payroll_ledger")


BASE_DIR = data_home()
DATA_DIR = os.path.join(BASE_DIR, "data")
DATA_FILE_NAME = "payroll_data.db"
BACKUP_FILE_NAME = "payroll_backup.db"
DATA_FILE_PATH = os.path.join(DATA_DIR, DATA_FILE_NAME)
BACKUP_FILE_PATH = os.path.join(DATA_DIR, BACKUP_FILE_NAME)

# --- Report Export ---
REPORTS_DIR = os.path.join(BASE_DIR, "reports")
REPORT_CALENDAR = "gregorian" # "gregorian" or "shamsi"

# --- Logging Configuration ---
LOGS_DIR = os.path.join(BASE_DIR, "logs")
LOG_FILE_NAME = "app.log"
LOG_FILE_PATH = os.path.join(LOGS_DIR, LOG_FILE_NAME)

LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': LOG_FORMAT,
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': logging.DEBUG,
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'standard',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024*1024*5,  # 5 MB
            'backupCount': 5,
            'level': logging.INFO,
            'encoding': 'utf-8',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': LOG_LEVEL,
    },
}


def ensure_directories() -> None:
    """Creates the data, reports and logs directories if they don't exist."""
    for directory in (DATA_DIR, REPORTS_DIR, LOGS_DIR):
        if not os.path.exists(directory):
            os.makedirs(directory)
