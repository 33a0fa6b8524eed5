# personnel_records/config.py

import os
import logging

from dotenv import load_dotenv

# Values in a local .env override nothing already exported in the shell.
load_dotenv()

# --- Database Configuration ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # project root
DATA_DIR = os.path.join(BASE_DIR, "data")
DB_NAME = "personnel_records.db"
DATABASE_PATH = os.getenv("PERSONNEL_DB_PATH", os.path.join(DATA_DIR, DB_NAME))

# --- Logging Configuration ---
LOGS_DIR = os.getenv("PERSONNEL_LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE_NAME = "personnel_records.log"
LOG_FILE_PATH = os.path.join(LOGS_DIR, LOG_FILE_NAME)

LOG_LEVEL = logging.getLevelName(os.getenv("PERSONNEL_LOG_LEVEL", "INFO").upper())
if not isinstance(LOG_LEVEL, int):
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
            'level': LOG_LEVEL,
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
