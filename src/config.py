''' Static configuration for the ALV metrics report '''

import os

PROJECT_NAME = "alv-metrics"
__version__ = "1.0.0"
__author__ = "Koala ITCrowd"

# Connection target is fixed; only the credentials come from the command line
DB_HOST = os.getenv("PGHOST", "127.0.0.1")
DB_PORT = os.getenv("PGPORT", "5432")

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
