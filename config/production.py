import os

from .config import *  # noqa: F401,F403

DEBUG = False

# Rotate to disk in production unless explicitly disabled
LOG_FILE = os.getenv("LOG_FILE", "logs/cico.log") or None
