import os

from .config import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
