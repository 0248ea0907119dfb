# hrms/logger.py
import logging
import os
from config import Config

# one common logger for whole app
logger = logging.getLogger("hrms")

if not logger.handlers:
    # loglevel could be customized in Config.LOG_LEVEL = "DEBUG" | "INFO" | "WARNING" | "ERROR"
    level_name = getattr(Config, "LOG_LEVEL", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    logger.setLevel(level)

    # target file in Config.APP_LOG, stderr when not configured
    log_path = getattr(Config, "APP_LOG", "")
    if log_path:
        os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)

    # no double logging via root logger
    logger.propagate = False
