import logging
import os
from logging.handlers import RotatingFileHandler
import sys

# RAPMANIA_LOG_DIR is exported by server.py in production.
# Without it, logs go next to the backend sources (development).
if "RAPMANIA_LOG_DIR" in os.environ:
    LOG_DIR = os.environ["RAPMANIA_LOG_DIR"]
else:
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    LOG_DIR = os.path.join(BASE_DIR, "logs")

os.makedirs(LOG_DIR, exist_ok=True)

def get_logger(name: str):
    """
    Return a logger writing to both the rotating log file and the console.
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per logger name
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # 1. File handler (rotates every 10MB, keeps 5 generations)
        log_file = os.path.join(LOG_DIR, "rapmania.log")
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024,
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.INFO)
            logger.addHandler(file_handler)
        except Exception as e:
            # e.g. read-only filesystem: keep console logging only
            print(f"Failed to set up file logging: {e}", file=sys.stderr)

        # 2. Console handler (docker logs / terminal)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        logger.addHandler(console_handler)

    return logger
