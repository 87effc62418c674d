# utils/logger.py
import logging
import sys

from config.settings import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Root of the "planner.*" hierarchy; engine modules log through children of it.
logger = logging.getLogger("planner")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

if not logger.handlers:
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

    run_log = logging.FileHandler(LOG_FILE, encoding="utf-8")
    run_log.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(run_log)

    # stdout -> container logs
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(console)

    logger.propagate = False
