# src/memsim_core/log_config.py
import logging
import sys

def setup_logging(level=logging.INFO):
    """ Configures basic logging to stdout for the simulation core. """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Replace any handlers left over from a previous configuration
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.getLogger(__name__).debug(f"Logging configured at level {logging.getLevelName(level)}.")
