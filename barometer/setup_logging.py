import logging, sys

from barometer.settings import LOG_LEVEL

# chatty at INFO, not useful for us
QUIET_LOGGERS = ("urllib3", "watchdog")

def setup_logging(level: str | None = None):
    """Root stdout handler shared by the backend and the dashboard."""
    root = logging.getLogger()
    if root.handlers:  # streamlit re-executes the script on every interaction
        return
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s :: %(message)s"))
    root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
