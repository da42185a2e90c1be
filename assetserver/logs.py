import logging
import sys
import threading

FORMAT = "%(asctime)s %(levelname)5s %(message)s"

_lock = threading.Lock()
_configured = False


def init_logging(level: str = "INFO") -> bool:
    """Install the process-wide stdout handler.

    Only the first call has any effect; later calls return ``False`` and leave
    the existing handler and level untouched.
    """
    global _configured
    with _lock:
        if _configured:
            return False
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(FORMAT))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(level)
        _configured = True
        return True
