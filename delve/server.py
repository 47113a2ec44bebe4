"""
project: Delve
module: server.py
License: MIT

Server bootstrap: logging setup and the development HTTP server.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from delve import create_app


def configure_logging(log_dir):
    """Configure logging to both console and a rotating file in ``log_dir``.

    The file is ``<log_dir>/delve.log``. Retains a few backups to avoid growth.
    Returns the log file path.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "delve.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Flask development server with file + console logging."""
    app = create_app()
    configure_logging(app.instance_path)
    logging.getLogger(__name__).info("Starting dungeon API on %s:%s", host, port)
    app.run(host=host, port=port, debug=debug)
