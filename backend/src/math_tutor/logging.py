from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()

    # SQL statements are only echoed in debug mode.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)

    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        return

    root.setLevel(level)
