"""Root logger setup for the ``encdoc`` command.

Records go to stderr: stdout carries nothing but the JSON the command
produces, so ``encdoc open doc.json > out.json`` stays clean at any level.
"""

import logging
import sys


def configure_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
