# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# logging_utils.py
# -----------------------------------------------------------------------------
# Purpose:
#   Package logger and a one-call console setup for scripts and the CLI.
# -----------------------------------------------------------------------------

import logging


def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


logger = logging.getLogger("carwash")
