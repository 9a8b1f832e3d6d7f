"""Small command that configures logging and writes a few sample entries."""

from __future__ import annotations

import argparse
import sys

from .log_id import new_log_id
from .logger import Logger, LoggerInitError
from .macros import log_debug, log_error, log_info, log_info_with_id, log_warn


def main(argv: list[str] | None = None) -> int:
    """Initialise logging from a YAML file and emit sample messages."""
    parser = argparse.ArgumentParser(prog="log4you", description=__doc__)
    parser.add_argument("--config", default="config/log4you.yaml", help="YAML configuration file")
    parser.add_argument("--service", default="log4you", help="service name used as log target")
    args = parser.parse_args(argv)

    try:
        Logger.init(new_log_id(), args.config, args.service)
    except LoggerInitError:
        return 1

    log_info("User logged in")
    log_warn("Slow response detected")
    log_error("Failed to connect to DB")
    log_debug("Debug info here")

    custom_id = new_log_id()
    log_info_with_id(custom_id, "This log uses custom log_id")
    return 0


if __name__ == "__main__":
    sys.exit(main())