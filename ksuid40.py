"""KSUID-40 command line - Entry Point."""

import sys

from config import load_config
from utils.crash import configure as configure_crash, install_crash_handler, log_crash


def main():
    config = load_config()
    configure_crash(config.logging.crash_file)
    install_crash_handler()

    from cli.app import create_app

    app = create_app(config)
    try:
        app()
    except Exception:
        log_crash(*sys.exc_info())
        sys.exit(1)


if __name__ == "__main__":
    main()
