from daflash.cli.app import main_menu
from daflash.db import close_connection, initialize_db
from daflash.logging import configure_logging, reconfigure


def main() -> None:
    configure_logging()
    initialize_db()
    reconfigure()
    try:
        main_menu()
    finally:
        close_connection()


if __name__ == "__main__":
    main()
