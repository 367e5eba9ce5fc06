from revtrack.cli.app import main_menu
from revtrack.db import initialize_db
from revtrack.logging import configure_logging, reconfigure


def main() -> None:
    configure_logging()
    initialize_db()
    # Alembic's fileConfig replaces the root handlers
    reconfigure()
    main_menu()


if __name__ == "__main__":
    main()
