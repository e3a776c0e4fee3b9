"""CLI adapter to create the workshop tables.

This module wires the BootstrapSchemaUseCase to the concrete database adapter
and provides a command-line entry point for preparing an empty database.
"""

from src.application.use_cases.bootstrap_schema import BootstrapSchemaUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the schema bootstrap use case."""
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()
    use_case = BootstrapSchemaUseCase(db_port=db_adapter, logger=logger)

    result = use_case.run()

    print(f"Schema ready with {len(result.tables)} tables: "
          f"{', '.join(result.tables)}.")


if __name__ == "__main__":  # pragma: no cover
    main()
