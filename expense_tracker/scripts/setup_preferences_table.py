import argparse
from typing import Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from expense_tracker.core.logger import logger
from expense_tracker.storage.document_store import TABLE_NAME, create_preferences_table


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="setup-preferences-table",
        description=f"Create the DynamoDB preferences table ({TABLE_NAME})",
    )
    parser.parse_args(argv)

    try:
        created = create_preferences_table()
    except (BotoCoreError, ClientError) as e:
        logger.error("[SetupPreferencesTable] failed: %s", e, exc_info=True)
        return 1
    if created:
        logger.info("[SetupPreferencesTable] table %s created", TABLE_NAME)
    else:
        logger.info("[SetupPreferencesTable] table %s already exists", TABLE_NAME)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
