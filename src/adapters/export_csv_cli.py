"""CLI adapter to export every monthly entry as CSV."""

import os
from pathlib import Path

from src.infrastructure.container import Container
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


def _resolve_output_path(raw: str | None) -> Path:
    """Return the export path, defaulting to ``data/monthly_entries.csv``."""
    if raw:
        return Path(raw).expanduser().resolve()
    return get_project_root() / "data" / "monthly_entries.csv"


def main() -> None:
    """Write the CSV export to ``NETWORTH_EXPORT_PATH`` or the default."""
    logger = get_app_logger()
    output_path = _resolve_output_path(os.getenv("NETWORTH_EXPORT_PATH"))
    output_path.parent.mkdir(parents=True, exist_ok=True)

    use_case = Container().export_entries_csv()
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        count = use_case.execute(handle)

    logger.info(f"CSV export written to {output_path}")
    print(f"Exported {count} monthly entries to {output_path}.")


if __name__ == "__main__":  # pragma: no cover
    main()
