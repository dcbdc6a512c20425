from pathlib import Path

from dagster import Definitions, load_from_defs_folder

from comment_pipes.config import DB_PATH, REPORT_NAME, REPORTS_DIR
from comment_pipes.defs.io_managers import ReportTextIOManager
from comment_pipes.defs.resources import AnalyticsDB


def _load_definitions() -> Definitions:
    """Load definitions with the report I/O manager and analytics database."""
    loaded = load_from_defs_folder(path_within_project=Path(__file__).parent)

    return Definitions(
        assets=loaded.assets,
        asset_checks=loaded.asset_checks,
        schedules=loaded.schedules,
        sensors=loaded.sensors,
        jobs=loaded.jobs,
        resources={
            **(loaded.resources or {}),
            "report_io": ReportTextIOManager(
                storage_dir=str(REPORTS_DIR), file_name=REPORT_NAME
            ),
            "analytics_db": AnalyticsDB(db_path=str(DB_PATH)),
        },
    )


defs = _load_definitions()
