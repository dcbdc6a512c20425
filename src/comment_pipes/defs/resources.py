import dagster as dg

from comment_pipes import db
from comment_pipes.models import CategorySummary


class AnalyticsDB(dg.ConfigurableResource):
    """SQLite database resource for the final category tallies.

    Wraps pure Python db module with Dagster resource pattern.
    Defaults to XDG_DATA_HOME/comment-pipes/analytics.db.
    """

    db_path: str

    def get_connection(self):
        """Get a connection to the analytics database."""
        return db.get_connection(self.db_path)

    def ensure_tables(self) -> None:
        """Ensure the result tables exist."""
        db.ensure_tables(self.db_path)

    def replace_category_results(self, summaries: list[CategorySummary]) -> None:
        """Replace all category results in the database."""
        db.replace_category_results(self.db_path, summaries)
