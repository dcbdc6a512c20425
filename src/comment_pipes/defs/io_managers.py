from pathlib import Path

import dagster as dg


class ReportTextIOManager(dg.ConfigurableIOManager):
    """I/O Manager that stores the rendered report as a local text file.

    The report is stored as {storage_dir}/{file_name}, replacing the report
    of the previous run. Defaults to XDG_DATA_HOME/comment-pipes/reports.
    """

    storage_dir: str
    file_name: str = "results.txt"

    def _get_path(self) -> Path:
        """Get file path for the report."""
        base_path = Path(self.storage_dir)
        base_path.mkdir(parents=True, exist_ok=True)
        return base_path / self.file_name

    def handle_output(self, context: dg.OutputContext, obj: str):
        """Save report text to file."""
        path = self._get_path()
        path.write_text(obj, encoding="utf-8")
        context.log.info(f"Stored report at {path}")

    def load_input(self, context: dg.InputContext) -> str:
        """Load report text from file."""
        path = self._get_path()

        if not path.exists():
            raise FileNotFoundError(
                f"Report file not found: {path}. "
                "Materialize the comment_report asset first."
            )

        context.log.info(f"Loaded report from {path}")
        return path.read_text(encoding="utf-8")
