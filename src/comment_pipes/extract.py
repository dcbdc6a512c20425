import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from comment_pipes.models import AnalyzerSettings, CategorySettings

logger = logging.getLogger(__name__)

# Directives that may appear before all #TYPEs have been registered
PRE_TYPE_DIRECTIVES = {"TYPE", "SOURCE"}

KNOWN_DIRECTIVES = {
    "DISABLE-CONJUGATION",
    "DISABLE-PLURALIZATION",
    "END",
    "IGNOREALL",
    "IGNORETYPE",
    "MERGEALL",
    "MERGETYPE",
    "SOURCE",
    "TYPE",
}


class DirectiveError(ValueError):
    """The directive file is malformed or refers to something that does not exist."""

    def __init__(self, line_number: int | None, message: str):
        self.line_number = line_number
        prefix = f"Error on line {line_number}: " if line_number is not None else ""
        super().__init__(f"{prefix}{message}")


class MissingConfigError(FileNotFoundError):
    """No directive file existed, so a template was written in its place."""


def read_default_config() -> str:
    """Read the commented directive file template shipped with the package."""
    package_dir = Path(__file__).parent
    template_path = package_dir / "data" / "config.cfg"
    return template_path.read_text(encoding="utf-8")


def write_default_config(config_path: str | Path) -> Path:
    """Write the directive file template to the given path.

    Returns:
        The path the template was written to
    """
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(read_default_config(), encoding="utf-8")
    logger.info(f"Wrote directive file template to {path}")
    return path


def read_comment_rows(source: str | Path) -> list[list[str]]:
    """Read all rows of the comment data file.

    Cells are comma separated. Cells enclosed in double quotes may contain
    commas, and doubled quotes inside them stand for a single quote.

    Args:
        source: Path to the CSV file

    Returns:
        List of rows, each a list of raw string cells
    """
    path = Path(source)
    logger.info(f"Reading comments from {path}")

    with open(path, "r", encoding="utf-8", newline="") as f:
        rows = [row for row in csv.reader(f)]

    logger.info(f"Found {len(rows)} rows")
    return rows


def _split_args(text: str) -> list[str]:
    return [arg.strip() for arg in text.split(",")]


def _resolve_source(raw_path: str, config_dir: Path, line_number: int) -> Path:
    """Find the data file, as given or relative to the directive file."""
    path = Path(raw_path)
    if path.exists():
        return path

    relative = config_dir / path
    if relative.exists():
        return relative

    raise DirectiveError(line_number, "the specified data file does not exist.")


def parse_directives(lines: list[str], config_dir: Path) -> AnalyzerSettings:
    """Interpret the lines of a directive file.

    Only lines starting with a hash followed by a known directive are
    interpreted; everything else is treated as a comment.

    Args:
        lines: The lines of the directive file
        config_dir: Directory relative paths in #SOURCE are resolved against

    Returns:
        The validated analyzer settings

    Raises:
        DirectiveError: If a directive is malformed or inconsistent
    """
    categories: dict[str, CategorySettings] = {}
    source: Path | None = None
    types_done = False

    def lookup(name: str, line_number: int) -> CategorySettings:
        category = categories.get(name.upper())
        if category is None:
            raise DirectiveError(
                line_number, f'no comment type "{name}" has been registered.'
            )
        return category

    def targets(name: str, line_number: int) -> list[CategorySettings]:
        return [lookup(name, line_number)] if name else list(categories.values())

    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.startswith("#"):
            continue

        directive, _, rest = line[1:].partition(" ")
        if directive not in KNOWN_DIRECTIVES:
            continue
        rest = rest.strip()

        if directive == "END":
            break

        if directive == "TYPE":
            if types_done:
                raise DirectiveError(
                    line_number,
                    "all #TYPEs must be defined before any other directive "
                    "(aside from #SOURCE).",
                )

            args = _split_args(rest)
            if len(args) not in (2, 3):
                raise DirectiveError(
                    line_number,
                    f"expected 2 or 3 arguments for #TYPE but found {len(args)}.",
                )

            name = args[0].upper()
            if not name:
                raise DirectiveError(line_number, "#TYPE requires a name.")
            if name in categories:
                raise DirectiveError(
                    line_number, f'comment type "{args[0]}" is already registered.'
                )

            try:
                text_column = int(args[1])
                author_column = int(args[2]) if len(args) == 3 else None
            except ValueError as e:
                raise DirectiveError(
                    line_number, "expected an integer column number."
                ) from e

            try:
                categories[name] = CategorySettings(
                    name=name, text_column=text_column, author_column=author_column
                )
            except ValidationError as e:
                raise DirectiveError(
                    line_number, "column numbers must not be negative."
                ) from e

            logger.info(f"Registered comment type {name}")
            continue

        if directive == "SOURCE":
            if source is not None:
                raise DirectiveError(line_number, "only one #SOURCE may be specified.")
            if not rest:
                raise DirectiveError(line_number, "the #SOURCE requires a filepath.")

            source = _resolve_source(rest, config_dir, line_number)
            continue

        types_done = True

        if directive in ("DISABLE-CONJUGATION", "DISABLE-PLURALIZATION"):
            for category in targets(rest, line_number):
                if directive == "DISABLE-CONJUGATION":
                    category.merge_conjugations = False
                else:
                    category.merge_plurals = False

        elif directive == "IGNOREALL":
            words = [w.upper() for w in _split_args(rest) if w]
            for category in categories.values():
                category.ignored.extend(words)

        elif directive == "IGNORETYPE":
            args = _split_args(rest)
            category = lookup(args[0], line_number)
            category.ignored.extend(w.upper() for w in args[1:] if w)

        elif directive in ("MERGEALL", "MERGETYPE"):
            args = _split_args(rest)
            if directive == "MERGETYPE":
                if len(args) < 3:
                    raise DirectiveError(
                        line_number,
                        f"expected at least 3 arguments for #MERGETYPE but found {len(args)}.",
                    )
                selected = [lookup(args[0], line_number)]
                args = args[1:]
            else:
                if len(args) < 2:
                    raise DirectiveError(
                        line_number,
                        f"expected at least 2 arguments for #MERGEALL but found {len(args)}.",
                    )
                selected = list(categories.values())

            if any(not arg for arg in args):
                raise DirectiveError(line_number, "merged words must not be empty.")

            for category in selected:
                if len(args) == 2 and args[1] == "*":
                    category.wildcards.append(args[0].upper())
                else:
                    category.aliases.append([arg.upper() for arg in args])

    if source is None:
        raise DirectiveError(
            None, "Configuration error: no source file specified from which to read data."
        )

    if not categories:
        logger.warning("No #TYPE directives found, the report will be empty")

    return AnalyzerSettings(source=source, categories=list(categories.values()))


def load_directives(config_path: str | Path) -> AnalyzerSettings:
    """Load analyzer settings from a directive file.

    If the file does not exist, the commented template is written in its
    place so the user has something to edit.

    Raises:
        MissingConfigError: If the file did not exist (a template now does)
        DirectiveError: If a directive is malformed or inconsistent
    """
    path = Path(config_path)

    if not path.exists():
        write_default_config(path)
        raise MissingConfigError(
            f"No configuration file found. A new configuration file has been "
            f"generated at {path}; see it for details about how to set up the analyzer."
        )

    logger.info(f"Loading directives from {path}")
    lines = path.read_text(encoding="utf-8").splitlines()
    return parse_directives(lines, path.parent)
