import os
from pathlib import Path

# We store files relative to the XDG Base Directory specification
XDG_DATA = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

# The root is the data directory, which contains the default directive file,
# the output database and the directory the text reports are written to.
DATA_ROOT = XDG_DATA / "comment-pipes"
DATA_ROOT.mkdir(parents=True, exist_ok=True)

REPORTS_DIR = DATA_ROOT / "reports"
REPORTS_DIR.mkdir(parents=True, exist_ok=True)

# The directive file can be moved anywhere by setting COMMENT_PIPES_CONFIG
CONFIG_PATH = Path(os.getenv("COMMENT_PIPES_CONFIG", DATA_ROOT / "config.cfg"))

REPORT_NAME = "results.txt"

DB_PATH = DATA_ROOT / "analytics.db"
