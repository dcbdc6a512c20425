import os
import tempfile

import pytest

# Keep the XDG data directory created on import out of the user's home
os.environ["XDG_DATA_HOME"] = tempfile.mkdtemp(prefix="comment-pipes-")

COMMENTS = (
    "run,,Ann\n"
    '"This guest is clearly crazy, so be careful.",Running late,Bob\n'
    "runner,The visitors loved it,Ann\n"
)

DIRECTIVES = """Test directives

#SOURCE comments.csv
#TYPE crs, 0
#TYPE front desk, 1, 2
#IGNOREALL the
#MERGETYPE front desk, guest, visitor
"""


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "comments.csv").write_text(COMMENTS, encoding="utf-8")
    path = tmp_path / "config.cfg"
    path.write_text(DIRECTIVES, encoding="utf-8")
    return path
