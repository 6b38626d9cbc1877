import os
from pathlib import Path

from issue_mirror.common.exceptions import StoreOpenException
from issue_mirror.constants import DIR_MODE


class IssueStore:
    """Maps issue numbers and comment ids to paths under the cache root.

    Layout::

        <root>/issues/<number>.json
        <root>/issues/<number>/comments/<comment id>.json
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def issue_file(self, issue_number: int) -> Path:
        return self.root / "issues" / f"{issue_number}.json"

    def comments_dir(self, issue_number: int) -> Path:
        return self.root / "issues" / str(issue_number) / "comments"

    def comment_file(self, issue_number: int, comment_id: int) -> Path:
        return self.comments_dir(issue_number) / f"{comment_id}.json"


def open_store(root: Path | str) -> IssueStore:
    path = Path(root).expanduser()
    try:
        path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise StoreOpenException(str(path), e.strerror or str(e))

    if not os.access(path, os.W_OK | os.X_OK):
        raise StoreOpenException(str(path), "permission denied")

    return IssueStore(path)
