import os
from pathlib import Path

import pytest

from issue_mirror.common.exceptions import StoreOpenException
from issue_mirror.store.locator import IssueStore, open_store


def test_paths_are_derived_from_root(tmp_path: Path) -> None:
    store = IssueStore(tmp_path)

    assert store.issue_file(12) == tmp_path / "issues" / "12.json"
    assert store.comments_dir(12) == tmp_path / "issues" / "12" / "comments"
    assert store.comment_file(12, 345) == (
        tmp_path / "issues" / "12" / "comments" / "345.json"
    )


def test_paths_are_deterministic(tmp_path: Path) -> None:
    store = IssueStore(tmp_path)

    assert store.issue_file(3) == store.issue_file(3)
    assert store.comments_dir(3) == IssueStore(str(tmp_path)).comments_dir(3)
    assert store.comment_file(3, 9) == store.comment_file(3, 9)


def test_path_mapping_has_no_side_effects(tmp_path: Path) -> None:
    store = IssueStore(tmp_path / "root")

    store.issue_file(1)
    store.comment_file(1, 2)

    assert not (tmp_path / "root").exists()


def test_open_store_creates_root(tmp_path: Path) -> None:
    root = tmp_path / "cache" / "jekyll-issues"

    store = open_store(root)

    assert root.is_dir()
    assert store.root == root


def test_open_store_existing_root(tmp_path: Path) -> None:
    store = open_store(tmp_path)
    assert store.root == tmp_path


def test_open_store_expands_user(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    store = open_store("~/mirror")

    assert store.root == tmp_path / "mirror"
    assert store.root.is_dir()


def test_open_store_root_is_a_file(tmp_path: Path) -> None:
    root = tmp_path / "not-a-dir"
    root.write_text("x")

    with pytest.raises(
        StoreOpenException, match="Cannot open issue cache folder.*File exists"
    ):
        open_store(root)


@pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
def test_open_store_unwritable_parent(tmp_path: Path) -> None:
    parent = tmp_path / "locked"
    parent.mkdir(mode=0o555)
    try:
        with pytest.raises(StoreOpenException):
            open_store(parent / "child")
    finally:
        parent.chmod(0o755)
