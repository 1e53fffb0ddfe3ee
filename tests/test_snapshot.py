"""
Tests for snapshot construction.
"""

from repo_health.snapshot import (
    Contributor,
    TreeEntry,
    build_snapshot,
    snapshot_from_github,
)


def test_build_snapshot_normalizes_and_deduplicates():
    """Test duplicate and prefixed paths collapse to one entry."""
    snapshot = build_snapshot(
        tree=["./README.md", "README.md", ("src", "tree"), "/src/main.py", ""]
    )
    assert snapshot.tree == (
        TreeEntry("README.md", "blob"),
        TreeEntry("src", "tree"),
        TreeEntry("src/main.py", "blob"),
    )
    assert [e.path for e in snapshot.blobs()] == ["README.md", "src/main.py"]


def test_build_snapshot_keeps_contributor_order():
    snapshot = build_snapshot(contributors=[("b", 1), ("a", "3")])
    assert snapshot.contributors == (Contributor("b", 1), Contributor("a", 3))


def test_snapshot_is_immutable():
    snapshot = build_snapshot(tree=["a.py"])
    assert isinstance(snapshot.tree, tuple)
    assert isinstance(snapshot.contributors, tuple)


def test_snapshot_from_github_payloads():
    """Test GitHub REST payloads are normalized."""
    snapshot = snapshot_from_github(
        repository={"archived": True, "default_branch": "trunk"},
        tree=[
            {"path": "README.md", "type": "blob", "sha": "1"},
            {"path": "docs", "type": "tree", "sha": "2"},
        ],
        contributors=[
            {"author": {"login": "octocat"}, "total": 12, "weeks": []},
            {"author": None, "total": 3},
        ],
        readme="# Hi",
        has_license=True,
    )
    assert snapshot.archived is True
    assert snapshot.default_branch == "trunk"
    assert snapshot.tree[1] == TreeEntry("docs", "tree")
    assert snapshot.contributors == (
        Contributor("octocat", 12),
        Contributor("ghost", 3),
    )
    assert snapshot.readme == "# Hi"
    assert snapshot.has_license is True
