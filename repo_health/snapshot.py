"""
Repository snapshot types.

A snapshot is the complete, read-only set of repository metadata handed to the
analyzers for one run. It is produced by a VCS provider (see
``repo_health.vcs``) or built directly by callers and tests.
"""

from typing import Any, Iterable, NamedTuple

BLOB = "blob"
TREE = "tree"


class TreeEntry(NamedTuple):
    """A single file-tree entry, relative to the repository root."""

    path: str
    kind: str = BLOB  # "blob" or "tree"

    @property
    def is_blob(self) -> bool:
        return self.kind == BLOB


class Contributor(NamedTuple):
    """Commit total for a single contributor."""

    login: str
    commits: int


class RepoSnapshot(NamedTuple):
    """Immutable repository metadata for one analysis run."""

    tree: tuple[TreeEntry, ...] = ()
    readme: str | None = None
    has_license: bool = False
    contributors: tuple[Contributor, ...] = ()
    archived: bool = False
    default_branch: str | None = None

    def blobs(self) -> Iterable[TreeEntry]:
        """Iterate over file entries only."""
        return (entry for entry in self.tree if entry.is_blob)

    def paths(self) -> Iterable[str]:
        return (entry.path for entry in self.tree)


def build_snapshot(
    tree: Iterable[TreeEntry | tuple[str, str] | str] = (),
    readme: str | None = None,
    has_license: bool = False,
    contributors: Iterable[Contributor | tuple[str, int]] = (),
    archived: bool = False,
    default_branch: str | None = None,
) -> RepoSnapshot:
    """
    Build a RepoSnapshot from loosely typed inputs.

    Tree items may be TreeEntry values, ``(path, kind)`` pairs or bare paths
    (treated as blobs). Paths are normalized (leading ``./`` and ``/``
    removed) and duplicates are dropped, keeping the first occurrence.
    Contributor order is preserved as given.
    """
    entries: list[TreeEntry] = []
    seen: set[str] = set()
    for item in tree:
        if isinstance(item, str):
            path, kind = item, BLOB
        else:
            path, kind = item[0], item[1]
        path = _normalize_path(path)
        if not path or path in seen:
            continue
        seen.add(path)
        entries.append(TreeEntry(path, kind))

    return RepoSnapshot(
        tree=tuple(entries),
        readme=readme,
        has_license=has_license,
        contributors=tuple(Contributor(login, int(commits)) for login, commits in contributors),
        archived=archived,
        default_branch=default_branch,
    )


def snapshot_from_github(
    repository: dict[str, Any],
    tree: list[dict[str, Any]],
    contributors: list[dict[str, Any]],
    readme: str | None,
    has_license: bool,
) -> RepoSnapshot:
    """
    Normalize GitHub REST API payloads into a RepoSnapshot.

    Args:
        repository: Payload of ``GET /repos/{owner}/{repo}``.
        tree: ``tree`` list of ``GET /repos/{owner}/{repo}/git/trees/{sha}``.
        contributors: Payload of ``GET /repos/{owner}/{repo}/stats/contributors``.
        readme: Decoded README text, or None when the repository has none.
        has_license: Whether the license endpoint found a license.
    """
    tree_items = [
        (item.get("path", ""), item.get("type", BLOB))
        for item in tree
        if isinstance(item, dict)
    ]

    contributor_items = []
    for stats in contributors:
        if not isinstance(stats, dict):
            continue
        author = stats.get("author") or {}
        login = author.get("login") if isinstance(author, dict) else None
        if not login:
            # Deleted accounts come back with a null author
            login = "ghost"
        contributor_items.append((login, stats.get("total") or 0))

    return build_snapshot(
        tree=tree_items,
        readme=readme,
        has_license=has_license,
        contributors=contributor_items,
        archived=bool(repository.get("archived", False)),
        default_branch=repository.get("default_branch"),
    )


def _normalize_path(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")
