"""Working-directory file listing, query filtering, and change signatures.

The listing walks the tree once per rebuild. While walking it records every
visited directory so later polls can detect added/removed entries by
re-stating those directories instead of walking again.
"""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    """Relative file paths under ``root`` plus the directories visited."""

    root: Path
    show_hidden: bool
    paths: tuple[str, ...]
    directories: tuple[Path, ...]
    signature: str


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _log_walk_error(exc: OSError) -> None:
    logger.debug("skipping unreadable entry %s: %s", exc.filename, exc)


def _ancestor_real_paths(dirpath: str, real_dirs: dict[str, str]) -> set[str]:
    """Return resolved paths of the already-walked ancestors of ``dirpath``."""
    ancestors: set[str] = set()
    parent = os.path.dirname(dirpath)
    while parent in real_dirs:
        ancestors.add(real_dirs[parent])
        grandparent = os.path.dirname(parent)
        if grandparent == parent:
            break
        parent = grandparent
    return ancestors


def collect_files(root: Path, show_hidden: bool) -> Listing:
    """Recursively list regular files under ``root`` following symlinks.

    Hidden names (leading ``.``) are skipped unless ``show_hidden``; entries
    that cannot be read are skipped. Paths are relative to ``root`` and sorted.
    A symlinked directory that points back at one of its own ancestors is
    not descended into.
    """
    root = Path(root)
    paths: list[str] = []
    directories: list[Path] = []
    real_dirs: dict[str, str] = {}

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_log_walk_error):
        real = os.path.realpath(dirpath)
        if real in _ancestor_real_paths(dirpath, real_dirs):
            logger.debug("skipping directory cycle at %s", dirpath)
            dirnames[:] = []
            continue
        real_dirs[dirpath] = real
        directories.append(Path(dirpath))

        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
            filenames = [name for name in filenames if not _is_hidden(name)]
        for filename in filenames:
            full = os.path.join(dirpath, filename)
            # isfile follows symlinks and reports broken ones as False.
            if not os.path.isfile(full):
                continue
            paths.append(os.path.relpath(full, root))

    paths.sort()
    return Listing(
        root=root,
        show_hidden=show_hidden,
        paths=tuple(paths),
        directories=tuple(directories),
        signature=directory_signature(root, directories, show_hidden),
    )


def filter_paths(paths: tuple[str, ...] | list[str], query: str) -> list[str]:
    """Keep paths containing ``query`` as a case-sensitive substring, in order."""
    if not query:
        return list(paths)
    return [path for path in paths if query in path]


def _update_digest(digest, token: str) -> None:
    """Append a token plus separator byte to a hash digest."""
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _stat_token(path: Path) -> str:
    try:
        st = path.stat()
    except FileNotFoundError:
        return "missing"
    except OSError:
        return "error"
    return f"ok:{st.st_mtime_ns}"


def directory_signature(root: Path, directories: list[Path] | tuple[Path, ...], show_hidden: bool) -> str:
    """Digest over ``root`` and the stat stamp of each visited directory.

    A directory's mtime changes when entries are added, removed, or renamed,
    so comparing signatures detects listing changes without a full walk.
    """
    digest = hashlib.blake2b(digest_size=20)
    _update_digest(digest, f"root:{root}")
    _update_digest(digest, f"show_hidden:{1 if show_hidden else 0}")
    for directory in directories:
        _update_digest(digest, f"dir:{directory}:{_stat_token(directory)}")
    return digest.hexdigest()


def listing_changed(listing: Listing, root: Path) -> bool:
    """Return whether ``listing`` is stale for working directory ``root``."""
    if Path(root) != listing.root:
        return True
    current = directory_signature(listing.root, listing.directories, listing.show_hidden)
    return current != listing.signature


__all__ = [
    "Listing",
    "collect_files",
    "directory_signature",
    "filter_paths",
    "listing_changed",
]
