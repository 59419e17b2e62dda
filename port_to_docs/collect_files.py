"""Logic for discovering the xml files of a run."""

from collections.abc import Iterable
from pathlib import Path

DOCS_INDEX_FILE = "index.xml"
DOCS_NAMESPACE_PREFIX = "ns-"
DOCS_FRAMEWORKS_DIR = "FrameworksIndex"


def _is_docs_metadata(path: Path) -> bool:
    """Check if a file is a Docs namespace, index or frameworks file."""
    return (
        path.name == DOCS_INDEX_FILE
        or path.name.startswith(DOCS_NAMESPACE_PREFIX)
        or DOCS_FRAMEWORKS_DIR in path.parts
    )


def collect_files(
    directories: Iterable[str | Path],
    pattern: str = "*.xml",
    *,
    skip_docs_metadata: bool = False,
) -> list[Path]:
    """Find matching files under every directory, sorted and de-duplicated.

    With ``skip_docs_metadata`` only Docs type files are returned.
    """
    found: set[Path] = set()
    for directory in directories:
        root = Path(directory)
        if not root.is_dir():
            msg = f"Directory not found: {root}"
            raise SystemExit(msg)
        for path in root.rglob(pattern):
            if not path.is_file():
                continue
            if skip_docs_metadata and _is_docs_metadata(path.relative_to(root)):
                continue
            found.add(path)
    return sorted(found)
