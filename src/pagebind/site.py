"""Site directory lookups.

Maps request paths onto files below the site root without ever escaping it.
"""

from pathlib import Path

INDEX_FILE = "index.html"
PAGE_SUFFIX = ".html"


def resolve_site_path(root_dir: Path, path: str) -> Path | None:
    """Resolve a URL path to a file below the site root.

    Directory paths resolve to their index.html.

    Args:
        root_dir: Site root directory
        path: URL path relative to the site root (e.g., "css/site.css")

    Returns:
        Existing file path, or None if missing or outside root_dir
    """
    root = root_dir.resolve()
    candidate = (root / path.lstrip("/")).resolve()

    if not candidate.is_relative_to(root):
        return None

    if candidate.is_dir():
        candidate = candidate / INDEX_FILE

    if not candidate.is_file():
        return None

    return candidate
