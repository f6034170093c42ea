"""Tool to parse every outline file in a local directory."""

import logging
from pathlib import Path
from typing import Optional

import pathspec

from ..parser.builder import build_tree
from ..parser.hierarchy import count_nodes, tree_depth
from ..security import is_sensitive_filename, scan_content_for_secrets, validate_path_traversal
from .parse_outline import resolve_config

logger = logging.getLogger(__name__)

SKIP_DIRS = {
    '.git',
    'node_modules',
    '__pycache__',
    '.venv',
    'venv',
    'dist',
    'build',
    '.pytest_cache',
    '.mypy_cache',
    '.tox',
}

OUTLINE_EXTENSIONS = ('.md', '.markdown', '.txt')


def is_hidden_path(path: Path) -> bool:
    """Check if any component of the path is hidden (starts with .)."""
    return any(part.startswith('.') for part in path.parts)


def _load_ignore_spec(base_path: Path, extra_patterns: Optional[list[str]]) -> Optional[pathspec.GitIgnoreSpec]:
    """Combine .gitignore rules with extra gitignore-style patterns."""
    lines: list[str] = []
    gitignore_path = base_path / '.gitignore'
    if gitignore_path.is_file():
        try:
            lines.extend(gitignore_path.read_text(encoding='utf-8').splitlines())
        except (OSError, UnicodeDecodeError):
            logger.debug("Unreadable .gitignore in %s", base_path)
    if extra_patterns:
        lines.extend(extra_patterns)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def discover_local_outline_files(
    base_path: str,
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
) -> list[str]:
    """
    Discover outline files in a local directory.

    Returns:
        Sorted list of paths relative to base_path (posix separators)

    Raises:
        ValueError: if base_path is missing or not a directory
    """
    base = Path(base_path).resolve()
    if not base.exists():
        raise ValueError(f"Path does not exist: {base_path}")
    if not base.is_dir():
        raise ValueError(f"Path is not a directory: {base_path}")

    ignore_spec = _load_ignore_spec(base, extra_ignore_patterns)
    found: list[str] = []

    def is_ignored(rel_path: str) -> bool:
        return bool(ignore_spec and ignore_spec.match_file(rel_path))

    def crawl(current: Path, depth: int) -> None:
        if depth > max_depth:
            return
        try:
            entries = list(current.iterdir())
        except OSError:
            logger.debug("Cannot list directory: %s", current)
            return

        for item in entries:
            try:
                resolved = item.resolve()
                if item.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", item)
                    continue
                if not validate_path_traversal(resolved, base):
                    logger.warning("Path escapes base directory, skipping: %s -> %s", item, resolved)
                    continue

                rel_path = item.relative_to(base).as_posix()
                if not include_hidden and is_hidden_path(Path(rel_path)):
                    continue

                if item.is_dir():
                    if item.name in SKIP_DIRS or is_ignored(rel_path + '/'):
                        continue
                    crawl(item, depth + 1)
                elif item.is_file() and item.suffix.lower() in OUTLINE_EXTENSIONS:
                    if is_sensitive_filename(rel_path):
                        logger.info("Skipping sensitive file: %s", rel_path)
                        continue
                    if is_ignored(rel_path):
                        logger.debug("Skipping ignored file: %s", rel_path)
                        continue
                    found.append(rel_path)
            except OSError:
                continue

    crawl(base, 0)
    found.sort()
    return found


def outline_local(
    path: str,
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
) -> dict:
    """
    Parse every outline file under a directory.

    Args:
        path: Directory to crawl
        max_depth: Maximum directory depth to crawl
        include_hidden: Whether to include hidden files and directories
        follow_symlinks: Whether to follow symbolic links (default False)
        extra_ignore_patterns: Additional gitignore-style patterns to exclude
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker

    Returns:
        Dict with per-file outline statistics
    """
    base_path = Path(path).resolve()

    try:
        config = resolve_config(indent_width, list_marker)
        files = discover_local_outline_files(
            str(base_path),
            max_depth=max_depth,
            include_hidden=include_hidden,
            follow_symlinks=follow_symlinks,
            extra_ignore_patterns=extra_ignore_patterns,
        )
    except ValueError as e:
        return {"success": False, "error": str(e), "path": str(base_path)}

    if not files:
        return {
            "success": False,
            "error": "No outline files found",
            "path": str(base_path),
            "searched_depth": max_depth,
        }

    outlines: list[dict] = []
    skipped_secrets: list[str] = []
    unreadable: list[str] = []

    for rel_path in files:
        try:
            content = (base_path / rel_path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            logger.debug("Unreadable outline file: %s", rel_path)
            unreadable.append(rel_path)
            continue

        detected = scan_content_for_secrets(content)
        if detected:
            logger.warning("Secret detected in %s: %s, skipping file", rel_path, ', '.join(detected))
            skipped_secrets.append(rel_path)
            continue

        forest = build_tree(content, config)
        outlines.append({
            "file": rel_path,
            "root_count": len(forest),
            "node_count": count_nodes(forest),
            "max_depth": tree_depth(forest),
            "roots": [node.value for node in forest],
        })

    result = {
        "success": True,
        "path": str(base_path),
        "file_count": len(outlines),
        "node_count": sum(o["node_count"] for o in outlines),
        "outlines": outlines,
    }
    if skipped_secrets:
        result["skipped_secrets"] = skipped_secrets
    if unreadable:
        result["unreadable"] = unreadable
    return result
