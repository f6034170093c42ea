"""Tool to parse a local outline file."""

import logging
from typing import Optional

from ..security import is_sensitive_filename, resolve_within, scan_content_for_secrets
from .parse_outline import outline_result, resolve_config

logger = logging.getLogger(__name__)


def parse_outline_file(
    path: str,
    base_dir: Optional[str] = None,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> dict:
    """
    Read a UTF-8 outline file and parse it.

    Args:
        path: File to read (relative to base_dir when given)
        base_dir: If set, the file must resolve inside this directory
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker
        max_depth: Only include nodes with depth <= this value

    Returns:
        Parse result plus file path, or a dict with "error"
    """
    try:
        config = resolve_config(indent_width, list_marker)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    resolved = resolve_within(path, base_dir)
    if resolved is None:
        return {"success": False, "error": f"Path escapes base directory: {path}"}

    if not resolved.exists():
        return {"success": False, "error": f"Path does not exist: {path}"}
    if not resolved.is_file():
        return {"success": False, "error": f"Path is not a file: {path}"}

    if is_sensitive_filename(resolved.name):
        logger.info("Refusing sensitive file: %s", resolved)
        return {"success": False, "error": f"Refusing to read sensitive file: {path}"}

    try:
        content = resolved.read_text(encoding='utf-8')
    except UnicodeDecodeError:
        return {"success": False, "error": f"File is not valid UTF-8: {path}"}
    except OSError as e:
        return {"success": False, "error": f"Could not read {path}: {e}"}

    detected = scan_content_for_secrets(content)
    if detected:
        logger.warning("Secret detected in %s: %s", resolved, ', '.join(detected))
        return {
            "success": False,
            "error": f"Secret detected in file ({', '.join(detected)})",
            "file": str(resolved),
        }

    result = outline_result(content, config, max_depth)
    result["success"] = True
    result["file"] = str(resolved)
    return result
