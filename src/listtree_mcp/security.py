"""Guards for reading outline files: sensitive names, secrets, path escapes."""

import fnmatch
import logging
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Never parsed, even when they carry an outline extension
SKIP_FILES = {
    '.env',
    '.env.local',
    '.env.production',
    'credentials.json',
    'secrets.yaml',
    'secrets.yml',
    '.npmrc',
    '.pypirc',
    '.netrc',
}

SENSITIVE_PATTERNS = [
    '*.pem',
    '*.key',
    '*.p12',
    '*.pfx',
    'id_rsa*',
    'id_ed25519*',
    '.env.*',
]

SECRET_CONTENT_PATTERNS = {
    'private key': re.compile(r'-----BEGIN.*PRIVATE KEY-----'),
    'AWS access key': re.compile(r'AKIA[0-9A-Z]{16}'),
    'Anthropic API key': re.compile(r'sk-ant-[a-zA-Z0-9_-]+'),
    'GitHub personal access token': re.compile(r'ghp_[a-zA-Z0-9]{36}'),
    'Slack token': re.compile(r'xox[boaprs]-[a-zA-Z0-9\-]+'),
}


def is_sensitive_filename(filename: str) -> bool:
    """True if the basename matches a known credential or key file."""
    basename = Path(filename).name.lower()
    if basename in SKIP_FILES:
        return True
    return any(fnmatch.fnmatch(basename, pattern) for pattern in SENSITIVE_PATTERNS)


def scan_content_for_secrets(content: str) -> list[str]:
    """Return descriptions of the secret patterns found in `content`."""
    return [name for name, pattern in SECRET_CONTENT_PATTERNS.items() if pattern.search(content)]


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path stays inside the base directory."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False


def resolve_within(path: str, base_dir: Optional[str] = None) -> Optional[Path]:
    """
    Resolve `path`, relative to `base_dir` when given.

    Returns None when the result escapes `base_dir` (including via symlinks).
    """
    if base_dir is None:
        return Path(path).resolve()

    base = Path(base_dir).resolve()
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = base / candidate
    resolved = candidate.resolve()
    if not validate_path_traversal(resolved, base):
        logger.warning("Path escapes base directory: %s -> %s", path, resolved)
        return None
    return resolved
