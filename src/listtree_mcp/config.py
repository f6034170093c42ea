"""Parser configuration and environment settings."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_INDENT_WIDTH = 1
DEFAULT_LIST_MARKER = "-"
DEFAULT_TAB_WIDTH = 4


@dataclass(frozen=True)
class ParserConfig:
    """Options recognized by the line classifier."""
    indentation_unit_width: int = DEFAULT_INDENT_WIDTH
    list_marker: str = DEFAULT_LIST_MARKER
    tab_width: int = DEFAULT_TAB_WIDTH

    def __post_init__(self):
        if self.indentation_unit_width < 1:
            raise ValueError(
                f"indentation_unit_width must be >= 1, got {self.indentation_unit_width}"
            )
        if self.tab_width < 1:
            raise ValueError(f"tab_width must be >= 1, got {self.tab_width}")
        if not self.list_marker or any(c.isspace() for c in self.list_marker):
            raise ValueError(f"Invalid list marker: {self.list_marker!r}")

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a config from LISTTREE_* environment variables."""
        return cls(
            indentation_unit_width=_env_int("LISTTREE_INDENT_WIDTH", DEFAULT_INDENT_WIDTH),
            list_marker=os.environ.get("LISTTREE_LIST_MARKER", "").strip() or DEFAULT_LIST_MARKER,
            tab_width=_env_int("LISTTREE_TAB_WIDTH", DEFAULT_TAB_WIDTH),
        )

    def with_overrides(
        self,
        indent_width: Optional[int] = None,
        list_marker: Optional[str] = None,
    ) -> "ParserConfig":
        """Return a copy with tool-argument overrides applied."""
        return ParserConfig(
            indentation_unit_width=indent_width if indent_width is not None else self.indentation_unit_width,
            list_marker=list_marker if list_marker is not None else self.list_marker,
            tab_width=self.tab_width,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


def is_local_only() -> bool:
    """Whether remote fetching is disabled (LISTTREE_LOCAL_ONLY)."""
    return os.environ.get("LISTTREE_LOCAL_ONLY", "").lower() in ("true", "1", "yes")


def log_level() -> str:
    return os.environ.get("LISTTREE_LOG_LEVEL", "WARNING").upper()
