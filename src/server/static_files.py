"""Safe static-file resolution and content-type helpers for UI assets."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional

_TEXT_APPLICATION_TYPES = {
    "application/javascript",
    "application/json",
    "application/manifest+json",
    "application/xml",
    "image/svg+xml",
}


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Resolve `request_path` to a file inside `ui_root`, or None.

    The bare root is not a file, and anything escaping the root via `..` or
    symlinks is refused.
    """
    root = ui_root.resolve()
    relative = (request_path or "").lstrip("/")
    if not relative:
        return None

    candidate = (root / relative).resolve()
    if root not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_APPLICATION_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


def load_static_file(ui_root: Path, request_path: str) -> Optional[tuple[bytes, str]]:
    """Return `(body, content_type)` for a servable asset, or None."""
    path = resolve_static_file(ui_root, request_path)
    if path is None:
        return None
    return path.read_bytes(), guess_content_type(path)
