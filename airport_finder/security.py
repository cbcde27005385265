"""Security utilities (reference path validation)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable


class SecurityError(Exception):
    """Raised when security validation fails."""
    pass


logger = logging.getLogger(__name__)


def validate_reference_file(file_path: Path, allowed_base_dirs: Iterable[str], max_file_size_bytes: int) -> None:
    allowed = list(allowed_base_dirs)
    resolved_path = Path(file_path).resolve()
    for allowed_base in allowed:
        try:
            resolved_path.relative_to(Path(allowed_base).resolve())
            break
        except ValueError:
            continue
    else:
        raise SecurityError(f"Reference file '{file_path}' is outside allowed directories: {allowed}")

    if resolved_path.is_file():
        size = resolved_path.stat().st_size
        if size > max_file_size_bytes:
            raise SecurityError(
                f"Reference file '{file_path}' exceeds size limit "
                f"({size / 1024 / 1024:.1f}MB > {max_file_size_bytes / 1024 / 1024:.0f}MB)"
            )
    logger.info("Path validation passed: %s", file_path)
