"""Configuration models and defaults."""
from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Optional, Tuple


def default_allowed_dirs() -> Tuple[str, ...]:
    return (str(Path.home()), os.getcwd())


@dataclass(frozen=True)
class Config:
    reference_path: Optional[Path] = None
    strategy: str = "kdtree"
    max_file_size_mb: int = 100
    validation_samples: int = 1000
    allowed_base_dirs: Tuple[str, ...] = field(default_factory=default_allowed_dirs)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Config":
        reference = os.getenv("AIRPORT_REFERENCE_PATH")
        extra_dirs = [d for d in os.getenv("AIRPORT_ALLOWED_DIRS", "").split(os.pathsep) if d]
        return cls(
            reference_path=Path(reference) if reference else None,
            strategy=os.getenv("AIRPORT_FINDER") or "kdtree",
            allowed_base_dirs=default_allowed_dirs() + tuple(extra_dirs),
        )
