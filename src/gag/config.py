"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_GLOB = "./*md"
DATE_FORMAT = "%Y.%m.%d"


@dataclass(slots=True)
class AppConfig:
    glob: str = DEFAULT_GLOB
    column_width: int = 20
    count_width: int = 4

    def resolve_glob(self, base_dir: Path | None = None) -> str:
        if Path(self.glob).is_absolute() or base_dir is None:
            return self.glob
        return str(base_dir / self.glob)
