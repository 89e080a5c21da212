"""Layout of the Sentinel data directory."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sentinel.config import get_settings


@dataclass(frozen=True)
class DataPaths:
    root: Path

    @property
    def config(self) -> Path:
        return self.root / "config.json"

    @property
    def store(self) -> Path:
        return self.root / "store.json"

    @property
    def sessions_dir(self) -> Path:
        return self.root / "sessions"

    @property
    def tasks_dir(self) -> Path:
        return self.root / "tasks"

    @property
    def session_index(self) -> Path:
        return self.sessions_dir / "index.json"

    @property
    def task_index(self) -> Path:
        return self.tasks_dir / "index.json"

    def session(self, session_id: str) -> Path:
        return self.sessions_dir / f"{session_id}.json"

    def task(self, task_id: str) -> Path:
        return self.tasks_dir / f"{task_id}.json"


def get_paths(root: Optional[Path] = None) -> DataPaths:
    """Resolve the data directory from settings unless one is given."""
    if root is None:
        root = get_settings().general.data_path
    return DataPaths(Path(root).expanduser())
