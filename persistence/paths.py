from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    """Default home of the shared document file; created on first use."""
    return ensure_dir(project_root() / "data")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_file(data_dir: Path, name: str) -> Path:
    """Resolve STORE_DATA_FILE; absolute names bypass the data dir."""
    path = Path(name)
    if path.is_absolute():
        return path
    return data_dir / path
