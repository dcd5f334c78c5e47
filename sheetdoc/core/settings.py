from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv


# SHEETDOC_HOME (the log directory base) may come from a .env file.
load_dotenv(override=False)


def resolve_relative(path: str | Path, base: Path) -> Path:
    """Resolve ``path`` against ``base`` unless it is already absolute."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return base / p
