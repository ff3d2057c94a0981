"""
File system utilities for the pipeline.
"""

import json
from pathlib import Path
from typing import Any, Optional


def save_json(data: Any, path: Path, indent: int = 2) -> None:
    """Save data to JSON file with atomic write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=str)
    tmp.replace(path)


def load_json(path: Path) -> Any:
    """Load JSON file, return None if missing."""
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_text(path: Path) -> Optional[str]:
    """Read text file, return None if missing."""
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
