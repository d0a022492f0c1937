# src/tetris_ai/utils/paths.py
from __future__ import annotations

from pathlib import Path


def _existing_dir(p: Path, what: str) -> Path:
    if not p.is_dir():
        raise FileNotFoundError(f"{what} directory not found: {p} (is the package installed with its data?)")
    return p


def package_root() -> Path:
    """Directory of the installed tetris_ai package."""
    return Path(__file__).resolve().parent.parent


def assets_dir() -> Path:
    return _existing_dir(package_root() / "assets", "assets")


def pieces_dir() -> Path:
    return _existing_dir(assets_dir() / "pieces", "piece set")


def relpath(path: Path, *, base: Path) -> str:
    """
    `path` relative to `base` for log lines; the path as given when it lies
    outside `base`.
    """
    target = Path(path).resolve()
    root = Path(base).resolve()
    if target == root or root in target.parents:
        return str(target.relative_to(root))
    return str(path)


__all__ = ["package_root", "assets_dir", "pieces_dir", "relpath"]
