"""File name helpers."""

from __future__ import annotations


def get_extension(file_name: str) -> str:
    """Return the extension of ``file_name`` without the dot.

    The last dot counts only when it is neither the first nor the last
    character, so ``".gitignore"``, ``"file."`` and ``"README"`` have no
    extension and yield ``""``.
    """
    pos = file_name.rfind(".")
    if 0 < pos < len(file_name) - 1:
        return file_name[pos + 1 :]
    return ""
