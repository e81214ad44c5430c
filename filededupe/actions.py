from __future__ import annotations

import os
import re
import shutil
from typing import Callable, List, Optional

from .config import ActionConfig
from .errors import UniqueNameError
from .models import Action, Classification
from .report import Reporter

_NUMBERED = re.compile(r"^(.*)\.(\d+)$", re.DOTALL)


def unique_name(path: str, max_attempts: int = 10000, exists: Callable[[str], bool] = os.path.lexists) -> str:
    """Return ``path`` or the first free ``path.N`` variant.

    A path already ending in ``.<digits>`` has that number bumped, anything
    else gets ``.1`` appended, until a name that does not exist is found.
    """
    candidate = path
    for _ in range(max_attempts):
        if not exists(candidate):
            return candidate
        m = _NUMBERED.match(candidate)
        if m:
            candidate = f"{m.group(1)}.{int(m.group(2)) + 1}"
        else:
            candidate = f"{candidate}.1"
    raise UniqueNameError(f"no free name for '{path}' after {max_attempts} attempts")


class ActionEngine:
    """Deletes duplicates, copies or moves new files."""

    def __init__(self, actions: ActionConfig, reporter: Optional[Reporter] = None) -> None:
        self.actions = actions
        self.reporter = reporter or Reporter()

    def destination(self, directory: str, path: str) -> str:
        target = os.path.join(directory, os.path.basename(path))
        if self.actions.clobber:
            return target
        return unique_name(target, self.actions.max_unique_attempts)

    def apply(self, path: str, result: Classification) -> List[Action]:
        applied: List[Action] = []
        if result.tag.is_duplicate:
            if self.actions.delete:
                applied.append(Action.DELETE)
                self._delete(path)
            return applied

        if self.actions.copy_dir:
            applied.append(Action.COPY)
            self._transfer(path, self.actions.copy_dir, shutil.copy, "copy")
        if self.actions.move_dir:
            applied.append(Action.MOVE)
            self._transfer(path, self.actions.move_dir, shutil.move, "move")
        return applied

    def _delete(self, path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            self.reporter.warn(f"Failed to unlink file '{path}': {e.strerror or e}")

    def _transfer(self, path: str, directory: str, op: Callable[[str, str], object], verb: str) -> None:
        try:
            target = self.destination(directory, path)
            op(path, target)
        except (OSError, shutil.Error) as e:
            self.reporter.warn(f"Failed to {verb} file '{path}' to '{directory}': {getattr(e, 'strerror', None) or e}")
