from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.


"""Path containment guard.

``PathGuard`` decides whether a caller-supplied path, interpreted relative
to the root boundary, stays inside that root.  The decision is purely
lexical: the joined path is normalized (``.``/``..`` collapsed) and compared
segment by segment against the normalized root.  Nothing is read from disk,
so symlinks are not followed and existence is not checked; those errors
surface later from the actual I/O call.

Segment-wise comparison means a root of ``/proj`` never admits
``/project-evil`` even though the strings share a prefix.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath

from demoapp.exceptions import ConfigValidationError, ContainmentError

logger = logging.getLogger("demoapp.path_guard")


# ── Validation outcome ───────────────────────────────────────


@dataclass(frozen=True)
class Allowed:
    """The candidate resolves inside the root."""

    path: Path


@dataclass(frozen=True)
class Denied:
    """The candidate was rejected; *reason* never echoes the candidate."""

    reason: str


PathValidation = Allowed | Denied


def _normalize(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


# ── PathGuard ────────────────────────────────────────────────


class PathGuard:
    """Validate candidate paths against a single root boundary.

    The root is normalized once at construction and never changes.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        raw = os.fspath(root)
        if not raw or not raw.strip():
            raise ConfigValidationError("Root boundary must not be empty")
        self._root = Path(_normalize(raw))

    def __repr__(self) -> str:
        return f"PathGuard(root={str(self._root)!r})"

    @property
    def root(self) -> Path:
        """Absolute, normalized root boundary."""
        return self._root

    def validate(self, candidate: str) -> PathValidation:
        """Resolve *candidate* against the root and check containment.

        Never raises: malformed input becomes a :class:`Denied` outcome.
        """
        try:
            if "\x00" in candidate:
                raise ValueError("embedded null byte")
            resolved = _normalize(os.path.join(self._root, candidate))
            logger.debug("validate candidate=%r resolved=%s", candidate, resolved)
            if not PurePath(resolved).is_relative_to(self._root):
                logger.debug("path_denied candidate=%r reason=outside_root", candidate)
                return Denied(
                    f"Access denied. Only files inside {self._root} may be accessed"
                )
            return Allowed(Path(resolved))
        except Exception as exc:
            logger.debug("path_denied candidate=%r reason=%s", candidate, exc)
            return Denied(f"Invalid path: {exc}")

    def resolve(self, candidate: str) -> Path:
        """Return the contained absolute path or raise :class:`ContainmentError`."""
        outcome = self.validate(candidate)
        if isinstance(outcome, Denied):
            raise ContainmentError(outcome.reason)
        return outcome.path

    def relative(self, path: str | os.PathLike[str]) -> str:
        """Render a resolved path relative to the root."""
        return os.path.relpath(path, self._root)
