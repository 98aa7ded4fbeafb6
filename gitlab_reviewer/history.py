# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Reviewer candidates from local commit authorship (no GitLab usernames)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

import git  # GitPython

from .exceptions import HistoryError
from .members import Member

_logger = logging.getLogger(__name__)


def unique_authors(names: Iterable[str]) -> List[Member]:
    """Dedupe author names by exact match, keeping first-seen order."""
    seen = set()
    members: List[Member] = []
    for raw in names:
        name = str(raw or "").strip()
        if not name or name in seen:
            continue
        seen.add(name)
        members.append(Member(name=name, username=""))
    return members


def fetch_from_git_log(repo_path: Union[str, Path] = ".") -> List[Member]:
    """All distinct commit author names (mailmap applied), in `git log` order."""
    try:
        repo = git.Repo(str(repo_path), search_parent_directories=True)
        out = repo.git.log("--format=%aN")
    except git.exc.GitError as e:
        raise HistoryError(f"git log failed: {e}") from e

    members = unique_authors(str(out or "").splitlines())
    _logger.debug(f"git log yielded {len(members)} distinct authors")
    return members
