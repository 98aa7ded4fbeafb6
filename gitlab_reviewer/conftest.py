# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared pytest fixtures: throwaway git repositories built with GitPython."""

from pathlib import Path
from typing import Optional, Sequence

import git
import pytest


def _commit_as(repo: git.Repo, author_name: str, n: int) -> None:
    work = Path(repo.working_tree_dir)
    f = work / f"file{n}.txt"
    f.write_text(f"change {n} by {author_name}\n")
    repo.index.add([str(f)])
    actor = git.Actor(author_name, f"{author_name.lower().replace(' ', '.')}@example.com")
    repo.index.commit(f"commit {n}", author=actor, committer=actor)


@pytest.fixture
def make_repo(tmp_path):
    """Factory: make_repo(authors=[...], origin="git@...") -> repo path.

    `authors` are committed in order, so `git log` lists them newest first.
    """
    counter = {"n": 0}

    def _make(authors: Sequence[str] = (), origin: Optional[str] = None) -> Path:
        counter["n"] += 1
        path = tmp_path / f"repo{counter['n']}"
        repo = git.Repo.init(path)
        for i, name in enumerate(authors):
            _commit_as(repo, name, i)
        if origin is not None:
            repo.create_remote("origin", origin)
        return path

    return _make
