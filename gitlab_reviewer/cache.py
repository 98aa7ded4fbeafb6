# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Per-project member cache on disk.

One JSON file per project under the cache root:

    ~/.cache/gitlab-reviewer/researchable-general-my-project.json

Content is an indented JSON array of {"name": ..., "username": ...} objects.
Freshness is judged by the file's mtime; entries are never deleted here.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import List, Optional, Union

import platformdirs

from .exceptions import (
    CacheCorruptError,
    CacheEmptyError,
    CacheNotFoundError,
    CacheStaleError,
    RemoteParseError,
)
from .members import Member
from .remote import parse_gitlab_remote, sanitize_remote_url

_logger = logging.getLogger(__name__)

CACHE_DIR_NAME = "gitlab-reviewer"
CACHE_TTL_S = 24 * 60 * 60


def gitlab_reviewer_cache_dir() -> Path:
    """Return the cache directory for gitlab-reviewer.

    Resolution order:
    - GITLAB_REVIEWER_CACHE_DIR (explicit override)
    - <OS user cache dir>/gitlab-reviewer
    - $HOME/.cache/gitlab-reviewer
    """
    override = os.environ.get("GITLAB_REVIEWER_CACHE_DIR")
    if override:
        return Path(override).expanduser()

    try:
        base = platformdirs.user_cache_dir()
    except (OSError, RuntimeError, KeyError):
        base = ""
    if not base:
        base = os.path.join(os.environ.get("HOME", ""), ".cache")
    return Path(base) / CACHE_DIR_NAME


def cache_file_name(remote_url: str) -> str:
    """Map a remote URL to its cache file name (a pure function of the URL)."""
    try:
        path = parse_gitlab_remote(remote_url).path
    except RemoteParseError:
        path = sanitize_remote_url(remote_url)
    return path.replace("/", "-") + ".json"


def cache_path_for(remote_url: str, cache_root: Optional[Union[str, Path]] = None) -> Path:
    root = Path(cache_root) if cache_root is not None else gitlab_reviewer_cache_dir()
    return root / cache_file_name(remote_url)


def read_cache(
    path: Union[str, Path],
    *,
    respect_ttl: bool = True,
    ttl_s: int = CACHE_TTL_S,
    now: Optional[float] = None,
) -> List[Member]:
    """Load the member list at `path`.

    Raises:
        CacheNotFoundError: no file at `path`
        CacheStaleError: `respect_ttl` is set and the file is older than `ttl_s`
        CacheCorruptError: the file is not a JSON array of member objects
        CacheEmptyError: the array is empty
    """
    p = Path(path)
    try:
        mtime = p.stat().st_mtime
    except (FileNotFoundError, NotADirectoryError) as e:
        raise CacheNotFoundError(path=p, message=f"no cache file at {p}") from e
    except OSError as e:
        raise CacheCorruptError(path=p, message=f"reading cache {p}: {e}") from e

    if respect_ttl:
        now_s = time.time() if now is None else float(now)
        age_s = now_s - mtime
        if age_s > float(ttl_s):
            raise CacheStaleError(path=p, message=f"cache is stale ({int(age_s)}s old, ttl {int(ttl_s)}s)")

    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (FileNotFoundError, NotADirectoryError) as e:
        raise CacheNotFoundError(path=p, message=f"no cache file at {p}") from e
    except (OSError, ValueError) as e:
        raise CacheCorruptError(path=p, message=f"parsing cache {p}: {e}") from e

    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise CacheCorruptError(path=p, message=f"parsing cache {p}: expected a JSON array")
    try:
        members = [Member.from_dict(item) for item in raw]
    except TypeError as e:
        raise CacheCorruptError(path=p, message=f"parsing cache {p}: {e}") from e

    if not members:
        raise CacheEmptyError(path=p, message=f"cache {p} is empty")
    _logger.debug(f"read {len(members)} members from {p}")
    return members


def write_cache(path: Union[str, Path], members: List[Member]) -> None:
    """Write `members` to `path`, creating parent directories. Raises OSError."""
    p = Path(path)
    p.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    data = json.dumps([m.to_dict() for m in members], indent=2, ensure_ascii=False)

    # Atomic write (tmp file + rename)
    tmp = p.with_name(f"{p.name}.tmp.{os.getpid()}")
    try:
        tmp.write_text(data, encoding="utf-8")
        os.chmod(tmp, 0o644)
        os.replace(tmp, p)
    finally:
        if tmp.exists():
            tmp.unlink()
    _logger.debug(f"wrote {len(members)} members to {p}")
