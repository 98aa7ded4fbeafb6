# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Locate the GitLab project behind a local repository's `origin` remote.

Two remote shapes are recognized, each by its own matcher:

    git@gitlab.com:group/project.git       (SSH / scp-like)
    https://gitlab.com/group/project.git   (HTTP or HTTPS)

Anything else (ssh://, file paths, local directories) is reported as unparsed.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import git  # GitPython

from .exceptions import RemoteParseError, RemoteURLError

_logger = logging.getLogger(__name__)

_SSH_REMOTE_RE = re.compile(r"^[^@/\s]+@(?P<host>[^:/\s]+):(?P<path>.+?)(?:\.git)?$")
_HTTP_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ProjectRef:
    host: str  # e.g. "gitlab.com"
    path: str  # e.g. "researchable/myproject"


def parse_ssh_remote(remote_url: str) -> Optional[ProjectRef]:
    m = _SSH_REMOTE_RE.match(str(remote_url or ""))
    if not m:
        return None
    return ProjectRef(host=m.group("host"), path=m.group("path"))


def parse_http_remote(remote_url: str) -> Optional[ProjectRef]:
    """Match `scheme://[user@]host[:port]/path[.git]`; only one trailing `.git` is stripped."""
    try:
        parts = urllib.parse.urlsplit(str(remote_url or ""))
    except ValueError:
        return None
    if parts.scheme not in _HTTP_SCHEMES:
        return None

    # Keep the port, drop any userinfo.
    host = parts.netloc.rpartition("@")[2]
    if not host:
        return None

    path = parts.path
    if path.startswith("/"):
        path = path[1:]
    if path.endswith(".git"):
        path = path[: -len(".git")]
    if not path:
        return None
    return ProjectRef(host=host, path=path)


def parse_gitlab_remote(remote_url: str) -> ProjectRef:
    """Return the project reference for `remote_url` or raise RemoteParseError."""
    for matcher in (parse_ssh_remote, parse_http_remote):
        project = matcher(remote_url)
        if project is not None:
            return project
    raise RemoteParseError(remote_url)


def sanitize_remote_url(remote_url: str) -> str:
    """Flatten an unrecognized remote URL into something usable as a file name."""
    return re.sub(r"[/:@.]", "-", str(remote_url or ""))


def get_remote_url(repo_path: Union[str, Path] = ".", remote: str = "origin") -> str:
    """Return the configured URL of `remote` (with insteadOf rewrites applied)."""
    try:
        repo = git.Repo(str(repo_path), search_parent_directories=True)
        url = repo.git.remote("get-url", remote)
    except git.exc.GitError as e:
        raise RemoteURLError(f"not a git repo or no {remote} remote: {e}") from e
    url = str(url or "").strip()
    if not url:
        raise RemoteURLError(f"{remote} remote has an empty URL")
    _logger.debug(f"{remote} remote: {url}")
    return url
