# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""GitLab API client for gitlab-reviewer."""

from __future__ import annotations

import logging
import time
import urllib.parse
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from .exceptions import (
    CredentialError,
    GitLabAPIError,
    GitLabRequestError,
    GitLabResponseError,
    NoActiveMembersError,
)
from .members import Member
from .remote import ProjectRef

_logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".gitlab_pat"
ERROR_PREVIEW_CHARS = 200
MEMBERS_PER_PAGE = 100


def read_token(token_path: Union[str, Path] = DEFAULT_TOKEN_PATH) -> str:
    """Read the GitLab personal access token (one line, surrounding whitespace ignored)."""
    p = Path(token_path).expanduser()
    try:
        token = p.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialError(f"could not read {p}: {e}") from e
    if not token:
        raise CredentialError(f"{p} is empty")
    return token


def preview_body(text: str, limit: int = ERROR_PREVIEW_CHARS) -> str:
    """Truncate a response body so error pages don't flood the terminal."""
    s = str(text or "")
    if len(s) > limit:
        return s[:limit] + "..."
    return s


class GitLabAPIClient:
    """GitLab REST API client for a single host.

    Example:
        client = GitLabAPIClient(host="gitlab.com", token=read_token())
        members = client.get_project_members("group/project")
    """

    def __init__(self, *, host: str, token: str, timeout: float = 10):
        self.base_url = f"https://{host}"
        self.timeout = timeout
        # GitLab personal access tokens go in PRIVATE-TOKEN, not Authorization.
        self.headers: Dict[str, str] = {"PRIVATE-TOKEN": token}

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a single GET request and return the decoded JSON body or raise.

        Anything but 200 is an error; no retries.
        """
        ep = str(endpoint or "")
        url = f"{self.base_url}{ep}" if ep.startswith("/") else f"{self.base_url}/{ep}"
        t0 = time.monotonic()
        _logger.debug(f"GET {url} params={params}")

        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitLabRequestError(status_code=0, endpoint=ep, message=f"API request failed: {e}") from e
        finally:
            _logger.debug(f"GET {ep} took {time.monotonic() - t0:.2f}s")

        if response.status_code != 200:
            raise GitLabAPIError(
                status_code=response.status_code,
                endpoint=ep,
                message=f"API returned status {response.status_code}: {preview_body(response.text)}",
            )

        try:
            return response.json()
        except ValueError as e:
            raise GitLabResponseError(
                status_code=response.status_code, endpoint=ep, message=f"parsing API response: {e}"
            ) from e

    def get_project_members(self, project_path: str, *, per_page: int = MEMBERS_PER_PAGE) -> List[Member]:
        """Active members of a project, including inherited group members.

        Only the first page is fetched (at most `per_page` members).
        """
        encoded = urllib.parse.quote(project_path, safe="")
        data = self.get(f"/api/v4/projects/{encoded}/members/all", params={"per_page": per_page})
        return active_members(data)


def active_members(records: Any) -> List[Member]:
    """Project `members/all` records down to active members; raises if none are left."""
    if not isinstance(records, list):
        raise GitLabResponseError(status_code=200, endpoint="", message="parsing API response: expected a JSON array")

    members: List[Member] = []
    for rec in records:
        if not isinstance(rec, dict) or rec.get("state") != "active":
            continue
        members.append(Member(name=str(rec.get("name") or ""), username=str(rec.get("username") or "")))

    if not members:
        raise NoActiveMembersError("no active members found")
    return members


def fetch_from_gitlab(
    project: ProjectRef,
    *,
    token_path: Union[str, Path] = DEFAULT_TOKEN_PATH,
    timeout: float = 10,
    per_page: int = MEMBERS_PER_PAGE,
) -> List[Member]:
    token = read_token(token_path)
    client = GitLabAPIClient(host=project.host, token=token, timeout=timeout)
    return client.get_project_members(project.path, per_page=per_page)
