# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""gitlab-reviewer error types.

Every strategy in the resolver raises one of these; the resolver catches them by
type, logs a diagnostic and moves on to the next strategy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class GitLabReviewerError(Exception):
    pass


class RemoteURLError(GitLabReviewerError):
    """`origin` could not be resolved (not a repository, or no such remote)."""


class RemoteParseError(GitLabReviewerError):
    def __init__(self, remote_url: str):
        super().__init__(f"could not parse remote URL: {remote_url}")
        self.remote_url = str(remote_url or "")


class CredentialError(GitLabReviewerError):
    pass


class CacheError(GitLabReviewerError):
    def __init__(self, *, path: Union[str, Path], message: str):
        super().__init__(message)
        self.path = Path(path)


class CacheNotFoundError(CacheError):
    pass


class CacheStaleError(CacheError):
    pass


class CacheEmptyError(CacheError):
    pass


class CacheCorruptError(CacheError):
    pass


class GitLabAPIError(GitLabReviewerError):
    def __init__(self, *, status_code: int, endpoint: str, message: str):
        super().__init__(message)
        self.status_code = int(status_code)
        self.endpoint = str(endpoint or "")


class GitLabRequestError(GitLabAPIError):
    pass


class GitLabResponseError(GitLabAPIError):
    pass


class NoActiveMembersError(GitLabReviewerError):
    pass


class HistoryError(GitLabReviewerError):
    pass
