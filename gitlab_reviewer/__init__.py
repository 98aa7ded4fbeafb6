# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
gitlab-reviewer: GitLab project members as reviewer candidates.

- `remote` finds the project behind `origin`
- `cache` keeps one JSON file per project with a 24h TTL
- `gitlab_api` / `history` are the two member sources
- `resolver` chains cache -> API -> stale cache -> git log
"""

from .members import Member  # noqa: F401
from .remote import ProjectRef, parse_gitlab_remote  # noqa: F401
from .resolver import MemberResolver, Resolution, ResolverConfig, get_members  # noqa: F401

__all__ = [
    "Member",
    "MemberResolver",
    "ProjectRef",
    "Resolution",
    "ResolverConfig",
    "get_members",
    "parse_gitlab_remote",
]
