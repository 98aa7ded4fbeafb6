# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Project member value type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Member:
    """One reviewer candidate.

    `username` is empty when the member came from commit history rather than GitLab.
    """

    name: str
    username: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "username": self.username}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        """Build a Member from a JSON object; raises TypeError on bad shape."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        name = data.get("name") or ""
        username = data.get("username") or ""
        if not isinstance(name, str) or not isinstance(username, str):
            raise TypeError("member name and username must be strings")
        return cls(name=name, username=username)
