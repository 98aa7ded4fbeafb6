# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Output formats for a resolved member list (order is preserved, never sorted)."""

from __future__ import annotations

import json
from typing import List

from .members import Member


def render_tsv(members: List[Member]) -> str:
    """One `name<TAB>username` line per member."""
    return "".join(f"{m.name}\t{m.username}\n" for m in members)


def render_json(members: List[Member]) -> str:
    return json.dumps([m.to_dict() for m in members], indent=2, ensure_ascii=False) + "\n"


def render(members: List[Member], *, as_json: bool = False) -> str:
    return render_json(members) if as_json else render_tsv(members)
