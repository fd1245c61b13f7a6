"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, svcctl.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """[backend] section."""

    model_config = {"frozen": True}

    name: Literal["auto", "systemd", "windows"] = "auto"
    user_scope: bool = False
    systemctl: str = "systemctl"


class WaitConfig(BaseModel):
    """[wait] section."""

    model_config = {"frozen": True}

    poll_interval: float = Field(default=0.5, gt=0)
