"""
Configuration for narytree.

Settings are resolved from:
1. Defaults (this file)
2. Environment variables (NARYTREE_*) override defaults
3. CLI flags override everything
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "NARYTREE_"


class PrintStyle(BaseModel):
    """Layout used by print_tree: indentation per level and node markers."""

    indent: int = Field(default=2, ge=0)
    branch_marker: str = "*"
    leaf_marker: str = "-"

    model_config = {"frozen": True}

    def prefix(self, level: int, is_leaf: bool) -> str:
        marker = self.leaf_marker if is_leaf else self.branch_marker
        return " " * (self.indent * level) + marker + " "


class Settings(BaseModel):
    """Root settings object."""

    id_bits: int = Field(default=64, ge=32)
    log_level: str = "WARNING"
    print_style: PrintStyle = Field(default_factory=PrintStyle)

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


def _env_overrides(environ: Dict[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field_name in ("id_bits", "log_level"):
        value = environ.get(ENV_PREFIX + field_name.upper())
        if value:
            overrides[field_name] = value

    # NARYTREE_PRINT_INDENT, NARYTREE_PRINT_BRANCH_MARKER, NARYTREE_PRINT_LEAF_MARKER
    style: Dict[str, str] = {}
    for field_name in PrintStyle.model_fields:
        value = environ.get(f"{ENV_PREFIX}PRINT_{field_name.upper()}")
        if value:
            style[field_name] = value
    if style:
        overrides["print_style"] = style
    return overrides


def load_settings(environ: Optional[Dict[str, str]] = None) -> Settings:
    """Load settings from defaults plus environment overrides.

    Raises:
        pydantic.ValidationError: if an override is not a valid value.
    """
    env = os.environ if environ is None else environ
    return Settings(**_env_overrides(dict(env)))


__all__ = ["PrintStyle", "Settings", "load_settings"]
