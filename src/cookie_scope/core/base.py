"""Base rule contract — every passive scan rule implements this interface."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any

import httpx
from pydantic import BaseModel, Field


class RiskLevel(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class Confidence(StrEnum):
    CONFIRMED = "confirmed"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    FALSE_POSITIVE = "false_positive"


class Finding(BaseModel):
    """A single finding — one issue detected in one response."""

    rule_id: int
    title: str
    description: str
    risk: RiskLevel
    confidence: Confidence
    solution: str
    reference: str = ""
    other_info: str = ""
    evidence: list[str] = Field(default_factory=list)
    cwe_id: int = 0
    wasc_id: int = 0
    tags: dict[str, str] = Field(default_factory=dict)


class ScanResult(BaseModel):
    """Result of running one rule against one response."""

    rule_name: str
    url: str
    host: str
    findings: list[Finding] = Field(default_factory=list)
    raw_data: dict[str, Any] = Field(default_factory=dict)


class BaseRule(ABC):
    """Abstract base class for all passive scan rules.

    Every rule must implement scan() and get_example_findings(), and expose its
    registration metadata as class attributes.
    """

    name: str
    plugin_id: int
    display_name: str
    description: str
    risk: RiskLevel = RiskLevel.INFO
    confidence: Confidence = Confidence.MEDIUM
    cwe_id: int = 0
    wasc_id: int = 0
    tags: Mapping[str, str] = MappingProxyType({})

    @abstractmethod
    async def scan(
        self, response: httpx.Response, ignore_list: frozenset[str] = frozenset(), **kwargs: Any
    ) -> ScanResult:
        """Inspect a recorded response and return any findings. Never sends traffic."""
        ...

    @abstractmethod
    def get_example_findings(self) -> list[Finding]:
        """Return sample findings, used for documentation and `info` output."""
        ...

    def get_educational_content(self) -> str:
        """Load the info.md file co-located with the rule."""
        module_file = Path(inspect.getfile(self.__class__))
        info_path = module_file.parent / "info.md"
        if info_path.exists():
            return info_path.read_text()
        return f"No educational content available for {self.display_name}."
