"""Data models for helm-update-config."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any


class ValuesPolicy(Enum):
    """How the release service treats values not part of the update.

    RESET falls back to the chart's built-in defaults, REUSE inherits the
    values stored with the previous release.
    """

    RESET = "reset"
    REUSE = "reuse"

    @classmethod
    def from_flag(cls, reset_values: bool) -> "ValuesPolicy":
        return cls.RESET if reset_values else cls.REUSE


@dataclass(frozen=True)
class Release:
    """A deployed release as reported by the release service.

    Attributes:
        name: Release name, ``NAMESPACE.VERSION_DATE.VERSION_TIME``
        namespace: Namespace the release is deployed into
        chart: Chart reference, passed back to the service unchanged
        config_raw: Stored values as a YAML document
        version: Release revision number
    """

    name: str
    namespace: str
    chart: dict[str, Any] = field(default_factory=dict)
    config_raw: str = ""
    version: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Release":
        """Build a Release from its wire representation."""
        config = data.get("config") or {}
        return cls(
            name=data["name"],
            namespace=data.get("namespace", ""),
            chart=data.get("chart") or {},
            config_raw=config.get("raw", "") or "",
            version=int(data.get("version", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "version": self.version,
            "chart": self.chart,
            "config": {"raw": self.config_raw},
        }
