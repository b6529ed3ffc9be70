"""Configuration models describing cfhelper settings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TAGS = [
    "dp",
    "greedy",
    "math",
    "graphs",
    "data structures",
    "sortings",
    "binary search",
    "dfs and similar",
    "trees",
    "strings",
    "number theory",
    "geometry",
    "two pointers",
    "dsu",
    "bitmasks",
    "constructive algorithms",
    "implementation",
]


class CFHelperBaseModel(BaseModel):
    """Shared configuration for cfhelper settings models."""

    model_config = ConfigDict(extra="forbid")


class ApiSettings(CFHelperBaseModel):
    """Remote API access options.

    Attributes:
        base_url: Root of the Codeforces JSON API.
        timeout_seconds: Transport timeout applied to each request.
    """

    base_url: str = "https://codeforces.com/api"
    timeout_seconds: float = Field(default=30.0, gt=0)


class StorageSettings(CFHelperBaseModel):
    """Local persistence options.

    Attributes:
        data_dir: Directory holding the catalog snapshot, folders, and submissions.
    """

    data_dir: str = "~/.cfhelper"


class CatalogSettings(CFHelperBaseModel):
    """Catalog caching and tag classification options.

    Attributes:
        ttl_hours: Age after which the cached catalog is considered stale.
        folder_size: Number of problems kept in each system tag folder.
        tags: Ordered tag registry used to build system folders.
    """

    ttl_hours: float = Field(default=24.0, gt=0)
    folder_size: int = Field(default=20, ge=0)
    tags: List[str] = Field(default_factory=lambda: list(DEFAULT_TAGS))


class SearchSettings(CFHelperBaseModel):
    """Search and random pick options.

    Attributes:
        result_limit: Maximum number of catalog matches returned by a search.
        default_max_rating: Upper rating bound used when none is supplied.
    """

    result_limit: int = Field(default=50, ge=0)
    default_max_rating: int = Field(default=10_000, ge=0)


class UserSettings(CFHelperBaseModel):
    """Per-user options.

    Attributes:
        handle: Codeforces handle used when syncing submissions.
        exclude_solved: Whether random picks skip problems already accepted.
    """

    handle: Optional[str] = None
    exclude_solved: bool = False


class LoggingSettings(CFHelperBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(CFHelperBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        recent_limit: Default number of submissions listed by `submissions recent`.
    """

    quiet_default: bool = False
    recent_limit: int = Field(default=20, ge=0)


class CFHelperConfig(CFHelperBaseModel):
    """Top-level configuration struct for cfhelper."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    user: UserSettings = Field(default_factory=UserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DEFAULT_TAGS",
    "CFHelperBaseModel",
    "ApiSettings",
    "StorageSettings",
    "CatalogSettings",
    "SearchSettings",
    "UserSettings",
    "LoggingSettings",
    "CLIOptions",
    "CFHelperConfig",
]
