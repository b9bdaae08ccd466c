"""helm-update-config: Update the values of a deployed release in place.

This library re-applies an existing release with new configuration values
without going through the full chart install/upgrade flow:
- Locate the release by the namespace part of its name
- Deep merge ``key=value`` overrides onto its stored values
- Submit the merged values back to the release service

Public API:
    ReleaseConfigUpdater: Locate, merge and submit for one release
    HttpReleaseClient: JSON/HTTP client for the release service
    Release, ValuesPolicy: Data models
    merge_values: Deep merge of override values onto stored values
    parse_set_values: Parse ``--set-value`` flags into a nested mapping
    UpdateConfigError and subclasses: Exception types

Example:
    ```python
    from helm_update_config import HttpReleaseClient
    from helm_update_config import ReleaseConfigUpdater
    from helm_update_config import parse_set_values

    updater = ReleaseConfigUpdater(
        client=HttpReleaseClient(),  # reads TILLER_HOST
        release_id="team-a.20230601.101500",
        values=parse_set_values(["replicas=3,env.tier=canary"]),
    )
    updater.run()
    ```
"""

from .client import HttpReleaseClient
from .client import ReleaseClient
from .exceptions import ArgumentError
from .exceptions import ConfigFormatError
from .exceptions import EmptyReleaseSetError
from .exceptions import QueryError
from .exceptions import ReleaseServiceError
from .exceptions import UpdateConfigError
from .exceptions import UpdateError
from .models import Release
from .models import ValuesPolicy
from .updater import ReleaseConfigUpdater
from .updater import namespace_of
from .utils import merge_values
from .values import parse_set_values

__version__ = "0.1.0"

__all__ = [
    "ReleaseConfigUpdater",
    "HttpReleaseClient",
    "ReleaseClient",
    "Release",
    "ValuesPolicy",
    "namespace_of",
    "merge_values",
    "parse_set_values",
    "UpdateConfigError",
    "ArgumentError",
    "ConfigFormatError",
    "ReleaseServiceError",
    "QueryError",
    "EmptyReleaseSetError",
    "UpdateError",
]
