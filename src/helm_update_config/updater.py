"""Locate a release and re-apply it with merged values."""

import logging
from typing import Any

from .client import ReleaseClient
from .exceptions import ArgumentError
from .exceptions import EmptyReleaseSetError
from .exceptions import QueryError
from .exceptions import ReleaseServiceError
from .exceptions import UpdateError
from .models import Release
from .models import ValuesPolicy
from .utils import dump_config
from .utils import load_config
from .utils import merge_values

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "."


def namespace_of(release_id: str) -> str:
    """Derive the namespace from a release identifier.

    Release names are composed as ``NAMESPACE.VERSION_DATE.VERSION_TIME``;
    an identifier without a separator is taken whole as the namespace.

    Raises:
        ArgumentError: If the identifier or its namespace part is empty
    """
    if not release_id or not release_id.strip():
        raise ArgumentError("release identifier must not be empty")
    namespace = release_id.split(NAMESPACE_SEPARATOR, 1)[0]
    if not namespace:
        raise ArgumentError(f"release identifier '{release_id}' has an empty namespace")
    return namespace


class ReleaseConfigUpdater:
    """Updates the stored values of one deployed release.

    The release is looked up by the namespace part of its identifier, the
    override values are deep merged onto its stored values, and the merged
    document is submitted back in a single update call.

    Args:
        client: Release service client
        release_id: Release identifier (NAMESPACE.DATE.TIME)
        values: Override values, as parsed from the command line
        policy: Whether unset values reset to chart defaults or reuse stored ones
    """

    def __init__(
        self,
        client: ReleaseClient,
        release_id: str,
        values: dict[str, Any],
        policy: ValuesPolicy = ValuesPolicy.REUSE,
    ):
        self.client = client
        self.release_id = release_id
        self.values = values
        self.policy = policy

    def locate_release(self) -> Release:
        """Find the release to update.

        The first release listed in the namespace is selected. The service
        gives no ordering guarantee, so a namespace should hold one release.

        Raises:
            ArgumentError: If the release identifier is invalid
            QueryError: If listing releases fails
            EmptyReleaseSetError: If no release is deployed in the namespace
        """
        namespace = namespace_of(self.release_id)

        try:
            releases = self.client.list_releases(namespace)
        except ReleaseServiceError as e:
            raise QueryError(f"failed to list releases in namespace '{namespace}': {e}") from e

        if not releases:
            raise EmptyReleaseSetError(f"no releases found in namespace '{namespace}'")

        release = releases[0]
        if len(releases) > 1:
            others = ", ".join(r.name for r in releases[1:])
            logger.warning(f"{len(releases)} releases in namespace '{namespace}', using '{release.name}' (also: {others})")
        logger.info(f"Located release '{release.name}' (revision {release.version})")
        return release

    def merged_values(self, release: Release) -> dict[str, Any]:
        """Merge the override values onto the release's stored values."""
        base = load_config(release.config_raw)
        return merge_values(base, self.values)

    def run(self) -> Release:
        """Locate, merge and submit.

        Returns:
            The updated release as reported by the service

        Raises:
            UpdateError: If the service rejects the update
        """
        release = self.locate_release()
        document = dump_config(self.merged_values(release))
        logger.debug(f"Submitting values for '{release.name}':\n{document}")

        try:
            updated = self.client.update_release(release.name, release.chart, document, self.policy)
        except ReleaseServiceError as e:
            raise UpdateError(f"failed to update release '{release.name}': {e}") from e

        logger.info(f"Updated release '{updated.name}' with {self.policy.value} policy")
        return updated
