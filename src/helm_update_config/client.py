"""Client for the release-management service."""

import logging
import os
from typing import Any
from typing import Protocol
from urllib.parse import quote

import requests

from .exceptions import ReleaseServiceError
from .models import Release
from .models import ValuesPolicy

logger = logging.getLogger(__name__)

HOST_ENV_VAR = "TILLER_HOST"
DEFAULT_HOST = "localhost:44134"


class ReleaseClient(Protocol):
    """Operations the updater needs from the release service."""

    def list_releases(self, namespace: str) -> list[Release]: ...

    def update_release(
        self, name: str, chart: dict[str, Any], values: str, policy: ValuesPolicy
    ) -> Release: ...


def resolve_host(host: str | None = None) -> str:
    """Resolve the service base URL.

    Resolution order:
    1. Explicit host argument
    2. TILLER_HOST environment variable
    3. DEFAULT_HOST

    A host without a scheme is assumed to speak plain http.
    """
    address = host or os.environ.get(HOST_ENV_VAR) or DEFAULT_HOST
    if "://" not in address:
        address = f"http://{address}"
    return address.rstrip("/")


class HttpReleaseClient:
    """JSON-over-HTTP release service client.

    Args:
        host: Service address; falls back to TILLER_HOST, then DEFAULT_HOST
        timeout: Per-request timeout in seconds
        session: Optional requests session (injected in tests)
    """

    def __init__(self, host: str | None = None, timeout: float = 30.0, session: requests.Session | None = None):
        self.base_url = resolve_host(host)
        self.timeout = timeout
        self.session = session or requests.Session()

    def list_releases(self, namespace: str) -> list[Release]:
        """List releases deployed into namespace.

        Raises:
            ReleaseServiceError: On transport failure or a malformed reply
        """
        payload = self._request("GET", "/api/v1/releases", params={"namespace": namespace})
        try:
            return [Release.from_dict(item) for item in payload.get("releases") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ReleaseServiceError(f"Malformed release listing: {e}") from e

    def update_release(self, name: str, chart: dict[str, Any], values: str, policy: ValuesPolicy) -> Release:
        """Apply a new values document to an existing release.

        Raises:
            ReleaseServiceError: On transport failure or a malformed reply
        """
        body = {
            "chart": chart,
            "values": {"raw": values},
            "reset_values": policy is ValuesPolicy.RESET,
            "reuse_values": policy is ValuesPolicy.REUSE,
        }
        payload = self._request("PUT", f"/api/v1/releases/{quote(name, safe='')}", json=body)
        try:
            return Release.from_dict(payload["release"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ReleaseServiceError(f"Malformed update reply: {e}") from e

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            payload = resp.json()
        except requests.HTTPError as e:
            detail = e.response.text[:400] if e.response is not None else ""
            raise ReleaseServiceError(f"{method} {url} failed: {e} {detail}".rstrip()) from e
        except requests.RequestException as e:
            raise ReleaseServiceError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise ReleaseServiceError(f"{method} {url} returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ReleaseServiceError(f"{method} {url} returned unexpected payload")
        return payload
