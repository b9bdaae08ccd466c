"""Shared fixtures for helm-update-config tests."""

import pytest
from helm_update_config import Release
from helm_update_config import ReleaseServiceError


class FakeReleaseClient:
    """In-memory release service recording every call."""

    def __init__(self, releases=None, list_error=None, update_error=None):
        self.releases = list(releases or [])
        self.list_error = list_error
        self.update_error = update_error
        self.list_calls = []
        self.update_calls = []

    def list_releases(self, namespace):
        self.list_calls.append(namespace)
        if self.list_error:
            raise ReleaseServiceError(self.list_error)
        return [r for r in self.releases if r.namespace == namespace]

    def update_release(self, name, chart, values, policy):
        self.update_calls.append({"name": name, "chart": chart, "values": values, "policy": policy})
        if self.update_error:
            raise ReleaseServiceError(self.update_error)
        current = next(r for r in self.releases if r.name == name)
        return Release(
            name=name,
            namespace=current.namespace,
            chart=chart,
            config_raw=values,
            version=current.version + 1,
        )


@pytest.fixture
def team_release():
    """Release deployed in namespace team-a with nested stored values."""
    return Release(
        name="team-a.20230601.101500",
        namespace="team-a",
        chart={"metadata": {"name": "webapp", "version": "1.2.0"}},
        config_raw="replicas: 2\nenv:\n  tier: prod\n",
        version=4,
    )


@pytest.fixture
def fake_client(team_release):
    """Fake client holding only the team-a release."""
    return FakeReleaseClient([team_release])


@pytest.fixture
def make_client():
    """Factory for fake clients with custom releases or failures."""
    return FakeReleaseClient
