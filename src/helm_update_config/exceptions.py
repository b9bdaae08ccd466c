"""Exceptions for helm-update-config."""


class UpdateConfigError(Exception):
    """Base exception for release configuration updates."""

    pass


class ArgumentError(UpdateConfigError):
    """Invalid release identifier or override syntax."""

    pass


class ConfigFormatError(UpdateConfigError):
    """Stored values document could not be parsed into a mapping."""

    pass


class ReleaseServiceError(UpdateConfigError):
    """Transport or protocol failure talking to the release service."""

    pass


class QueryError(UpdateConfigError):
    """Listing releases failed."""

    pass


class EmptyReleaseSetError(QueryError):
    """Listing succeeded but no release matched the namespace."""

    pass


class UpdateError(UpdateConfigError):
    """Submitting the merged values to the release service failed."""

    pass
