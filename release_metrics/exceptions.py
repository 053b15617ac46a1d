"""
Error types raised by the release metrics pipeline.
"""


class ReleaseMetricsError(Exception):
    """Base class for all errors that abort a report run."""


class CredentialReadError(ReleaseMetricsError):
    """The access token file is missing, unreadable or empty."""


class FetchError(ReleaseMetricsError):
    """A release page could not be fetched from the API."""


class InvalidRepositoryIdentifier(ReleaseMetricsError, ValueError):
    """The repository argument does not name an organization and project."""


class EmptyReleaseList(ReleaseMetricsError):
    """The repository has no releases to report on."""


class RenderError(ReleaseMetricsError):
    """The HTML report template failed to render."""
