"""Fatal error types. Per-document problems are recorded, not raised."""


class MirrorError(Exception):
    """Base class for errors that abort the whole run."""

    exit_code = 1


class DependencyError(MirrorError):
    """The fetch capability is missing TLS support or the site is unreachable."""


class DiscoveryError(MirrorError):
    """The index page could not be fetched or yielded no usable paths."""


class UsageError(MirrorError):
    """Bad command line input."""

    exit_code = 2
