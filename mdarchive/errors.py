"""Error types raised by the archiver."""


class ArchiverError(Exception):
    """Base class for all archiver errors."""


class ConfigError(ArchiverError):
    """Missing or invalid configuration, raised before any traversal."""


class TraversalError(ArchiverError):
    """I/O failure while walking the input tree or reading a document."""


class WriteError(TraversalError):
    """An archive entry could not be created or populated."""


class ArchiveExistsError(WriteError):
    """An archive entry already exists for the link ID."""


class CacheIOError(ArchiverError):
    """The checked-links cache file could not be read or written."""


class MalformedURLError(ArchiverError):
    """A discovered link could not be parsed into a host and request path."""


class FetchError(ArchiverError):
    """The content of a link could not be fetched or extracted."""
