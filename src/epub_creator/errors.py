"""Build error taxonomy.

Every failure in a build is fatal. Library code raises one of these and the
CLI turns it into a red message and a non-zero exit.
"""


class EpubBuildError(Exception):
    """Base class for all build failures."""

    error_type = "build"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(EpubBuildError):
    """Malformed or missing build-request fields."""

    error_type = "configuration"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class UnresolvedReferenceError(EpubBuildError):
    """A spine entry, navigation target or cover is not in the manifest."""

    error_type = "unresolved_reference"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'File not found in manifest: "{path}"')


class UnsupportedContentError(EpubBuildError):
    """A file cannot be mapped to a usable media type."""

    error_type = "unsupported_content"

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f'Can\'t guess media type of file "{path}"')


class MalformedMetadataError(EpubBuildError):
    """Explicit metadata does not form well-structured markup."""

    error_type = "malformed_metadata"


class PackageIOError(EpubBuildError):
    """Filesystem or archive sink failure."""

    error_type = "io"

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
