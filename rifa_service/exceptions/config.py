class ConfigurationError(ValueError):
    """Generic error thrown if the service configuration is missing or invalid.

    These are fatal: the service refuses to start.
    """


class ArtifactMissing(ConfigurationError):
    """A contract's build artifact could not be found or read from disk."""

    def __init__(self, name: str, path):
        message = f"No readable build artifact for contract {name} at {path}!"
        super(ArtifactMissing, self).__init__(message)


class BindingNotFound(ConfigurationError):
    """No artifact or no address is known for the requested contract."""
