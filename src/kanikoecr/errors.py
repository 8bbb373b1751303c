"""Domain errors for kaniko-ecr."""


class PluginError(RuntimeError):
    """Raised when the plugin cannot continue safely."""
