"""json_repeaters exception hierarchy.

All package-specific exceptions inherit from JsonRepeatersError so callers
can catch configuration and registry failures with a single clause. The
mapping operations themselves do not raise for missing or stale data.
"""


class JsonRepeatersError(Exception):
    """Base exception for all json_repeaters errors."""


class ConfigError(JsonRepeatersError):
    """Invalid or missing configuration."""


class DeclarationError(ConfigError):
    """Repeater-name declaration is neither a plain list nor an alias map."""


class RegistryError(JsonRepeatersError):
    """Repeater definitions could not be loaded into the registry."""


class MediaRoleKeyError(JsonRepeatersError):
    """A media-lift key could not be decoded."""
