class ArchmapError(Exception):
    """Base class for errors raised outside the analysis core."""


class SourceTreeError(ArchmapError):
    """A source tree root is missing or is not a directory."""


class ConfigError(ArchmapError):
    """An extraction rules file could not be used."""


class DiagramValidationError(ArchmapError):
    """The extracted model failed validation in strict mode."""
