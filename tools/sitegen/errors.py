from __future__ import annotations


class SitegenError(Exception):
    """Base class for everything the generator raises on purpose."""


class FrontMatterError(SitegenError):
    """A single document could not be turned into a post."""


class MissingFrontMatterError(FrontMatterError):
    def __init__(self, message: str = "No front matter found in markdown file"):
        super().__init__(message)


class MissingRequiredFieldError(FrontMatterError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required front matter field: {field}")


class ContentRootError(SitegenError):
    """The content tree itself is unreadable; nothing can be indexed."""


class PersistedDataError(SitegenError):
    """posts.json (or another artifact) exists but cannot be used."""


class ConfigError(SitegenError):
    pass
