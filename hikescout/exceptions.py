"""
Exceptions raised by the hikescout scraper.
"""


class HikeScoutError(Exception):
    """Base class for hikescout errors."""


class ConfigurationError(HikeScoutError):
    """Missing credentials or an invalid site configuration."""


class ExtractionError(HikeScoutError):
    """The extraction model failed or returned data that does not fit the schema."""


class ActionError(HikeScoutError):
    """A page action could not be matched to an element or could not be performed."""
