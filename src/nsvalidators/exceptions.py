"""Exception hierarchy for nsvalidators."""


class NsValidatorsError(Exception):
    """Base class for all nsvalidators failures."""


class ConfigurationError(NsValidatorsError, ValueError):
    """Raised when rule configuration cannot be turned into a rule set."""


class DescriptorError(NsValidatorsError):
    """Raised for structural problems inside a component descriptor."""


class DescriptorPatternError(NsValidatorsError, ValueError):
    """Raised when a Service-Component glob does not compile to a regex."""

    def __init__(self, pattern: str, regex: str, cause: Exception):
        super().__init__(
            f"Service-Component pattern '{pattern}' translates to invalid regex '{regex}': {cause}"
        )
        self.pattern = pattern
        self.regex = regex


class ParserSetupError(NsValidatorsError, RuntimeError):
    """Raised when a hardened XML parser cannot be constructed."""
