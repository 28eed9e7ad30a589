"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RulesAPIError(DomainException):
    """A rule document could not be fetched or its body is malformed"""

    pass


class RuleLoadError(DomainException):
    """No per-tier rules loaded and the legacy rules are unavailable"""

    pass
