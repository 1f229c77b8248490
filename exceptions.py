"""Error types raised by the hedge analytics packages."""

from typing import Iterable, List


class HedgeAnalyticsError(ValueError):
    """Base class for all hedge analytics errors"""


class ValidationError(HedgeAnalyticsError):
    """An input parameter violates its constraint"""

    def __init__(self, parameter: str, constraint: str):
        self.parameter = parameter
        self.constraint = constraint
        super().__init__(f"`{parameter}` {constraint}")


class StructuralError(HedgeAnalyticsError):
    """Required identifiers are missing from an input"""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing: List[str] = list(missing)
        super().__init__(message)


class UnknownTermError(StructuralError):
    """Requested coefficient name(s) not present in the estimate"""

    def __init__(self, terms: Iterable[str]):
        terms = list(terms)
        super().__init__(f"Unknown term(s): {', '.join(terms)}", terms)


class MissingLevelError(StructuralError):
    """BM10 table does not contain every required level"""

    def __init__(self, levels: Iterable[str]):
        levels = list(levels)
        super().__init__(
            f"Input doesn't contain required rows: {', '.join(levels)}", levels
        )


class InsufficientDataError(HedgeAnalyticsError):
    """Too few observations for the requested computation"""

    def __init__(self, observed: int, required: int, what: str = "observations"):
        self.observed = observed
        self.required = required
        super().__init__(
            f"Not enough overlapping non-missing {what}: {observed} < {required}"
        )
