"""navkit exception hierarchy.

Shared across the template evaluator, the reload engine, and the
navigator so every module raises and catches the same types.
"""


class NavkitError(Exception):
    """Base for all navkit-specific errors."""


class ConfigurationError(NavkitError):
    """Raised when navigator configuration is invalid.

    Typically raised while constructing ``NavConfig``.
    """


class TemplateError(NavkitError):
    """A URL template placeholder could not be evaluated.

    Carries the offending placeholder text (filters included) so the
    caller can see exactly which part of the template failed.
    """

    def __init__(self, expression: str, detail: str = "") -> None:
        self.expression = expression
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"{self.detail}: {self.expression!r}"
        return repr(self.expression)


class UnresolvedExpressionError(TemplateError):
    """A placeholder's key resolved to a missing value in the context.

    Navigation does not proceed; the location is left untouched.
    """

    def __init__(self, expression: str, detail: str = "Replacement failed, unresolved expression") -> None:
        super().__init__(expression, detail)


class MalformedTemplateError(TemplateError):
    """A placeholder is empty or its expression cannot be parsed."""

    def __init__(self, expression: str, detail: str = "Malformed template expression") -> None:
        super().__init__(expression, detail)


class UnknownRouteError(NavkitError, LookupError):
    """The object does not list the requested named route."""

    def __init__(self, route: str) -> None:
        self.route = route
        super().__init__(f"No route named {route!r}")
