"""navkit — URL navigation that keeps the router and app state in step.

Evaluates parameterized URL templates and forces a route reload when a
navigation lands on the current route without the router noticing.

Basic usage::

    from navkit import MemoryLocation, Navigator

    location = MemoryLocation("/inbox")
    nav = Navigator(location, router)
    nav.change("/users/{{ user.id }}/{{ user.name | slug }}", {"user": user})
    location.commit()

Template evaluation on its own::

    from navkit import evaluate
    evaluate("/search?q={{ q }}", {"q": "red fox"})   # "/search?q=red%20fox"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AppState",
    "ConfigurationError",
    "Location",
    "LocationSnapshot",
    "MalformedTemplateError",
    "MemoryLocation",
    "NavConfig",
    "Navigator",
    "NavkitError",
    "ReloadState",
    "RoutePolicy",
    "Router",
    "TemplateError",
    "UnknownRouteError",
    "UnresolvedExpressionError",
    "UrlTemplateEvaluator",
    "evaluate",
    "should_force_reload",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "AppState": "navkit.location.protocol",
    "ConfigurationError": "navkit.errors",
    "Location": "navkit.location.protocol",
    "LocationSnapshot": "navkit.location.snapshot",
    "MalformedTemplateError": "navkit.errors",
    "MemoryLocation": "navkit.location.memory",
    "NavConfig": "navkit.config",
    "Navigator": "navkit.navigator",
    "NavkitError": "navkit.errors",
    "ReloadState": "navkit.routing.reload",
    "RoutePolicy": "navkit.routing.route",
    "Router": "navkit.location.protocol",
    "TemplateError": "navkit.errors",
    "UnknownRouteError": "navkit.errors",
    "UnresolvedExpressionError": "navkit.errors",
    "UrlTemplateEvaluator": "navkit.templating.evaluator",
    "evaluate": "navkit.templating.evaluator",
    "should_force_reload": "navkit.routing.reload",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import navkit`` fast (kida is only loaded once templates are
    used) while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
