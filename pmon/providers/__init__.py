"""
Metrics providers for different project types.

Available Providers:
    - JavaScriptProvider: Mock build metrics for Node.js projects
    - GoProvider: Mock build metrics for Go modules
    - PythonProvider: Accepts Python projects, reports no metrics

Java has no provider, so analysing a Java project fails with
UnsupportedTypeError.

Usage:
    from pmon.providers import create_provider_registry

    registry = create_provider_registry()
    provider = registry.get(project_info.type)
"""

from pmon.providers.base import BaseMetricsProvider, ProviderRegistry
from pmon.providers.go import GoProvider
from pmon.providers.javascript import JavaScriptProvider
from pmon.providers.mock import MockBuildProvider
from pmon.providers.python import PythonProvider


def create_provider_registry() -> ProviderRegistry:
    """Create a registry with every built-in provider."""
    registry = ProviderRegistry()
    registry.register(JavaScriptProvider())
    registry.register(GoProvider())
    registry.register(PythonProvider())
    return registry


__all__ = [
    "BaseMetricsProvider",
    "GoProvider",
    "JavaScriptProvider",
    "MockBuildProvider",
    "ProviderRegistry",
    "PythonProvider",
    "create_provider_registry",
]
