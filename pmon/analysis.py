"""
pmon Analysis Dispatcher

Selects the metrics provider for a classified project and collects one
metrics record per selected analysis category.
"""

from datetime import datetime
from typing import Optional

from pmon.config import AnalysisConfig
from pmon.exceptions import UnsupportedTypeError
from pmon.providers import ProviderRegistry, create_provider_registry
from pmon.schema import AnalysisResult, ProjectInfo


def run_analysis(
    project_info: ProjectInfo,
    config: AnalysisConfig,
    registry: Optional[ProviderRegistry] = None,
) -> AnalysisResult:
    """
    Run the analyses selected in config against a project.

    Args:
        project_info: The classified project
        config: Run configuration (selects the categories)
        registry: Provider registry (defaults to the built-in providers)

    Returns:
        AnalysisResult with a section for every category the provider measured

    Raises:
        UnsupportedTypeError: If no provider handles project_info.type
    """
    if registry is None:
        registry = create_provider_registry()

    provider = registry.get(project_info.type)
    if provider is None:
        raise UnsupportedTypeError(str(project_info.type))

    result = AnalysisResult(
        project_info=project_info,
        timestamp=datetime.now().astimezone(),
    )

    for category in config.selected_categories():
        metrics = provider.collect(project_info, category)
        if metrics is not None:
            result.set_metrics(category, metrics)

    return result
