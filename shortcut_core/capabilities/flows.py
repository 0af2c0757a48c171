"""One thin entry point per capability: validated input in, parsed output out."""

from typing import Callable, Dict

from shortcut_core.capabilities import registry
from shortcut_core.capabilities.models import (
    AnalyzeCompetitorsInput,
    AnalyzeCompetitorsOutput,
    AnalyzeVideoInput,
    AnalyzeVideoOutput,
    EnhanceAccessibilityInput,
    EnhanceAccessibilityOutput,
    GenerateIdeasInput,
    GenerateIdeasOutput,
    GenerateScriptInput,
    GenerateScriptOutput,
    OptimizeTrendsInput,
    OptimizeTrendsOutput,
    PlanSeriesInput,
    PlanSeriesOutput,
    RepurposeContentInput,
    RepurposeContentOutput,
)
from shortcut_core.dispatcher import ModelDispatcher


def analyze_video_content(dispatcher: ModelDispatcher, data: AnalyzeVideoInput) -> AnalyzeVideoOutput:
    return dispatcher.dispatch(registry.ANALYZE_VIDEO, data)


def generate_short_script(dispatcher: ModelDispatcher, data: GenerateScriptInput) -> GenerateScriptOutput:
    return dispatcher.dispatch(registry.GENERATE_SCRIPT, data)


def optimize_short_for_trends(dispatcher: ModelDispatcher, data: OptimizeTrendsInput) -> OptimizeTrendsOutput:
    return dispatcher.dispatch(registry.OPTIMIZE_TRENDS, data)


def plan_multi_short_series(dispatcher: ModelDispatcher, data: PlanSeriesInput) -> PlanSeriesOutput:
    return dispatcher.dispatch(registry.PLAN_SERIES, data)


def analyze_competitor_content(
    dispatcher: ModelDispatcher, data: AnalyzeCompetitorsInput
) -> AnalyzeCompetitorsOutput:
    return dispatcher.dispatch(registry.ANALYZE_COMPETITORS, data)


def repurpose_content(dispatcher: ModelDispatcher, data: RepurposeContentInput) -> RepurposeContentOutput:
    # Fails fast inside dispatch when neither a URL nor text was supplied
    return dispatcher.dispatch(registry.REPURPOSE_CONTENT, data)


def generate_video_ideas(dispatcher: ModelDispatcher, data: GenerateIdeasInput) -> GenerateIdeasOutput:
    return dispatcher.dispatch(registry.GENERATE_IDEAS, data)


def enhance_short_accessibility(
    dispatcher: ModelDispatcher, data: EnhanceAccessibilityInput
) -> EnhanceAccessibilityOutput:
    return dispatcher.dispatch(registry.ENHANCE_ACCESSIBILITY, data)


FLOWS: Dict[str, Callable] = {
    registry.ANALYZE_VIDEO.name: analyze_video_content,
    registry.GENERATE_SCRIPT.name: generate_short_script,
    registry.OPTIMIZE_TRENDS.name: optimize_short_for_trends,
    registry.PLAN_SERIES.name: plan_multi_short_series,
    registry.ANALYZE_COMPETITORS.name: analyze_competitor_content,
    registry.REPURPOSE_CONTENT.name: repurpose_content,
    registry.GENERATE_IDEAS.name: generate_video_ideas,
    registry.ENHANCE_ACCESSIBILITY.name: enhance_short_accessibility,
}
