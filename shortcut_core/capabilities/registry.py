from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict

from shortcut_core.capabilities import models, prompts
from shortcut_core.capabilities.prompts import ExecutionHints
from shortcut_core.errors import PreconditionError


class Capability(BaseModel):
    """One AI-assisted operation: its contracts, its prompt and its execution hints."""

    model_config = ConfigDict(frozen=True)

    name: str
    input_model: Type[models.InputContract]
    output_model: Type[models.OutputContract]
    render_prompt: Callable[[Any], str]
    hints: ExecutionHints = prompts.NO_HINTS
    # Returns an error message when a required combination of inputs is missing.
    precondition: Optional[Callable[[Any], Optional[str]]] = None

    def check_preconditions(self, data: models.InputContract) -> None:
        if self.precondition is None:
            return
        message = self.precondition(data)
        if message:
            raise PreconditionError(message)


def _url_or_text(data: models.RepurposeContentInput) -> Optional[str]:
    if not data.content_url and not data.content_text:
        return "Please provide a content URL or the content text to repurpose."
    return None


ANALYZE_VIDEO = Capability(
    name="analyze_video_content",
    input_model=models.AnalyzeVideoInput,
    output_model=models.AnalyzeVideoOutput,
    render_prompt=prompts.render_analyze_video,
    hints=prompts.ANALYZE_VIDEO_HINTS,
)

GENERATE_SCRIPT = Capability(
    name="generate_short_script",
    input_model=models.GenerateScriptInput,
    output_model=models.GenerateScriptOutput,
    render_prompt=prompts.render_generate_script,
)

OPTIMIZE_TRENDS = Capability(
    name="optimize_short_for_trends",
    input_model=models.OptimizeTrendsInput,
    output_model=models.OptimizeTrendsOutput,
    render_prompt=prompts.render_optimize_trends,
    hints=prompts.OPTIMIZE_TRENDS_HINTS,
)

PLAN_SERIES = Capability(
    name="plan_multi_short_series",
    input_model=models.PlanSeriesInput,
    output_model=models.PlanSeriesOutput,
    render_prompt=prompts.render_plan_series,
)

ANALYZE_COMPETITORS = Capability(
    name="analyze_competitor_content",
    input_model=models.AnalyzeCompetitorsInput,
    output_model=models.AnalyzeCompetitorsOutput,
    render_prompt=prompts.render_analyze_competitors,
    hints=prompts.ANALYZE_COMPETITORS_HINTS,
)

REPURPOSE_CONTENT = Capability(
    name="repurpose_content",
    input_model=models.RepurposeContentInput,
    output_model=models.RepurposeContentOutput,
    render_prompt=prompts.render_repurpose_content,
    precondition=_url_or_text,
)

GENERATE_IDEAS = Capability(
    name="generate_video_ideas",
    input_model=models.GenerateIdeasInput,
    output_model=models.GenerateIdeasOutput,
    render_prompt=prompts.render_generate_ideas,
)

ENHANCE_ACCESSIBILITY = Capability(
    name="enhance_short_accessibility",
    input_model=models.EnhanceAccessibilityInput,
    output_model=models.EnhanceAccessibilityOutput,
    render_prompt=prompts.render_enhance_accessibility,
)

CAPABILITIES: Dict[str, Capability] = {
    c.name: c
    for c in (
        ANALYZE_VIDEO,
        GENERATE_SCRIPT,
        OPTIMIZE_TRENDS,
        PLAN_SERIES,
        ANALYZE_COMPETITORS,
        REPURPOSE_CONTENT,
        GENERATE_IDEAS,
        ENHANCE_ACCESSIBILITY,
    )
}
