"""
Input and output contracts for every capability.

Attribute names are snake_case; the wire names (JSON schema sent to the model,
JSON API payloads) are the camelCase aliases. Output contracts reject missing
fields and extra fields, and score fields refuse numeral strings.
"""

from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

_HTTP_URL = TypeAdapter(HttpUrl)

TIMESTAMP_PATTERN = r"^\d{1,2}:\d{2}$"
VIDEO_LENGTH_PATTERN = r"^\d+:\d{2}$"


def _check_url(value: str) -> str:
    # Validate the shape only; the string as typed is what gets interpolated.
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("Input should be a valid URL") from None
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]


class InputContract(BaseModel):
    """Base for input records. Validation is structural only."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OutputContract(BaseModel):
    """Base for output records parsed from the model's response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# --- Analyze video ---


class AnalyzeVideoInput(InputContract):
    video_url: UrlStr = Field(..., description="The URL of the YouTube video to analyze.")


class ViralMoment(OutputContract):
    timestamp: str = Field(..., description="The timestamp of the viral moment.")
    duration: str = Field(..., description="The duration of the viral moment.")
    description: str = Field(..., description="A description of the viral moment.")
    hook_reason: str = Field(..., description="The reason why this moment is engaging.")
    viral_score: float = Field(
        ..., strict=True, ge=1, le=10, description="A score indicating the viral potential (1-10)."
    )


class VisualHighlight(OutputContract):
    timestamp: str = Field(..., description="The timestamp of the visual highlight.")
    description: str = Field(..., description="A description of the visual highlight.")


class TargetAudience(OutputContract):
    demographic: str = Field(..., description="The primary demographic of the target audience.")
    recommended_duration: str = Field(..., description="The ideal short duration (15s, 30s, 60s).")
    hashtags: List[str] = Field(..., description="Recommended hashtags for the short.")


class AnalyzeVideoOutput(OutputContract):
    summary: str = Field(..., description="A brief summary of the video content.")
    viral_moments: List[ViralMoment] = Field(
        ..., description="List of potential viral moments with timestamps and descriptions."
    )
    key_quotes: List[str] = Field(..., description="Memorable quotes extracted from the video.")
    visual_highlights: List[VisualHighlight] = Field(
        ..., description="Visually striking moments identified in the video."
    )
    target_audience: TargetAudience = Field(..., description="Details about the target audience.")


# --- Generate short script ---


class GenerateScriptInput(InputContract):
    video_url: UrlStr = Field(..., description="The URL of the original YouTube video.")
    start_time: str = Field(
        ..., min_length=1, pattern=TIMESTAMP_PATTERN,
        description="The start timestamp of the video segment (e.g., 0:15).",
    )
    end_time: str = Field(
        ..., min_length=1, pattern=TIMESTAMP_PATTERN,
        description="The end timestamp of the video segment (e.g., 0:30).",
    )
    category: str = Field(..., min_length=2, description="The category of the video (e.g., tech, lifestyle, education).")
    duration: str = Field(
        ..., min_length=1, description="The target duration of the short in seconds (e.g., 15, 30, 60)."
    )


class ScriptLine(OutputContract):
    timestamp: str = Field(..., description="The timestamp in the short (e.g., 0:00).")
    narration: str = Field(..., description="The narration for this timestamp.")
    text_overlay: str = Field(..., description="The text overlay to display at this timestamp.")
    visual_direction: str = Field(..., description="Visual direction for this timestamp (e.g., zoom in, transition).")
    audio_note: str = Field(..., description="Audio notes for this timestamp (e.g., background music, sound effect).")


class GenerateScriptOutput(OutputContract):
    title: str = Field(..., description="The title of the short.")
    description: str = Field(..., description="A brief description of the short.")
    hook: str = Field(..., description="An attention-grabbing opening line for the short.")
    script: List[ScriptLine] = Field(..., description="A second-by-second breakdown of the short script.")
    call_to_action: str = Field(..., description="An engaging end screen text for the short.")
    engagement_questions: List[str] = Field(..., description="Questions to drive engagement in the comments.")
    suggested_music: str = Field(
        ..., description="Suggested background music style (e.g., trending, upbeat, dramatic)."
    )
    estimated_views: str = Field(..., description="Estimated view count.")


# --- Optimize for trends ---


class OptimizeTrendsInput(InputContract):
    short_details: str = Field(..., min_length=10, description="Details of the short to optimize.")
    category: str = Field(..., min_length=2, description="The category of the short.")


class OptimizeTrendsOutput(OutputContract):
    trending_topics: List[str] = Field(..., description="Top trending topics in the short category.")
    optimized_titles: List[str] = Field(..., description="Attention-grabbing titles for the short.")
    thumbnail_text: List[str] = Field(..., description="Bold text for the thumbnail.")
    description: str = Field(..., description="SEO-optimized description for the short.")
    hashtags: List[str] = Field(..., description="Relevant hashtags for the short.")
    posting_time: str = Field(..., description="Best time to post the short.")
    trending_music: List[str] = Field(..., description="Trending audio tracks for shorts.")
    unique_angles: List[str] = Field(..., description="Unique angles for the short.")


# --- Plan multi-short series ---


class PlanSeriesInput(InputContract):
    video_url: UrlStr = Field(..., description="The URL of the long-form video to analyze.")
    duration: str = Field(..., min_length=1, pattern=VIDEO_LENGTH_PATTERN, description="The duration of the video.")


class SeriesEpisode(OutputContract):
    episode_number: int = Field(..., strict=True, ge=1, description="The episode number in the series.")
    title: str = Field(..., description="The title of the short.")
    start_time: str = Field(..., description="The start time of the short in the original video.")
    end_time: str = Field(..., description="The end time of the short in the original video.")
    hook: str = Field(..., description="A compelling hook for the short.")
    main_point: str = Field(..., description="The main point of the short.")
    cliffhanger: str = Field(..., description="A cliffhanger to drive viewers to the next video.")
    posting_date_time: str = Field(..., description="The recommended date and time to post the short.")


class BrandingElements(OutputContract):
    color_scheme: str = Field(..., description="The color scheme for the series branding.")
    font_style: str = Field(..., description="The font style for the series branding.")
    intro_style: str = Field(..., description="The intro style for the series branding.")


class PlanSeriesOutput(OutputContract):
    series_title: str = Field(..., description="The title of the multi-short series.")
    shorts: List[SeriesEpisode] = Field(..., description="An array of short plans for the series.")
    branding_elements: BrandingElements = Field(..., description="The branding elements for the series.")
    engagement_tactics: List[str] = Field(..., description="An array of engagement tactics for the series.")


# --- Analyze competitors ---


class AnalyzeCompetitorsInput(InputContract):
    competitor_urls: List[UrlStr] = Field(..., min_length=1, description="URLs of competitor content to analyze.")
    my_video_url: UrlStr = Field(..., description="URL of the user's video.")


class Recommendation(OutputContract):
    category: str = Field(..., description="Category of recommendation.")
    suggestion: str = Field(..., description="Specific suggestion for improvement.")
    priority: str = Field(..., description="Priority level of the suggestion.")


class AnalyzeCompetitorsOutput(OutputContract):
    content_gaps: List[str] = Field(..., description="Identified content gaps in competitor content.")
    success_patterns: List[str] = Field(..., description="Identified success patterns in competitor content.")
    unique_angles: List[str] = Field(..., description="Unique angles to differentiate content.")
    audience_insights: List[str] = Field(..., description="Audience insights derived from competitor content.")
    recommendations: List[Recommendation] = Field(..., description="Actionable recommendations for improvement.")


# --- Repurpose content ---


class RepurposeContentInput(InputContract):
    content_url: Optional[UrlStr] = Field(default=None, description="The URL of the article or blog post to repurpose.")
    content_text: Optional[str] = Field(
        default=None, min_length=50, description="The raw text of the content to repurpose."
    )


class RepurposedIdea(OutputContract):
    title: str = Field(..., description="A catchy title for the short video.")
    format: str = Field(
        ..., description="The suggested format (e.g., Talking Head, Tutorial, Listicle, Myth Busting)."
    )
    hook: str = Field(..., description="A strong opening hook for the video.")
    content_angle: str = Field(
        ..., description="The specific angle or snippet from the original content to focus on."
    )


class RepurposeContentOutput(OutputContract):
    key_takeaways: List[str] = Field(..., description="The most important points extracted from the content.")
    video_ideas: List[RepurposedIdea] = Field(
        ..., description="An array of short-form video ideas based on the content."
    )


# --- Generate video ideas ---

VIDEO_STYLES = ["Educational", "Comedy", "Vlog", "Documentary", "Entertainment", "Tech Review"]


class GenerateIdeasInput(InputContract):
    topic: str = Field(..., min_length=2, description="The main topic or keyword for the video ideas.")
    target_audience: str = Field(..., min_length=2, description="The specific audience you want to reach.")
    style: str = Field(
        ..., min_length=1, description="The desired style of the video (e.g., educational, comedy, vlog, documentary)."
    )


class VideoIdea(OutputContract):
    title: str = Field(..., description="A catchy, viral-potential title for the video.")
    concept: str = Field(..., description="A brief but compelling concept for the video.")
    hook: str = Field(..., description="A strong opening hook to grab viewer attention in the first 3 seconds.")
    viral_potential: float = Field(
        ..., strict=True, ge=1, le=10, description="A score from 1-10 indicating the viral potential."
    )
    suitability_score: float = Field(
        ..., strict=True, ge=1, le=10,
        description="A score from 1-10 indicating how well it matches the requested style and audience.",
    )


class GenerateIdeasOutput(OutputContract):
    ideas: List[VideoIdea] = Field(..., description="An array of creative video ideas.")


# --- Enhance accessibility ---


class EnhanceAccessibilityInput(InputContract):
    short_content: str = Field(..., min_length=10, description="The content of the short video.")


class Caption(OutputContract):
    start_time: str = Field(..., description="The start time of the caption.")
    end_time: str = Field(..., description="The end time of the caption.")
    text: str = Field(..., description="The caption text.")


class EnhanceAccessibilityOutput(OutputContract):
    captions: List[Caption] = Field(..., description="Generated captions for the short.")
    target_languages: List[str] = Field(..., description="Key target languages based on content.")
    accessibility_score: float = Field(
        ..., strict=True, ge=0, le=100, description="Score representing the accessibility of the short (0-100)."
    )
    recommendations: List[str] = Field(..., description="Recommendations for improving accessibility.")
