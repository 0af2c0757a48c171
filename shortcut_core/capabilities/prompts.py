from typing import Any, Dict, List

from pydantic import BaseModel, Field

from shortcut_core.capabilities.models import (
    AnalyzeCompetitorsInput,
    AnalyzeVideoInput,
    EnhanceAccessibilityInput,
    GenerateIdeasInput,
    GenerateScriptInput,
    OptimizeTrendsInput,
    PlanSeriesInput,
    RepurposeContentInput,
)

SYSTEM_PROMPT = """
You are ShortCut, an assistant for YouTube Shorts, TikTok and Reels creators.
Answer every request with a single JSON object that matches the requested schema exactly.
Do not add fields that are not in the schema. Numbers must be JSON numbers, not strings.
"""


class SafetySetting(BaseModel):
    category: str
    threshold: str


class ExecutionHints(BaseModel):
    """Opaque per-request options forwarded to the model provider as-is."""

    safety_settings: List[SafetySetting] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.safety_settings and not self.tools

    def as_request_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.safety_settings:
            body["safety_settings"] = [s.model_dump() for s in self.safety_settings]
        if self.tools:
            body["tools_hint"] = list(self.tools)
        return body


NO_HINTS = ExecutionHints()

ANALYZE_VIDEO_HINTS = ExecutionHints(
    safety_settings=[
        SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
        SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_NONE"),
        SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_MEDIUM_AND_ABOVE"),
        SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_LOW_AND_ABOVE"),
    ]
)

OPTIMIZE_TRENDS_HINTS = ExecutionHints(tools=["google_search"])

ANALYZE_COMPETITORS_HINTS = ExecutionHints(tools=["url_context"])


ANALYZE_VIDEO_TEMPLATE = """
Analyze this YouTube video and extract key information for creating engaging shorts:

1. CONTENT SUMMARY:
   - Provide a compelling 2-3 sentence summary of the main topic
   - Identify the video's niche/category (tech, lifestyle, education, etc.)
   - Extract the emotional tone (inspirational, educational, entertaining, etc.)

2. VIRAL MOMENTS IDENTIFICATION:
   - List 5-7 potential "hook" moments with timestamps that would work as shorts
   - For each moment, explain why it's engaging (surprising fact, emotional peak, visual appeal, etc.)
   - Rate each moment's viral potential (1-10)

3. KEY QUOTES & SOUNDBITES:
   - Extract 3-5 memorable quotes that could standalone
   - Identify any catchphrases or repeating themes
   - Note any background music or sound effects that enhance the moment

4. VISUAL HIGHLIGHTS:
   - Describe visually striking moments (animations, demonstrations, reactions)
   - Identify scenes with high visual variety
   - Note any text overlays or graphics already present

5. TARGET AUDIENCE:
   - Define the primary demographic (age, interests)
   - Suggest ideal short duration (15s, 30s, 60s)
   - Recommend posting time and hashtags

Video URL: {video_url}

Please provide this analysis in structured JSON format.
"""

GENERATE_SCRIPT_TEMPLATE = """
Create an engaging YouTube Shorts script based on this video segment:

VIDEO CONTEXT:
- Original video URL: {video_url}
- Selected timestamp: {start_time} to {end_time}
- Video category: {category}
- Target duration: {duration} seconds

SCRIPT REQUIREMENTS:

1. HOOK (First 3 seconds):
   - Create an attention-grabbing opening line
   - Use curiosity gaps, bold statements, or questions
   - Make viewers want to keep watching

2. MAIN CONTENT:
   - Adapt the video segment for vertical format
   - Add context if needed for standalone viewing
   - Keep language punchy and concise
   - Include call-outs for key moments

3. VISUAL DIRECTIONS:
   - Suggest text overlays and their timing
   - Recommend zoom-ins or emphasis points
   - Note transitions between scenes
   - Suggest emoji or graphic placements

4. AUDIO NOTES:
   - Identify background music style (trending, upbeat, dramatic)
   - Note sound effect opportunities
   - Mark places for audio emphasis

5. CALL-TO-ACTION:
   - Create engaging end screen text
   - Suggest follow-up prompts
   - Include hook for next video

6. ENGAGEMENT ELEMENTS:
   - Add 2-3 questions in comments to drive engagement
   - Suggest controversial/discussion-worthy angles
   - Include shareability factors

OUTPUT FORMAT: Provide a second-by-second breakdown with all elements.
"""

OPTIMIZE_TRENDS_TEMPLATE = """
Optimize this YouTube Short for maximum viral potential using current trends:

SHORT DETAILS:
{short_details}

OPTIMIZATION TASKS:

1. TRENDING RESEARCH (Use Google Search grounding):
   - What are the top trending topics in {category} right now?
   - What YouTube Shorts formats are currently viral?
   - What audio tracks are trending for shorts?
   - What hashtags are gaining traction in this niche?

2. TITLE OPTIMIZATION:
   - Create 5 attention-grabbing titles
   - Use trending keywords naturally
   - Include power words (shocking, secret, mistake, hack, etc.)
   - Optimize for YouTube search and recommendations

3. THUMBNAIL TEXT:
   - Suggest 3-5 words of bold text for thumbnail
   - Use high-contrast, readable fonts
   - Include emoji suggestions

4. DESCRIPTION OPTIMIZATION:
   - Write SEO-optimized description (first 100 chars crucial)
   - Include 15-20 relevant hashtags
   - Add timestamps if applicable
   - Include strategic keyword placement

5. POSTING STRATEGY:
   - Best time to post based on audience timezone
   - Cross-platform sharing strategy (TikTok, Instagram Reels)
   - Series potential (can this be part 1 of multiple shorts?)

6. COMPETITION ANALYSIS:
   - Compare with similar successful shorts
   - Identify gaps in current content
   - Suggest unique angles

Provide actionable recommendations with data-backed reasoning.
"""

PLAN_SERIES_TEMPLATE = """
Analyze this long-form video and create a strategic multi-short series plan:

VIDEO URL: {video_url}
VIDEO DURATION: {duration}

SERIES PLANNING:

1. CONTENT BREAKDOWN:
   - Divide video into 5-10 shorts with natural flow
   - Create narrative arc across shorts (build anticipation)
   - Ensure each short can standalone but creates desire for next

2. HOOKS & CLIFFHANGERS:
   - Design compelling hooks for each short
   - Add cliffhangers to drive viewers to next video
   - Create callback references between shorts

3. PROGRESSIVE VALUE:
   - Structure information from basic to advanced
   - Tease advanced content in early shorts
   - Build on previous shorts' concepts

4. POSTING SCHEDULE:
   - Recommend optimal posting frequency
   - Suggest days/times for each short
   - Create urgency with limited-time angles

5. CROSS-PROMOTION:
   - Design end screens that promote next video
   - Create consistent visual branding
   - Build series identity (title format, intro style)

6. ENGAGEMENT STRATEGY:
   - Polls and questions across series
   - Community posts between shorts
   - Behind-the-scenes content ideas

Output should be a complete content calendar in JSON format.
"""

ANALYZE_COMPETITORS_TEMPLATE = """
Analyze competing content and provide strategic advantages:

COMPETITOR URLS:
{competitor_urls}

MY VIDEO:
{my_video_url}

ANALYSIS REQUIREMENTS:

1. CONTENT GAPS:
   - What are competitors missing?
   - What angles are underexplored?
   - What questions are left unanswered?

2. PERFORMANCE METRICS:
   - Analyze video styles that perform best
   - Identify common elements in top performers
   - Note what differentiates viral content

3. UNIQUE POSITIONING:
   - How can we stand out?
   - What's our unique value proposition?
   - What format innovations can we try?

4. AUDIENCE INSIGHTS:
   - What do comments reveal about audience wants?
   - What complaints appear frequently?
   - What requests are unfulfilled?

5. IMPROVEMENT OPPORTUNITIES:
   - Better production quality tactics
   - More engaging editing techniques
   - Stronger hooks and storytelling

Provide actionable competitive advantages.
"""

REPURPOSE_CONTENT_TEMPLATE = """
You are an expert content strategist specializing in repurposing long-form content for short-form video platforms like YouTube Shorts, TikTok, and Reels.

Your task is to analyze the following content and generate a list of compelling short video ideas.

Content Source:
{content_source}

First, identify the key takeaways from the content.

Then, for each video idea, provide:
1.  **Title:** A viral-worthy title.
2.  **Format:** The best format for the video (e.g., "Talking Head with Text Overlay", "Quick Tutorial", "Listicle", "Myth Busting", "Story Time").
3.  **Hook:** A powerful opening for the first 3 seconds.
4.  **Content Angle:** The specific part of the original content to focus on.

Generate at least 3-5 distinct video ideas. Focus on creating value and sparking curiosity.
"""

REPURPOSE_URL_BLOCK = "URL: {content_url}"
REPURPOSE_TEXT_BLOCK = "Text:\n{content_text}"

GENERATE_IDEAS_TEMPLATE = """
You are a world-class viral video producer and content strategist.
Your task is to brainstorm 5 unique, engaging, and high-potential YouTube Short ideas based on the provided criteria.

Topic: {topic}
Target Audience: {target_audience}
Video Style: {style}

For each idea, provide the following:
1.  **Title:** A highly clickable and SEO-friendly title.
2.  **Concept:** A one or two-sentence summary of the video idea. It should be clear and compelling.
3.  **Hook:** A powerful opening line or visual concept for the first 3 seconds to maximize viewer retention.
4.  **Viral Potential (1-10):** Your expert assessment of its likelihood to go viral.
5.  **Suitability Score (1-10):** How well the idea fits the requested audience and style.

Think outside the box. Aim for ideas that are original, emotionally resonant, or provide exceptional value. Avoid generic or overdone concepts. Present the 5 ideas in a structured format.
"""

ENHANCE_ACCESSIBILITY_TEMPLATE = """
Enhance this short for maximum reach through accessibility and localization:

SHORT CONTENT: {short_content}

ENHANCEMENT TASKS:

1. CAPTION GENERATION:
   - Create accurate, properly timed captions
   - Add sound effect descriptions [music playing], [laughter]
   - Include speaker labels if multiple people

2. TRANSLATION OPTIMIZATION:
   - Identify key target languages based on content
   - Adapt jokes/references for cultural relevance
   - Suggest localized hashtags

3. VISUAL ACCESSIBILITY:
   - Ensure text contrast meets WCAG standards
   - Suggest alternative descriptions for visual elements
   - Recommend timing for text readability

4. INCLUSIVE LANGUAGE:
   - Review for potentially exclusive terminology
   - Suggest more inclusive alternatives
   - Ensure broad appeal across demographics

5. GLOBAL APPEAL:
   - Identify culturally universal elements
   - Suggest adaptations for international markets
   - Recommend region-specific posting strategies

Prioritize authenticity while maximizing reach. Output the captions as a JSON array of objects with startTime, endTime, and text fields. Output the targetLanguages as a JSON array of strings. Output recommendations as a JSON array of strings. Output accessibilityScore as a single number from 0 to 100.
"""


def render_analyze_video(data: AnalyzeVideoInput) -> str:
    return ANALYZE_VIDEO_TEMPLATE.format(video_url=data.video_url)


def render_generate_script(data: GenerateScriptInput) -> str:
    return GENERATE_SCRIPT_TEMPLATE.format(
        video_url=data.video_url,
        start_time=data.start_time,
        end_time=data.end_time,
        category=data.category,
        duration=data.duration,
    )


def render_optimize_trends(data: OptimizeTrendsInput) -> str:
    return OPTIMIZE_TRENDS_TEMPLATE.format(short_details=data.short_details, category=data.category)


def render_plan_series(data: PlanSeriesInput) -> str:
    return PLAN_SERIES_TEMPLATE.format(video_url=data.video_url, duration=data.duration)


def render_analyze_competitors(data: AnalyzeCompetitorsInput) -> str:
    return ANALYZE_COMPETITORS_TEMPLATE.format(
        competitor_urls="\n".join(data.competitor_urls),
        my_video_url=data.my_video_url,
    )


def render_repurpose_content(data: RepurposeContentInput) -> str:
    blocks = []
    if data.content_url:
        blocks.append(REPURPOSE_URL_BLOCK.format(content_url=data.content_url))
    if data.content_text:
        blocks.append(REPURPOSE_TEXT_BLOCK.format(content_text=data.content_text))
    return REPURPOSE_CONTENT_TEMPLATE.format(content_source="\n".join(blocks))


def render_generate_ideas(data: GenerateIdeasInput) -> str:
    return GENERATE_IDEAS_TEMPLATE.format(
        topic=data.topic,
        target_audience=data.target_audience,
        style=data.style,
    )


def render_enhance_accessibility(data: EnhanceAccessibilityInput) -> str:
    return ENHANCE_ACCESSIBILITY_TEMPLATE.format(short_content=data.short_content)
