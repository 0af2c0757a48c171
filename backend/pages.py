import threading
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

from backend.forms import FORM_ERROR, FieldKind, FormField, FormSchema
from backend.notifications import NotificationService
from shortcut_core.capabilities import registry
from shortcut_core.capabilities.flows import FLOWS
from shortcut_core.capabilities.models import VIDEO_STYLES, InputContract, OutputContract
from shortcut_core.capabilities.registry import Capability
from shortcut_core.dispatcher import ModelDispatcher
from shortcut_core.errors import PreconditionError, ShortcutError


class PageState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class PageSpec(BaseModel):
    """Static description of one capability page."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str
    capability: Capability
    form: FormSchema
    template: str
    failure_message: str
    loading_message: str = "Working on it..."
    badge: Optional[str] = None


class FormPage:
    """
    Page state for one capability within one browser session.

    Idle -> Submitting -> Success | Failed. Invalid input or an unmet
    precondition leaves the state untouched and never reaches the dispatcher.
    """

    def __init__(self, spec: PageSpec, dispatcher: ModelDispatcher, notifications: NotificationService):
        self.spec = spec
        self.dispatcher = dispatcher
        self.notifications = notifications
        self.state = PageState.IDLE
        self.values: Dict[str, Any] = spec.form.defaults()
        self.errors: Dict[str, str] = {}
        self.result: Optional[OutputContract] = None
        self.submitted: Optional[InputContract] = None
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self.state == PageState.SUBMITTING

    @property
    def form_error(self) -> Optional[str]:
        return self.errors.get(FORM_ERROR)

    def prefill(self, values: Mapping[str, Any]) -> None:
        self.values = self.spec.form.display_values({**self.values, **values})

    def submit(self, raw_values: Mapping[str, Any]) -> PageState:
        capability = self.spec.capability

        with self._lock:
            if self.state == PageState.SUBMITTING:
                logger.debug(f"Ignoring submit on /{self.spec.slug}: a request is already in flight.")
                return self.state

            self.values = self.spec.form.display_values(raw_values)
            data, errors = self.spec.form.validate_values(raw_values, capability.input_model)
            if data is not None:
                try:
                    capability.check_preconditions(data)
                except PreconditionError as e:
                    errors = {FORM_ERROR: str(e)}

            self.errors = errors
            if errors:
                logger.info(f"/{self.spec.slug} rejected locally: {sorted(errors)}")
                return self.state

            self.state = PageState.SUBMITTING
            self.result = None

        flow = FLOWS[capability.name]
        try:
            result = flow(self.dispatcher, data)
        except ShortcutError as e:
            logger.error(f"/{self.spec.slug} request failed: {e}")
            return self._fail()
        except Exception as e:
            logger.exception(f"/{self.spec.slug} request crashed: {e}")
            return self._fail()

        with self._lock:
            self.result = result
            self.submitted = data
            self.state = PageState.SUCCESS
        return self.state

    def _fail(self) -> PageState:
        with self._lock:
            self.state = PageState.FAILED
        self.notifications.enqueue("Error", self.spec.failure_message, variant="destructive")
        return self.state


PAGES: Dict[str, PageSpec] = {
    spec.slug: spec
    for spec in (
        PageSpec(
            slug="ideas",
            title="Idea Generation",
            description="Brainstorm viral short ideas for any topic and audience.",
            capability=registry.GENERATE_IDEAS,
            template="ideas.html",
            failure_message="Failed to generate ideas. Please try again.",
            loading_message="Brainstorming ideas...",
            form=FormSchema(
                submit_label="Generate Ideas",
                inputs=[
                    FormField(
                        name="topic", label="Topic", placeholder="e.g., Home espresso",
                        message="Topic must be at least 2 characters long.",
                    ),
                    FormField(
                        name="target_audience", label="Target Audience", placeholder="e.g., Busy students",
                        message="Target audience must be at least 2 characters long.",
                    ),
                    FormField(
                        name="style", label="Video Style", kind=FieldKind.SELECT,
                        options=VIDEO_STYLES, default="Educational",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="analyze",
            title="Video Analysis",
            description="Analyze any YouTube video to find viral moments and key insights.",
            capability=registry.ANALYZE_VIDEO,
            template="analyze.html",
            failure_message="Failed to analyze video. Please check the URL and try again.",
            loading_message="Watching the video...",
            badge="Start Here",
            form=FormSchema(
                submit_label="Analyze Video",
                inputs=[
                    FormField(
                        name="video_url", label="YouTube Video URL", kind=FieldKind.URL,
                        placeholder="https://www.youtube.com/watch?v=...",
                        message="Please enter a valid YouTube URL.",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="script",
            title="Script Generation",
            description="Generate an engaging script from any video segment.",
            capability=registry.GENERATE_SCRIPT,
            template="script.html",
            failure_message="Failed to generate script. Please try again.",
            loading_message="Writing your viral script...",
            form=FormSchema(
                submit_label="Generate Script",
                inputs=[
                    FormField(
                        name="video_url", label="YouTube Video URL", kind=FieldKind.URL,
                        placeholder="https://www.youtube.com/watch?v=...",
                        message="Please enter a valid YouTube URL.",
                    ),
                    FormField(
                        name="start_time", label="Start Time (m:ss)", placeholder="e.g., 1:23",
                        default="0:00", message="Use m:ss or mm:ss format",
                    ),
                    FormField(
                        name="end_time", label="End Time (m:ss)", placeholder="e.g., 1:38",
                        default="0:15", message="Use m:ss or mm:ss format",
                    ),
                    FormField(
                        name="category", label="Video Category", placeholder="e.g., Tech, Lifestyle",
                        message="Category is required.",
                    ),
                    FormField(
                        name="duration", label="Target Duration (seconds)", kind=FieldKind.SELECT,
                        options=["15", "30", "60"], default="15", message="Duration is required",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="optimize",
            title="Trend Optimizer",
            description="Optimize your shorts with trending topics, titles, and music.",
            capability=registry.OPTIMIZE_TRENDS,
            template="optimize.html",
            failure_message="Failed to optimize short. Please try again.",
            loading_message="Researching current trends...",
            form=FormSchema(
                submit_label="Optimize Short",
                inputs=[
                    FormField(
                        name="short_details", label="Short Details", kind=FieldKind.TEXTAREA,
                        placeholder="Describe your short: topic, hook, format...",
                        message="Please describe your short video.",
                    ),
                    FormField(
                        name="category", label="Category", placeholder="e.g., Fitness",
                        message="Please enter a category.",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="series",
            title="Series Planner",
            description="Turn one long video into a strategic, binge-worthy series of shorts.",
            capability=registry.PLAN_SERIES,
            template="series.html",
            failure_message="Failed to plan series. Please try again.",
            loading_message="Planning your series...",
            form=FormSchema(
                submit_label="Plan Series",
                inputs=[
                    FormField(
                        name="video_url", label="YouTube Video URL", kind=FieldKind.URL,
                        placeholder="https://www.youtube.com/watch?v=...",
                        message="Please enter a valid YouTube URL.",
                    ),
                    FormField(
                        name="duration", label="Video Duration (m:ss)", placeholder="e.g., 25:47",
                        message="Use m:ss format",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="competitors",
            title="Competitor Analysis",
            description="Analyze competitor content to find your unique advantage.",
            capability=registry.ANALYZE_COMPETITORS,
            template="competitors.html",
            failure_message="Failed to analyze competitors. Please try again.",
            loading_message="Studying the competition...",
            form=FormSchema(
                submit_label="Analyze Competitors",
                inputs=[
                    FormField(
                        name="my_video_url", label="Your Video URL", kind=FieldKind.URL,
                        placeholder="https://www.youtube.com/watch?v=...",
                        message="Please enter a valid URL for your video.",
                    ),
                    FormField(
                        name="competitor_urls", label="Competitor URLs", kind=FieldKind.URL_LIST,
                        placeholder="https://www.youtube.com/watch?v=...", default=[""],
                        message="Please enter a valid URL.",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="repurpose",
            title="Repurpose Content",
            description="Turn an article, blog post or any text into short video ideas.",
            capability=registry.REPURPOSE_CONTENT,
            template="repurpose.html",
            failure_message="Failed to repurpose content. Please try again.",
            loading_message="Reading your content...",
            form=FormSchema(
                submit_label="Repurpose Content",
                inputs=[
                    FormField(
                        name="content_url", label="Content URL", kind=FieldKind.URL, optional=True,
                        placeholder="https://example.com/blog/post",
                        message="Please enter a valid URL.",
                    ),
                    FormField(
                        name="content_text", label="Or paste the text", kind=FieldKind.TEXTAREA, optional=True,
                        placeholder="Paste your article here (min 50 characters)",
                        message="Text content must be at least 50 characters.",
                    ),
                ],
            ),
        ),
        PageSpec(
            slug="accessibility",
            title="Accessibility",
            description="Enhance your shorts for maximum reach with captions and localization.",
            capability=registry.ENHANCE_ACCESSIBILITY,
            template="accessibility.html",
            failure_message="Failed to enhance accessibility. Please try again.",
            loading_message="Writing captions...",
            form=FormSchema(
                submit_label="Enhance Short",
                inputs=[
                    FormField(
                        name="short_content", label="Short Content", kind=FieldKind.TEXTAREA,
                        placeholder="Paste the script or describe the content of your short",
                        message="Please enter the script or content of your short video.",
                    ),
                ],
            ),
        ),
    )
}
