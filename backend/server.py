from pathlib import Path
from typing import Annotated, Any, Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.concurrency import run_in_threadpool

from backend.navigation import ScriptIntent
from backend.pages import PAGES, FormPage, PageSpec
from backend.sessions import Session, SessionStore
from shortcut_core.capabilities.flows import FLOWS
from shortcut_core.capabilities.models import ViralMoment
from shortcut_core.config_manager import ConfigManager
from shortcut_core.dispatcher import ModelDispatcher
from shortcut_core.errors import PreconditionError, ShortcutError
from shortcut_core.utils.logger import intercept_stdlib_logging, setup_logger

# Load env vars
load_dotenv()

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
GENERIC_FAILURE = "The AI request failed. Please try again."


# Bridge stdlib logging (uvicorn, httpx, openai) to loguru
intercept_stdlib_logging()


def format_score(value: Any) -> str:
    """9.0 -> "9", 7.5 -> "7.5"."""
    try:
        return f"{float(value):g}"
    except (TypeError, ValueError):
        return str(value)


def script_intent_url(video_url: str, moment: ViralMoment) -> str:
    return f"/script?{ScriptIntent.from_viral_moment(video_url, moment).to_query()}"


def _add_api_route(app: FastAPI, spec: PageSpec, dispatcher: ModelDispatcher) -> None:
    capability = spec.capability
    input_model = capability.input_model
    flow = FLOWS[capability.name]

    def run_capability(payload: input_model):  # type: ignore[valid-type]
        try:
            return flow(dispatcher, payload)
        except PreconditionError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except ShortcutError as e:
            logger.error(f"API /api/{spec.slug} failed: {e}")
            raise HTTPException(status_code=502, detail=GENERIC_FAILURE) from e

    app.add_api_route(
        f"/api/{spec.slug}",
        run_capability,
        methods=["POST"],
        response_model=capability.output_model,
        name=f"api_{spec.slug}",
    )


def create_app(
    config_manager: Optional[ConfigManager] = None,
    dispatcher: Optional[ModelDispatcher] = None,
) -> FastAPI:
    cm = config_manager or ConfigManager(allow_missing=True)
    dispatcher = dispatcher or ModelDispatcher(cm)
    server_cfg = cm.server

    sessions = SessionStore(
        dispatcher,
        max_sessions=server_cfg.max_sessions,
        notification_limit=server_cfg.notification_limit,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["score"] = format_score
    templates.env.globals["script_intent_url"] = script_intent_url
    templates.env.globals["pages"] = PAGES
    templates.env.globals["app_title"] = server_cfg.title

    app = FastAPI(title=f"{server_cfg.title} Backend")
    app.state.sessions = sessions
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _session(request: Request) -> Session:
        return sessions.get_or_create(request.cookies.get(server_cfg.session_cookie))

    def _remember(response, session: Session):
        response.set_cookie(server_cfg.session_cookie, session.id, httponly=True, samesite="lax")
        return response

    def _render(request: Request, session: Session, template: str, context: Dict[str, Any]):
        context = {"notifications": session.notifications.pending(), **context}
        return _remember(templates.TemplateResponse(request, template, context), session)

    def _render_page(request: Request, session: Session, page: FormPage):
        return _render(request, session, page.spec.template, {"page": page, "spec": page.spec})

    def _spec_or_404(slug: str) -> PageSpec:
        if slug not in PAGES:
            raise HTTPException(status_code=404, detail=f"Unknown page: {slug}")
        return PAGES[slug]

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    for spec in PAGES.values():
        _add_api_route(app, spec, dispatcher)

    @app.get("/")
    async def dashboard(request: Request):
        return _render(request, _session(request), "dashboard.html", {})

    @app.post("/notifications/{notification_id}/dismiss")
    async def dismiss_notification(request: Request, notification_id: str):
        session = _session(request)
        session.notifications.dismiss(notification_id)
        form = await request.form()
        slug = str(form.get("page") or "") or urlparse(request.headers.get("referer") or "").path.strip("/")
        # Dismissing only drops the notice; the page keeps its values and result
        if slug in PAGES:
            return _render_page(request, session, session.page(slug))
        return _render(request, session, "dashboard.html", {})

    @app.get("/script")
    async def script_page(request: Request, intent: Annotated[ScriptIntent, Query()]):
        session = _session(request)
        page = session.open_page("script")
        page.prefill(intent.form_values())
        return _render_page(request, session, page)

    @app.get("/{slug}")
    async def show_page(request: Request, slug: str):
        _spec_or_404(slug)
        session = _session(request)
        return _render_page(request, session, session.open_page(slug))

    @app.post("/{slug}")
    async def submit_page(request: Request, slug: str):
        _spec_or_404(slug)
        session = _session(request)
        page = session.page(slug)
        form = await request.form()
        raw_values = page.spec.form.read(form)
        # The model call blocks; keep it off the event loop
        await run_in_threadpool(page.submit, raw_values)
        return _render_page(request, session, page)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    cm = ConfigManager(allow_missing=True)
    setup_logger(cm)
    uvicorn.run(app, host=cm.server.host, port=cm.server.port)
