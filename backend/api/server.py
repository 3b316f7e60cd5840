"""
Story Graph Viewer: API Server
==============================

Read-only API over one viewer session. The story set is never
mutated; the only writes are selection events.

Endpoints:
- GET  /health                     -> Load phase, banners, export button
- GET  /api/v1/graph               -> Laid-out graph view
- GET  /api/v1/mermaid             -> Mermaid text
- GET  /api/v1/stories/{story_id}  -> Dialog view of one story
- GET  /api/v1/selection           -> Current selection
- POST /api/v1/selection/node      -> NodeClicked
- POST /api/v1/selection/option    -> OptionActivated
- POST /api/v1/selection/close     -> DialogClosed
- GET  /api/v1/export              -> HTML page with the JPEG embedded

Usage:
    uvicorn backend.api.server:app --reload
"""
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel

from ..engine import StoryGraphSession, StoryGraphConfig
from ..contracts.story import index_stories
from ..contracts.events import NodeClicked, OptionActivated, DialogClosed, SelectionSnapshot
from ..contracts.session import LoadPhase
from frontend.mapper import ViewMapper
from frontend.export import ExportPresenter
from frontend.visualization.mermaid import generate_mermaid
from .mapper import map_graph_view, map_dialog, map_selection, map_chrome


class NodeClickRequest(BaseModel):
    node_id: str


class OptionActivateRequest(BaseModel):
    target: str


def _default_session() -> StoryGraphSession:
    return StoryGraphSession(StoryGraphConfig.from_env())


def create_app(session_factory: Callable[[], StoryGraphSession] = _default_session) -> FastAPI:
    """Build the app around one session created (and loaded) at startup."""
    mapper = ViewMapper()
    holder = {}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = session_factory()
        holder["session"] = session
        print("[*] Loading story structure...")
        state = await session.load()
        if state.error_message:
            print(f"[!] {state.error_message}")
        else:
            print(f"[*] Story graph ready ({len(state.stories)} stories).")

        yield

        print("[*] Shutting down story graph session.")
        session.dispose()
        holder.pop("session", None)

    app = FastAPI(
        title="Story Graph Viewer API",
        version="0.1.0",
        description="Read-only graph, layout and selection API for branching stories",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    def ready_session() -> StoryGraphSession:
        session: Optional[StoryGraphSession] = holder.get("session")
        if session is None or session.phase in (LoadPhase.LOADING, LoadPhase.DISPOSED):
            raise HTTPException(status_code=503, detail="Story graph not loaded")
        if session.phase == LoadPhase.FAILED:
            raise HTTPException(status_code=502, detail=session.error_message)
        return session

    def selection_response(snapshot: SelectionSnapshot):
        return map_selection(snapshot, mapper.map_selection(snapshot))

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    @app.get("/health")
    async def health_check():
        """Session status."""
        session = holder.get("session")
        if session is None:
            raise HTTPException(status_code=503, detail="Session not initialized")
        return {
            "status": "online",
            "phase": session.phase.value,
            "availability": mapper.map_availability(session.phase).value,
            "error": session.error_message,
            **map_chrome(
                mapper.map_loading(session.phase),
                mapper.map_error(session.error_message),
                mapper.map_export_action(session.phase),
            ),
        }

    @app.get("/api/v1/graph")
    async def get_graph():
        session = ready_session()
        view = mapper.map_graph(session.graph, session.layout, session.selection.snapshot)
        return map_graph_view(view)

    @app.get("/api/v1/mermaid", response_class=PlainTextResponse)
    async def get_mermaid():
        session = ready_session()
        return generate_mermaid(
            session.graph,
            root_id=session.layout.root_id,
            selected_id=session.selection.snapshot.story_id
        )

    @app.get("/api/v1/stories/{story_id}")
    async def get_story(story_id: str):
        session = ready_session()
        story = index_stories(session.stories).get(story_id)
        if story is None:
            raise HTTPException(status_code=404, detail=f"No story with id {story_id!r}")
        return map_dialog(mapper.map_dialog(story))

    @app.get("/api/v1/selection")
    async def get_selection():
        session = ready_session()
        return selection_response(session.selection.snapshot)

    @app.post("/api/v1/selection/node")
    async def click_node(request: NodeClickRequest):
        session = ready_session()
        return selection_response(session.dispatch(NodeClicked(request.node_id)))

    @app.post("/api/v1/selection/option")
    async def activate_option(request: OptionActivateRequest):
        session = ready_session()
        return selection_response(session.dispatch(OptionActivated(request.target)))

    @app.post("/api/v1/selection/close")
    async def close_dialog():
        session = ready_session()
        return selection_response(session.dispatch(DialogClosed()))

    @app.get("/api/v1/export", response_class=HTMLResponse)
    async def export_image():
        """The HTTP client is the viewing surface here; nothing is opened server-side."""
        session = ready_session()
        data_uri = session.export_data_uri()
        return ExportPresenter(session.config.export).render_document(data_uri)

    return app


app = create_app()
