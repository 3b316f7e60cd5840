"""
Engine Orchestration Module

Coordinates one viewer session: fetch, build, layout, selection, export.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. One fetch per session, no retry, no cancellation
3. The story collection and graph are immutable once built
4. Selection is the only mutable state and changes only via events

SESSION LIFECYCLE:
==================
    LOADING --fetch ok--> READY
    LOADING --fetch failed--> FAILED (persistent message)
    any --dispose()--> DISPOSED (late fetch results are ignored)

This module is the composition root: it is the only core-side module
that wires in ingestion and the frontend exporter.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging

from .contracts.base import Error
from .contracts.story import Story
from .contracts.graph import GraphModel, LayoutResult
from .contracts.events import SelectionEvent, SelectionSnapshot
from .contracts.session import LoadPhase, FETCH_ERROR_PREFIX
from .core import GraphBuilder, LayoutEngine, LayoutConfig, SelectionController, DEFAULT_ROOT_ID
from ingestion import StoryFetcher, FetchConfig, FetchResult
from frontend.export import ExportConfig, ExportOutcome, JpegExporter, ExportPresenter, Opener, to_data_uri

logger = logging.getLogger(__name__)


@dataclass
class StoryGraphConfig:
    """Unified configuration for a viewer session."""
    fetch: FetchConfig = None
    layout: LayoutConfig = None
    export: ExportConfig = None
    root_id: str = DEFAULT_ROOT_ID

    def __post_init__(self):
        self.fetch = self.fetch or FetchConfig()
        self.layout = self.layout or LayoutConfig()
        self.export = self.export or ExportConfig()

    @classmethod
    def from_env(cls) -> StoryGraphConfig:
        return cls(fetch=FetchConfig.from_env(), export=ExportConfig.from_env())


@dataclass(frozen=True)
class ViewState:
    """
    Read-only snapshot of everything the rendering surface shows.
    """
    phase: LoadPhase
    error_message: Optional[str] = None
    stories: Tuple[Story, ...] = field(default_factory=tuple)
    graph: Optional[GraphModel] = None
    layout: Optional[LayoutResult] = None
    selection: SelectionSnapshot = field(default_factory=SelectionSnapshot.idle)

    @property
    def is_loading(self) -> bool:
        return self.phase == LoadPhase.LOADING

    @property
    def can_export(self) -> bool:
        return self.phase == LoadPhase.READY


class StoryGraphSession:
    """
    One viewer session.

    LAYER FLOW:
    ===========
    1. Ingestion: endpoint -> FetchResult
    2. Core: stories -> GraphModel -> LayoutResult
    3. Selection: events -> SelectionSnapshot
    4. Export: LayoutResult -> JPEG -> viewing surface
    """

    def __init__(
        self,
        config: Optional[StoryGraphConfig] = None,
        fetcher: Optional[StoryFetcher] = None,
        opener: Optional[Opener] = None
    ):
        self._config = config or StoryGraphConfig()
        self._fetcher = fetcher or StoryFetcher(self._config.fetch)
        self._builder = GraphBuilder()
        self._layout_engine = LayoutEngine(self._config.layout)
        self._exporter = JpegExporter(self._config.export)
        self._presenter = ExportPresenter(self._config.export, opener)

        self._phase = LoadPhase.LOADING
        self._load_started = False
        self._error: Optional[Error] = None
        self._stories: Tuple[Story, ...] = ()
        self._graph: Optional[GraphModel] = None
        self._layout: Optional[LayoutResult] = None
        self._selection: Optional[SelectionController] = None

    # =========================================================================
    # LOAD
    # =========================================================================

    @property
    def config(self) -> StoryGraphConfig:
        return self._config

    @property
    def phase(self) -> LoadPhase:
        return self._phase

    async def load(self) -> ViewState:
        """
        Run the single startup fetch.

        Calling again (in flight or finished) does nothing.
        """
        if self._load_started or self._phase == LoadPhase.DISPOSED:
            return self.view_state()
        self._load_started = True

        result = await self._fetcher.fetch()
        self.apply_fetch_result(result)
        return self.view_state()

    def apply_fetch_result(self, result: FetchResult) -> None:
        """Resolve the loading phase. Ignored once disposed."""
        if self._phase == LoadPhase.DISPOSED:
            logger.debug("Session disposed; ignoring late fetch result from %s", result.url)
            return
        if self._phase != LoadPhase.LOADING:
            return

        if not result.success:
            self._error = result.to_error()
            self._phase = LoadPhase.FAILED
            return

        self._stories = result.stories
        self._graph = self._builder.build(self._stories)
        self._layout = self._layout_engine.compute(self._graph, self._config.root_id)
        self._selection = SelectionController(self._stories)
        self._phase = LoadPhase.READY
        logger.info(
            "Story graph ready: %d nodes, %d edges",
            len(self._graph.nodes), len(self._graph.edges)
        )

    def dispose(self) -> None:
        """Tear the session down; pending results become no-ops."""
        self._phase = LoadPhase.DISPOSED

    @property
    def error_message(self) -> Optional[str]:
        if self._error is None:
            return None
        return FETCH_ERROR_PREFIX + self._error.message

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def stories(self) -> Tuple[Story, ...]:
        return self._stories

    @property
    def graph(self) -> Optional[GraphModel]:
        return self._graph

    @property
    def layout(self) -> Optional[LayoutResult]:
        return self._layout

    @property
    def selection(self) -> Optional[SelectionController]:
        return self._selection

    def view_state(self) -> ViewState:
        return ViewState(
            phase=self._phase,
            error_message=self.error_message,
            stories=self._stories,
            graph=self._graph,
            layout=self._layout,
            selection=self._selection.snapshot if self._selection else SelectionSnapshot.idle(),
        )

    # =========================================================================
    # INTERACTION
    # =========================================================================

    def dispatch(self, event: SelectionEvent) -> SelectionSnapshot:
        """Forward an input event. Before the graph is ready there is nothing to select."""
        if self._selection is None or self._phase != LoadPhase.READY:
            return SelectionSnapshot.idle()
        return self._selection.dispatch(event)

    def export(self) -> Optional[ExportOutcome]:
        """Rasterize and present the diagram; None until the graph is ready."""
        if self._phase != LoadPhase.READY:
            return None
        jpeg = self._exporter.render(self._graph, self._layout)
        return self._presenter.present(to_data_uri(jpeg))

    def export_data_uri(self) -> Optional[str]:
        if self._phase != LoadPhase.READY:
            return None
        return to_data_uri(self._exporter.render(self._graph, self._layout))
