"""
Place Embedder

Fetches a place once and runs the enabled features against that single
payload:

  fetch ─┬─ schema         → JSON-LD record, emitted into <head>
         ├─ reviews        → star bar, score, link-out, reviewer photos
         └─ opening hours  → hours table rows

Features are gated and guarded independently: one failing feature is logged
and recorded, the others still render. A failed fetch leaves the document
untouched.
"""

from typing import Any, Callable, Dict, List, Optional
import copy
import logging

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from review_embed.core.config import settings
from review_embed.core.dom_renderer import DomRenderer
from review_embed.core.hours_parser import parse_weekly_hours
from review_embed.core.place_fetcher import PlaceFetcher, place_fetcher
from review_embed.core.render_binder import bind_opening_hours_targets, bind_review_targets
from review_embed.core.review_selector import (
    format_score,
    reviews_link,
    select_reviews,
    star_fill_percentage,
)
from review_embed.core.schema_composer import compose_schema
from review_embed.core.schema_emitter import emit_schema
from review_embed.models.errors import ApplicationError
from review_embed.models.place import PlacePayload
from review_embed.models.schemas import DaySchedule, EmbedOptions, OpeningHoursSelectors, RenderInstruction

logger = logging.getLogger(__name__)

FEATURE_SCHEMA = "schema"
FEATURE_REVIEWS = "reviews"
FEATURE_OPENING_HOURS = "opening_hours"


class EmbedBuild(BaseModel):
    """Everything derived from one payload, before touching a document"""
    schema_record: Optional[Dict[str, Any]] = None
    review_instructions: List[RenderInstruction] = Field(default_factory=list)
    hours_instructions: List[RenderInstruction] = Field(default_factory=list)
    hours_selectors: Optional[OpeningHoursSelectors] = None
    feature_errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def instructions(self) -> List[RenderInstruction]:
        return self.review_instructions + self.hours_instructions


class EmbedResult(BaseModel):
    """Outcome of one embed invocation"""
    place_id: str
    schema_record: Optional[Dict[str, Any]] = None
    instructions: List[RenderInstruction] = Field(default_factory=list)
    html: Optional[str] = None
    error: Optional[Dict[str, Any]] = None
    feature_errors: Dict[str, str] = Field(default_factory=dict)
    render_warnings: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class PlaceEmbedder:
    """Runs the fetch → derive → render pass for a place."""

    def __init__(self, fetcher: Optional[PlaceFetcher] = None, closed_token: Optional[str] = None):
        self.fetcher = fetcher or place_fetcher
        self.closed_token = closed_token if closed_token is not None else settings.closed_token

    def _run_feature(self, build: EmbedBuild, feature: str, step: Callable[[], None]) -> None:
        try:
            step()
        except Exception as e:
            logger.exception(f"[EMBED] Feature {feature!r} failed")
            build.feature_errors[feature] = f"{type(e).__name__}: {e}"

    def build(self, payload: PlacePayload, place_id: str, options: EmbedOptions) -> EmbedBuild:
        """Derive the schema record and render instructions (no I/O)."""
        build = EmbedBuild()

        # Parsed once, shared by the schema and hours features
        schedules: List[DaySchedule] = []
        if options.schema_enabled or options.opening_hours_enabled:
            schedules = parse_weekly_hours(payload.weekday_text, self.closed_token)

        if options.schema_enabled:
            def schema_step():
                build.schema_record = compose_schema(
                    payload, options.schema_fields, self.closed_token, schedules=schedules
                )
            self._run_feature(build, FEATURE_SCHEMA, schema_step)

        if options.reviews_enabled:
            def reviews_step():
                selectors = options.review_selectors
                build.review_instructions = bind_review_targets(
                    select_reviews(payload.reviews, settings.review_photo_limit),
                    format_score(payload.rating),
                    star_fill_percentage(payload.rating),
                    selectors,
                    reviews_link(place_id, selectors.reviews_link),
                )
            self._run_feature(build, FEATURE_REVIEWS, reviews_step)

        if options.opening_hours_enabled:
            def hours_step():
                build.hours_instructions = bind_opening_hours_targets(
                    schedules,
                    options.opening_hours_selectors,
                )
                build.hours_selectors = options.opening_hours_selectors
            self._run_feature(build, FEATURE_OPENING_HOURS, hours_step)

        return build

    def _apply_staged(self, renderer: DomRenderer, write: Callable[[DomRenderer], object]) -> None:
        # Write into a copy; the live document only changes if every write succeeds
        staged = DomRenderer(soup=copy.copy(renderer.soup))
        write(staged)
        renderer.soup = staged.soup
        renderer.warnings.extend(staged.warnings)

    def render(self, build: EmbedBuild, html: Optional[str]) -> DomRenderer:
        """Apply a build to a document; each feature is written as a unit."""
        renderer = DomRenderer(soup=BeautifulSoup(html or "", "html.parser"))

        if build.schema_record is not None:
            def emit_step():
                self._apply_staged(renderer, lambda staged: emit_schema(staged.soup, build.schema_record))
            self._run_feature(build, FEATURE_SCHEMA, emit_step)

        if build.review_instructions:
            def reviews_step():
                self._apply_staged(renderer, lambda staged: staged.apply(build.review_instructions))
            self._run_feature(build, FEATURE_REVIEWS, reviews_step)

        if build.hours_instructions:
            def hours_step():
                self._apply_staged(renderer, lambda staged: staged.apply(build.hours_instructions))
            self._run_feature(build, FEATURE_OPENING_HOURS, hours_step)
        elif build.hours_selectors is not None:
            # No rows to show: the hours list is still emptied
            def clear_step():
                self._apply_staged(renderer, lambda staged: staged.clear_hours_list(build.hours_selectors))
            self._run_feature(build, FEATURE_OPENING_HOURS, clear_step)

        return renderer

    async def embed(self, place_id: str, options: Optional[EmbedOptions] = None, html: Optional[str] = None) -> EmbedResult:
        """Fetch the place and render every enabled feature into `html`."""
        options = options or EmbedOptions()
        logger.info(
            f"[EMBED] place_id={place_id} schema={options.schema_enabled} "
            f"reviews={options.reviews_enabled} hours={options.opening_hours_enabled}"
        )

        try:
            payload = await self.fetcher.fetch_place(place_id)
        except ApplicationError as e:
            logger.error(f"[EMBED] Error fetching details: {e.message}")
            return EmbedResult(place_id=place_id, html=html, error=e.model_dump())

        build = self.build(payload, place_id, options)
        renderer = self.render(build, html)

        if build.feature_errors:
            logger.warning(f"[EMBED] Features failed: {sorted(build.feature_errors)}")

        return EmbedResult(
            place_id=place_id,
            schema_record=build.schema_record,
            instructions=build.instructions,
            html=renderer.render() if html is not None else None,
            feature_errors=build.feature_errors,
            render_warnings=renderer.warnings,
        )


# Global embedder instance
place_embedder = PlaceEmbedder()
