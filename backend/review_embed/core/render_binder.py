"""Maps already-derived review and hours data onto render instructions"""

from typing import List, Optional, Sequence

from review_embed.core.config import settings
from review_embed.core.review_selector import format_percentage, photo_markup
from review_embed.models.place import Review
from review_embed.models.schemas import (
    DaySchedule,
    HoursRow,
    InstructionKind,
    OpeningHoursSelectors,
    RenderInstruction,
    ReviewSelectors,
)

# Anchor target for the reviews link-out
LINK_TARGET = "_blank"


def bind_review_targets(
    selected_reviews: Sequence[Review],
    score_text: str,
    star_pct: float,
    selectors: ReviewSelectors,
    link: str,
) -> List[RenderInstruction]:
    instructions = [
        RenderInstruction(
            kind=InstructionKind.STYLE,
            selector=selectors.stars_bar,
            name="width",
            value=format_percentage(star_pct),
        ),
        RenderInstruction(kind=InstructionKind.TEXT, selector=selectors.score, value=score_text),
        RenderInstruction(kind=InstructionKind.ATTRIBUTE, selector=selectors.text_wrapper, name="href", value=link),
        RenderInstruction(kind=InstructionKind.ATTRIBUTE, selector=selectors.text_wrapper, name="target", value=LINK_TARGET),
    ]
    for index, review in enumerate(selected_reviews, start=1):
        instructions.append(
            RenderInstruction(
                kind=InstructionKind.INNER_HTML,
                selector=selectors.profile_photo_selector(index),
                value=photo_markup(review),
            )
        )
    return instructions


def format_hours(schedule: DaySchedule, closed_label: str) -> str:
    if schedule.is_closed:
        return closed_label
    return f"{schedule.opens} - {schedule.closes}"


def bind_opening_hours_targets(
    schedules: Sequence[DaySchedule],
    selectors: OpeningHoursSelectors,
    closed_label: Optional[str] = None,
) -> List[RenderInstruction]:
    """One row per schedule; only the positionally last row is marked last."""
    label = closed_label or selectors.closed_label or settings.closed_label
    last_index = len(schedules) - 1
    return [
        RenderInstruction(
            kind=InstructionKind.HOURS_ROW,
            selector=selectors.list_container,
            row=HoursRow(
                day=schedule.day_of_week,
                time=format_hours(schedule, label),
                is_closed=schedule.is_closed,
                is_last=index == last_index,
                item_selector=selectors.item,
                day_selector=selectors.day,
                time_selector=selectors.time,
            ),
        )
        for index, schedule in enumerate(schedules)
    ]


def bind_render_targets(
    schedules: Sequence[DaySchedule],
    selected_reviews: Sequence[Review],
    score_text: str,
    star_pct: float,
    review_selectors: ReviewSelectors,
    opening_hours_selectors: OpeningHoursSelectors,
    link: str,
    closed_label: Optional[str] = None,
) -> List[RenderInstruction]:
    """Review instructions followed by opening-hours rows."""
    return (
        bind_review_targets(selected_reviews, score_text, star_pct, review_selectors, link)
        + bind_opening_hours_targets(schedules, opening_hours_selectors, closed_label)
    )
