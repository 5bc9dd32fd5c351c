"""
DOM Renderer

Applies render instructions to an HTML document (BeautifulSoup). Every
element matched by an instruction's selector is updated. A selector that
matches nothing is logged and skipped; the remaining instructions still run.
"""

from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple
import copy
import logging

from bs4 import BeautifulSoup, Tag

from review_embed.models.schemas import HoursRow, InstructionKind, OpeningHoursSelectors, RenderInstruction

logger = logging.getLogger(__name__)


def parse_style(style: Optional[str]) -> "OrderedDict[str, str]":
    """Parse an inline style attribute into ordered property/value pairs."""
    declarations: "OrderedDict[str, str]" = OrderedDict()
    for declaration in (style or "").split(";"):
        prop, sep, value = declaration.partition(":")
        if sep and prop.strip():
            declarations[prop.strip().lower()] = value.strip()
    return declarations


def format_style(declarations: Dict[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


def set_style(element: Tag, prop: str, value: Optional[str]) -> None:
    """Set (or, with value None, remove) one inline style property."""
    declarations = parse_style(element.get("style"))
    if value is None:
        declarations.pop(prop, None)
    else:
        declarations[prop] = value
    if declarations:
        element["style"] = format_style(declarations)
    elif element.has_attr("style"):
        del element["style"]


class DomRenderer:
    """Writes already-computed values into a parsed HTML document."""

    def __init__(self, html: Optional[str] = None, soup: Optional[BeautifulSoup] = None):
        self.soup = soup if soup is not None else BeautifulSoup(html or "", "html.parser")
        self.warnings: List[str] = []

    def render(self) -> str:
        return str(self.soup)

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(f"[RENDER] {message}")

    def _select(self, selector: str, kind: str) -> List[Tag]:
        elements = self.soup.select(selector)
        if not elements:
            self._warn(f"No element matches {selector!r}; skipping {kind}")
        return elements

    def apply(self, instructions: Sequence[RenderInstruction]) -> int:
        """Apply instructions in order; returns the number of elements written."""
        written = 0
        hours_rows: "OrderedDict[str, List[HoursRow]]" = OrderedDict()

        for instruction in instructions:
            if instruction.kind == InstructionKind.HOURS_ROW:
                hours_rows.setdefault(instruction.selector, []).append(instruction.row)
                continue
            written += self._apply_one(instruction)

        for list_selector, rows in hours_rows.items():
            written += self._apply_hours_rows(list_selector, rows)

        return written

    def _apply_one(self, instruction: RenderInstruction) -> int:
        elements = self._select(instruction.selector, instruction.kind.value)
        for element in elements:
            if instruction.kind == InstructionKind.STYLE:
                set_style(element, instruction.name, instruction.value)
            elif instruction.kind == InstructionKind.TEXT:
                element.string = instruction.value
            elif instruction.kind == InstructionKind.ATTRIBUTE:
                element[instruction.name] = instruction.value
            elif instruction.kind == InstructionKind.INNER_HTML:
                element.clear()
                fragment = BeautifulSoup(instruction.value, "html.parser")
                for node in list(fragment.contents):
                    element.append(node.extract())
        return len(elements)

    def _hours_list(self, list_selector: str, item_selector: str) -> Optional[Tuple[Tag, Tag]]:
        """The list container and a display-cleared copy of its item template."""
        container = self.soup.select_one(list_selector)
        template_element = self.soup.select_one(item_selector)
        if container is None or template_element is None:
            self._warn("Opening hours selectors not found.")
            return None

        template = copy.copy(template_element)
        set_style(template, "display", None)
        container.clear()
        return container, template

    def clear_hours_list(self, selectors: OpeningHoursSelectors) -> None:
        """Empty the hours list when there are no rows to show."""
        self._hours_list(selectors.list_container, selectors.item)

    def _apply_hours_rows(self, list_selector: str, rows: List[HoursRow]) -> int:
        """
        Rebuild the hours list: clone the item template once per row.

        The template's inline display is cleared so hidden templates show up,
        and the last row gets a transparent bottom border.
        """
        found = self._hours_list(list_selector, rows[0].item_selector)
        if found is None:
            return 0
        container, template = found

        for row in rows:
            clone = copy.copy(template)
            for selector, text in ((row.day_selector, row.day), (row.time_selector, row.time)):
                target = clone.select_one(selector)
                if target is None:
                    self._warn(f"No element matches {selector!r} in hours item; skipping")
                    continue
                target.string = text
            if row.is_last:
                set_style(clone, "border-bottom-color", "transparent")
            container.append(clone)

        return len(rows)
