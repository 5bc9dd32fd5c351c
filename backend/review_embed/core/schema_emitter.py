"""Structured-data sink: writes the schema record as a JSON-LD script tag"""

from typing import Any, Dict
import json
import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"


def serialize_schema(record: Dict[str, Any]) -> str:
    """JSON-LD text safe to place inside a <script> element."""
    text = json.dumps(record, indent=2, ensure_ascii=False)
    # A literal "</" would end the script element early
    return text.replace("</", "<\\/")


def emit_schema(soup: BeautifulSoup, record: Dict[str, Any]) -> Tag:
    """Append a JSON-LD <script> holding `record` to the document head."""
    script = soup.new_tag("script", attrs={"type": JSON_LD_TYPE})
    script.string = serialize_schema(record)

    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        else:
            soup.insert(0, head)

    head.append(script)
    logger.info(f"[SCHEMA] Schema markup added: @type={record.get('@type')!r}, keys={sorted(record)}")
    return script
