"""Extraction of ``<widget>`` JSON blocks from model responses."""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

WIDGET_PATTERN = re.compile(r"<widget>(.*?)</widget>", re.IGNORECASE | re.DOTALL)


class WidgetHintParser:
    """Separates widget descriptors from plain response text."""

    def parse(self, raw: str) -> Tuple[str, Optional[List[Dict[str, Any]]]]:
        """Parse a raw model response.

        Malformed widget blocks are dropped from both the text and the result.

        Args:
            raw: Response text possibly containing widget blocks

        Returns:
            Tuple of (cleaned text, widget descriptors or None if there are none)
        """
        if not raw:
            return "", None

        widgets: List[Dict[str, Any]] = []
        for match in WIDGET_PATTERN.finditer(raw):
            body = match.group(1).strip()
            try:
                widget = json.loads(body)
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping malformed widget block: {e}")
                continue
            if isinstance(widget, dict):
                widgets.append(widget)
            else:
                logger.warning("Skipping widget block that is not a JSON object")

        content = WIDGET_PATTERN.sub("", raw).strip()
        return content, widgets or None
