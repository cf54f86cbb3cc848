"""Extraction helpers for model replies that should contain JSON."""

import json
import logging
import re
from typing import Dict, Any, Iterable, List, Optional

logger = logging.getLogger(__name__)


class ResponseFormatter:
    """
    Utility class for pulling structured data out of free-form model text.

    Model output is untrusted: every method returns None (or an empty list)
    instead of raising when the reply is not what was asked for.
    """

    _FENCED_PATTERNS = (
        re.compile(r'```json\s*\n(.*?)\n?```', re.DOTALL),
        re.compile(r'```\s*\n(.*?)\n?```', re.DOTALL),
    )

    @staticmethod
    def extract_json_from_response(response_text: str) -> Optional[Dict[str, Any]]:
        """
        Extract a JSON object from a model reply.

        Tries, in order:
        1. Markdown code blocks (```json ... ```)
        2. Raw JSON (entire response)
        3. JSON embedded in text (first balanced object that parses)

        Args:
            response_text: Raw response text that may contain JSON

        Returns:
            Parsed JSON dictionary, or None if no object was found
        """
        if not response_text or not response_text.strip():
            logger.debug("Empty response text provided")
            return None

        text = response_text.strip()

        for extractor in (
            ResponseFormatter._extract_markdown_json,
            ResponseFormatter._extract_raw_json,
            ResponseFormatter._extract_embedded_json,
        ):
            data = extractor(text)
            if isinstance(data, dict):
                logger.debug(f"Extracted JSON via {extractor.__name__}")
                return data

        logger.debug(f"No JSON object found in response: {text[:200]}...")
        return None

    @staticmethod
    def _extract_markdown_json(text: str) -> Optional[Any]:
        for pattern in ResponseFormatter._FENCED_PATTERNS:
            match = pattern.search(text)
            if match:
                try:
                    return json.loads(match.group(1).strip())
                except json.JSONDecodeError:
                    continue
        return None

    @staticmethod
    def _extract_raw_json(text: str) -> Optional[Any]:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _extract_embedded_json(text: str) -> Optional[Any]:
        """
        Find the first balanced ``{...}`` span that parses as JSON.

        Braces inside string literals are ignored.
        """
        start_idx = text.find('{')
        while start_idx != -1:
            depth = 0
            in_string = False
            escape_next = False
            end_idx = -1

            for i in range(start_idx, len(text)):
                char = text[i]
                if escape_next:
                    escape_next = False
                    continue
                if char == '\\':
                    escape_next = True
                    continue
                if char == '"':
                    in_string = not in_string
                    continue
                if in_string:
                    continue
                if char == '{':
                    depth += 1
                elif char == '}':
                    depth -= 1
                    if depth == 0:
                        end_idx = i
                        break

            if end_idx == -1:
                return None

            try:
                return json.loads(text[start_idx:end_idx + 1])
            except json.JSONDecodeError:
                start_idx = text.find('{', start_idx + 1)

        return None

    @staticmethod
    def validate_json_structure(
        data: Any,
        required_fields: Optional[Iterable[str]] = None
    ) -> bool:
        """
        Validate that JSON data is an object carrying the required fields.

        Args:
            data: JSON data to validate
            required_fields: Field names that must be present

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict):
            logger.debug("JSON data is not a dictionary")
            return False

        missing_fields = [name for name in (required_fields or ()) if name not in data]
        if missing_fields:
            logger.debug(f"Missing required fields: {missing_fields}")
            return False

        return True

    @staticmethod
    def non_empty_lines(response_text: str) -> List[str]:
        """Split a reply into stripped, non-blank lines."""
        if not response_text:
            return []
        return [line.strip() for line in response_text.split("\n") if line.strip()]
