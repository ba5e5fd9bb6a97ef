"""OpenAI API integration for chatdo.

This module turns a user's chat message into ParsedTaskInput records. The model
only extracts text fields; all date and recurrence interpretation happens in the
deterministic engine. Without an API key, or when the API fails, a keyword
heuristic is used instead so the chat flow keeps working.
"""

import os
import json
import logging
from typing import List, Optional
from openai import OpenAI, APIError
from dotenv import load_dotenv
from pydantic import ValidationError

from chatdo.models.constants import (
    DEFAULT_HEURISTIC_CATEGORY,
    MIN_TODO_MESSAGE_LENGTH,
    TODO_KEYWORDS,
)
from chatdo.models.parsed_input import ParsedTaskInput
from chatdo.models.task import TaskPriority

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Cheapest chat model that reliably returns JSON; override with OPENAI_MODEL
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

EXTRACTION_PROMPT_TEMPLATE = """You are an assistant that helps users manage their todos in a natural, conversational way.

Extract every todo item from the user's message. For each one, give:
- "content": the main task description
- "priority": "high", "medium" or "low"
- "category": a short suggested category (e.g. "health", "home", "work")
- "dueDate": the due date exactly as phrased ("tomorrow", "this weekend", "friday", "next month") or an ISO date, or null
- "isRecurring": true if the task repeats
- "recurrenceDescription": the repeat phrase ("twice a year", "every 3 months", "weekly"), or null

Examples:
- "I need to visit the dentist twice a year" -> recurring, high priority, health, recurrenceDescription "twice a year"
- "Buy groceries this weekend" -> one-time, medium priority, dueDate "this weekend"
- "Call mom" -> one-time, medium priority, no due date

User message: "{message}"

Respond with a JSON object {{"todos": [...]}} and no other text. Use an empty list if there are no todos."""


def extract_tasks_heuristically(message: str) -> List[ParsedTaskInput]:
    """Fallback extraction used when the LLM is unavailable.

    A message that reads like a to-do (contains a keyword such as "need to" and is
    longer than a few words) becomes a single medium-priority task.
    """
    text = (message or "").strip()
    has_keyword = any(keyword in text.lower() for keyword in TODO_KEYWORDS)
    if has_keyword and len(text) > MIN_TODO_MESSAGE_LENGTH:
        return [
            ParsedTaskInput(
                content=text,
                priority=TaskPriority.MEDIUM,
                category=DEFAULT_HEURISTIC_CATEGORY,
                is_recurring=False,
            )
        ]
    return []


def _strip_code_fence(content: str) -> str:
    # Handle cases where response might have markdown code blocks
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


class LLMClient:
    """Client that extracts structured todos from chat messages."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize the client.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY environment variable.
            model: Chat model name. If None, reads OPENAI_MODEL (default gpt-4o-mini).

        Note:
            Without an API key the client still initializes and falls back to the
            keyword heuristic on every call.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        self.client = None

        if self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        else:
            logger.warning("OPENAI_API_KEY not found in environment. Using heuristic todo extraction.")

    def extract_tasks(self, message: str) -> List[ParsedTaskInput]:
        """Extract todo records from a chat message.

        Args:
            message: Raw user message

        Returns:
            Parsed records (possibly empty). Falls back to the heuristic when the
            client is not configured, the API call fails, or the reply is not JSON.
        """
        if not message or not message.strip():
            return []

        if not self.client:
            return extract_tasks_heuristically(message)

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You extract todos. Respond only with valid JSON."},
                    {"role": "user", "content": EXTRACTION_PROMPT_TEMPLATE.format(message=message)},
                ],
                temperature=0.2,  # Low temperature keeps extraction stable
                max_tokens=1000,
            )
            response_content = _strip_code_fence((response.choices[0].message.content or "").strip())
        except APIError as e:
            error_code = getattr(e, 'code', None)
            status_code = getattr(e, 'status_code', None)

            if error_code == 'insufficient_quota':
                logger.warning("OpenAI API quota insufficient. Using heuristic todo extraction.")
            elif status_code == 429:
                logger.warning("OpenAI API rate limit exceeded. Using heuristic todo extraction.")
            else:
                logger.error(f"OpenAI API error: {status_code or 'unknown'} ({error_code or 'unknown'})")
            # Don't log full error message as it might contain sensitive info
            return extract_tasks_heuristically(message)

        try:
            result = json.loads(response_content)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse OpenAI JSON response: {e}. Response: {response_content[:100]}")
            return extract_tasks_heuristically(message)

        records = result.get("todos", []) if isinstance(result, dict) else result
        if not isinstance(records, list):
            logger.warning("OpenAI response has no todo list. Using heuristic todo extraction.")
            return extract_tasks_heuristically(message)

        parsed: List[ParsedTaskInput] = []
        for record in records:
            if not isinstance(record, dict):
                continue
            try:
                item = ParsedTaskInput.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping malformed todo record: {e.error_count()} error(s)")
                continue
            if item.content:
                parsed.append(item)

        logger.debug(f"OpenAI extracted {len(parsed)} todo(s)")
        return parsed
