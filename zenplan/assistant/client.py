"""Gemini client for the daily assistant summary.

Calls the Generative Language REST API directly with httpx. The public
coroutine never raises: every failure maps to a fixed fallback reminder so
the planner stays usable without credentials or network access.
"""
import datetime as dt
import json
import logging
from collections.abc import Iterable

import httpx
from pydantic import BaseModel, Field, ValidationError

from zenplan.core.config import settings
from zenplan.models import Schedule
from zenplan.planner.projector import schedules_for_day

logger = logging.getLogger(__name__)


class Reminder(BaseModel):
    message: str
    suggestions: list[str]


WELCOME_REMINDER = Reminder(
    message="Welcome back! Add your tasks for today to get personalized AI coaching.",
    suggestions=["Set your first goal", "Stay productive"],
)
DEFAULT_REMINDER = Reminder(
    message="Let's stay focused on your top priorities today.",
    suggestions=["Start with your most difficult task", "Break down large goals"],
)
FALLBACK_REMINDER = Reminder(
    message="Ready to help you conquer the day! What's your top priority?",
    suggestions=["Review your High priority tasks", "Focus on one item at a time"],
)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "message": {
            "type": "STRING",
            "description": "A motivational greeting focusing on priorities.",
        },
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Strategic actionable advice points.",
        },
    },
    "required": ["message", "suggestions"],
}


def build_prompt(schedules: Iterable[Schedule], today: dt.date) -> str:
    """Describe today's schedules and ask for a focused greeting plus advice."""
    lines = [
        f"- [{s.priority.value.upper()}] {s.title}: "
        f"{s.completed_count}/{len(s.checklist)} tasks done"
        for s in schedules_for_day(schedules, today)
    ]
    context = "\n".join(lines) or "No tasks scheduled for today yet."
    return (
        f"Context: Today is {today.isoformat()}.\n"
        f"User's Schedule for today (including priority):\n"
        f"{context}\n\n"
        "Instructions:\n"
        "Act as a productivity expert and strategist.\n"
        '1. Provide a concise, professional greeting that identifies the "High Priority" '
        "items as the primary focus.\n"
        '2. Suggest 2 specific "Strategic Advice" points based on the task mix '
        '(e.g., "Tackle the High Priority task first thing in the morning").\n\n'
        "Return the response in JSON format."
    )


class _Part(BaseModel):
    text: str = ""


class _Content(BaseModel):
    parts: list[_Part] = []


class _Candidate(BaseModel):
    content: _Content = Field(default_factory=_Content)


class GenerateContentResponse(BaseModel):
    """The slice of a generateContent response body the assistant reads."""
    candidates: list[_Candidate] = []

    @property
    def text(self) -> str:
        if not self.candidates:
            return ""
        return "".join(part.text for part in self.candidates[0].content.parts)


async def get_daily_reminder(
    schedules: Iterable[Schedule],
    today: dt.date | None = None,
    *,
    api_key: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Reminder:
    """
    Ask Gemini for a motivational summary of today's schedules.

    Returns ``WELCOME_REMINDER`` when no API key is configured,
    ``DEFAULT_REMINDER`` when the model returns no text, and
    ``FALLBACK_REMINDER`` on any request or parsing failure.
    """
    api_key = settings.gemini_api_key if api_key is None else api_key
    if not api_key:
        logger.info("No Gemini API key configured, using welcome reminder")
        return WELCOME_REMINDER

    prompt = build_prompt(list(schedules), today or dt.date.today())
    url = f"{settings.gemini_api_url}/models/{settings.gemini_model}:generateContent"
    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }
    headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.assistant_timeout_seconds) as owned:
                resp = await owned.post(url, json=payload, headers=headers)
        else:
            resp = await client.post(url, json=payload, headers=headers)
        resp.raise_for_status()
        text = GenerateContentResponse.model_validate(resp.json()).text
        if not text:
            return DEFAULT_REMINDER
        return Reminder.model_validate(json.loads(text))
    except (httpx.HTTPError, ValueError, ValidationError) as e:
        logger.error(f"Gemini API error: {e}")
        return FALLBACK_REMINDER
