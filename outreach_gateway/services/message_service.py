"""
Message service - outreach prompt and Gemini generation.

Generation is not cached and the model is non-deterministic: two calls with
the same profile may return different text. Callers must not treat a retry
as a no-op.
"""
import logging
from typing import Optional

import google.generativeai as genai

from outreach_gateway.config import settings
from outreach_gateway.core.exceptions import ExternalServiceError, ValidationError
from outreach_gateway.schemas.outreach import GenerateMessageRequest, ProfileInput

logger = logging.getLogger(__name__)


PROMPT_TEMPLATE = """Write a professional LinkedIn outreach message to {name} who works as {job_title} at {company} in the {industry} industry.

Keep it:
- Under 100 words
- Professional but friendly
- Focused on potential collaboration
- No pushy sales language

Just return the message, no extra formatting."""


def build_prompt(profile: ProfileInput) -> str:
    """Deterministic prompt for a profile. `name` is required."""
    if not profile.name or not profile.name.strip():
        raise ValidationError("Profile name is required", field="name")

    return PROMPT_TEMPLATE.format(
        name=profile.name.strip(),
        job_title=profile.job_title or "professional",
        company=profile.company or "a company",
        industry=profile.industry or "relevant"
    )


def resolve_prompt(request: GenerateMessageRequest) -> str:
    """Prompt for a request: built from `profile`, else the raw `prompt`."""
    if request.profile is not None:
        return build_prompt(request.profile)
    if request.prompt and request.prompt.strip():
        return request.prompt
    raise ValidationError("Either a profile with a name or a prompt is required")


class GeminiMessageGenerator:
    """Thin wrapper over a Gemini GenerativeModel."""

    def __init__(self, api_key: Optional[str], model_name: str):
        if not api_key:
            logger.warning("GEMINI_API_KEY not configured; generation requests will fail")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)

    async def generate(self, prompt: str) -> str:
        """First candidate's text, verbatim."""
        response = await self.model.generate_content_async(prompt)
        return response.text


class MessageService:
    """Service for outreach message generation."""

    def __init__(self, generator: GeminiMessageGenerator):
        self.generator = generator

    async def generate_message(self, request: GenerateMessageRequest) -> str:
        prompt = resolve_prompt(request)
        try:
            return await self.generator.generate(prompt)
        except Exception as e:
            logger.error(f"Gemini error: {e}")
            raise ExternalServiceError(
                "Failed to generate message",
                service="Gemini",
                extra={"message": ""}
            )


# =============================================================================
# FACTORY
# =============================================================================

_generator: Optional[GeminiMessageGenerator] = None


def get_message_generator() -> GeminiMessageGenerator:
    """Process-wide Gemini generator, built from settings on first use."""
    global _generator
    if _generator is None:
        _generator = GeminiMessageGenerator(settings.GEMINI_API_KEY, settings.AI_MODEL)
        logger.info(f"AI Service initialized with Gemini ({settings.AI_MODEL})")
    return _generator
