"""
AI content generation routes backed by OpenAI chat completions.
"""
from fastapi import APIRouter, Depends, Request
from openai import OpenAI, AuthenticationError, OpenAIError
from typing import Optional

from ..auth import get_required_user
from ..config import get_settings
from ..limiter import limiter
from ..logging_config import ai_logger, timed
from ..models.user import User
from ..responses import success, server_error, upstream_error
from ..schemas.ai import GenerateContentRequest, GeneratedContent

settings = get_settings()

router = APIRouter(prefix="/api/ai", tags=["ai"])

SYSTEM_PROMPTS = {
    "post": (
        "You are a creative social media content creator. Generate engaging, authentic "
        "social media posts based on the user's prompt. Keep posts concise, engaging, and "
        "suitable for a social platform. Include relevant hashtags where appropriate."
    ),
    "comment": (
        "You are helping users write thoughtful comments. Generate a meaningful, respectful "
        "comment based on the user's prompt. Keep it conversational and engaging."
    ),
    "bio": (
        "You are helping users write their social media bio. Create a concise, interesting bio "
        "that captures their personality or interests. Keep it under 150 characters."
    ),
}
DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant for social media content creation."


def get_ai_client() -> OpenAI:
    """Build the OpenAI client from settings."""
    if not settings.openai_api_key:
        server_error("AI content generation is not configured")
    return OpenAI(api_key=settings.openai_api_key)


@timed(ai_logger)
def generate_completion(client: OpenAI, prompt: str, content_type: str) -> Optional[str]:
    """Ask the model for content; returns None when it produced nothing."""
    completion = client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPTS.get(content_type, DEFAULT_SYSTEM_PROMPT)},
            {"role": "user", "content": prompt},
        ],
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
    )
    if not completion.choices:
        return None
    content = completion.choices[0].message.content
    return content.strip() if content else None


@router.post("/generate-content")
@limiter.limit(settings.ai_rate_limit)
def generate_content(
    request: Request,
    body: GenerateContentRequest,
    current_user: User = Depends(get_required_user),
    client: OpenAI = Depends(get_ai_client),
):
    """Generate a post, comment or bio draft from a prompt."""
    try:
        content = generate_completion(client, body.prompt, body.type)
    except AuthenticationError:
        upstream_error("AI provider rejected the configured API key")
    except OpenAIError:
        upstream_error("Failed to generate content")

    if not content:
        upstream_error("Failed to generate content")

    ai_logger.info("Content generated", user_id=current_user.id, type=body.type)
    return success(GeneratedContent(content=content).model_dump(), "Content generated successfully")
