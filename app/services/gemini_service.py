# /app/services/gemini_service.py

import json
import logging

import google.generativeai as genai
from google.generativeai.types import GenerationConfig
from pydantic import ValidationError

# --- Local Imports ---
from ..core.config import get_settings
from ..core.errors import (
    EmptyResponseError,
    GenerationError,
    MalformedResponseError,
    MissingKeyError,
)
from ..models.content_model import GeneratedContent, GenerationRequest
from . import prompt_library

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


# --- HELPERS ---

def _build_model(api_key: str, system_prompt: str) -> genai.GenerativeModel:
    """
    Configures the SDK with the caller's own key and returns a model bound to
    the system prompt. The model picks up its client on first use, which
    happens before the first await in generate_content_async, so concurrent
    requests with different keys do not see each other's configuration.
    """
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(get_settings().gemini_model, system_instruction=system_prompt)


def _response_text(response) -> str:
    # .text raises ValueError when the candidate has no parts (e.g. blocked by safety filters).
    try:
        return response.text or ""
    except ValueError:
        return ""


def parse_generated_content(text: str) -> GeneratedContent:
    """
    Decodes the model's JSON reply into GeneratedContent. Any syntax error,
    non-object document, or field type mismatch becomes MalformedResponseError.
    """
    if not text or not text.strip():
        raise EmptyResponseError()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"The AI response is not valid JSON: {e.msg}") from e
    if not isinstance(payload, dict):
        raise MalformedResponseError("The AI response must be a JSON object.")
    try:
        return GeneratedContent.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"The AI response does not match the content structure ({e.error_count()} problems)."
        ) from e


# --- CORE GENERATIVE FUNCTION ---

async def generate_viral_content(request: GenerationRequest, api_key: str) -> GeneratedContent:
    """
    Runs one schema-constrained generation with the user's key. Nothing is
    retried: transport failures surface as GenerationError, and output that
    breaks the contract surfaces as EmptyResponseError/MalformedResponseError.
    """
    if not api_key:
        raise MissingKeyError()

    settings = get_settings()
    system_prompt, user_prompt = prompt_library.build_prompt(request)
    model = _build_model(api_key, system_prompt)
    config = GenerationConfig(
        temperature=settings.generation_temperature,
        response_mime_type=JSON_MIME_TYPE,
    )

    try:
        response = await model.generate_content_async(user_prompt, generation_config=config)
    except Exception as e:
        logger.error("Gemini generation failed for mode=%s length=%s: %s",
                     request.mode, request.length, e)
        raise GenerationError(f"The AI service call failed: {e}") from e

    text = _response_text(response)
    if not text:
        logger.warning("Gemini returned an empty response for mode=%s", request.mode)
        raise EmptyResponseError()

    try:
        return parse_generated_content(text)
    except MalformedResponseError as e:
        logger.warning("Discarding malformed Gemini response: %s", e.message)
        raise
