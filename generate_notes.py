import logging

# import google ai library to access gemini
from google import genai
# import types library from Google genai to configure the request
from google.genai import types

import config
from error_handler import ErrorHandler, GenerationRequestError

logger = logging.getLogger(__name__)


def safe_get_text(response):
    """Extract plain text from Gemini response object."""
    if not response:
        return None

    if hasattr(response, "candidates") and response.candidates:
        for candidate in response.candidates:
            if hasattr(candidate, "content") and candidate.content and candidate.content.parts:
                text = "".join([getattr(p, "text", None) or "" for p in candidate.content.parts])
                if text.strip():
                    return text

    return None


def clean_raw_response_from_ai(ai_response: str) -> str:
    """Remove Markdown code fences the model sometimes wraps around HTML."""
    if not ai_response:
        return ""
    cleaned = ai_response.strip()
    for fence in ("```html", "```HTML", "```"):
        if cleaned.startswith(fence):
            cleaned = cleaned[len(fence):]
            break
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def get_token_usage(response):
    """(input, output, total) token counts, zeros when the SDK omits them."""
    usage = getattr(response, "usage_metadata", None)
    if not usage:
        return 0, 0, 0
    return (
        usage.prompt_token_count or 0,
        usage.candidates_token_count or 0,
        usage.total_token_count or 0,
    )


def generate_text(payload: dict, api_key: str, model: str = None, client=None, on_usage=None) -> str:
    """
    Send one prompt to Gemini and return the generated text.
    Raises GenerationRequestError on any failure. No retries.
    """
    if client is None:
        if not api_key:
            raise GenerationRequestError(
                "GOOGLE_API_KEY not found in environment variables",
                "API_KEY_MISSING"
            )
        client = genai.Client(api_key=api_key)

    parameters = payload["generation_parameters"]

    try:
        response = client.models.generate_content(
            model=model or config.GEMINI_MODEL,
            contents=payload["prompt_text"],
            config=types.GenerateContentConfig(
                temperature=parameters["temperature"],
                top_p=parameters["top_p"],
                max_output_tokens=parameters["max_output_tokens"],
            ),
        )
    except Exception as e:
        # The SDK raises several error families (API, HTTP transport, ...)
        raise GenerationRequestError(str(e), ErrorHandler.classify_error(str(e))) from e

    if not response:
        raise GenerationRequestError("No response received from Gemini API")

    if on_usage is not None:
        on_usage(*get_token_usage(response))

    raw_text = safe_get_text(response)
    if not raw_text:
        raise GenerationRequestError("No text in Gemini response - response was empty")

    return clean_raw_response_from_ai(raw_text)
