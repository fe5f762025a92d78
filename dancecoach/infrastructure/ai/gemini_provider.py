import logging
from typing import List, Optional

import google.generativeai as genai

from ...core.config import settings
from ...application.errors import ExternalCallFailed
from ...application.ports.text_generator import TextGenerator

logger = logging.getLogger(__name__)


class GeminiTextGenerator(TextGenerator):
    def __init__(self, api_key: Optional[str] = None, model_names: Optional[List[str]] = None) -> None:
        genai.configure(api_key=api_key or settings.GEMINI_API_KEY)
        names = model_names or [settings.GEMINI_MODEL] + settings.GEMINI_FALLBACK_MODELS
        # Remove duplicates while preserving order
        self.model_names = list(dict.fromkeys(names))

    def generate_text(self, prompt: str, max_tokens: int) -> str:
        """Try each configured model in turn; raise ExternalCallFailed if none answers."""
        last_error: Optional[Exception] = None
        for model_name in self.model_names:
            try:
                model = genai.GenerativeModel(model_name)
                result = model.generate_content(
                    prompt,
                    generation_config=genai.GenerationConfig(max_output_tokens=max_tokens),
                )
                text = getattr(result, "text", None)
                if text and text.strip():
                    return text
                logger.warning(f"Gemini model {model_name} returned no text")
            except Exception as e:
                logger.warning(f"Gemini model {model_name} failed: {e}")
                last_error = e
        if last_error is not None:
            raise ExternalCallFailed(f"Text generation failed: {last_error}") from last_error
        raise ExternalCallFailed("Text generation returned no text")
