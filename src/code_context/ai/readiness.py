"""AI readiness check backed by the google-genai SDK."""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from google import genai

from ..utils.config import AIConfig

logger = logging.getLogger(__name__)


class GeminiReadinessProbe:
    """Reports whether a Gemini client can be configured from current credentials.

    Resolution follows the Gemini client: Vertex AI needs a project, the
    Developer API needs an explicit key, ``GEMINI_API_KEY`` or
    ``GOOGLE_API_KEY``. ``.env`` values are loaded and credentials resolved once,
    at construction; the client is built on the first call and the answer is
    reused afterwards. Calling the probe never raises.
    """

    def __init__(self, ai_config: Optional[AIConfig] = None):
        load_dotenv()

        self.ai_config = ai_config or AIConfig()
        self.options = self.client_options()
        self._ready: Optional[bool] = None

    def client_options(self) -> Optional[Dict[str, Any]]:
        """Keyword arguments for ``genai.Client``, or None without credentials."""
        use_vertexai = self.ai_config.use_vertexai or os.getenv("GOOGLE_GENAI_USE_VERTEXAI", "").lower() == "true"
        if use_vertexai:
            project = self.ai_config.vertexai_project or os.getenv("GOOGLE_CLOUD_PROJECT")
            if not project:
                return None
            location = self.ai_config.vertexai_location or os.getenv("GOOGLE_CLOUD_LOCATION", "us-central1")
            return {"vertexai": True, "project": project, "location": location}

        api_key = self.ai_config.api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            return None
        return {"api_key": api_key}

    def is_ai_ready(self) -> bool:
        if self._ready is None:
            self._ready = self._can_build_client()
        return self._ready

    def _can_build_client(self) -> bool:
        if self.options is None:
            return False

        try:
            genai.Client(**self.options)
        except Exception as e:
            logger.debug("Gemini client could not be configured: %s", e)
            return False
        return True

    def __call__(self) -> bool:
        return self.is_ai_ready()
