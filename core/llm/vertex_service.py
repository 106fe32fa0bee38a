"""
Vertex AI Service - LLM implementation using Gemini through Vertex AI's
OpenAI-compatible chat completions endpoint.

Authentication uses short-lived Google Cloud access tokens supplied by
``AccessTokenProvider``. Calls are never retried: a failure is raised as
``LLMExtractionError`` and the caller decides whether to fall back.
"""
from typing import Any, Callable, Dict, Optional
import json
import logging
import re

import openai
from openai import OpenAI

from core.config_loader import LlmConfig
from core.errors import LLMExtractionError
from core.llm.credentials import AccessTokenProvider
from core.llm.interfaces import LLMProvider
from core.llm.schema_models import RESUME_SCHEMA_TEXT
from core.llm.system_prompts import (
    RESUME_EXTRACTION_SYSTEM_PROMPT,
    RESUME_EXTRACTION_USER_TEMPLATE,
)

logger = logging.getLogger(__name__)

VERTEX_OPENAI_URL = (
    "https://{region}-aiplatform.googleapis.com/v1/projects/{project}"
    "/locations/{region}/endpoints/openapi"
)

_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


def parse_json_object(content: Optional[str]) -> Dict[str, Any]:
    """Parse a model reply that must be a single JSON object.

    Markdown code fences around the object are tolerated; anything else
    that is not valid JSON is an error.

    Raises:
        LLMExtractionError: If the reply is empty, not JSON, or not an object
    """
    if not content or not content.strip():
        raise LLMExtractionError("LLM returned an empty response")

    cleaned = _CODE_FENCE_RE.sub("", content).strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise LLMExtractionError(f"LLM returned malformed JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise LLMExtractionError(
            f"LLM returned JSON {type(parsed).__name__}, expected an object"
        )
    return parsed


class VertexAIService(LLMProvider):
    """
    Gemini on Vertex AI via the OpenAI SDK.

    Generation settings (max output tokens, temperature) are looked up per
    call type from ``LlmConfig.profiles``.
    """

    def __init__(
        self,
        llm_config: LlmConfig,
        token_provider: AccessTokenProvider,
        client_factory: Optional[Callable[..., OpenAI]] = None,
    ):
        if not llm_config.project_id:
            raise ValueError("Vertex AI requires llm.project_id (GOOGLE_CLOUD_PROJECT)")

        self.config = llm_config
        self.token_provider = token_provider
        self.model = f"google/{llm_config.model}"
        self.base_url = VERTEX_OPENAI_URL.format(
            region=llm_config.region, project=llm_config.project_id
        )
        self._client_factory = client_factory or OpenAI
        self._client: Optional[OpenAI] = None
        self._client_token: Optional[str] = None

    def _get_client(self) -> OpenAI:
        token = self.token_provider.get_token()
        if self._client is None or token != self._client_token:
            self._client = self._client_factory(
                api_key=token,
                base_url=self.base_url,
                timeout=self.config.timeout_seconds,
                max_retries=0,
            )
            self._client_token = token
        return self._client

    def _complete(self, messages, call_type: str, json_mode: bool = False) -> str:
        profile = self.config.profile_for(call_type)
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": profile.temperature,
            "max_tokens": profile.max_output_tokens,
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        client = self._get_client()
        try:
            response = client.chat.completions.create(**request)
        except openai.APITimeoutError as e:
            raise LLMExtractionError(f"Vertex AI request timed out ({call_type})") from e
        except openai.APIStatusError as e:
            raise LLMExtractionError(
                f"Vertex AI returned HTTP {e.status_code} ({call_type}): {e.message}"
            ) from e
        except openai.APIError as e:
            raise LLMExtractionError(f"Vertex AI request failed ({call_type}): {e}") from e

        if not response.choices:
            raise LLMExtractionError(f"Vertex AI returned no choices ({call_type})")

        content = response.choices[0].message.content
        logger.debug(f"Vertex AI {call_type} call returned {len(content or '')} chars")
        return content or ""

    def extract_resume_data(self, text: str) -> Dict[str, Any]:
        """Extract structured resume fields as a JSON object.

        Args:
            text: Decoded resume text

        Returns:
            Parsed JSON object following ``RESUME_SCHEMA``

        Raises:
            LLMExtractionError: On provider errors or unparsable output
        """
        messages = [
            {"role": "system", "content": RESUME_EXTRACTION_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": RESUME_EXTRACTION_USER_TEMPLATE.format(
                    schema=RESUME_SCHEMA_TEXT, resume_text=text
                ),
            },
        ]
        content = self._complete(messages, "resume_extraction", json_mode=True)
        return parse_json_object(content)

    def generate_text(self, prompt: str, call_type: str) -> str:
        messages = [{"role": "user", "content": prompt}]
        return self._complete(messages, call_type).strip()
