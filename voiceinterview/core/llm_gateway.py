"""
Language Model Gateway for VoiceInterview

Single entry point for chat completions against an OpenAI-compatible API.
Every component that needs the model (interviewer, scorer, aggregator,
resume parser) receives a gateway instance and calls:

    await gateway.generate_completion(system_instruction, user_instruction, temperature)

Failures surface as LLMGatewayError; callers own their fallbacks.
Integrated with Langfuse for observability and tracing.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from langfuse import Langfuse

from voiceinterview.config.settings import get_settings

logger = logging.getLogger(__name__)


class LLMGatewayError(Exception):
    """Raised when the language model provider cannot produce a completion."""
    pass


class CompletionGateway(Protocol):
    """Anything that can turn a prompt pair into text."""

    async def generate_completion(
        self,
        system_instruction: str,
        user_instruction: str,
        temperature: float = 0.7,
        trace_name: str = "completion",
    ) -> str:
        ...


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Decode the outermost JSON object embedded in model output.

    Models often wrap JSON in prose or markdown fences, so only the span
    from the first "{" to the last "}" is decoded.

    Raises:
        json.JSONDecodeError: If no decodable object is present
    """
    json_start = text.find("{")
    json_end = text.rfind("}") + 1

    if json_start < 0 or json_end <= json_start:
        raise json.JSONDecodeError("No JSON object found", text, 0)

    data = json.loads(text[json_start:json_end])
    if not isinstance(data, dict):
        raise json.JSONDecodeError("Top-level JSON value is not an object", text, json_start)
    return data


class LLMGateway:
    """
    Chat-completion client for the configured provider.

    Stateless apart from the HTTP connection pool, so one instance is
    shared by every interview session.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the gateway from settings.

        Args:
            transport: Optional httpx transport (used to stub the provider)
        """
        self.settings = get_settings()
        self.model = self.settings.chat_model
        self.max_tokens = self.settings.completion_max_tokens
        self.max_retries = self.settings.llm_max_retries

        headers = {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
        }
        if self.settings.openai_org_id:
            headers["OpenAI-Organization"] = self.settings.openai_org_id

        # HTTP client for API calls
        self.client = httpx.AsyncClient(
            base_url=self.settings.openai_base_url.rstrip("/"),
            headers=headers,
            timeout=self.settings.llm_timeout_seconds,
            transport=transport,
        )

        # Initialize Langfuse for observability
        self.langfuse = None
        if self.settings.langfuse_enabled:
            if self.settings.langfuse_secret_key and self.settings.langfuse_public_key:
                try:
                    self.langfuse = Langfuse(
                        secret_key=self.settings.langfuse_secret_key,
                        public_key=self.settings.langfuse_public_key,
                        host=self.settings.langfuse_base_url,
                    )
                    logger.info("Langfuse initialized for LLM observability")
                except Exception as e:
                    logger.warning(f"Failed to initialize Langfuse: {e}")
            else:
                logger.info("Langfuse keys not configured, tracing disabled")

    async def close(self):
        """Close the HTTP client and flush Langfuse."""
        await self.client.aclose()
        if self.langfuse:
            try:
                self.langfuse.flush()
            except Exception as e:
                logger.warning(f"Failed to flush Langfuse: {e}")

    # =========================================================================
    # COMPLETIONS
    # =========================================================================

    def _extract_content(self, result: dict) -> str:
        """Extract text content from API response, handling list/dict formats."""
        choices = result.get("choices") or [{}]
        content = choices[0].get("message", {}).get("content", "")

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        if content is None:
            return ""
        return content if isinstance(content, str) else str(content)

    async def _post_completion(self, payload: dict[str, Any]) -> str:
        """Send one chat-completion request."""
        try:
            response = await self.client.post("/chat/completions", json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Chat completion API error: {e}")
            raise LLMGatewayError(f"Provider request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Chat completion returned invalid JSON: {e}")
            raise LLMGatewayError("Provider returned an undecodable response") from e

        return self._extract_content(result)

    async def generate_completion(
        self,
        system_instruction: str,
        user_instruction: str,
        temperature: float = 0.7,
        trace_name: str = "completion",
    ) -> str:
        """
        Generate a chat completion.

        Args:
            system_instruction: System message content
            user_instruction: User message content
            temperature: Sampling temperature
            trace_name: Name for the Langfuse span

        Returns:
            Model response text (may be empty)

        Raises:
            LLMGatewayError: Provider unreachable, error status or bad envelope
        """
        if not self.settings.openai_api_key:
            raise LLMGatewayError("OpenAI API key is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_instruction},
            ],
            "temperature": temperature,
            "max_tokens": self.max_tokens,
        }

        span = self._start_span(trace_name, user_instruction, temperature)

        last_error: LLMGatewayError | None = None
        for attempt in range(self.max_retries + 1):
            try:
                content = await self._post_completion(payload)
                self._end_span(span, {"output": content, "attempts": attempt + 1})
                return content
            except LLMGatewayError as e:
                last_error = e
                logger.warning(f"{trace_name} failed (attempt {attempt + 1}): {e}")

        self._end_span(span, {"error": str(last_error)})
        raise last_error

    # =========================================================================
    # TRACING
    # =========================================================================

    def _start_span(self, name: str, prompt: str, temperature: float):
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(
                name=name,
                input=prompt,
                metadata={"model": self.model, "temperature": temperature},
            )
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(self, span, output: dict[str, Any]) -> None:
        if not span:
            return
        try:
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")

    def record_score(self, name: str, value: float, comment: str | None = None) -> None:
        """Send a numeric score event to Langfuse when tracing is enabled."""
        if not self.langfuse:
            return
        try:
            self.langfuse.create_score(name=name, value=value, comment=comment)
        except Exception as lf_err:
            logger.warning(f"Langfuse score failed: {lf_err}")
