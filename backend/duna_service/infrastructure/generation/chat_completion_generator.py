"""Chat-completions client — implements the CodeGenerator interface.

Talks to any OpenAI-compatible endpoint (OpenAI, OpenRouter, a local
gateway) using httpx. Only the generated text is returned; everything else
in the response is ignored.
"""

import json
import logging

import httpx

from duna_service.application.interfaces.code_generator import CodeGenerator
from duna_service.domain.exceptions import GenerationError

logger = logging.getLogger(__name__)

_SYSTEM_MESSAGE = (
    "You write Solidity smart contracts. Reply with Solidity source code only."
)


def strip_markdown_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around the model output."""
    code = text.strip()
    if not code.startswith("```"):
        return code
    lines = code.split("\n")
    # Drop the opening fence line (``` or ```solidity) and a closing fence.
    body = lines[1:]
    if body and body[-1].strip() == "```":
        body = body[:-1]
    return "\n".join(body).strip()


class ChatCompletionGenerator(CodeGenerator):
    """Infrastructure adapter — requests Solidity source from an LLM endpoint.

    One POST per call, no internal retry. Network failures, non-2xx statuses
    and bodies without generated text all raise GenerationError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        *,
        max_tokens: int = 2048,
        temperature: float = 0.2,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "chat-completions"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, prompt: str) -> dict:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": _SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def generate(self, prompt: str) -> str:
        url = f"{self._base_url}/chat/completions"
        payload = self._build_payload(prompt)

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                response = await client.post(url, headers=self._get_headers(), json=payload)
            except httpx.HTTPError as exc:
                logger.warning("Generation request to %s failed: %s", url, type(exc).__name__)
                raise GenerationError(f"request failed: {type(exc).__name__}") from exc

            if not response.is_success:
                self._raise_generation_error(response)

            try:
                data = response.json()
            except (json.JSONDecodeError, ValueError) as exc:
                raise GenerationError("response body is not valid JSON") from exc

            text = self._extract_text(data)
        finally:
            if should_close:
                await client.aclose()

        source = strip_markdown_fences(text)
        if not source:
            raise GenerationError("response contained only an empty code block")
        logger.info(
            "[%s] Generated %d characters of source with model %s",
            self.provider_name,
            len(source),
            self._model,
        )
        return source

    @staticmethod
    def _extract_text(data: object) -> str:
        """Pull the generated text out of a completion response body."""
        if not isinstance(data, dict):
            raise GenerationError("response body is not a JSON object")
        if data.get("error"):
            error = data["error"] if isinstance(data["error"], dict) else {}
            raise GenerationError(error.get("message", "provider returned an error"))

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise GenerationError("no choices in response")

        choice = choices[0]
        message = choice.get("message")
        text = message.get("content") if isinstance(message, dict) else None
        if text is None:
            # Legacy /completions shape
            text = choice.get("text")
        if not isinstance(text, str) or not text.strip():
            raise GenerationError("response contained no generated text")
        return text

    @staticmethod
    def _raise_generation_error(response: httpx.Response) -> None:
        """Raise GenerationError from a non-2xx httpx Response."""
        try:
            data = response.json()
            error = data.get("error", {})
            message = error.get("message", response.reason_phrase) if isinstance(error, dict) else str(error)
        except Exception:
            message = response.reason_phrase or "unexpected status"

        raise GenerationError(message, status_code=response.status_code)
