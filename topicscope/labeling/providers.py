"""Text generation backends for LLM labeling.

Any object with an ``available`` attribute and a ``generate`` method can be
handed to ``LLMLabeler``. The two concrete backends wrap the OpenAI and
Anthropic SDKs with a lazily created client and a per-backend circuit
breaker.

SDK imports are deferred to first use so the package imports cleanly when
neither SDK is installed.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from topicscope.labeling.circuit_breaker import CircuitBreaker
from topicscope.labeling.config import LabelingConfig
from topicscope.labeling.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt into text."""

    available: bool

    def generate(
        self,
        prompt: str,
        *,
        max_tokens: int = 100,
        temperature: float = 0.3,
        response_format: dict[str, str] | None = None,
    ) -> str: ...


class BaseTextGenerator(ABC):
    """Shared plumbing for SDK-backed generators.

    Subclasses implement ``_complete``; ``generate`` routes it through the
    circuit breaker and, when JSON was requested, coerces the reply into a
    JSON object string.
    """

    name = "generator"

    def __init__(self, config: LabelingConfig | None = None) -> None:
        self._config = config or LabelingConfig()
        self._client: Any = None
        self._breaker = CircuitBreaker(
            failure_threshold=self._config.circuit_failure_threshold,
            recovery_timeout=self._config.circuit_recovery_timeout,
            name=self.name,
        )

    @property
    def breaker(self) -> CircuitBreaker:
        """Access circuit breaker state."""
        return self._breaker

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether the backend is configured and usable."""

    @abstractmethod
    def _get_client(self) -> Any:
        """Return the SDK client, importing the SDK on first use."""

    @abstractmethod
    def _complete(self, prompt: str, max_tokens: int, temperature: float, json_mode: bool) -> str:
        """Run one completion against the backend and return its text."""

    def generate(
        self,
        prompt: str,
        *,
        max_tokens: int = 100,
        temperature: float = 0.3,
        response_format: dict[str, str] | None = None,
    ) -> str:
        json_mode = bool(response_format) and response_format.get("type") == "json_object"
        text = self._breaker.call(self._complete, prompt, max_tokens, temperature, json_mode)
        if json_mode:
            return self.ensure_json_response(text)
        return text

    @staticmethod
    def ensure_json_response(text: str) -> str:
        """Return the first parseable JSON object in ``text``.

        Falls back to a synthesized object when the reply has none.
        """
        match = _JSON_OBJECT.search(text or "")
        if match:
            candidate = match.group(0)
            try:
                if isinstance(json.loads(candidate), dict):
                    return candidate
            except json.JSONDecodeError:
                logger.debug("Reply contained a brace span that is not JSON")
        return BaseTextGenerator.generate_fallback_json(text or "")

    @staticmethod
    def generate_fallback_json(text: str) -> str:
        """Wrap free text in the label response shape."""
        stripped = text.strip()
        first_line = stripped.splitlines()[0].strip() if stripped else ""
        return json.dumps(
            {
                "label": first_line or "Unknown",
                "description": stripped,
                "confidence": 0.5,
            }
        )


class OpenAIGenerator(BaseTextGenerator):
    """Chat-completions backend using the OpenAI SDK."""

    name = "openai"

    @property
    def available(self) -> bool:
        return self._config.openai_api_key is not None

    def _get_client(self) -> Any:
        """Lazy-initialize the OpenAI client."""
        if self._client is None:
            import openai

            api_key = self._config.openai_api_key
            key_str = api_key.get_secret_value() if api_key else None
            self._client = openai.OpenAI(api_key=key_str, timeout=self._config.llm_timeout)
        return self._client

    def _complete(self, prompt: str, max_tokens: int, temperature: float, json_mode: bool) -> str:
        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = self._get_client().chat.completions.create(
            model=self._config.openai_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )
        return response.choices[0].message.content or ""


class AnthropicGenerator(BaseTextGenerator):
    """Messages backend using the Anthropic SDK.

    The messages API has no JSON mode; the prompt already asks for JSON and
    ``ensure_json_response`` extracts it.
    """

    name = "anthropic"

    @property
    def available(self) -> bool:
        return self._config.anthropic_api_key is not None

    def _get_client(self) -> Any:
        """Lazy-initialize the Anthropic client."""
        if self._client is None:
            import anthropic

            api_key = self._config.anthropic_api_key
            key_str = api_key.get_secret_value() if api_key else None
            self._client = anthropic.Anthropic(api_key=key_str, timeout=self._config.llm_timeout)
        return self._client

    def _complete(self, prompt: str, max_tokens: int, temperature: float, json_mode: bool) -> str:
        response = self._get_client().messages.create(
            model=self._config.anthropic_model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )


def default_generator(config: LabelingConfig | None = None) -> TextGenerator | None:
    """Build the first configured backend, preferring OpenAI.

    Returns None when no backend has both an API key and an installed SDK.
    """
    config = config or LabelingConfig()
    for cls in (OpenAIGenerator, AnthropicGenerator):
        generator = cls(config)
        if not generator.available:
            continue
        try:
            generator._get_client()
        except ImportError:
            logger.warning("%s API key is set but the SDK is not installed", cls.name)
            continue
        logger.debug("Using %s for topic labels", cls.name)
        return generator
    return None
