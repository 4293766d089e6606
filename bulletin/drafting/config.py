"""Configuration for narrative drafting backends."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from bulletin.common.env import optional_str, parse_float, parse_int
from bulletin.drafting.errors import DraftingConfigError, OpenAIConfigError

if typ.TYPE_CHECKING:
    from bulletin.common.env import Environ

# Default configuration values - single source of truth
_DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
_DEFAULT_MODEL = "gpt-4o-mini"
_DEFAULT_TIMEOUT_S = 120.0
_DEFAULT_TEMPERATURE = 0.4
_DEFAULT_MAX_TOKENS = 4096

# Validation bounds for temperature (OpenAI API range)
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


class DraftingBackend(enum.StrEnum):
    """Available drafting backends."""

    OPENAI = "openai"
    TEMPLATE = "template"


@dataclasses.dataclass(frozen=True, slots=True)
class OpenAIDraftingConfig:
    """Configuration for the OpenAI-compatible drafting client.

    Attributes
    ----------
    api_key
        API key for the chat-completions endpoint.
    endpoint
        Chat completions endpoint URL.
    model
        Model identifier to use for completions.
    timeout_s
        Request timeout in seconds.
    temperature
        Sampling temperature (0.0 to 2.0).
    max_tokens
        Maximum tokens in the completion response.

    """

    api_key: str
    endpoint: str = _DEFAULT_ENDPOINT
    model: str = _DEFAULT_MODEL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    temperature: float = _DEFAULT_TEMPERATURE
    max_tokens: int = _DEFAULT_MAX_TOKENS

    @classmethod
    def from_env(cls, environ: Environ) -> OpenAIDraftingConfig:
        """Build configuration from ``BULLETIN_OPENAI_*`` variables.

        Raises
        ------
        OpenAIConfigError
            If ``BULLETIN_OPENAI_API_KEY`` is unset or blank.
        ConfigurationError
            If temperature or max tokens are malformed.

        """
        raw_api_key = environ.get("BULLETIN_OPENAI_API_KEY")
        if raw_api_key is None:
            raise OpenAIConfigError.missing_api_key()
        api_key = raw_api_key.strip()
        if not api_key:
            raise OpenAIConfigError.empty_api_key()

        return cls(
            api_key=api_key,
            endpoint=optional_str(environ, "BULLETIN_OPENAI_ENDPOINT")
            or _DEFAULT_ENDPOINT,
            model=optional_str(environ, "BULLETIN_OPENAI_MODEL") or _DEFAULT_MODEL,
            temperature=parse_float(
                environ,
                "BULLETIN_OPENAI_TEMPERATURE",
                _DEFAULT_TEMPERATURE,
                minimum=MIN_TEMPERATURE,
                maximum=MAX_TEMPERATURE,
            ),
            max_tokens=parse_int(
                environ, "BULLETIN_OPENAI_MAX_TOKENS", _DEFAULT_MAX_TOKENS, minimum=1
            ),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class DraftingConfig:
    """Selected drafting backend and, for ``openai``, its client settings."""

    backend: DraftingBackend = DraftingBackend.TEMPLATE
    openai: OpenAIDraftingConfig | None = None

    @classmethod
    def from_env(
        cls, environ: Environ, *, force_template: bool = False
    ) -> DraftingConfig:
        """Build configuration from ``BULLETIN_DRAFTING_BACKEND``.

        The OpenAI credential is only required when the ``openai`` backend is
        selected; ``force_template`` disables drafting regardless of the
        environment.
        """
        if force_template:
            return cls(backend=DraftingBackend.TEMPLATE)

        raw_backend = optional_str(environ, "BULLETIN_DRAFTING_BACKEND") or "openai"
        try:
            backend = DraftingBackend(raw_backend.lower())
        except ValueError as exc:
            raise DraftingConfigError.invalid_backend(
                raw_backend, (b.value for b in DraftingBackend)
            ) from exc

        if backend is DraftingBackend.TEMPLATE:
            return cls(backend=backend)
        return cls(backend=backend, openai=OpenAIDraftingConfig.from_env(environ))
