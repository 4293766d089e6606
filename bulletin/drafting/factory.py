"""Factory for creating NarrativeDrafter implementations from configuration."""

from __future__ import annotations

import typing as typ

from bulletin.drafting.config import DraftingBackend
from bulletin.drafting.errors import OpenAIConfigError
from bulletin.drafting.template import TemplateDrafter

if typ.TYPE_CHECKING:
    from bulletin.drafting.config import DraftingConfig
    from bulletin.drafting.protocol import NarrativeDrafter


def create_drafter(config: DraftingConfig) -> NarrativeDrafter:
    """Create the drafter selected by ``config``.

    Parameters
    ----------
    config
        Drafting configuration, already validated.

    Returns
    -------
    NarrativeDrafter
        ``TemplateDrafter`` for the ``template`` backend, otherwise an
        ``OpenAINarrativeDrafter``.

    Raises
    ------
    OpenAIConfigError
        If the ``openai`` backend is selected without client settings.

    Examples
    --------
    >>> from bulletin.drafting.config import DraftingConfig
    >>> isinstance(create_drafter(DraftingConfig()), TemplateDrafter)
    True

    """
    if config.backend is DraftingBackend.TEMPLATE:
        return TemplateDrafter()

    if config.openai is None:
        raise OpenAIConfigError.missing_api_key()

    from bulletin.drafting.openai_client import OpenAINarrativeDrafter

    return OpenAINarrativeDrafter(config.openai)
