from dataclasses import replace

from .config import Target
from .models import DestinationMessage, TextMessage


def annotate(base: DestinationMessage, target: Target) -> DestinationMessage:
    """Gera a variante da mensagem para um target, sem alterar `base`."""
    if isinstance(base, TextMessage):
        return replace(
            base,
            mentioned_list=tuple(target.mentioned_list),
            mentioned_mobile_list=tuple(target.mentioned_mobile_list),
        )
    # markdown: sem menções
    return replace(base)
