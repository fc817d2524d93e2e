from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import MSGTYPE_MARKDOWN, MSGTYPE_TEXT


class MessageDecodeError(ValueError):
    """Corpo recebido não corresponde ao formato de mensagem do DingTalk."""


# ---------- Origem (DingTalk) ----------

class _SourceModel(BaseModel):
    # Campos extras do DingTalk (at, title, actionCard, ...) são ignorados
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_missing(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class SourceText(_SourceModel):
    content: str = ""


class SourceMarkdown(_SourceModel):
    text: str = ""


class SourceMessage(_SourceModel):
    message_type: str = Field(default="", alias="msgtype")
    text: Optional[SourceText] = None
    markdown: Optional[SourceMarkdown] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SourceMessage":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MessageDecodeError(f"corpo do DingTalk inválido: {e}") from e


# ---------- Destino (WeChat) ----------

@dataclass(frozen=True)
class TextMessage:
    content: str
    mentioned_list: Tuple[str, ...] = ()
    mentioned_mobile_list: Tuple[str, ...] = ()

    message_type = MSGTYPE_TEXT

    def to_payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"content": self.content}
        # Listas vazias são omitidas do JSON
        if self.mentioned_list:
            body["mentioned_list"] = list(self.mentioned_list)
        if self.mentioned_mobile_list:
            body["mentioned_mobile_list"] = list(self.mentioned_mobile_list)
        return {"msgtype": self.message_type, "text": body}


@dataclass(frozen=True)
class MarkdownMessage:
    """Markdown do WeChat não suporta menções via mentioned_list."""

    content: str

    message_type = MSGTYPE_MARKDOWN

    def to_payload(self) -> Dict[str, Any]:
        return {"msgtype": self.message_type, "markdown": {"content": self.content}}


DestinationMessage = Union[TextMessage, MarkdownMessage]
