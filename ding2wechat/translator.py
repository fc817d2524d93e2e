from .constants import MSGTYPE_MARKDOWN, MSGTYPE_TEXT
from .models import DestinationMessage, MarkdownMessage, SourceMessage, TextMessage


class TranslationError(ValueError):
    pass


class MissingFieldError(TranslationError):
    def __init__(self, field_name: str):
        super().__init__(f"malformed dingtalk body: missing {field_name} field")
        self.field_name = field_name


class UnknownTypeError(TranslationError):
    def __init__(self, message_type: str):
        super().__init__(f"unknown msgtype: {message_type}")
        self.message_type = message_type


def translate(source: SourceMessage) -> DestinationMessage:
    """
    Converte uma mensagem DingTalk no equivalente WeChat.
    Menções não são preenchidas aqui; cada target recebe as suas no annotator.
    """
    msgtype = source.message_type

    if msgtype == MSGTYPE_TEXT:
        if source.text is None:
            raise MissingFieldError("text")
        return TextMessage(content=source.text.content)

    if msgtype == MSGTYPE_MARKDOWN:
        if source.markdown is None:
            raise MissingFieldError("markdown")
        return MarkdownMessage(content=source.markdown.text)

    raise UnknownTypeError(msgtype)
