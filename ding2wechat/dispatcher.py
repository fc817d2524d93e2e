import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from .annotator import annotate
from .config import Receiver, Target
from .constants import WEBHOOK_TIMEOUT_SECONDS
from .models import DestinationMessage

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def redact_url(url: str) -> str:
    """Remove query string e fragmento: no WeChat o `?key=` do webhook é a credencial."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def _redact_error(error: Exception, url: str) -> str:
    # Exceções do requests costumam incluir a URL completa
    message = str(error)
    query = urlsplit(url).query
    if query:
        message = message.replace(query, "<redacted>")
    return message


@dataclass
class TargetOutcome:
    url: str
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code is not None and 200 <= self.status_code < 300


@dataclass
class DispatchReport:
    receiver: str
    outcomes: List[TargetOutcome] = field(default_factory=list)

    @property
    def delivered(self) -> List[TargetOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[TargetOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class Dispatcher:
    """
    Envia uma mensagem traduzida para todos os targets de um receiver.
    Best-effort: uma tentativa por target, sem retry; falhas de um target
    são registradas em log e não interrompem os demais.
    """

    def __init__(self, timeout: float = WEBHOOK_TIMEOUT_SECONDS):
        self.timeout = timeout

    def dispatch(self, receiver: Receiver, base_message: DestinationMessage) -> DispatchReport:
        report = DispatchReport(receiver=receiver.name)
        for target in receiver.targets:
            report.outcomes.append(self._send(receiver, target, base_message))

        if report.failed:
            logger.warning(
                f"Receiver '{receiver.name}': {len(report.delivered)}/{len(report.outcomes)} target(s) entregues"
            )
        else:
            logger.info(f"Receiver '{receiver.name}': mensagem enviada para {len(report.outcomes)} target(s)")
        return report

    def _send(self, receiver: Receiver, target: Target, base_message: DestinationMessage) -> TargetOutcome:
        outcome = TargetOutcome(url=target.url)
        safe_url = redact_url(target.url)
        message = annotate(base_message, target)

        try:
            body = json.dumps(message.to_payload(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"Falha ao serializar mensagem para '{safe_url}' (receiver '{receiver.name}'): {e}")
            outcome.error = f"serialization: {e}"
            return outcome

        logger.debug(f"Enviando requisição para webhook do WeChat {safe_url}: {body.decode('utf-8')}")
        try:
            resp = requests.post(target.url, data=body, headers=JSON_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            error = _redact_error(e, target.url)
            logger.error(f"Falha ao enviar para webhook '{safe_url}' (receiver '{receiver.name}'): {error}")
            outcome.error = error
            return outcome

        outcome.status_code = resp.status_code
        logger.debug(f"Resposta de '{safe_url}': {resp.status_code} {resp.text}")
        if not 200 <= resp.status_code < 300:
            logger.warning(
                f"Webhook '{safe_url}' (receiver '{receiver.name}') respondeu {resp.status_code}: {resp.text}"
            )
        return outcome
