import logging
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuração inválida (YAML malformado, chave desconhecida, tipo errado)."""


class DuplicateReceiverError(ConfigError):
    def __init__(self, name: str):
        super().__init__(f"duplicate receiver: {name}")
        self.name = name


class _ConfigModel(BaseModel):
    # Chaves desconhecidas são rejeitadas; números sem aspas no YAML viram string
    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_missing(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class Target(_ConfigModel):
    url: str = ""
    mentioned_list: Tuple[str, ...] = ()
    mentioned_mobile_list: Tuple[str, ...] = ()


class Receiver(_ConfigModel):
    name: str = ""
    targets: Tuple[Target, ...] = ()


class Configuration(_ConfigModel):
    """
    Receivers carregados uma única vez na inicialização.
    Imutável: compartilhada entre as threads do servidor sem lock.
    """

    receivers: Tuple[Receiver, ...] = ()

    _by_name: Dict[str, Receiver] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        by_name: Dict[str, Receiver] = {}
        for receiver in self.receivers:
            if receiver.name in by_name:
                raise DuplicateReceiverError(receiver.name)
            by_name[receiver.name] = receiver
        self._by_name = by_name

    def get_receiver(self, name: Optional[str]) -> Optional[Receiver]:
        if name is None:
            return None
        return self._by_name.get(name)

    @property
    def receiver_names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.receivers)


class _StrictLoader(yaml.SafeLoader):
    """SafeLoader que rejeita chaves duplicadas dentro de um mesmo mapping."""


def _construct_strict_mapping(loader, node, deep=False):
    loader.flatten_mapping(node)
    seen = set()
    for key_node, _ in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in seen:
            raise yaml.constructor.ConstructorError(
                None, None, f"chave duplicada: {key!r}", key_node.start_mark
            )
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


_StrictLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_strict_mapping
)


def load(data: Any) -> Configuration:
    """
    Constrói a Configuration a partir de um documento já decodificado.
    Campos desconhecidos são rejeitados; nomes de receiver repetidos geram
    DuplicateReceiverError (o primeiro repetido, na ordem de definição).
    URLs não são validadas e receivers sem targets são aceitos.
    """
    if data is None:
        data = {}
    try:
        return Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"configuração inválida: {e}") from e


def loads(content: str) -> Configuration:
    try:
        data = yaml.load(content, Loader=_StrictLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML inválido: {e}") from e
    return load(data)


def load_file(path: str) -> Configuration:
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Falha ao ler arquivo de configuração '{path}': {e}") from e

    config = loads(content)
    logger.info(f"Configuração carregada de '{path}': {len(config.receivers)} receiver(s)")
    return config
