"""Relay de webhooks DingTalk -> WeChat Work (企业微信).

Este pacote contém:
- constants: variáveis de ambiente do processo
- config: modelo de receivers/targets e carga do YAML
- models: mensagens de origem (DingTalk) e destino (WeChat)
- translator: tradução DingTalk -> WeChat
- annotator: injeção de menções por target
- dispatcher: envio (fanout) para os webhooks configurados
- controller: criação do Flask app e endpoints
"""

__version__ = "0.2.0"
