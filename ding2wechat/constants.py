import os

# Configurações globais de ambiente
CONFIG_FILE = os.getenv("CONFIG_FILE", "ding2wechat.yml")
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8080"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = "DEBUG" if DEBUG_MODE else os.getenv("LOG_LEVEL", "INFO").upper()

# Apenas valida o arquivo de configuração e encerra
DRY_RUN = os.getenv("DRY_RUN", "False").lower() == "true"

# Envio para os webhooks do WeChat
WEBHOOK_TIMEOUT_SECONDS = int(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10"))

SERVICE_NAME = "ding2wechat"

# Tipos de mensagem suportados (DingTalk -> WeChat)
MSGTYPE_TEXT = "text"
MSGTYPE_MARKDOWN = "markdown"
