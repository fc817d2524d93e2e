import logging
import sys

from ding2wechat import __version__
from ding2wechat.config import ConfigError, load_file
from ding2wechat.constants import APP_HOST, APP_PORT, CONFIG_FILE, DEBUG_MODE, DRY_RUN, LOG_LEVEL
from ding2wechat.controller import create_app

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("ding2wechat")


def main():
    logger.info(f"Iniciando ding2wechat {__version__}")

    try:
        configuration = load_file(CONFIG_FILE)
    except ConfigError as e:
        logger.critical(f"Erro ao carregar arquivo de configuração: {e}")
        return 1

    # Modo dry-run: apenas valida a configuração
    if DRY_RUN:
        logger.info("Configuração validada com sucesso.")
        return 0

    app = create_app(configuration)
    logger.info(f"Escutando em {APP_HOST}:{APP_PORT}")
    app.run(host=APP_HOST, port=APP_PORT, debug=DEBUG_MODE, threaded=True, use_reloader=False)
    return 0


if __name__ == '__main__':
    sys.exit(main())
