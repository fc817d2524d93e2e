import logging
from typing import Optional

from flask import Flask, render_template_string, request

from .config import Configuration
from .constants import SERVICE_NAME
from .dispatcher import Dispatcher
from .models import MessageDecodeError, SourceMessage
from .translator import TranslationError, translate

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = """<html>
    <head><title>DingTalk To WeChat</title></head>
    <body>
        <h1>DingTalk To WeChat</h1>
        <h2>Receivers</h2>
        <ul>
        {% for receiver in receivers %}<li><code>{{ url_base }}receiver?name={{ receiver.name }}</code></li>{% endfor %}
        </ul>
    </body>
</html>"""


def create_app(configuration: Configuration, dispatcher: Optional[Dispatcher] = None):
    app = Flask(__name__)
    # Configuração é somente leitura, compartilhada entre as threads do servidor
    dispatcher = dispatcher or Dispatcher()

    @app.route('/', methods=['GET'])
    def index():
        return render_template_string(
            INDEX_TEMPLATE,
            receivers=configuration.receivers,
            url_base=request.url_root,
        )

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': SERVICE_NAME}, 200

    @app.route('/receiver', methods=['POST'])
    def receiver():
        receiver_name = request.args.get('name')
        target_receiver = configuration.get_receiver(receiver_name)
        if target_receiver is None:
            logger.error(f"Receiver desconhecido: {receiver_name}")
            return 'bad request', 400

        data = request.get_json(force=True, silent=True)
        if data is None:
            logger.error("Não foi possível decodificar o corpo da requisição do DingTalk")
            return 'bad request', 400

        try:
            source = SourceMessage.from_dict(data)
            message = translate(source)
        except (MessageDecodeError, TranslationError) as e:
            logger.error(f"Não foi possível traduzir a mensagem: {e}")
            return 'bad request', 400

        try:
            dispatcher.dispatch(target_receiver, message)
        except Exception as e:
            logger.exception(f"Erro inesperado ao despachar para receiver '{receiver_name}': {e}")
            return 'unknown error', 500

        return 'ok', 200

    return app
