# financeiro/main.py
import logging

from financeiro.config import FLASK_SECRET_KEY, INSTALLMENT_INSERT_MODE, LOG_LEVEL
from financeiro.core.db import get_supabase_client
from financeiro.web.app_setup import setup_app

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

config = {
    "SECRET_KEY": FLASK_SECRET_KEY,
    "CLIENT_FACTORY": get_supabase_client,
    "INSTALLMENT_INSERT_MODE": INSTALLMENT_INSERT_MODE,
}
logger.debug(f"Configurações da aplicação: {list(config.keys())}")

# A variável wsgi_app é a que o Gunicorn serve (financeiro.main:wsgi_app)
wsgi_app = setup_app(config)
