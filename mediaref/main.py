import logging
import os

from flask import Flask

from mediaref.api.routes import api
from mediaref.config import get_config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s:%(message)s")


# ================================
# INIT
# ================================
def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(api)

    config = get_config()
    logging.info("Storage base: %s", config.storage_base)
    logging.info("Fallback image: %s", config.fallback_url)

    return app


# ================================
# START
# ================================
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    create_app().run(host="0.0.0.0", port=port)
