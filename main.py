"""ASGI entry point: `uvicorn main:app`."""

import logging

from api.app import create_app
from core.config import load_config

config = load_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(config)
