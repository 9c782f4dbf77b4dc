"""
Server — the cart engine over HTTP.

    uvicorn examples.server:app --reload
    # then open http://127.0.0.1:8000/docs
"""

from quotecart import configure_logging, load_settings
from quotecart.cart import SessionPool
from quotecart.wire import create_app
from examples._infra import seed_catalog, seed_registry

settings = load_settings()
configure_logging(settings)

app = create_app(SessionPool(seed_catalog(), seed_registry()), settings=settings)
