"""Flask application for the food ordering backend."""

from __future__ import annotations

from typing import Optional

from flask import Flask

from .config import AppConfig, load_env
from .db.session import build_engine, init_db, make_session_factory
from .routes import api
from .services.cart_locks import CartLockRegistry
from .services.cart_service import CartService
from .services.logging import set_log_level
from .services.order_service import OrderService
from .services.payment_gateway import build_payment_gateway


def create_app(config: Optional[AppConfig] = None, *, gateway=None, clock=None) -> Flask:
    config = config or load_env()
    set_log_level(config.log_level)

    engine = build_engine(config.database_url)
    init_db(engine)
    session_factory = make_session_factory(engine)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["FOODORDER_CONFIG"] = config

    order_kwargs = {"clock": clock} if clock else {}
    components = {
        "engine": engine,
        "session_factory": session_factory,
        "cart_service": CartService(session_factory),
        "order_service": OrderService(
            session_factory,
            gateway=gateway or build_payment_gateway(config),
            locks=CartLockRegistry(),
            currency=config.currency,
            **order_kwargs,
        ),
    }
    app.extensions["foodorder_components"] = components

    app.register_blueprint(api.api_bp)

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=8080, debug=False)


if __name__ == "__main__":
    main()
