from flask import Flask, Response, request
import logging
import os

import dotenv

from passenger_bridge import BridgeConfig, OdooRpcClient, PassengerHandler

dotenv.load_dotenv()

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config=None, client=None):
    config = config or BridgeConfig.from_env()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    app = Flask(__name__)
    # One client, and so one connection pool, for the life of the app.
    bridge = PassengerHandler(config, client or OdooRpcClient(timeout=config.timeout))

    @app.route("/", methods=ALL_METHODS)
    @app.route("/passenger", methods=ALL_METHODS)
    def passenger():
        result = bridge.handle(
            request.method,
            request.get_data(),
            request.headers.get("Origin"),
        )
        return Response(result.body_text(), status=result.status_code, headers=result.headers)

    return app


def handler(event, context):
    """Serverless entry point for API Gateway / Netlify style events."""
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    config = BridgeConfig.from_env()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    with OdooRpcClient(timeout=config.timeout) as client:
        result = PassengerHandler(config, client).handle(
            event.get("httpMethod", ""),
            event.get("body"),
            headers.get("origin"),
            base64_encoded=bool(event.get("isBase64Encoded")),
        )
    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": result.body_text(),
    }


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    create_app().run(host="0.0.0.0", port=port)
