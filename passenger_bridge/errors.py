"""Exceptions raised by the passenger bridge.

``BridgeError`` subclasses map one-to-one onto the HTTP status the handler
answers with. ``OdooRpcError`` and its children describe failures talking to
Odoo and always end up as a generic 500.
"""

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Error that the handler turns into a JSON ``{"error": ...}`` envelope."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ClientInputError(BridgeError):
    status_code = 400


class AuthError(BridgeError):
    status_code = 401


class NotFoundError(BridgeError):
    """Nothing matches the token. Carries a ``status`` key, not ``error``."""

    status_code = 404

    def to_body(self) -> Dict[str, Any]:
        return {"status": "not_found", "message": self.message}


class MethodNotAllowed(BridgeError):
    status_code = 405


class ConfigError(BridgeError):
    status_code = 500


class OdooRpcError(Exception):
    """Base class for failures of a JSON-RPC call to Odoo."""


class RpcTransportError(OdooRpcError):
    """The HTTP request failed or Odoo answered with a non-2xx status."""

    def __init__(self, status_code: Optional[int], body: str):
        if status_code is None:
            message = f"Odoo transport error: {body}"
        else:
            message = f"Odoo HTTP error {status_code}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RpcProtocolError(OdooRpcError):
    """Odoo answered 2xx but the payload carries a JSON-RPC error."""

    def __init__(self, error: Any):
        super().__init__(f"Odoo JSON-RPC error: {error}")
        self.error = error
