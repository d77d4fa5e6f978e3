"""Thin JSON-RPC client for the three Odoo calls the bridge needs."""

import logging

import requests

from .errors import RpcProtocolError, RpcTransportError

logger = logging.getLogger(__name__)


class OdooRpcClient:
    """Issue ``authenticate``, ``search_read`` and ``write`` against ``/jsonrpc``.

    Every method takes the connection details explicitly so a single client
    can be shared by handlers built from different configs. Calls are plain
    request/response: no retries, and the timeout is whatever was passed in
    (``None`` leaves it to ``requests``).
    """

    def __init__(self, timeout=None, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _rpc(self, url, service, method, args):
        endpoint = f"{url.rstrip('/')}/jsonrpc"
        payload = {
            "jsonrpc": "2.0",
            "method": "call",
            "params": {
                "service": service,
                "method": method,
                "args": args,
            },
            "id": 1,
        }
        try:
            response = self.session.post(
                endpoint,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcTransportError(None, str(e)) from e

        if not response.ok:
            raise RpcTransportError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise RpcProtocolError(f"invalid JSON response: {response.text[:200]}") from e

        if data.get("error"):
            raise RpcProtocolError(data["error"])
        return data.get("result")

    def authenticate(self, url, db, username, api_key):
        """Return the uid for ``username``, or ``False`` if Odoo rejects the key."""
        logger.debug("Authenticating %s on %s", username, db)
        return self._rpc(url, "common", "authenticate", [db, username, api_key, {}])

    def execute_kw(self, url, db, uid, api_key, model, method, args, kwargs=None):
        logger.debug("execute_kw %s.%s", model, method)
        call_args = [db, uid, api_key, model, method, args]
        if kwargs:
            call_args.append(kwargs)
        return self._rpc(url, "object", "execute_kw", call_args)

    def search_read(self, url, db, uid, api_key, model, domain, fields):
        records = self.execute_kw(
            url, db, uid, api_key, model, "search_read", [domain], {"fields": fields}
        )
        return records or []

    def write(self, url, db, uid, api_key, model, record_id, values):
        result = self.execute_kw(
            url, db, uid, api_key, model, "write", [[record_id], values]
        )
        return bool(result)
