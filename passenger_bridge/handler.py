"""
Request handling for the passenger endpoint.

``PassengerHandler.handle`` takes the raw method, body and ``Origin`` header
of one request and returns a ``HandlerResponse``; it knows nothing about
Flask or any serverless runtime, so both adapters in ``main.py`` share it.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .config import BridgeConfig
from .errors import (
    AuthError,
    BridgeError,
    ClientInputError,
    ConfigError,
    MethodNotAllowed,
    NotFoundError,
)
from .odoo_rpc import OdooRpcClient
from .passenger_fields import (
    DEPARTURE_FIELDS,
    DEPARTURE_MODEL,
    PASSENGER_FIELDS,
    PASSENGER_MODEL,
    TOKEN_FIELD,
    departure_id_of,
    departure_to_external,
    passenger_to_external,
    passenger_to_internal,
)

logger = logging.getLogger(__name__)


@dataclass
class HandlerResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def body_text(self) -> str:
        return "" if self.body is None else json.dumps(self.body)


def _mask(token: str) -> str:
    return token[:4] + "..." if len(token) > 4 else "..."


class PassengerHandler:
    """Load or save the passengers of one booking token."""

    def __init__(self, config: BridgeConfig, client: OdooRpcClient):
        self.config = config
        self.client = client

    def cors_headers(self, origin: Optional[str] = None) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": self.config.resolve_origin(origin),
            "Access-Control-Allow-Headers": "Content-Type",
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Vary": "Origin",
        }

    def handle(
        self,
        method: str,
        body: Optional[Union[str, bytes]],
        origin: Optional[str] = None,
        base64_encoded: bool = False,
    ) -> HandlerResponse:
        headers = self.cors_headers(origin)
        method = (method or "").upper()

        if method == "OPTIONS":
            return HandlerResponse(204, headers)

        try:
            if method != "POST":
                raise MethodNotAllowed("Method not allowed")
            payload = self._parse_body(body, base64_encoded)
            status_code, result = self._dispatch(payload)
        except BridgeError as e:
            if e.status_code >= 500:
                logger.error("Rejected request: %s", e.message)
            else:
                logger.info("Rejected request (%s): %s", e.status_code, e.message)
            return HandlerResponse(e.status_code, headers, e.to_body())
        except Exception as e:
            logger.exception("Error processing passenger request")
            return HandlerResponse(500, headers, {"error": "Server error", "details": str(e)})

        return HandlerResponse(status_code, headers, result)

    def _parse_body(self, body, base64_encoded=False) -> Dict[str, Any]:
        # binascii.Error and UnicodeDecodeError are both ValueErrors.
        try:
            if body and base64_encoded:
                body = base64.b64decode(body, validate=True)
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            payload = json.loads(body or "{}")
        except ValueError:
            raise ClientInputError("Invalid JSON body")
        if not isinstance(payload, dict):
            raise ClientInputError("Invalid JSON body")
        return payload

    def _dispatch(self, payload):
        token = payload.get("token")
        if not token or not isinstance(token, str):
            raise ClientInputError("Missing token")

        if self.config.invalid:
            raise ConfigError("Invalid server configuration: " + ", ".join(self.config.invalid))
        if not self.config.is_complete():
            raise ConfigError("Odoo credentials not configured on server")

        uid = self.client.authenticate(
            self.config.url, self.config.db, self.config.username, self.config.api_key
        )
        if not uid:
            raise AuthError("Authentication to Odoo failed")

        action = payload.get("action")
        logger.info("Action %r for token %s", action, _mask(token))
        if action == "load":
            return 200, self.load(uid, token)
        if action == "save":
            return 200, self.save(uid, token, payload.get("passengers"))
        raise ClientInputError("Unknown action")

    def _search_read(self, uid, model, domain, fields):
        return self.client.search_read(
            self.config.url, self.config.db, uid, self.config.api_key, model, domain, fields
        )

    def load(self, uid, token):
        records = self._search_read(
            uid, PASSENGER_MODEL, [[TOKEN_FIELD, "=", token]], PASSENGER_FIELDS
        )
        if not records:
            raise NotFoundError("No passengers found for this token")

        return {
            "status": "ok",
            "departure": self._load_departure(uid, records),
            "passengers": [passenger_to_external(r) for r in records],
        }

    def _load_departure(self, uid, records):
        # One departure per token is assumed; only the first passenger counts.
        departure_id = departure_id_of(records[0])
        others = {departure_id_of(r) for r in records[1:]} - {None, departure_id}
        if others:
            logger.warning(
                "Passengers reference several departures %s; using %s",
                sorted(others), departure_id,
            )
        if departure_id is None:
            return None

        departures = self._search_read(
            uid, DEPARTURE_MODEL, [["id", "=", departure_id]], DEPARTURE_FIELDS
        )
        if not departures:
            return None
        return departure_to_external(departures[0])

    def save(self, uid, token, passengers):
        if not isinstance(passengers, list):
            raise ClientInputError("Missing passengers array for save action")

        existing = self._search_read(uid, PASSENGER_MODEL, [[TOKEN_FIELD, "=", token]], ["id"])
        valid_ids = {r["id"] for r in existing}

        confirmed = 0
        for entry in passengers:
            if not isinstance(entry, dict):
                continue
            passenger_id = entry.get("id")
            if (
                not isinstance(passenger_id, int)
                or isinstance(passenger_id, bool)
                or passenger_id not in valid_ids
            ):
                logger.info(
                    "Ignoring passenger entry with %s id not linked to token",
                    type(passenger_id).__name__,
                )
                continue

            values = passenger_to_internal(entry)
            if not values:
                continue

            ok = self.client.write(
                self.config.url, self.config.db, uid, self.config.api_key,
                PASSENGER_MODEL, passenger_id, values,
            )
            if ok:
                confirmed += 1
            else:
                logger.warning("Odoo did not confirm write on passenger %s", passenger_id)

        logger.info("Odoo confirmed %d writes for %d submitted passengers", confirmed, len(passengers))
        return {"status": "ok"}
