from .config import BridgeConfig
from .errors import OdooRpcError, RpcProtocolError, RpcTransportError
from .handler import HandlerResponse, PassengerHandler
from .odoo_rpc import OdooRpcClient

__all__ = [
    "BridgeConfig",
    "HandlerResponse",
    "OdooRpcClient",
    "OdooRpcError",
    "PassengerHandler",
    "RpcProtocolError",
    "RpcTransportError",
]
