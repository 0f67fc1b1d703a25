from dataclasses import dataclass
from typing import Dict, Optional

from pairing_relay.utils.error_codes import ErrorCodes, RelayError


@dataclass
class ConnectionRecord:
    """
    One open connection.

    `handle` is anything with `send(text)` and `is_open()`; on the server it
    is a network.ws_handle.WebSocketHandle.
    """
    id: str
    handle: object
    partner_id: Optional[str] = None


class ConnectionRegistry:
    def __init__(self):
        self._records: Dict[str, ConnectionRecord] = {}

    def register(self, conn_id: str, handle) -> ConnectionRecord:
        if conn_id in self._records:
            raise RelayError(ErrorCodes.ERR_DUPLICATE_ID, f"Connection {conn_id} already registered")
        record = ConnectionRecord(id=conn_id, handle=handle)
        self._records[conn_id] = record
        return record

    def lookup(self, conn_id: str) -> Optional[ConnectionRecord]:
        return self._records.get(conn_id)

    def is_open(self, conn_id: str) -> bool:
        record = self._records.get(conn_id)
        return record is not None and record.handle.is_open()

    def remove(self, conn_id: str) -> Optional[ConnectionRecord]:
        return self._records.pop(conn_id, None)

    def set_partner(self, conn_id: str, partner_id: Optional[str]) -> bool:
        record = self._records.get(conn_id)
        if record is None:
            return False
        record.partner_id = partner_id
        return True

    def partner_of(self, conn_id: str) -> Optional[str]:
        record = self._records.get(conn_id)
        return record.partner_id if record else None

    def ids(self):
        return list(self._records)

    def __contains__(self, conn_id) -> bool:
        return conn_id in self._records

    def __len__(self) -> int:
        return len(self._records)
