class ErrorCodes:
    SUCCESS = 0
    ERR_NETWORK = 101
    ERR_MALFORMED = 201
    ERR_UNKNOWN_TYPE = 202
    ERR_MISSING_FIELD = 203
    ERR_DUPLICATE_ID = 301
    ERR_RATE_LIMITED = 401
    ERR_INTERNAL = 500


class RelayError(Exception):
    def __init__(self, code, message):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ProtocolError(RelayError):
    """Malformed input from a client. The message text is sent back verbatim."""

    def __init__(self, message, code=ErrorCodes.ERR_MALFORMED):
        super().__init__(code, message)
