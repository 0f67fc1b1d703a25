def validate_connection_id(value) -> bool:
    """
    A destination must be a non-empty string. Whether it names a live
    connection is the registry's business, not ours.
    """
    return isinstance(value, str) and bool(value)


def validate_message_text(payload) -> bool:
    """Chat payloads must be an object carrying a non-empty string `text`."""
    if not isinstance(payload, dict):
        return False
    text = payload.get("text")
    return isinstance(text, str) and bool(text)


def validate_message_length(message: str, max_length: int = 1000) -> bool:
    """
    Client-side length check before a chat line goes out.
    The relay itself does not cap text length.
    """
    if not message:
        return False
    return len(message) <= max_length
