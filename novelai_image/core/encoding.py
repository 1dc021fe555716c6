import base64


def to_base64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    """Data URL suitable for an <img src=...> attribute."""
    return f"data:{mime_type};base64,{to_base64(data)}"
