from eth_utils import add_0x_prefix, decode_hex, is_hex, remove_0x_prefix

from nethermind.txdecode.exceptions import DecodingError


def to_bytes(data: str | bytes | bytearray, pad: int | None = None) -> bytes:
    """
    Converts a hexstring or bytes-like value to bytes.  Hexstrings can be passed with or without the 0x prefix,
    and surrounding whitespace & newlines are stripped.

    >>> to_bytes("0x095ea7b3")
    b'\\t^\\xa7\\xb3'
    >>> to_bytes("01", pad=4)
    b'\\x00\\x00\\x00\\x01'

    :param data: hexstring or bytes
    :param pad: If provided, left-pads the result with zero bytes to this length
    """
    if isinstance(data, (bytes, bytearray)):
        result = bytes(data)
    else:
        hex_str = "".join(data.split())
        if hex_str in ("", "0x", "0X"):
            result = b""
        else:
            if not is_hex(hex_str):
                raise DecodingError(f"Invalid hexstring: {data[:80]}")
            stripped = remove_0x_prefix(hex_str)  # type: ignore[arg-type]
            if len(stripped) % 2:
                raise DecodingError(f"Hexstring has an odd number of characters: {len(stripped)}")
            result = decode_hex(stripped)

    if pad is not None:
        return result.rjust(pad, b"\x00")
    return result


def to_hex(data: bytes) -> str:
    """Returns 0x prefixed hexstring for bytes"""
    return add_0x_prefix(data.hex())  # type: ignore[arg-type]
