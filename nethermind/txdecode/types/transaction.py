from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Transaction:
    """Transaction fetched from a JSON RPC node.  Decoded fields are filled in place by the DecodingDispatcher"""

    hash: bytes
    from_address: str
    to_address: str | None
    value: int
    input: bytes
    block_number: int | None = None

    function_name: str | None = None
    decoded_input: dict[str, Any] | None = None
