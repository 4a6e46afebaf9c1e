from typing import Any, Iterator, Protocol

from nethermind.txdecode.types.decoding import DecodedFunction


class AbiFunctionDecoder(Protocol):
    """Abstract Protocol for ABI Function Decoders"""

    name: str
    signature: bytes
    function_signature: str
    abi_name: str

    priority: int

    def decode(
        self, calldata: bytes | list[bytes], result: bytes | list[bytes] | None = None
    ) -> DecodedFunction | None:
        """Decode Function from calldata and result bytes"""
        raise NotImplementedError()

    def iter_dynamic_bytes(self, inputs: dict[str, Any]) -> Iterator[tuple[str, bytes]]:
        """Yields the path and value of every dynamic bytes parameter within decoded inputs"""
        raise NotImplementedError()

    def id_str(self, full_signature: bool = True) -> str:
        """Return Human Readable representation of the function signature"""
        raise NotImplementedError()
