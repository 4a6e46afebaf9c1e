from dataclasses import dataclass, field
from typing import Any


@dataclass
class InnerCall:
    """Calldata embedded within a bytes parameter of another call"""

    path: str
    """ Location of the bytes value within the parent inputs, ie ``ops[0].callData`` or ``func[1]`` """

    decoded: "DecodedFunction"


@dataclass
class DecodedFunction:
    """Function Decoding Result"""

    abi_name: str
    name: str

    function_signature: str
    selector: bytes

    inputs: dict[str, Any]
    outputs: dict[str, Any] | None = None

    inner_calls: list[InnerCall] = field(default_factory=list)

    def flatten(self) -> list["DecodedFunction"]:
        """Returns this call followed by every inner call, depth first"""
        calls = [self]
        for inner in self.inner_calls:
            calls.extend(inner.decoded.flatten())
        return calls
