import json
from dataclasses import asdict, is_dataclass

from nethermind.txdecode.utils import to_hex


class HexEnabledJsonEncoder(json.JSONEncoder):
    """JSON Encoder that converts bytes to 0x prefixed hex, and dataclasses to objects"""

    def default(self, o):
        if isinstance(o, (bytes, bytearray)):
            return to_hex(bytes(o))
        if is_dataclass(o) and not isinstance(o, type):
            return asdict(o)
        return json.JSONEncoder.default(self, o)
