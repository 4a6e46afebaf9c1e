from .dispatcher import DecodingDispatcher
from .function_decoders import EVMFunctionDecoder
from .human_readable import parse_abi, parse_signature

__all__ = ["DecodingDispatcher", "EVMFunctionDecoder", "parse_abi", "parse_signature"]
