import logging
import traceback
from typing import Any, Sequence

from eth_abi import decode as eth_abi_decode
from eth_abi.exceptions import DecodingError as EthAbiDecodingError
from eth_abi.exceptions import InsufficientDataBytes, NonEmptyPaddingBytes
from eth_typing import ABIComponent, ABIFunction

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("decoding")


def abi_to_signature(abi: ABIFunction) -> str:
    """
    Converts ABI to signature.

    >>> from nethermind.txdecode.decoding.utils import abi_to_signature
    >>> abi_to_signature({
    ...     "type": "function",
    ...     "name": "approve",
    ...     "inputs": [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
    ... })
    'approve(address,uint256)'

    """
    collapsed = [collapse_if_tuple(abi_input) for abi_input in abi.get("inputs", [])]
    return f"{abi['name']}({','.join(collapsed)})"


def collapse_if_tuple(abi_params: ABIComponent | dict[str, Any]) -> str:
    """
    Returns the canonical type of an ABI parameter.  Tuple components are collapsed recursively into a
    parenthesized type list, keeping any array suffix of the tuple.

    >>> collapse_if_tuple({"type": "uint256", "name": "amount"})
    'uint256'
    >>> collapse_if_tuple(
    ...     {
    ...         "type": "tuple[]",
    ...         "components": [{"name": "to", "type": "address"}, {"name": "data", "type": "bytes"}],
    ...     }
    ... )
    '(address,bytes)[]'
    """
    typ = abi_params["type"]
    if not isinstance(typ, str):
        raise TypeError(f"ABI parameter type must be a string, got {typ!r}")

    if not typ.startswith("tuple"):
        return typ

    inner_types = ",".join(collapse_if_tuple(c) for c in abi_params.get("components", []))
    return f"({inner_types}){typ.removeprefix('tuple')}"


def filter_functions(contract_abi: Sequence[dict[str, Any]]) -> list[ABIFunction]:
    """Filters out all non-function ABIs"""
    return [abi for abi in contract_abi if abi.get("type", "function") == "function"]  # type: ignore[misc]


def signature_to_name(function_sig: str) -> str:
    """
    Removes types from function signature

    >>> signature_to_name("transferFrom(address,address,uint256)")
    'transferFrom'
    >>> signature_to_name("approve")
    'approve'
    """
    return function_sig.partition("(")[0]


def decode_evm_abi_from_types(types: list[str], data: bytes | bytearray) -> tuple[Any, ...] | None:
    """
    Decodes ABI data from types and data bytes.  Malformed data is logged at debug level and returns None.
    Unexpected decoder failures are logged as errors with their traceback, and also return None.

    :param types: Canonical ABI types, ie ``["address", "(uint256,bytes)[]"]``
    :param data: ABI encoded data, without a function selector
    """
    try:
        return eth_abi_decode(types, data)
    except (InsufficientDataBytes, NonEmptyPaddingBytes, EthAbiDecodingError, OverflowError) as e:
        logger.debug(f"{type(e).__name__} while decoding 0x{data.hex()} as ({','.join(types)}): {e}")
        return None
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(
            f"Unknown error while decoding 0x{data.hex()} as ({','.join(types)}): "
            f"{''.join(traceback.format_exception(type(e), e, e.__traceback__))}"
        )
        return None
