import logging
import re
from typing import Any, Iterable

from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import parse as parse_abi_type
from eth_typing import ABIComponent, ABIFunction

from nethermind.txdecode.exceptions import AbiParseError

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("decoding")

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_LEADING_WORD = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*")
_BASIC_TYPE = re.compile(r"^([a-z]+[0-9]*(?:x[0-9]+)?)((?:\[[0-9]*\])*)$")
_ARRAY_SUFFIX = re.compile(r"^((?:\[[0-9]*\])*)")

_TYPE_ALIASES = {
    "uint": "uint256",
    "int": "int256",
    "byte": "bytes1",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
}

# Data locations and address payability do not change the encoding
_PARAM_MODIFIERS = {"calldata", "memory", "storage", "payable", "indexed"}
_VISIBILITY_MODIFIERS = {"external", "public", "internal", "private", "virtual", "override", "nonpayable"}
_STATE_MUTABILITY = {"view", "pure", "payable"}
_NON_FUNCTION_KINDS = {"event", "error", "constructor", "fallback", "receive", "struct"}


def _matching_paren(text: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    raise AbiParseError(f"Unbalanced parentheses in '{text}'")


def _split_top_level(text: str) -> list[str]:
    """Splits a parameter list on commas that are not nested inside a tuple"""
    if not text.strip():
        return []

    parts, depth, current = [], 0, ""
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += char
    parts.append(current)

    if depth != 0:
        raise AbiParseError(f"Unbalanced parentheses in parameter list '{text}'")
    return parts


def _normalize_basic_type(typ: str) -> str:
    match = _BASIC_TYPE.match(typ)
    if match is None:
        raise AbiParseError(f"Invalid ABI type '{typ}'")

    base, array_dims = match.groups()
    normalized = _TYPE_ALIASES.get(base, base) + array_dims

    try:
        parse_abi_type(normalized).validate()
    except (ParseError, ABITypeError) as e:
        raise AbiParseError(f"Invalid ABI type '{typ}': {e}") from e

    return normalized


def parse_parameter(text: str) -> ABIComponent:
    """
    Parses a single human-readable parameter into an ABI parameter dict.

    >>> parse_parameter("address payable beneficiary")
    {'name': 'beneficiary', 'type': 'address'}
    >>> parse_parameter("(uint256 a, bytes b)[] ops")["type"]
    'tuple[]'
    """
    text = text.strip()
    if not text:
        raise AbiParseError("Empty parameter in signature")

    if text.startswith("tuple("):
        text = text[len("tuple") :]

    components: list[ABIComponent] | None = None
    if text.startswith("("):
        end = _matching_paren(text, 0)
        components = [parse_parameter(component) for component in _split_top_level(text[1:end])]
        remainder = text[end + 1 :]
        array_dims = _ARRAY_SUFFIX.match(remainder).group(1)  # type: ignore[union-attr]
        abi_type = "tuple" + array_dims
        remainder = remainder[len(array_dims) :]
    else:
        typ, _, remainder = text.partition(" ")
        abi_type = _normalize_basic_type(typ)

    name = ""
    for word in remainder.split():
        if word in _PARAM_MODIFIERS:
            continue
        if name or not _IDENTIFIER.match(word):
            raise AbiParseError(f"Unexpected token '{word}' in parameter '{text}'")
        name = word

    param: dict[str, Any] = {"name": name, "type": abi_type}
    if components is not None:
        param["components"] = components
    return param  # type: ignore[return-value]


def parse_signature(text: str) -> ABIFunction:
    """
    Parses a human-readable function signature into an ABI function dict.  The leading ``function`` keyword,
    parameter names, data locations, visibility and a ``returns (...)`` clause are all optional.

    >>> abi = parse_signature("function approve(address spender, uint256 amount) external returns (bool)")
    >>> [(p["name"], p["type"]) for p in abi["inputs"]]
    [('spender', 'address'), ('amount', 'uint256')]
    >>> abi["outputs"]
    [{'name': '', 'type': 'bool'}]

    :param text: Signature as it would be written in solidity, or in an ethers human-readable ABI
    :raises AbiParseError: if the signature is malformed or does not describe a function
    """
    body = " ".join(text.split())
    keyword = _LEADING_WORD.match(body)
    if keyword and keyword.group(0) == "function":
        body = body[len("function") :].strip()
    elif keyword and keyword.group(0) in _NON_FUNCTION_KINDS:
        raise AbiParseError(f"'{text}' is a {keyword.group(0)}, not a function")

    open_index = body.find("(")
    if open_index == -1:
        raise AbiParseError(f"Missing parameter list in signature '{text}'")

    name = body[:open_index].strip()
    if not _IDENTIFIER.match(name):
        raise AbiParseError(f"Invalid function name '{name}' in signature '{text}'")

    close_index = _matching_paren(body, open_index)
    inputs = [parse_parameter(param) for param in _split_top_level(body[open_index + 1 : close_index])]

    outputs: list[ABIComponent] = []
    state_mutability = "nonpayable"
    tail = body[close_index + 1 :].strip()
    while tail:
        if tail.startswith("returns"):
            tail = tail[len("returns") :].strip()
            if not tail.startswith("("):
                raise AbiParseError(f"Missing return parameters in signature '{text}'")
            end = _matching_paren(tail, 0)
            outputs = [parse_parameter(param) for param in _split_top_level(tail[1:end])]
            tail = tail[end + 1 :].strip()
            continue

        word, _, tail = tail.partition(" ")
        if word in _STATE_MUTABILITY:
            state_mutability = word
        elif word not in _VISIBILITY_MODIFIERS:
            raise AbiParseError(f"Unexpected token '{word}' in signature '{text}'")

    return {  # type: ignore[typeddict-item]
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": outputs,
        "stateMutability": state_mutability,
    }


def _validate_json_params(params: Any, where: str):
    if not isinstance(params, list):
        raise AbiParseError(f"Parameters of {where} must be a list, got {type(params).__name__}")

    for param in params:
        if not isinstance(param, dict) or not isinstance(param.get("type"), str):
            raise AbiParseError(f"Parameter {param!r} of {where} must be a dict with a string 'type'")
        if param["type"].startswith("tuple"):
            _validate_json_params(param.get("components"), f"tuple parameter {param.get('name', '')!r} of {where}")


def _validate_json_function(entry: dict[str, Any]):
    """Checks the fields of a JSON ABI function entry that decoders rely on"""
    name = entry.get("name")
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise AbiParseError(f"JSON ABI function entry has an invalid or missing 'name': {entry!r}")

    for field in ("inputs", "outputs"):
        _validate_json_params(entry.get(field, []), f"function {name}")


def parse_abi(entries: Iterable[str | dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Normalizes a mixed list of human-readable signatures and JSON ABI dicts into a JSON ABI.  Blank lines and
    comments are ignored, and events, errors and constructors written in human-readable form are skipped.

    :param entries: Human-readable signatures and/or JSON ABI entries
    :return: List of JSON ABI entries
    :raises AbiParseError: if a signature is malformed, or a JSON function entry is missing its name or types
    """
    abi: list[dict[str, Any]] = []
    for entry in entries:
        if isinstance(entry, dict):
            if entry.get("type", "function") == "function":
                _validate_json_function(entry)
            abi.append(entry)
            continue

        if not isinstance(entry, str):
            raise AbiParseError(f"ABI entries must be strings or dicts, got {type(entry)}")

        stripped = entry.strip()
        if not stripped or stripped.startswith(("#", "//")):
            continue

        keyword = _LEADING_WORD.match(stripped)
        if keyword and keyword.group(0) in _NON_FUNCTION_KINDS:
            logger.debug(f"Skipping non-function ABI entry: {stripped}")
            continue

        abi.append(parse_signature(stripped))  # type: ignore[arg-type]

    return abi
