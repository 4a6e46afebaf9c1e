import logging
from typing import Any, Callable, Iterator, Sequence

from eth_typing import ABIComponent, ABIFunction
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from nethermind.txdecode.types.decoding import DecodedFunction
from nethermind.txdecode.utils import to_hex

from .utils import abi_to_signature, collapse_if_tuple, decode_evm_abi_from_types

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("decoding")


def _parameter_names(params: Sequence[ABIComponent]) -> list[str]:
    """Returns parameter names, falling back to the parameter position for unnamed parameters"""
    return [param.get("name") or str(index) for index, param in enumerate(params)]


def _array_item_type(typ: str) -> str:
    """Strips the outermost array dimension.  ie, uint256[2][] -> uint256[2]"""
    return typ[: typ.rindex("[")]


def _walk_dynamic_bytes(
    value: Any, typ: str, components: Sequence[ABIComponent] | None, path: str
) -> Iterator[tuple[str, bytes]]:
    if typ.endswith("]"):
        item_type = _array_item_type(typ)
        for index, item in enumerate(value):
            yield from _walk_dynamic_bytes(item, item_type, components, f"{path}[{index}]")

    elif typ == "tuple":
        # Tuples formatted as dicts are keyed by component name, otherwise by position
        for index, (name, component) in enumerate(zip(_parameter_names(components or []), components or [])):
            key = name if isinstance(value, dict) else str(index)
            item = value[name] if isinstance(value, dict) else value[index]
            yield from _walk_dynamic_bytes(item, component["type"], component.get("components"), f"{path}.{key}")

    elif typ == "bytes":
        yield path, value


class EVMFunctionDecoder:
    """
    Represents a single EVM function selector.  Parses input & output types to efficiently decode
    transactions & nested calldata with its selector
    """

    name: str
    abi_name: str
    function_signature: str
    signature: bytes
    priority: int

    _inputs: list[ABIComponent]
    _input_types: list[str]
    _input_names: list[str]
    _outputs: list[ABIComponent]
    _output_types: list[str]
    _output_names: list[str]

    _formatters: dict[str, Callable[[Any], Any]]

    def __init__(self, abi_function: ABIFunction, abi_name: str, priority: int = 0):
        self.priority = priority
        self.abi_name = abi_name
        self.name = abi_function["name"]

        self._inputs = list(abi_function.get("inputs", []))
        self._input_types = [collapse_if_tuple(param) for param in self._inputs]
        self._input_names = _parameter_names(self._inputs)

        self._outputs = list(abi_function.get("outputs", []))
        self._output_types = [collapse_if_tuple(param) for param in self._outputs]
        self._output_names = _parameter_names(self._outputs)

        self.function_signature = abi_to_signature(abi_function)
        self.signature = function_signature_to_4byte_selector(self.function_signature)

        self._formatters = {"address": to_checksum_address}

    def __repr__(self):
        return f"EVMFunctionDecoder({self.abi_name}: {self.function_signature} -> {to_hex(self.signature)})"

    def decode(
        self, calldata: bytes | list[bytes], result: bytes | list[bytes] | None = None
    ) -> DecodedFunction | None:
        """
        Decodes Function data using the provided calldata.  Calldata should not include the 4 byte selector.

        :param calldata: Argument bytes, or a list of 32 byte words
        :param result: Return data bytes, or a list of 32 byte words
        :return: DecodedFunction
        """
        input_data = calldata if isinstance(calldata, (bytes, bytearray)) else b"".join(calldata)

        decoded_input = decode_evm_abi_from_types(self._input_types, input_data)
        if decoded_input is None:
            logger.debug(f"Error Decoding {self.function_signature} For Input {to_hex(bytes(input_data))}")
            return None

        formatted_input = self.apply_formatters(decoded_input, self._inputs)
        return_input = dict(zip(self._input_names, formatted_input, strict=True))

        if result and len(result) > 0:
            output_data = result if isinstance(result, (bytes, bytearray)) else b"".join(result)
            decoded_output = decode_evm_abi_from_types(self._output_types, output_data)
            if decoded_output is None:
                logger.debug(
                    f"Error Decoding {self.function_signature} for Function Result {to_hex(bytes(output_data))}"
                )
                return None

            formatted_output = self.apply_formatters(decoded_output, self._outputs)
            return_output = dict(zip(self._output_names, formatted_output, strict=True))
        else:
            return_output = None

        return DecodedFunction(
            abi_name=self.abi_name,
            name=self.name,
            function_signature=self.function_signature,
            selector=self.signature,
            inputs=return_input,
            outputs=return_output,
        )

    def apply_formatters(self, decoding_result: Sequence[Any], params: Sequence[ABIComponent]) -> list[Any]:
        """
        Applies currently loaded formatters to decoding result.  Arrays are returned as lists, and tuples are
        returned as dicts keyed by component name if every component is uniquely named.

        :param decoding_result: List of values returned from ABI Decoding
        :param params: ABI parameter for each entry in decoding_result
        """
        return [
            self._format_value(value, param["type"], param.get("components"))
            for value, param in zip(decoding_result, params, strict=True)
        ]

    def _format_value(self, value: Any, typ: str, components: Sequence[ABIComponent] | None) -> Any:
        if typ.endswith("]"):
            item_type = _array_item_type(typ)
            return [self._format_value(item, item_type, components) for item in value]

        if typ == "tuple":
            components = components or []
            formatted = [
                self._format_value(item, component["type"], component.get("components"))
                for item, component in zip(value, components, strict=True)
            ]
            names = [component.get("name", "") for component in components]
            if all(names) and len(set(names)) == len(names):
                return dict(zip(names, formatted))
            return tuple(formatted)

        formatter = self._formatters.get(typ)
        if formatter is not None:
            return formatter(value)
        return value

    def iter_dynamic_bytes(self, inputs: dict[str, Any]) -> Iterator[tuple[str, bytes]]:
        """
        Yields the path and value of every dynamic bytes parameter within decoded inputs.  Paths use the
        parameter names, ie ``ops[0].callData``
        """
        for name, param in zip(self._input_names, self._inputs, strict=True):
            yield from _walk_dynamic_bytes(inputs[name], param["type"], param.get("components"), name)

    def id_str(self, full_signature: bool = True) -> str:
        """
        Returns ID string for function.  If full_signature is True, returns the function name & parameter types.
        If full_signature is false, returns function name
        """
        if full_signature:
            return self.function_signature
        return self.name
