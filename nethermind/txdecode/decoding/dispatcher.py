import logging
from typing import Any, Iterable, Sequence, TypedDict

from eth_utils import function_signature_to_4byte_selector
from rich.table import Table

from nethermind.txdecode.abis import BUILTIN_ABIS
from nethermind.txdecode.exceptions import DecodingError, SelectorNotFound
from nethermind.txdecode.types.decoding import DecodedFunction, InnerCall
from nethermind.txdecode.types.transaction import Transaction
from nethermind.txdecode.utils import to_bytes, to_hex

from .base import AbiFunctionDecoder
from .function_decoders import EVMFunctionDecoder
from .human_readable import parse_abi, parse_signature
from .utils import abi_to_signature, filter_functions, signature_to_name

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("decoding")

DEFAULT_MAX_DEPTH = 8


def _split_evm_data(data: bytes) -> list[bytes]:
    """Splits EVM Calldata into a list of 32 byte words"""
    return [data[i : i + 32] for i in range(0, len(data), 32)]


class GroupedAbi(TypedDict):
    """Grouped Abi Data Helper Class for Visualizing DecodingDispatcher to console"""

    priority: int
    functions: list[AbiFunctionDecoder]


class DecodingDispatcher:
    """

    Dispatcher for Multi-ABI Calldata Decoding.  Can add ABIs for different contracts, and handle conflicts between
    ABIs with conflicting function selectors

    """

    loaded_abis: dict[str, int]
    """ Mapping between loaded ABI Names and their priorities """

    function_decoders: dict[bytes, AbiFunctionDecoder]
    """ Dictionary mapping function selectors to the correctly prioritized Decoder """

    def __init__(self):
        self.loaded_abis = {}
        self.function_decoders = {}

    def add_abi(
        self,
        abi_name: str,
        abi_data: Iterable[str | dict[str, Any]],
        priority: int = 0,
    ):
        """
        Adds ABI to DecodingDispatcher.  Dispatcher will track all the currently loaded ABIs, and their priorities.
        If 2 abis share a function selector, the ABI with the higher priority will be used to decode that selector.

        :param abi_name: Name of ABI
        :param abi_data: JSON ABI entries, human-readable function signatures, or a mix of both
        :param priority: Priority of ABI.  Higher is better, negative priority is lower than default
        :return:
        """
        if abi_name in self.loaded_abis:
            error_msg = f"{abi_name} ABI already loaded into dispatcher"
            logger.error(error_msg)
            raise DecodingError(error_msg)

        logger.info(f"Adding ABI {abi_name} to dispatcher with priority {priority}")

        abi_functions = filter_functions(parse_abi(abi_data))
        functions = [EVMFunctionDecoder(f, abi_name, priority) for f in abi_functions]

        if functions:
            self.add_function_decoders(functions)
        else:
            logger.warning(f"ABI {abi_name} does not define any functions")

        self.loaded_abis[abi_name] = priority
        logger.info(f"Successfully Added {abi_name} ABI to DecodingDispatcher")

    def add_function_decoders(
        self,
        functions: Sequence[AbiFunctionDecoder],
    ):
        """
        Adds function decoders from a given ABI to the dispatcher.  If a function selector is already present, the
        decoder with the higher priority will be used to decode that function selector.

        :param functions:
        :return:
        """
        logger.debug(f"Adding {functions[0].abi_name} Functions: {', '.join([f.name for f in functions])}")
        for func in functions:
            existing_decoder = self.function_decoders.get(func.signature, None)
            if existing_decoder is None or existing_decoder.priority < func.priority:
                logger.debug(
                    f"Adding function {func.name} from ABI {func.abi_name} to dispatcher "
                    f"with selector {to_hex(func.signature)}"
                )
                self.function_decoders[func.signature] = func

            elif existing_decoder.priority > func.priority:
                logger.debug(
                    f"Function {func.name} with Signature {to_hex(func.signature)} already "
                    f"defined in ABI {existing_decoder.abi_name} with Priority: {existing_decoder.priority}"
                )
                continue

            else:
                logger.warning(
                    f"ABI {func.abi_name} and {existing_decoder.abi_name} share the decoder for the function "
                    f"{func.name}, and both are set to priority {func.priority}.  "
                    f"Increase or decrease the priority of an ABI to resolve this conflict."
                )
                continue

    @classmethod
    def from_abis(
        cls,
        abi_names: Sequence[str] | None = None,
        extra_abis: dict[str, Sequence[str | dict[str, Any]]] | None = None,
    ) -> "DecodingDispatcher":
        """
        Loads DecodingDispatcher from the ABIs bundled with txdecode.  Used for the CLI

        :param abi_names:
            List of built-in ABI Names to load into Dispatcher.  If None, all built-in ABIs are loaded
        :param extra_abis:
            Mapping of ABI Name to ABI entries that are loaded alongside the built-in ABIs
        """
        if abi_names is None:
            abi_names = list(BUILTIN_ABIS.keys())

        missing = set(abi_names) - set(BUILTIN_ABIS.keys())
        if missing:
            raise DecodingError(
                f"Unknown built-in ABIs: {', '.join(sorted(missing))}.  "
                f"Available ABIs: {', '.join(BUILTIN_ABIS.keys())}"
            )

        dispatcher = cls()
        for abi_name in abi_names:
            dispatcher.add_abi(abi_name, BUILTIN_ABIS[abi_name])

        for abi_name, abi_data in (extra_abis or {}).items():
            dispatcher.add_abi(abi_name, abi_data)

        return dispatcher

    def get_function_decoder(self, function: str) -> AbiFunctionDecoder | None:
        """
        Returns the loaded decoder for a function name or full signature.  If a bare function name is passed and
        multiple overloads are loaded, a DecodingError is raised.

        :param function: ``approve`` or ``approve(address,uint256)``
        """
        if "(" in function:
            canonical = abi_to_signature(parse_signature(function))
            return self.function_decoders.get(function_signature_to_4byte_selector(canonical))

        matches = [d for d in self.function_decoders.values() if signature_to_name(d.function_signature) == function]
        if len(matches) > 1:
            raise DecodingError(
                f"Multiple functions named {function} loaded: {', '.join(d.function_signature for d in matches)}.  "
                f"Pass the full signature to select an overload"
            )
        return matches[0] if matches else None

    def decode_calldata(
        self,
        calldata: str | bytes,
        function_name: str | None = None,
        nested: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> DecodedFunction:
        """
        Decodes calldata with the currently loaded ABIs.

        :param calldata: Hexstring or bytes, including the 4 byte function selector
        :param function_name:
            If provided, the calldata must be a call to this function.  Accepts a name or a full signature
        :param nested:
            If True, bytes parameters that contain calldata for a loaded function are also decoded and attached
            to the result as inner calls
        :param max_depth: Maximum depth of nested calldata to decode
        :return: DecodedFunction
        :raises DecodingError: if the calldata cannot be decoded
        """
        data = to_bytes(calldata)
        if len(data) < 4:
            raise DecodingError(f"Calldata must contain a 4 byte function selector, got {len(data)} bytes")

        selector = data[:4]

        if function_name is not None:
            expected = self.get_function_decoder(function_name)
            if expected is None:
                raise DecodingError(f"Function {function_name} is not defined in any loaded ABI")
            if expected.signature != selector:
                raise DecodingError(
                    f"Data signature {to_hex(selector)} does not match function {expected.function_signature} "
                    f"({to_hex(expected.signature)})"
                )

        function_decoder = self.function_decoders.get(selector)
        if function_decoder is None:
            raise SelectorNotFound(f"Function with selector {to_hex(selector)} not found in loaded ABIs")

        decoded = function_decoder.decode(calldata=data[4:])
        if decoded is None:
            raise DecodingError(
                f"Could not decode {len(data) - 4} bytes of arguments for {function_decoder.function_signature}"
            )

        if nested:
            self._decode_inner_calls(function_decoder, decoded, depth=1, max_depth=max_depth)

        return decoded

    def _decode_inner_calls(
        self,
        function_decoder: AbiFunctionDecoder,
        decoded: DecodedFunction,
        depth: int,
        max_depth: int,
    ):
        if depth > max_depth:
            logger.debug(f"Max nesting depth of {max_depth} reached while decoding {decoded.function_signature}")
            return

        for path, value in function_decoder.iter_dynamic_bytes(decoded.inputs):
            if len(value) < 4:
                continue

            inner_decoder = self.function_decoders.get(value[:4])
            if inner_decoder is None:
                continue

            inner = inner_decoder.decode(calldata=value[4:])
            if inner is None:
                logger.debug(f"{path} starts with selector of {inner_decoder.function_signature} but failed to decode")
                continue

            logger.debug(f"Decoded {path} as {inner_decoder.function_signature}")
            self._decode_inner_calls(inner_decoder, inner, depth + 1, max_depth)
            decoded.inner_calls.append(InnerCall(path=path, decoded=inner))

    def decode_transaction(self, tx: Transaction):
        """
        Decodes Transaction input with currently loaded ABIs.  Modifies the transaction in place, setting the
        function_name and decoded_input if the selector is known.

        :param tx:
        :return:
        """
        assert isinstance(tx.input, bytes), "EVM Transactions must have input bytes"

        function_decoder = self.function_decoders.get(tx.input[:4])
        if function_decoder is None:
            return
        decode_result = function_decoder.decode(calldata=_split_evm_data(tx.input[4:]))
        if decode_result:
            tx.decoded_input = decode_result.inputs
            tx.function_name = decode_result.name

    def _group_abis(self) -> dict[str, GroupedAbi]:
        output_dict: dict[str, GroupedAbi] = {
            name: {"priority": priority, "functions": []} for name, priority in self.loaded_abis.items()
        }

        for func in self.function_decoders.values():
            output_dict[func.abi_name]["functions"].append(func)

        return output_dict

    def decoder_table(self, full_signatures: bool = False) -> Table:
        """
        Returns a rich table with all the currently loaded ABIs, and the functions each ABI will decode.
        Used for printing out abi information in the CLI

        :param full_signatures:
        :return:
        """
        abi_table = Table(title="[bold magenta]EVM Decoder ABIs", min_width=80, show_lines=True)

        abi_table.add_column("Name")
        abi_table.add_column("Priority")
        abi_table.add_column("Functions")
        abi_table.add_column("Selectors")

        grouped_abis = self._group_abis()
        sorted_abis = sorted(grouped_abis.items(), key=lambda x: x[1]["priority"], reverse=True)

        for abi_name, abi_params in sorted_abis:
            funcs = sorted(abi_params["functions"], key=lambda f: f.id_str(full_signatures))
            abi_table.add_row(
                abi_name,
                str(abi_params["priority"]),
                "\n".join(f.id_str(full_signatures) for f in funcs),
                "\n".join(to_hex(f.signature) for f in funcs),
            )

        return abi_table
