import json
import logging
from pathlib import Path
from typing import Any

from nethermind.txdecode.exceptions import AbiParseError

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("abis")

AbiEntries = list[str | dict[str, Any]]

# ERC-4337 EntryPoint v0.6 bundle submission
ENTRY_POINT_ABI: AbiEntries = [
    "function handleOps((address sender, uint256 nonce, bytes initCode, bytes callData, uint256 callGasLimit, "
    "uint256 verificationGasLimit, uint256 preVerificationGas, uint256 maxFeePerGas, uint256 maxPriorityFeePerGas, "
    "bytes paymasterAndData, bytes signature)[] ops, address payable beneficiary) external",
]

SIMPLE_ACCOUNT_ABI: AbiEntries = [
    "function execute(address dest, uint256 value, bytes calldata func)",
    "function executeBatch(address[] calldata dest, uint256[] calldata value, bytes[] calldata func)",
]

ERC20_ABI: AbiEntries = [
    "function approve(address spender, uint256 amount) external returns (bool)",
    "function transfer(address recipient, uint256 amount) external returns (bool)",
    "function transferFrom(address sender, address recipient, uint256 amount) external returns (bool)",
]

SOCKET_BRIDGE_ABI: AbiEntries = [
    "function bridge(address receiver_,uint256 amount_,uint256 msgGasLimit_,address connector_,"
    "bytes calldata execPayload_,bytes calldata options_)",
]

BUILTIN_ABIS: dict[str, AbiEntries] = {
    "EntryPoint": ENTRY_POINT_ABI,
    "SimpleAccount": SIMPLE_ACCOUNT_ABI,
    "ERC20": ERC20_ABI,
    "SocketBridge": SOCKET_BRIDGE_ABI,
}

ABI_FILE_SUFFIXES = (".json", ".abi")


def load_abi_file(path: str | Path) -> AbiEntries:
    """
    Loads ABI entries from a file.  Supported formats:

        * JSON list of ABI entries
        * JSON compiler artifact with the ABI stored under the ``abi`` key
        * JSON list of human-readable signatures
        * Text file with one human-readable signature per line.  Lines starting with ``#`` are ignored

    :param path: Path to ABI file
    :return: List of ABI entries that can be passed to ``DecodingDispatcher.add_abi``
    """
    file_path = Path(path)
    with open(file_path, "r", encoding="utf-8") as abi_file:
        contents = abi_file.read()

    stripped = contents.strip()
    if not stripped.startswith(("[", "{")):
        logger.debug(f"Loading {file_path.name} as human-readable signatures")
        return [line for line in stripped.splitlines() if line.strip()]

    try:
        abi_json = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise AbiParseError(f"Invalid JSON in ABI file {file_path}: {e}") from e

    if isinstance(abi_json, dict):
        if "abi" not in abi_json:
            raise AbiParseError(f"ABI file {file_path} is a JSON object without an 'abi' key")
        abi_json = abi_json["abi"]

    if not isinstance(abi_json, list):
        raise AbiParseError(f"ABI in {file_path} must be a list, got {type(abi_json).__name__}")

    return abi_json


def load_abi_directory(path: str | Path) -> dict[str, AbiEntries]:
    """
    Loads every ABI file within a directory.  ABIs are named by file stem, so ``ERC721.json`` is loaded as
    ``ERC721``

    :param path: Directory containing ABI files
    :return: Mapping of ABI name to ABI entries
    """
    directory = Path(path)
    if not directory.is_dir():
        raise AbiParseError(f"ABI directory {directory} does not exist")

    abis = {}
    for abi_path in sorted(directory.iterdir()):
        if abi_path.suffix.lower() not in ABI_FILE_SUFFIXES:
            continue
        if abi_path.stem in abis:
            raise AbiParseError(f"Multiple ABI files in {directory} are named {abi_path.stem}")
        abis[abi_path.stem] = load_abi_file(abi_path)

    logger.info(f"Loaded {len(abis)} ABIs from {directory}")
    return abis
