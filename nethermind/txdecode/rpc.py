import logging

from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from nethermind.txdecode.exceptions import DecodingError, RpcError
from nethermind.txdecode.types.transaction import Transaction
from nethermind.txdecode.utils import to_bytes, to_hex

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("rpc")


def fetch_transaction(tx_hash: str | bytes, json_rpc: str | None = None, w3: Web3 | None = None) -> Transaction:
    """
    Fetches a transaction from a JSON RPC node with ``eth_getTransactionByHash``

    :param tx_hash: 32 byte transaction hash as hexstring or bytes
    :param json_rpc: RPC url.  Ignored if a Web3 instance is passed
    :param w3: Web3 instance to use for the request
    :return: Transaction with undecoded input
    :raises RpcError: if the hash is malformed, the transaction is not found, or the request fails
    """
    try:
        hash_bytes = to_bytes(tx_hash)
    except DecodingError as e:
        raise RpcError(f"Invalid transaction hash: {e}") from e

    if len(hash_bytes) != 32:
        raise RpcError(f"Transaction hash must be 32 bytes, got {len(hash_bytes)}")

    if w3 is None:
        if not json_rpc:
            raise RpcError("JSON RPC url required to fetch transactions.  Set with --json-rpc or JSON_RPC env var")
        w3 = Web3(Web3.HTTPProvider(json_rpc))

    logger.info(f"Fetching transaction {to_hex(hash_bytes)}")

    try:
        tx_response = w3.eth.get_transaction(hash_bytes)  # type: ignore[arg-type]
    except TransactionNotFound as e:
        raise RpcError(f"Transaction {to_hex(hash_bytes)} not found") from e
    except (Web3Exception, RequestException) as e:
        raise RpcError(f"RPC request for transaction {to_hex(hash_bytes)} failed: {e}") from e

    return Transaction(
        hash=hash_bytes,
        from_address=tx_response["from"],
        to_address=tx_response.get("to"),
        value=int(tx_response.get("value", 0)),
        input=to_bytes(tx_response.get("input", b"")),
        block_number=tx_response.get("blockNumber"),
    )
