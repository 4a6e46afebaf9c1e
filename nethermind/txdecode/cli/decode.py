import json
import logging

import click

from nethermind.txdecode.cli.utils import (
    abi_dir_option,
    abi_file_option,
    abi_option,
    group_options,
    json_rpc_option,
    signature_option,
    verbose_option,
)
from nethermind.txdecode.decoding.dispatcher import DEFAULT_MAX_DEPTH

# isort: skip_file
# pylint: disable=too-many-arguments,import-outside-toplevel,too-many-locals

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("cli")


@click.command("decode")
@click.argument("calldata", required=False)
@group_options(abi_option, abi_file_option, signature_option, abi_dir_option)
@click.option(
    "--function",
    "-f",
    "function_name",
    type=str,
    default=None,
    help="Function name or signature the calldata must match, ie 'bridge' or 'approve(address,uint256)'",
)
@click.option("--tx-hash", "tx_hash", type=str, default=None, help="Fetch calldata for a transaction over JSON RPC")
@json_rpc_option
@click.option(
    "--nested/--no-nested",
    default=True,
    show_default=True,
    help="Decode bytes parameters that contain calldata for a loaded function",
)
@click.option("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, show_default=True, help="Max nested call depth")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print decoded call as JSON")
@verbose_option
def decode_command(
    calldata: str | None,
    abi_names: tuple[str, ...],
    abi_files: tuple[str, ...],
    signatures: tuple[str, ...],
    abi_dir: str | None,
    function_name: str | None,
    tx_hash: str | None,
    json_rpc: str | None,
    nested: bool,
    max_depth: int,
    json_output: bool,
    verbose: bool,
):
    """
    Decode CALLDATA with the loaded ABIs.  Pass '-' to read calldata from stdin, or use --tx-hash to
    fetch the calldata of a transaction.
    """
    from nethermind.txdecode.cli.utils import cli_logger_config, load_cli_dispatcher
    from nethermind.txdecode.exceptions import DecodingError, RpcError
    from nethermind.txdecode.render import decoded_to_dict, decoded_to_tree
    from nethermind.txdecode.rpc import fetch_transaction
    from nethermind.txdecode.types.utils import HexEnabledJsonEncoder
    from nethermind.txdecode.utils import to_hex

    console = cli_logger_config(root_logger, verbose)

    if calldata is not None and tx_hash is not None:
        raise click.UsageError("Pass either CALLDATA or --tx-hash, not both")
    if calldata is None and tx_hash is None:
        raise click.UsageError("Missing CALLDATA.  Pass calldata as an argument, '-' for stdin, or use --tx-hash")

    if calldata == "-":
        calldata = click.get_text_stream("stdin").read()

    tx = None
    try:
        dispatcher = load_cli_dispatcher(abi_names, abi_files, signatures, abi_dir)

        if tx_hash is not None:
            tx = fetch_transaction(tx_hash, json_rpc=json_rpc)
            calldata = tx.input  # type: ignore[assignment]

        decoded = dispatcher.decode_calldata(
            calldata,  # type: ignore[arg-type]
            function_name=function_name,
            nested=nested,
            max_depth=max_depth,
        )
    except (DecodingError, RpcError) as e:
        logger.error(e)
        raise SystemExit(1)

    if tx is not None:
        tx.function_name = decoded.name
        tx.decoded_input = decoded.inputs

    if json_output:
        payload = decoded_to_dict(decoded)
        if tx is not None:
            payload = {"transaction": tx, **payload}
        click.echo(json.dumps(payload, cls=HexEnabledJsonEncoder, indent=2))
        return

    if tx is not None:
        console.print(
            f"[bold]Transaction[/bold] {to_hex(tx.hash)}  from {tx.from_address}  "
            f"to {tx.to_address}  value {tx.value}"
        )
    console.print(decoded_to_tree(decoded))


@click.command("selector")
@click.argument("signature")
def selector_command(signature: str):
    """Print the canonical signature and 4 byte selector of a human-readable function SIGNATURE"""
    from eth_utils import function_signature_to_4byte_selector

    from nethermind.txdecode.cli.utils import cli_logger_config
    from nethermind.txdecode.decoding import parse_signature
    from nethermind.txdecode.decoding.utils import abi_to_signature
    from nethermind.txdecode.exceptions import AbiParseError
    from nethermind.txdecode.utils import to_hex

    cli_logger_config(root_logger)

    try:
        canonical = abi_to_signature(parse_signature(signature))
    except AbiParseError as e:
        logger.error(e)
        raise SystemExit(1)

    click.echo(f"{to_hex(function_signature_to_4byte_selector(canonical))}  {canonical}")


@click.command("list-abis")
@group_options(abi_option, abi_file_option, signature_option, abi_dir_option)
@click.option("--full-signatures", is_flag=True, default=False)
def list_abis_command(
    abi_names: tuple[str, ...],
    abi_files: tuple[str, ...],
    signatures: tuple[str, ...],
    abi_dir: str | None,
    full_signatures: bool,
):
    """Lists the loaded ABIs, along with the functions and selectors each ABI will decode"""
    from nethermind.txdecode.cli.utils import cli_logger_config, load_cli_dispatcher
    from nethermind.txdecode.exceptions import DecodingError

    console = cli_logger_config(root_logger)

    try:
        dispatcher = load_cli_dispatcher(abi_names, abi_files, signatures, abi_dir)
    except DecodingError as e:
        logger.error(e)
        raise SystemExit(1)

    console.print(dispatcher.decoder_table(full_signatures=full_signatures))
