import logging
import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler

from nethermind.txdecode.abis import BUILTIN_ABIS, load_abi_directory, load_abi_file
from nethermind.txdecode.decoding import DecodingDispatcher
from nethermind.txdecode.exceptions import DecodingError

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("txdecode").getChild("cli")

CLI_SIGNATURE_ABI_NAME = "cli-signatures"
CLI_SIGNATURE_PRIORITY = 1


def cli_logger_config(instrument_logger: Logger, verbose: bool = False) -> Console:
    """Attaches a RichHandler to the logger, and returns the console it writes to"""
    rich_console = Console()
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=rich_console))
    instrument_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return rich_console


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


def load_cli_dispatcher(
    abi_names: tuple[str, ...],
    abi_files: tuple[str, ...],
    signatures: tuple[str, ...],
    abi_dir: str | None,
) -> DecodingDispatcher:
    """
    Builds the DecodingDispatcher for CLI commands.  If no --abi options are passed, every built-in ABI is
    loaded.  ABI files & directories are loaded with the default priority, and signatures passed on the
    command line are loaded with a higher priority so they override conflicting selectors.
    """
    extra_abis = {}
    if abi_dir:
        extra_abis.update(load_abi_directory(abi_dir))
    for abi_file in abi_files:
        abi_name = os.path.splitext(os.path.basename(abi_file))[0]
        if abi_name in extra_abis:
            raise DecodingError(f"ABI name {abi_name} from {abi_file} is already used by another ABI file")
        extra_abis[abi_name] = load_abi_file(abi_file)

    dispatcher = DecodingDispatcher.from_abis(
        abi_names=list(abi_names) if abi_names else None,
        extra_abis=extra_abis,
    )

    if signatures:
        dispatcher.add_abi(CLI_SIGNATURE_ABI_NAME, list(signatures), priority=CLI_SIGNATURE_PRIORITY)

    return dispatcher


# -------------------------------------------------------
#    CLI Secrets, Connections, and Configurations
# -------------------------------------------------------
json_rpc_option = click.option(
    "--json-rpc",
    "-rpc",
    "json_rpc",
    default=os.environ.get("JSON_RPC"),
    help="RPC url to use for fetching transactions.  If not provided, will use the JSON_RPC environment variable",
)
abi_dir_option = click.option(
    "--abi-dir",
    "abi_dir",
    type=click.Path(exists=True, file_okay=False),
    default=os.environ.get("ABI_DIR"),
    help="Directory of ABI files to load.  Each file is loaded as an ABI named by its file stem.  "
    "If not provided, will use the ABI_DIR environment variable",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging",
)

# -------------------------------------------------------
#    ABI Selection Parameters
# -------------------------------------------------------
abi_option = click.option(
    "--abi",
    "-abi",
    "abi_names",
    type=click.Choice(list(BUILTIN_ABIS.keys())),
    multiple=True,
    help="Built-in ABI to decode with.  Can be input multiple times.  If not provided, all built-in ABIs are loaded",
)
abi_file_option = click.option(
    "--abi-file",
    "abi_files",
    type=click.Path(exists=True, dir_okay=False),
    multiple=True,
    help="JSON ABI, compiler artifact, or text file of human-readable signatures.  Can be input multiple times",
)
signature_option = click.option(
    "--signature",
    "-s",
    "signatures",
    type=str,
    multiple=True,
    help="Human-readable function signature, ie 'function approve(address spender, uint256 amount)'.  "
    "Can be input multiple times",
)
