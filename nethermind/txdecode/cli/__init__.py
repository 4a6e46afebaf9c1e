import click

from nethermind.txdecode.cli.decode import (
    decode_command,
    list_abis_command,
    selector_command,
)


@click.group()
@click.version_option(package_name="txdecode")
def txdecode_cli():
    """Command Line Interface for decoding EVM transaction calldata"""


# Adding Commands
txdecode_cli.add_command(decode_command, name="decode")
txdecode_cli.add_command(selector_command, name="selector")
txdecode_cli.add_command(list_abis_command, name="list-abis")
