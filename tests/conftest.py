import random

import pytest
from eth_utils import to_checksum_address

from nethermind.txdecode.decoding import DecodingDispatcher


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address():
        return to_checksum_address(random.randbytes(20).hex())

    return _generate_random_address


@pytest.fixture(name="dispatcher")
def fixture_dispatcher() -> DecodingDispatcher:
    """Dispatcher with every built-in ABI loaded"""
    return DecodingDispatcher.from_abis()


@pytest.fixture(name="abi_dir")
def fixture_abi_dir(tmp_path):
    """Directory with one JSON ABI and one human-readable ABI file"""
    (tmp_path / "Permit2.abi").write_text(
        "# Permit2 allowance transfer\n"
        "function approve(address token, address spender, uint160 amount, uint48 expiration)\n"
    )
    (tmp_path / "WETH.json").write_text(
        '[{"type": "function", "name": "deposit", "inputs": [], "outputs": [], "stateMutability": "payable"},'
        ' {"type": "function", "name": "withdraw", "inputs": [{"name": "wad", "type": "uint256"}], "outputs": []},'
        ' {"type": "event", "name": "Deposit", "anonymous": false, "inputs": []}]'
    )
    (tmp_path / "notes.txt").write_text("not an abi")
    return tmp_path
