import json

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from rich.console import Console

from nethermind.txdecode.render import decoded_to_dict, decoded_to_json, decoded_to_tree
from nethermind.txdecode.utils import to_bytes
from tests.resources.calldata import APPROVE_CALLDATA, BRIDGE_CALLDATA, HANDLE_OPS_CALLDATA


def _render(renderable) -> str:
    console = Console(width=200, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def test_decoded_to_dict(dispatcher):
    decoded = decoded_to_dict(dispatcher.decode_calldata(BRIDGE_CALLDATA))

    assert decoded["name"] == "bridge"
    assert decoded["selector"] == "0x405e720a"
    assert decoded["inputs"]["receiver_"] == "0x439B175A246b3FE2189C4c2FA1e6662eb3143103"
    assert decoded["inputs"]["amount_"] == 977746000000000000000
    assert decoded["inputs"]["execPayload_"] == "0x"
    assert decoded["outputs"] is None
    assert decoded["inner_calls"] == []


def test_nested_json(dispatcher):
    decoded = json.loads(decoded_to_json(dispatcher.decode_calldata(HANDLE_OPS_CALLDATA)))

    user_op = decoded["inputs"]["ops"][0]
    assert user_op["paymasterAndData"] == "0x1842a4eff3efd24c50b63c3cf89cecee245fc2bd"
    assert user_op["callData"].startswith("0x47e1da2a")

    execute_batch = decoded["inner_calls"][0]
    assert execute_batch["path"] == "ops[0].callData"
    assert execute_batch["decoded"]["name"] == "executeBatch"
    assert [inner["path"] for inner in execute_batch["decoded"]["inner_calls"]] == ["func[0]", "func[1]"]


def test_decoded_to_tree(dispatcher):
    output = _render(decoded_to_tree(dispatcher.decode_calldata(HANDLE_OPS_CALLDATA)))

    assert "handleOps" in output
    assert "executeBatch" in output
    assert "0x405e720a" in output
    assert "beneficiary: 0x433704c40F80cBff02e86FD36Bc8baC5e31eB0c1" in output
    assert "callGasLimit: 750000" in output
    assert "msgGasLimit_: 500000" in output
    assert "[1]" in output


def test_inner_call_within_unnamed_tuple(dispatcher):
    # The tuple has an unnamed component, so it is formatted as a tuple and keyed by position
    dispatcher.add_abi("Wrap", ["function wrap((bytes data, uint256) item)"])
    calldata = function_signature_to_4byte_selector("wrap((bytes,uint256))") + encode(
        ["(bytes,uint256)"], [(to_bytes(APPROVE_CALLDATA), 1)]
    )

    decoded = dispatcher.decode_calldata(calldata)
    assert isinstance(decoded.inputs["item"], tuple)
    assert [inner.path for inner in decoded.inner_calls] == ["item.0"]

    output = _render(decoded_to_tree(decoded))
    assert "approve" in output
    assert "spender: 0xCE2FC6C6bFCF04f2f857338ecF6004381F414926" in output
    assert "1: 1" in output

    as_dict = decoded_to_dict(decoded)
    assert as_dict["inputs"]["item"] == [APPROVE_CALLDATA, 1]
    assert as_dict["inner_calls"][0]["path"] == "item.0"
    assert as_dict["inner_calls"][0]["decoded"]["name"] == "approve"
