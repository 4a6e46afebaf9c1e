import json
from typing import Any

from rich.markup import escape
from rich.tree import Tree

from nethermind.txdecode.types.decoding import DecodedFunction, InnerCall
from nethermind.txdecode.utils import to_hex


def _format_scalar(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(bytes(value))
    return str(value)


def _call_label(decoded: DecodedFunction) -> str:
    return (
        f"[bold cyan]{escape(decoded.name)}[/bold cyan] "
        f"[dim]{escape(decoded.abi_name)}  {escape(decoded.function_signature)}  {to_hex(decoded.selector)}[/dim]"
    )


def _add_value(node: Tree, label: str, value: Any, path: str, inner_calls: dict[str, InnerCall]):
    if path in inner_calls:
        branch = node.add(f"[green]{escape(label)}[/green]")
        _add_call(branch.add(_call_label(inner_calls[path].decoded)), inner_calls[path].decoded)
        return

    match value:
        case list():
            branch = node.add(f"{escape(label)} [dim]({len(value)} items)[/dim]")
            for index, item in enumerate(value):
                _add_value(branch, f"[{index}]", item, f"{path}[{index}]", inner_calls)
        case dict():
            branch = node.add(escape(label))
            for key, item in value.items():
                _add_value(branch, key, item, f"{path}.{key}", inner_calls)
        case tuple():
            branch = node.add(escape(label))
            for index, item in enumerate(value):
                _add_value(branch, str(index), item, f"{path}.{index}", inner_calls)
        case _:
            node.add(f"{escape(label)}: [yellow]{escape(_format_scalar(value))}[/yellow]")


def _add_call(node: Tree, decoded: DecodedFunction):
    inner_calls = {inner.path: inner for inner in decoded.inner_calls}
    for name, value in decoded.inputs.items():
        _add_value(node, name, value, name, inner_calls)


def decoded_to_tree(decoded: DecodedFunction) -> Tree:
    """
    Renders a decoded call as a rich Tree.  Inner calls are rendered in place of the bytes parameter
    they were decoded from.

    :param decoded:
    :return:
    """
    tree = Tree(_call_label(decoded))
    _add_call(tree, decoded)
    return tree


def _to_jsonable(value: Any) -> Any:
    match value:
        case bytes() | bytearray():
            return to_hex(bytes(value))
        case dict():
            return {key: _to_jsonable(item) for key, item in value.items()}
        case list() | tuple():
            return [_to_jsonable(item) for item in value]
        case _:
            return value


def decoded_to_dict(decoded: DecodedFunction) -> dict[str, Any]:
    """Converts a decoded call and its inner calls into a JSON compatible dict.  Bytes are encoded as 0x hex"""
    return {
        "abi_name": decoded.abi_name,
        "name": decoded.name,
        "function_signature": decoded.function_signature,
        "selector": to_hex(decoded.selector),
        "inputs": _to_jsonable(decoded.inputs),
        "outputs": _to_jsonable(decoded.outputs),
        "inner_calls": [
            {"path": inner.path, "decoded": decoded_to_dict(inner.decoded)} for inner in decoded.inner_calls
        ],
    }


def decoded_to_json(decoded: DecodedFunction, indent: int | None = 2) -> str:
    """Serializes a decoded call to JSON"""
    return json.dumps(decoded_to_dict(decoded), indent=indent)
