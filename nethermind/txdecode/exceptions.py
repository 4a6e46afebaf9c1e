class DecodingError(Exception):
    """

    Raised when calldata cannot be decoded with the currently loaded ABIs

    """


class SelectorNotFound(DecodingError):
    """Raised when the 4 byte selector of the calldata is not defined in any loaded ABI"""


class AbiParseError(DecodingError):
    """
    Raised when an ABI entry cannot be parsed.  Typically caused by a malformed human-readable signature,
    ie unbalanced parentheses, a missing function name, or an empty parameter type.
    """


class RpcError(Exception):
    """

    Raised when the JSON RPC host returns an error, or fails to return the requested transaction

    """
