from typing import Any

from eth_utils import encode_hex, is_address, to_checksum_address


def to_json_compatible(value: Any) -> Any:
    """Convert a value returned by a contract call into something :mod:`json` can encode.

    Integers are stringified, since uint256 values exceed the range of JSON numbers
    most clients can handle. Byte strings are hex-encoded, addresses checksummed.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return encode_hex(value)
    if isinstance(value, str) and is_address(value):
        return to_checksum_address(value)
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json_compatible(item) for key, item in value.items()}
    return value
