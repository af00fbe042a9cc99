from eth_utils import to_checksum_address

OPERATOR_ADDRESS = to_checksum_address(f"0x1{1:039d}")
TOKEN_ADDRESS = to_checksum_address(f"0x98{1:038d}")
RAFFLE_ADDRESS = to_checksum_address(f"0x99{1:038d}")
RECIPIENT_ADDRESS = to_checksum_address(f"0x2{1:039d}")
