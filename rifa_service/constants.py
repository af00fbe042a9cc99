#: Number of fractional digits of the RealDigital token.
TOKEN_DECIMALS = 18

#: Largest value of a Solidity `uint256`, the type of every amount and count.
UINT256_MAX = 2 ** 256 - 1

#: Logical names of the contracts, matching their Hardhat artifact names.
CONTRACT_REAL_DIGITAL = "RealDigital"
CONTRACT_RIFA = "Rifa"
KNOWN_CONTRACTS = (CONTRACT_REAL_DIGITAL, CONTRACT_RIFA)

#: Revert reasons emitted by the Rifa contract.
REVERT_ALREADY_DRAWN = "O sorteio ja foi realizado"
REVERT_INSUFFICIENT_BALANCE = "Saldo insuficiente"

#: Failure codes attached to :exc:`rifa_service.exceptions.TransactionFailed`.
CALL_EXCEPTION = "CALL_EXCEPTION"
TIMEOUT = "TIMEOUT"
NETWORK_ERROR = "NETWORK_ERROR"

DEFAULT_TX_TIMEOUT = 120  # seconds
DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_ARTIFACTS_DIR = "artifacts"
