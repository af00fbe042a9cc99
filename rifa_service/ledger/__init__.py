from rifa_service.ledger.client import LedgerClient, PendingTransaction
from rifa_service.ledger.registry import ContractBinding, ContractRegistry

__all__ = ["ContractBinding", "ContractRegistry", "LedgerClient", "PendingTransaction"]
