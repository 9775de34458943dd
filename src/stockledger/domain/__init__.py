"""Domain layer for stockledger application."""

from importlib import import_module

# Services are imported lazily: they depend on the database layer, which in
# turn imports domain entities
_SERVICES = {
    "CustomerService": "stockledger.domain.customer",
    "BankAccountService": "stockledger.domain.bank_account",
    "TransactionService": "stockledger.domain.transaction",
    "LedgerService": "stockledger.domain.ledger_service",
    "InsightsService": "stockledger.domain.insights",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
