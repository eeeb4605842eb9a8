"""Infrastructure layer: persistence, blob storage, ledger and security adapters."""
