"""
Ingestion layer: reads portfolio files into validated model snapshots.

Submodules:
  portfolio_loader: JSON snapshot loader and asset CSV parser; applies
                     currency/region defaults and filters records to one user.
"""
