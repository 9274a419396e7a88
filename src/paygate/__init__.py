"""paygate — hosted payment page orchestration and outcome reconciliation.

Creates gateway payment sessions, resolves the payer's browser return, drives
captures and reconciles asynchronous gateway notifications into a receipt
ledger.
"""

__version__ = "0.1.0"
