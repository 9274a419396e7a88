"""Transaction lookup — read access to the receipt ledger."""

from paygate.errors import NotFoundError
from paygate.receipt.ledger import Receipt, ReceiptLedger


class TransactionLookup:
    def __init__(self, receipts: ReceiptLedger) -> None:
        self.receipts = receipts

    def get(self, transaction_id: str) -> Receipt:
        receipt = self.receipts.get(transaction_id)
        if receipt is None:
            raise NotFoundError("Transaction not found")
        return receipt
