"""
Invoice domain models and serialization helpers.

Invoices belong to a representative. List responses join the
representative's name and code so the table can show them without a second
request.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from benedict import benedict

from crm_panel.utils import is_overdue, parse_date, to_decimal


class InvoiceStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"

    @classmethod
    def parse(cls, value: str | None) -> "InvoiceStatus":
        try:
            return cls((value or cls.UNPAID.value).lower())
        except ValueError:
            return cls.UNPAID


STATUS_LABELS = {
    InvoiceStatus.UNPAID: "پرداخت نشده",
    InvoiceStatus.PAID: "پرداخت شده",
    InvoiceStatus.PARTIAL: "پرداخت جزئی",
    InvoiceStatus.OVERDUE: "سررسید گذشته",
}


@dataclass(slots=True)
class Invoice:
    """Primary dataclass for invoices."""

    id: int
    invoice_number: str
    representative_id: int
    amount: Decimal
    issue_date: datetime | None = None
    due_date: datetime | None = None
    status: InvoiceStatus = InvoiceStatus.UNPAID
    sent_to_telegram: bool = False
    telegram_sent_at: datetime | None = None
    created_at: datetime | None = None
    representative_name: str = ""
    representative_code: str = ""

    @property
    def is_active(self) -> bool:
        """Open invoices count as active for the shared status filter."""
        return self.status is not InvoiceStatus.PAID

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    def is_overdue(self, now: datetime | None = None) -> bool:
        if self.status is InvoiceStatus.PAID:
            return False
        return is_overdue(self.due_date, now=now)

    def searchable_terms(self) -> list[str]:
        terms = [
            self.invoice_number,
            self.representative_name,
            self.representative_code,
        ]
        return [value.lower() for value in terms if value]


def parse_invoice(payload: Mapping[str, Any]) -> Invoice:
    """Convert a camelCase backend record into an Invoice."""
    b = benedict(dict(payload))
    return Invoice(
        id=int(b.get("id") or 0),
        invoice_number=b.get("invoiceNumber") or "",
        representative_id=int(b.get("representativeId") or 0),
        amount=to_decimal(b.get("amount")),
        issue_date=parse_date(b.get("issueDate")),
        due_date=parse_date(b.get("dueDate")),
        status=InvoiceStatus.parse(b.get("status")),
        sent_to_telegram=bool(b.get("sentToTelegram", False)),
        telegram_sent_at=parse_date(b.get("telegramSentAt")),
        created_at=parse_date(b.get("createdAt")),
        representative_name=b.get("representativeName") or "",
        representative_code=b.get("representativeCode") or "",
    )


def serialize_invoice(invoice: Invoice) -> dict:
    """Convert an Invoice into the backend's camelCase JSON shape."""

    def _iso(value: datetime | None) -> str | None:
        return value.isoformat() if value else None

    return {
        "id": invoice.id,
        "invoiceNumber": invoice.invoice_number,
        "representativeId": invoice.representative_id,
        "amount": str(invoice.amount),
        "issueDate": _iso(invoice.issue_date),
        "dueDate": _iso(invoice.due_date),
        "status": invoice.status.value,
        "sentToTelegram": invoice.sent_to_telegram,
        "telegramSentAt": _iso(invoice.telegram_sent_at),
        "createdAt": _iso(invoice.created_at),
        "representativeName": invoice.representative_name,
        "representativeCode": invoice.representative_code,
    }
