"""
Representative domain models.

The backend owns these records; the panel only keeps read-through copies.
Payloads arrive camelCased with monetary fields as decimal strings, and are
parsed through benedict so missing or null keys fall back to defaults instead
of raising.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Sequence

from benedict import benedict

from crm_panel.utils import debt_ratio, parse_date, to_decimal


@dataclass(slots=True)
class Representative:
    """A sales representative as listed by the CRM."""

    id: int
    code: str
    name: str
    owner_name: str = ""
    panel_username: str = ""
    phone: str = ""
    public_id: str = ""
    sales_partner_id: str = ""
    is_active: bool = True
    total_debt: Decimal = Decimal("0")
    total_sales: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def debt_ratio(self) -> float:
        """Debt as a percentage of sales, for the card's ratio bar."""
        return debt_ratio(self.total_debt, self.total_sales)

    def searchable_terms(self) -> list[str]:
        """Return the lower-cased values matched by the search box."""
        terms = [self.name, self.code, self.owner_name, self.panel_username]
        return [value.lower() for value in terms if value]


@dataclass(slots=True)
class TopPerformer:
    id: int
    name: str
    code: str
    total_sales: Decimal
    is_active: bool


@dataclass(slots=True)
class RepresentativeStatistics:
    """Aggregate figures shown above the representative list."""

    total_count: int = 0
    active_count: int = 0
    inactive_count: int = 0
    total_sales: Decimal = Decimal("0")
    total_debt: Decimal = Decimal("0")
    avg_performance: float = 0.0
    risk_alerts: int = 0
    top_performers: Sequence[TopPerformer] = field(default_factory=list)


def _flag(value: Any, default: bool) -> bool:
    # Missing and null both mean the default.
    return default if value is None else bool(value)


def parse_representative(payload: Mapping[str, Any]) -> Representative:
    """Convert a camelCase backend record into a Representative."""
    b = benedict(dict(payload))
    return Representative(
        id=int(b.get("id") or 0),
        code=b.get("code") or "",
        name=b.get("name") or "",
        owner_name=b.get("ownerName") or "",
        panel_username=b.get("panelUsername") or "",
        phone=b.get("phone") or "",
        public_id=b.get("publicId") or "",
        sales_partner_id=str(b.get("salesPartnerId") or ""),
        is_active=_flag(b.get("isActive"), default=True),
        total_debt=to_decimal(b.get("totalDebt")),
        total_sales=to_decimal(b.get("totalSales")),
        credit=to_decimal(b.get("credit")),
        created_at=parse_date(b.get("createdAt")),
        updated_at=parse_date(b.get("updatedAt")),
    )


def parse_statistics(payload: Mapping[str, Any]) -> RepresentativeStatistics:
    """Convert the statistics endpoint body into RepresentativeStatistics."""
    b = benedict(dict(payload))
    return RepresentativeStatistics(
        total_count=int(b.get("totalCount") or 0),
        active_count=int(b.get("activeCount") or 0),
        inactive_count=int(b.get("inactiveCount") or 0),
        total_sales=to_decimal(b.get("totalSales")),
        total_debt=to_decimal(b.get("totalDebt")),
        avg_performance=float(b.get("avgPerformance") or 0),
        risk_alerts=int(b.get("riskAlerts") or 0),
        top_performers=[
            TopPerformer(
                id=int(p.get("id") or 0),
                name=p.get("name") or "",
                code=p.get("code") or "",
                total_sales=to_decimal(p.get("totalSales")),
                is_active=_flag(p.get("isActive"), default=True),
            )
            for p in b.get("topPerformers") or []
        ],
    )


def serialize_representative(rep: Representative) -> dict:
    """Convert a Representative back into the backend's camelCase shape."""
    data = asdict(rep)
    return {
        "id": data["id"],
        "code": data["code"],
        "name": data["name"],
        "ownerName": data["owner_name"],
        "panelUsername": data["panel_username"],
        "phone": data["phone"],
        "publicId": data["public_id"],
        "salesPartnerId": data["sales_partner_id"],
        "isActive": data["is_active"],
        "totalDebt": str(data["total_debt"]),
        "totalSales": str(data["total_sales"]),
        "credit": str(data["credit"]),
        "createdAt": rep.created_at.isoformat() if rep.created_at else None,
        "updatedAt": rep.updated_at.isoformat() if rep.updated_at else None,
    }
