"""Tools: account status, finances and service prices."""

from __future__ import annotations

import json
from typing import TypedDict

from timeweb_mcp.shared.dispatch import Operation, unwrap
from timeweb_mcp.shared.formatting import bullet, code_block, format_currency, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs


class AccountStatus(TypedDict, total=False):
    company_info: dict
    is_email_verified: bool
    ym_client_id: str
    restrictions: dict


class Finances(TypedDict, total=False):
    balance: float
    currency: str
    discount_end_date_at: str
    discount_percent: float
    hourly_cost: float
    hourly_fee: float
    monthly_cost: float
    total_paid: float
    hours_left: int
    autopay_card_info: dict


def format_status(status: AccountStatus) -> str:
    company = status.get("company_info") or {}
    restrictions = status.get("restrictions") or {}
    return "\n".join([
        "# Account Status",
        "",
        f"**Company:** {value_or(company.get('name'))}",
        f"**INN:** {value_or(company.get('inn'))}",
        f"**Email Verified:** {yes_no(status.get('is_email_verified'))}",
        f"**YM Client ID:** {value_or(status.get('ym_client_id'))}",
        "",
        "## Restrictions",
        bullet("Servers Limit", value_or(restrictions.get("servers_limit"), "Unlimited")),
        bullet("Blocked", yes_no(restrictions.get("is_blocked"))),
        bullet("Send Billing Alerts", yes_no(restrictions.get("is_send_billing_letters"))),
        bullet("Technical Works", yes_no(restrictions.get("is_technical_works"))),
    ])


def format_finances(finances: Finances) -> str:
    currency = finances.get("currency") or "RUB"

    def money(field):
        return format_currency(finances.get(field), currency)

    return "\n".join([
        "# Account Finances",
        "",
        f"**Balance:** {money('balance')}",
        f"**Currency:** {value_or(finances.get('currency'))}",
        f"**Discount End Date:** {value_or(finances.get('discount_end_date_at'))}",
        f"**Discount Percent:** {value_or(finances.get('discount_percent'), '0')}%",
        f"**Hourly Cost:** {money('hourly_cost')}",
        f"**Hourly Fee:** {money('hourly_fee')}",
        f"**Monthly Cost:** {money('monthly_cost')}",
        f"**Total Paid:** {money('total_paid')}",
        f"**Hours Left:** {value_or(finances.get('hours_left'))}",
        f"**Auto Payment Enabled:** {yes_no(finances.get('autopay_card_info'))}",
    ])


def format_prices(prices) -> str:
    text = json.dumps(prices, indent=2, ensure_ascii=False)
    return f"# Service Prices\n\n{code_block(text, 'json')}"


OPERATIONS = [
    Operation(
        "timeweb_get_account_status",
        "Get current account status including company info, verification status, and restrictions",
        FormattedArgs,
        "GET",
        "/api/v1/account/status",
        render=lambda payload, args: format_status(payload.get("status") or {}),
        structured=unwrap("status"),
    ),
    Operation(
        "timeweb_get_finances",
        "Get account finances including balance, discount, hourly cost, and payment history",
        FormattedArgs,
        "GET",
        "/api/v1/account/finances",
        render=lambda payload, args: format_finances(payload.get("finances") or {}),
        structured=unwrap("finances"),
    ),
    Operation(
        "timeweb_get_service_prices",
        "Get pricing for all available services",
        FormattedArgs,
        "GET",
        "/api/v1/prices",
        render=lambda payload, args: format_prices(payload.get("prices")),
        structured=unwrap("prices"),
    ),
]
