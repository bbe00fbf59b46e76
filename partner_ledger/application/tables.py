"""Table names shared by the application and infrastructure layers."""

PARTNERS = "client_partners"
ASSIGNMENTS = "client_partner_assignments"
APP_SPLITS = "partner_app_splits"
CLIENTS = "clients"
APPS = "apps"
CLIENT_APPS = "client_apps"
PARTNER_PAYMENTS = "partner_payments"
APP_PAYMENTS = "partner_payments_by_client_app"
REFERRAL_DEBTS = "referral_link_debts"
DEPOSIT_DEBTS = "deposit_debts"
DEBT_PAYMENTS = "debt_payments"
PAYMENT_SOURCES = "payment_sources"

DEBT_TABLES = {
    "referral": REFERRAL_DEBTS,
    "deposit": DEPOSIT_DEBTS,
}


__all__ = [
    "PARTNERS",
    "ASSIGNMENTS",
    "APP_SPLITS",
    "CLIENTS",
    "APPS",
    "CLIENT_APPS",
    "PARTNER_PAYMENTS",
    "APP_PAYMENTS",
    "REFERRAL_DEBTS",
    "DEPOSIT_DEBTS",
    "DEBT_PAYMENTS",
    "PAYMENT_SOURCES",
    "DEBT_TABLES",
]
