"""SQLAlchemy table definitions for the ledger database."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.engine import Engine

from partner_ledger.application import tables

metadata = MetaData()


def _id_column() -> Column:
    return Column("id", String(36), primary_key=True)


def _money(name: str, nullable: bool = False) -> Column:
    return Column(name, Numeric(12, 2, asdecimal=True), nullable=nullable)


def _fraction(name: str, nullable: bool = True) -> Column:
    return Column(name, Numeric(6, 4, asdecimal=True), nullable=nullable)


def _timestamp(name: str) -> Column:
    return Column(name, DateTime(timezone=True), nullable=True)


clients = Table(
    tables.CLIENTS,
    metadata,
    _id_column(),
    Column("name", Text, nullable=True),
    Column("surname", Text, nullable=True),
)

apps = Table(
    tables.APPS,
    metadata,
    _id_column(),
    Column("name", Text, nullable=False),
)

client_apps = Table(
    tables.CLIENT_APPS,
    metadata,
    _id_column(),
    Column("client_id", ForeignKey(f"{tables.CLIENTS}.id"), nullable=False),
    Column("app_id", ForeignKey(f"{tables.APPS}.id"), nullable=True),
    _money("profit_us", nullable=True),
    Column("status", String(32), nullable=False),
    _timestamp("completed_at"),
    _timestamp("created_at"),
)

client_partners = Table(
    tables.PARTNERS,
    metadata,
    _id_column(),
    Column("name", Text, nullable=False),
    Column("contact_info", Text, nullable=True),
    _fraction("default_split_partner"),
    _fraction("default_split_owner"),
    Column("notes", Text, nullable=True),
    _timestamp("created_at"),
)

client_partner_assignments = Table(
    tables.ASSIGNMENTS,
    metadata,
    _id_column(),
    Column("client_id", ForeignKey(f"{tables.CLIENTS}.id"), nullable=False),
    Column(
        "partner_id",
        ForeignKey(f"{tables.PARTNERS}.id", ondelete="CASCADE"),
        nullable=False,
    ),
    _fraction("split_partner_override"),
    _fraction("split_owner_override"),
    Column("notes", Text, nullable=True),
    _timestamp("assigned_at"),
    UniqueConstraint("client_id", "partner_id"),
)

partner_app_splits = Table(
    tables.APP_SPLITS,
    metadata,
    _id_column(),
    Column(
        "partner_id",
        ForeignKey(f"{tables.PARTNERS}.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("app_id", ForeignKey(f"{tables.APPS}.id"), nullable=False),
    _fraction("split_partner", nullable=False),
    _fraction("split_owner", nullable=False),
    Column("notes", Text, nullable=True),
    UniqueConstraint("partner_id", "app_id"),
)

partner_payments = Table(
    tables.PARTNER_PAYMENTS,
    metadata,
    _id_column(),
    Column(
        "partner_id",
        ForeignKey(f"{tables.PARTNERS}.id", ondelete="CASCADE"),
        nullable=False,
    ),
    _money("amount"),
    Column("note", Text, nullable=True),
    _timestamp("paid_at"),
)

partner_payments_by_client_app = Table(
    tables.APP_PAYMENTS,
    metadata,
    _id_column(),
    Column(
        "partner_id",
        ForeignKey(f"{tables.PARTNERS}.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("client_id", ForeignKey(f"{tables.CLIENTS}.id"), nullable=False),
    Column(
        "client_app_id",
        ForeignKey(f"{tables.CLIENT_APPS}.id"),
        nullable=False,
    ),
    _money("amount"),
    Column("note", Text, nullable=True),
    _timestamp("paid_at"),
    Column(
        "partner_payment_id",
        ForeignKey(f"{tables.PARTNER_PAYMENTS}.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

referral_link_debts = Table(
    tables.REFERRAL_DEBTS,
    metadata,
    _id_column(),
    _money("amount"),
    Column("status", String(32), nullable=False, default="open"),
    Column("description", Text, nullable=True),
    Column("assignee", Text, nullable=True),
    Column("creditor_client_id", ForeignKey(f"{tables.CLIENTS}.id")),
    Column("debtor_client_id", ForeignKey(f"{tables.CLIENTS}.id")),
    Column("referral_link_id", String(36), nullable=True),
    _timestamp("created_at"),
    _timestamp("settled_at"),
)

deposit_debts = Table(
    tables.DEPOSIT_DEBTS,
    metadata,
    _id_column(),
    _money("amount"),
    Column("status", String(32), nullable=False, default="open"),
    Column("description", Text, nullable=True),
    Column("assignee", Text, nullable=True),
    Column("client_id", ForeignKey(f"{tables.CLIENTS}.id")),
    Column("client_app_id", ForeignKey(f"{tables.CLIENT_APPS}.id")),
    Column("deposit_source", Text, nullable=True),
    _timestamp("created_at"),
    _timestamp("paid_back_at"),
)

debt_payments = Table(
    tables.DEBT_PAYMENTS,
    metadata,
    _id_column(),
    Column("debt_kind", String(16), nullable=False),
    Column("debt_id", String(36), nullable=False),
    _money("amount"),
    _timestamp("paid_at"),
    Column("notes", Text, nullable=True),
    Column("recipient", Text, nullable=True),
)

payment_sources = Table(
    tables.PAYMENT_SOURCES,
    metadata,
    _id_column(),
    Column("label", Text, nullable=False, unique=True),
)


def get_table(name: str) -> Table:
    """Return the table definition for a table name.

    Raises:
        KeyError: If the table is not part of the ledger schema.
    """
    try:
        return metadata.tables[name]
    except KeyError:
        raise KeyError(f"Unknown ledger table: {name}") from None


def create_schema(engine: Engine) -> list[str]:
    """Create missing ledger tables.

    Args:
        engine: Engine connected to the ledger database.

    Returns:
        list[str]: Names of the tables that did not exist before.
    """
    with engine.begin() as conn:
        existing = set(inspect(conn).get_table_names())
        metadata.create_all(conn, checkfirst=True)
    return [name for name in metadata.tables if name not in existing]


__all__ = ["metadata", "get_table", "create_schema"]
