"""Table definitions of the record store.

Column names follow the hosted schema so existing data stays readable.
"""

from fincommand.application.ports.database import DatabaseEnginePort

CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS app_users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        salt TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS companies (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        logo TEXT,
        theme TEXT,
        primary_color TEXT,
        secondary_color TEXT,
        position INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        company_id TEXT,
        date DATE NOT NULL,
        month TEXT,
        year INTEGER,
        type_category TEXT,
        description TEXT,
        amount_rd NUMERIC NOT NULL DEFAULT 0,
        amount_us NUMERIC NOT NULL DEFAULT 0,
        payment_method TEXT,
        type TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS credit_cards (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        bank TEXT NOT NULL,
        name TEXT NOT NULL,
        cutoff_date DATE,
        expiry_date DATE,
        debt_rd NUMERIC NOT NULL DEFAULT 0,
        debt_us NUMERIC NOT NULL DEFAULT 0,
        debt_type_rd TEXT,
        debt_type_us TEXT,
        status TEXT NOT NULL,
        payment_amount_rd NUMERIC NOT NULL DEFAULT 0,
        payment_amount_us NUMERIC NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS subscriptions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        amount NUMERIC NOT NULL,
        currency TEXT NOT NULL,
        charge_day INTEGER NOT NULL,
        card_id TEXT,
        category TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS quick_counts (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL UNIQUE,
        banco_popular NUMERIC NOT NULL DEFAULT 0,
        banco_bhd NUMERIC NOT NULL DEFAULT 0,
        banco_ban_reservas NUMERIC NOT NULL DEFAULT 0,
        efectivo NUMERIC NOT NULL DEFAULT 0,
        exchange_rate NUMERIC NOT NULL,
        ad_spend_us NUMERIC NOT NULL DEFAULT 0,
        days_for_calc INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS weekly_debts (
        id TEXT PRIMARY KEY,
        quick_count_id TEXT NOT NULL,
        concept TEXT NOT NULL,
        amount NUMERIC NOT NULL,
        payment_type TEXT NOT NULL,
        is_paid BOOLEAN NOT NULL DEFAULT FALSE,
        position INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_settings (
        user_id TEXT PRIMARY KEY,
        app_name TEXT,
        app_logo TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS clients (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        contact_info TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS client_tasks (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        client_id TEXT NOT NULL,
        description TEXT NOT NULL,
        due_date TIMESTAMP NOT NULL,
        status TEXT NOT NULL
    )
    """,
)


def ensure_schema(db_port: DatabaseEnginePort) -> int:
    """Create every table that does not exist yet.

    Args:
        db_port: Port providing the record store engine.

    Returns:
        int: Number of CREATE statements executed.
    """
    engine = db_port.get_engine()
    with engine.begin() as conn:
        for statement in CREATE_TABLES_SQL:
            conn.exec_driver_sql(statement)
    return len(CREATE_TABLES_SQL)


__all__ = ["CREATE_TABLES_SQL", "ensure_schema"]
