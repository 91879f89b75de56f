"""initial schema

Revision ID: 001_initial
Revises:
Create Date: 2025-06-02

Families, users, assets, the six category detail tables and asset ownerships.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = '001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Shared trailing columns of the detail tables
DETAIL_TIMESTAMPS = """
                                created_at DATETIME NOT NULL,
                                updated_at DATETIME NOT NULL,
                                deleted_at DATETIME,
                                FOREIGN KEY (asset_id) REFERENCES assets (id),
                                UNIQUE (asset_id)"""

DETAIL_TABLES = {
    "real_estate_assets": """
                                property_name   VARCHAR        NOT NULL,
                                property_type   VARCHAR        NOT NULL,
                                location        VARCHAR        NOT NULL,
                                plot_number     VARCHAR,
                                area_sq_ft      NUMERIC(15, 4),
                                purchase_date   DATE,
                                purchase_price  NUMERIC(15, 4) NOT NULL,
                                current_value   NUMERIC(15, 4) NOT NULL,
                                valuation_date  DATE,
                                rental_income   NUMERIC(15, 4),""",
    "vehicle_assets": """
                                vehicle_name        VARCHAR        NOT NULL,
                                vehicle_type        VARCHAR        NOT NULL,
                                make                VARCHAR,
                                model               VARCHAR,
                                year                INTEGER,
                                registration_number VARCHAR,
                                purchase_price      NUMERIC(15, 4) NOT NULL,
                                purchase_date       DATE,
                                current_value       NUMERIC(15, 4) NOT NULL,
                                outstanding_loan    NUMERIC(15, 4),""",
    "bank_account_assets": """
                                account_name    VARCHAR        NOT NULL,
                                bank_name       VARCHAR        NOT NULL,
                                account_number  VARCHAR,
                                account_type    VARCHAR        NOT NULL,
                                current_balance NUMERIC(15, 4) NOT NULL,
                                interest_rate   NUMERIC(15, 4),
                                opening_date    DATE,""",
    "investment_assets": """
                                investment_name    VARCHAR        NOT NULL,
                                broker             VARCHAR        NOT NULL,
                                account_number     VARCHAR,
                                investment_type    VARCHAR        NOT NULL,
                                initial_investment NUMERIC(15, 4) NOT NULL,
                                investment_date    DATE,
                                current_value      NUMERIC(15, 4) NOT NULL,
                                last_updated       DATE,""",
    "business_assets": """
                                business_name      VARCHAR        NOT NULL,
                                license_number     VARCHAR,
                                industry           VARCHAR        NOT NULL,
                                entity_type        VARCHAR,
                                initial_investment NUMERIC(15, 4) NOT NULL,
                                establishment_date DATE,
                                current_valuation  NUMERIC(15, 4) NOT NULL,
                                annual_revenue     NUMERIC(15, 4),""",
    "other_assets": """
                                asset_name        VARCHAR        NOT NULL,
                                asset_category    VARCHAR        NOT NULL,
                                description       TEXT,
                                purchase_price    NUMERIC(15, 4) NOT NULL,
                                purchase_date     DATE,
                                current_valuation NUMERIC(15, 4) NOT NULL,
                                valuation_date    DATE,""",
    }


def upgrade() -> None:
    """Create all tables."""
    conn = op.get_bind()

    print("🔧 Starting migration 001_initial...")
    print("=" * 60)

    # Families table
    print("📦 Creating table: families...")
    conn.execute(sa.text("""CREATE TABLE families
                            (
                                id         VARCHAR PRIMARY KEY,
                                name       VARCHAR  NOT NULL,
                                created_at DATETIME NOT NULL,
                                updated_at DATETIME NOT NULL
                            )"""))
    print("  ✓ Table created")

    # Users table
    print("📦 Creating table: users...")
    conn.execute(sa.text("""CREATE TABLE users
                            (
                                id              VARCHAR PRIMARY KEY,
                                family_id       VARCHAR  NOT NULL,
                                name            VARCHAR  NOT NULL,
                                email           VARCHAR  NOT NULL,
                                hashed_password VARCHAR  NOT NULL,
                                is_active       BOOLEAN  NOT NULL,
                                created_at      DATETIME NOT NULL,
                                updated_at      DATETIME NOT NULL,
                                deleted_at      DATETIME,
                                FOREIGN KEY (family_id) REFERENCES families (id)
                            )"""))
    print("  ✓ Table created")
    conn.execute(sa.text("CREATE INDEX ix_users_family_id ON users (family_id)"))
    conn.execute(sa.text("CREATE UNIQUE INDEX ix_users_email ON users (email)"))
    print("  ✓ Indexes created")

    # Assets table
    print("📦 Creating table: assets...")
    conn.execute(sa.text("""CREATE TABLE assets
                            (
                                id         VARCHAR PRIMARY KEY,
                                family_id  VARCHAR     NOT NULL,
                                category   VARCHAR(12) NOT NULL,
                                created_at DATETIME    NOT NULL,
                                updated_at DATETIME    NOT NULL,
                                deleted_at DATETIME,
                                CONSTRAINT ck_assets_category CHECK (category IN
                                    ('REAL_ESTATE', 'VEHICLE', 'BANK_ACCOUNT', 'INVESTMENT', 'BUSINESS', 'OTHER')),
                                FOREIGN KEY (family_id) REFERENCES families (id)
                            )"""))
    print("  ✓ Table created")
    conn.execute(sa.text("CREATE INDEX ix_assets_family_id ON assets (family_id)"))
    conn.execute(sa.text("CREATE INDEX ix_assets_category ON assets (category)"))
    print("  ✓ Indexes created")

    # Category detail tables
    for table, columns in DETAIL_TABLES.items():
        print(f"📦 Creating table: {table}...")
        conn.execute(sa.text(f"""CREATE TABLE {table}
                            (
                                id       VARCHAR PRIMARY KEY,
                                asset_id VARCHAR NOT NULL,{columns}{DETAIL_TIMESTAMPS}
                            )"""))
        print("  ✓ Table created")

    # Asset ownerships table
    print("📦 Creating table: asset_ownerships...")
    conn.execute(sa.text("""CREATE TABLE asset_ownerships
                            (
                                id         VARCHAR PRIMARY KEY,
                                asset_id   VARCHAR       NOT NULL,
                                user_id    VARCHAR       NOT NULL,
                                percentage NUMERIC(9, 6) NOT NULL,
                                created_at DATETIME      NOT NULL,
                                CONSTRAINT uq_asset_ownerships_asset_user UNIQUE (asset_id, user_id),
                                CONSTRAINT ck_asset_ownerships_percentage_range CHECK (percentage >= 0 AND percentage <= 100),
                                FOREIGN KEY (asset_id) REFERENCES assets (id),
                                FOREIGN KEY (user_id) REFERENCES users (id)
                            )"""))
    print("  ✓ Table created")
    conn.execute(sa.text("CREATE INDEX ix_asset_ownerships_asset_id ON asset_ownerships (asset_id)"))
    conn.execute(sa.text("CREATE INDEX ix_asset_ownerships_user_id ON asset_ownerships (user_id)"))
    print("  ✓ Indexes created")

    print("=" * 60)
    print("✅ Migration 001_initial completed")


def downgrade() -> None:
    """Drop all tables."""
    conn = op.get_bind()
    for table in ['asset_ownerships', *reversed(list(DETAIL_TABLES)), 'assets', 'users', 'families']:
        conn.execute(sa.text(f"DROP TABLE IF EXISTS {table}"))
