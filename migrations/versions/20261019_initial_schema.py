"""users and certificates

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="ADMIN"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "certificates",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("cpf", sa.String(11), nullable=False),
        sa.Column("registro", sa.String(64), nullable=False),
        sa.Column("matricula", sa.String(64), nullable=False),
        sa.Column("nome", sa.String(200), nullable=False),
        sa.Column("curso", sa.String(200), nullable=False),
        sa.Column("inicio", sa.Date(), nullable=False),
        sa.Column("fim", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_certificates"),
    )
    op.create_index("ix_certificates_cpf", "certificates", ["cpf"])

def downgrade():
    op.drop_index("ix_certificates_cpf", table_name="certificates")
    op.drop_table("certificates")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
