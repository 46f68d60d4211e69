"""Person, org and person mail subscriptions

Revision ID: 4c2a9e1f7d3b
Revises:
Create Date: 2020-10-05 10:42:17.511203

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.schema import CreateSequence, DropSequence


# revision identifiers, used by Alembic.
revision = "4c2a9e1f7d3b"  # pragma: allowlist secret
down_revision = None
branch_labels = None
depends_on = None

SEQUENCES = ["person_id_seq", "org_id_seq", "person_mail_org_id_seq"]


def _supports_sequences():
    return op.get_bind().dialect.supports_sequences


def _common_columns():
    return [
        sa.Column(
            "time_created",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "time_updated",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("username", sa.String(length=20), nullable=True),
    ]


def upgrade():
    if _supports_sequences():
        for name in SEQUENCES:
            op.execute(CreateSequence(sa.Sequence(name)))

    op.create_table(
        "person",
        sa.Column("id", sa.Integer(), sa.Sequence("person_id_seq"), nullable=False),
        sa.Column("ssn", sa.String(length=20), nullable=False),
        sa.Column("givenname", sa.String(length=50), nullable=True),
        sa.Column("surname", sa.String(length=50), nullable=False),
        sa.Column("certificate", sa.Text(), nullable=True),
        sa.Column("last_portal", sa.String(length=32), nullable=True),
        *_common_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("ssn", name="person_ssn_key"),
    )
    op.create_table(
        "org",
        sa.Column("id", sa.Integer(), sa.Sequence("org_id_seq"), nullable=False),
        sa.Column("member_class", sa.String(length=16), nullable=False),
        sa.Column("member_code", sa.String(length=50), nullable=False),
        sa.Column("subsystem_code", sa.String(length=64), nullable=True),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("sup_org_id", sa.Integer(), nullable=True),
        *_common_columns(),
        sa.ForeignKeyConstraint(["sup_org_id"], ["org.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "member_class",
            "member_code",
            "subsystem_code",
            name="org_member_class_member_code_subsystem_code_key",
        ),
    )
    op.create_index(
        "org_member_class_member_code_key",
        "org",
        ["member_class", "member_code"],
        unique=True,
        postgresql_where=sa.text("subsystem_code IS NULL"),
        sqlite_where=sa.text("subsystem_code IS NULL"),
    )
    op.create_table(
        "person_mail_org",
        sa.Column(
            "id", sa.Integer(), sa.Sequence("person_mail_org_id_seq"), nullable=False
        ),
        sa.Column("mail", sa.String(length=75), nullable=True),
        sa.Column(
            "notify_changes",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=True),
        *_common_columns(),
        sa.ForeignKeyConstraint(["org_id"], ["org.id"]),
        sa.ForeignKeyConstraint(["person_id"], ["person.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_person_mail_org_person_id"),
        "person_mail_org",
        ["person_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_person_mail_org_org_id"), "person_mail_org", ["org_id"], unique=False
    )


def downgrade():
    op.drop_index(op.f("ix_person_mail_org_org_id"), table_name="person_mail_org")
    op.drop_index(op.f("ix_person_mail_org_person_id"), table_name="person_mail_org")
    op.drop_table("person_mail_org")
    op.drop_index("org_member_class_member_code_key", table_name="org")
    op.drop_table("org")
    op.drop_table("person")

    if _supports_sequences():
        for name in SEQUENCES:
            op.execute(DropSequence(sa.Sequence(name)))
