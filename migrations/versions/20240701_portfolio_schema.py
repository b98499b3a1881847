"""create portfolio cms tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "portfolio_20240701"
down_revision = None
branch_labels = None
depends_on = None


ROLES = ("admin", "super_admin")
PUBLICATION_STATUSES = ("draft", "published")
EXPERIENCE_TYPES = ("full-time", "part-time", "contract", "freelance", "internship")
CONTACT_STATUSES = ("unread", "read", "replied", "archived")
TESTIMONIAL_STATUSES = ("pending", "approved", "rejected")

ENUMS = (
    ("user_role_enum", ROLES),
    ("portfolio_status_enum", PUBLICATION_STATUSES),
    ("blog_status_enum", PUBLICATION_STATUSES),
    ("experience_type_enum", EXPERIENCE_TYPES),
    ("contact_status_enum", CONTACT_STATUSES),
    ("testimonial_status_enum", TESTIMONIAL_STATUSES),
)


def _timestamps():
    return (
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def _index(table, *columns):
    for column in columns:
        op.create_index(f"ix_{table}_{column}", table, [column])


def _drop_index(table, *columns):
    for column in columns:
        op.drop_index(f"ix_{table}_{column}", table_name=table)


def upgrade():
    bind = op.get_bind()
    enums = {}
    for name, values in ENUMS:
        enums[name] = sa.Enum(*values, name=name)
        enums[name].create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", enums["user_role_enum"], nullable=False, server_default="admin"),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    _index("users", "role", "is_active", "created_at")

    op.create_table(
        "portfolio",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("long_description", sa.Text(), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("technologies", sa.Text(), nullable=True),
        sa.Column("live_url", sa.String(length=500), nullable=True),
        sa.Column("github_url", sa.String(length=500), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", enums["portfolio_status_enum"], nullable=False, server_default="draft"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_portfolio_slug", "portfolio", ["slug"], unique=True)
    _index("portfolio", "category", "featured", "status", "sort_order", "created_at")

    op.create_table(
        "experience",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("current", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("achievements", sa.Text(), nullable=True),
        sa.Column("technologies", sa.Text(), nullable=True),
        sa.Column("type", enums["experience_type_enum"], nullable=False, server_default="full-time"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    _index("experience", "company", "start_date", "current", "type", "sort_order", "created_at")

    op.create_table(
        "blog",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("status", enums["blog_status_enum"], nullable=False, server_default="draft"),
        sa.Column("read_time", sa.String(length=20), nullable=True),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("publish_date", sa.DateTime(), nullable=True),
        sa.Column(
            "author_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_blog_slug", "blog", ["slug"], unique=True)
    _index("blog", "category", "status", "publish_date", "author_id", "created_at")

    op.create_table(
        "contact_messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", enums["contact_status_enum"], nullable=False, server_default="unread"),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("replied", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reply_message", sa.Text(), nullable=True),
        sa.Column("replied_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    _index("contact_messages", "email", "status", "replied", "created_at")

    op.create_table(
        "testimonials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", enums["testimonial_status_enum"], nullable=False, server_default="pending"),
        sa.Column("project_type", sa.String(length=100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_testimonials_rating"),
    )
    _index("testimonials", "company", "rating", "featured", "status", "sort_order", "created_at")


def downgrade():
    _drop_index("testimonials", "company", "rating", "featured", "status", "sort_order", "created_at")
    op.drop_table("testimonials")

    _drop_index("contact_messages", "email", "status", "replied", "created_at")
    op.drop_table("contact_messages")

    _drop_index("blog", "slug", "category", "status", "publish_date", "author_id", "created_at")
    op.drop_table("blog")

    _drop_index("experience", "company", "start_date", "current", "type", "sort_order", "created_at")
    op.drop_table("experience")

    _drop_index("portfolio", "slug", "category", "featured", "status", "sort_order", "created_at")
    op.drop_table("portfolio")

    _drop_index("users", "email", "role", "is_active", "created_at")
    op.drop_table("users")

    bind = op.get_bind()
    for name, values in reversed(ENUMS):
        sa.Enum(*values, name=name).drop(bind, checkfirst=True)
