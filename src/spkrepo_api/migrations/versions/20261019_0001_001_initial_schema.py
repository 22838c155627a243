# SPDX-License-Identifier: MIT
"""Initial package repository schema.

Creates the reference tables (architecture, firmware, language, service),
users and roles, packages with their versions, builds and localized text,
screenshots, icons and download events.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table of the package repository."""
    # Reference tables
    op.create_table(
        "architecture",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(20), nullable=False),
        sa.UniqueConstraint("code"),
    )
    op.create_table(
        "firmware",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("version", sa.String(3), nullable=False),
        sa.Column("build", sa.Integer(), nullable=False),
        sa.UniqueConstraint("build"),
    )
    op.create_table(
        "language",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(3), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.UniqueConstraint("code"),
    )
    op.create_table(
        "service",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(30), nullable=False),
        sa.UniqueConstraint("code"),
    )

    # Users and roles
    op.create_table(
        "role",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(80), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("api_key", sa.String(64), nullable=True),
        sa.Column("github_access_token", sa.String(40), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(), nullable=True),
        sa.Column("reset_token_hash", sa.String(64), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("api_key"),
    )
    op.create_table(
        "user_role",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id",
            sa.Integer(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # Packages
    op.create_table(
        "package",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "author_user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("insert_date", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "package_user_maintainer",
        sa.Column(
            "package_id",
            sa.Integer(),
            sa.ForeignKey("package.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "version",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "package_id",
            sa.Integer(),
            sa.ForeignKey("package.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ver", sa.Integer(), nullable=False),
        sa.Column("upstream_version", sa.String(20), nullable=False),
        sa.Column("changelog", sa.Text(), nullable=True),
        sa.Column("report_url", sa.String(255), nullable=True),
        sa.Column("distributor", sa.String(50), nullable=True),
        sa.Column("distributor_url", sa.String(255), nullable=True),
        sa.Column("maintainer", sa.String(50), nullable=True),
        sa.Column("maintainer_url", sa.String(255), nullable=True),
        sa.Column("dependencies", sa.String(255), nullable=True),
        sa.Column("conf_dependencies", sa.Text(), nullable=True),
        sa.Column("conflicts", sa.String(255), nullable=True),
        sa.Column("conf_conflicts", sa.Text(), nullable=True),
        sa.Column("install_wizard", sa.Boolean(), nullable=True),
        sa.Column("upgrade_wizard", sa.Boolean(), nullable=True),
        sa.Column("startable", sa.Boolean(), nullable=True),
        sa.Column("license", sa.Text(), nullable=True),
        sa.Column("insert_date", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_version_package_id", "version", ["package_id"])

    op.create_table(
        "build",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "package_id",
            sa.Integer(),
            sa.ForeignKey("package.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("firmware_id", sa.Integer(), sa.ForeignKey("firmware.id"), nullable=False),
        sa.Column(
            "publisher_user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("checksum", sa.String(32), nullable=True),
        sa.Column("exec_size", sa.Integer(), nullable=False),
        sa.Column("path", sa.String(100), nullable=False),
        sa.Column("md5", sa.String(32), nullable=False),
        sa.Column("insert_date", sa.DateTime(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=True),
    )
    op.create_index("ix_build_package_id", "build", ["package_id"])

    op.create_table(
        "build_architecture",
        sa.Column(
            "build_id",
            sa.Integer(),
            sa.ForeignKey("build.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "architecture_id",
            sa.Integer(),
            sa.ForeignKey("architecture.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # Localized text and media
    op.create_table(
        "displayname",
        sa.Column(
            "version_id",
            sa.Integer(),
            sa.ForeignKey("version.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("language_id", sa.Integer(), sa.ForeignKey("language.id"), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
    )
    op.create_table(
        "description",
        sa.Column(
            "version_id",
            sa.Integer(),
            sa.ForeignKey("version.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("language_id", sa.Integer(), sa.ForeignKey("language.id"), primary_key=True),
        sa.Column("desc", sa.Text(), nullable=False),
    )
    op.create_table(
        "icon",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "version_id",
            sa.Integer(),
            sa.ForeignKey("version.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("path", sa.String(100), nullable=False),
    )
    op.create_index("ix_icon_version_id", "icon", ["version_id"])

    op.create_table(
        "screenshot",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "package_id",
            sa.Integer(),
            sa.ForeignKey("package.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("path", sa.String(200), nullable=False),
    )
    op.create_index("ix_screenshot_package_id", "screenshot", ["package_id"])

    op.create_table(
        "version_service_dependency",
        sa.Column(
            "version_id",
            sa.Integer(),
            sa.ForeignKey("version.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "service_id",
            sa.Integer(),
            sa.ForeignKey("service.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # Analytics
    op.create_table(
        "download",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "build_id",
            sa.Integer(),
            sa.ForeignKey("build.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "architecture_id",
            sa.Integer(),
            sa.ForeignKey("architecture.id"),
            nullable=False,
        ),
        sa.Column("firmware_build", sa.Integer(), nullable=False),
        sa.Column("ip_address", sa.String(46), nullable=False),
        sa.Column("user_agent", sa.String(255), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_download_build_id", "download", ["build_id"])
    op.create_index("ix_download_date", "download", ["date"])


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_index("ix_download_date", table_name="download")
    op.drop_index("ix_download_build_id", table_name="download")
    op.drop_table("download")
    op.drop_table("version_service_dependency")
    op.drop_index("ix_screenshot_package_id", table_name="screenshot")
    op.drop_table("screenshot")
    op.drop_index("ix_icon_version_id", table_name="icon")
    op.drop_table("icon")
    op.drop_table("description")
    op.drop_table("displayname")
    op.drop_table("build_architecture")
    op.drop_index("ix_build_package_id", table_name="build")
    op.drop_table("build")
    op.drop_index("ix_version_package_id", table_name="version")
    op.drop_table("version")
    op.drop_table("package_user_maintainer")
    op.drop_table("package")
    op.drop_table("user_role")
    op.drop_table("user")
    op.drop_table("role")
    op.drop_table("service")
    op.drop_table("language")
    op.drop_table("firmware")
    op.drop_table("architecture")
