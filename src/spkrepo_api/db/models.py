# SPDX-License-Identifier: MIT
"""SQLAlchemy database models for the package repository."""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


# =============================================================================
# Reference tables
# =============================================================================


class Architecture(Base):
    """CPU architecture a build can target (e.g. ``x86_64``, ``armv7``)."""

    __tablename__ = "architecture"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(20), unique=True)

    def __repr__(self) -> str:
        return f"<Architecture(id={self.id}, code={self.code!r})>"


class Firmware(Base):
    """Firmware release that builds are compiled against."""

    __tablename__ = "firmware"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version: Mapped[str] = mapped_column(String(3))
    build: Mapped[int] = mapped_column(Integer, unique=True)

    def __repr__(self) -> str:
        return f"<Firmware(version={self.version!r}, build={self.build})>"


class Language(Base):
    """Language for localized display names and descriptions."""

    __tablename__ = "language"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(3), unique=True)
    name: Mapped[str] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"<Language(code={self.code!r})>"


class Service(Base):
    """System service a package version may depend on."""

    __tablename__ = "service"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(30), unique=True)

    def __repr__(self) -> str:
        return f"<Service(code={self.code!r})>"


# =============================================================================
# Users and roles
# =============================================================================


class UserRole(Base):
    """Association between users and roles."""

    __tablename__ = "user_role"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True
    )


class Role(Base):
    """Named permission group (``admin``, ``package_admin``, ``developer``)."""

    __tablename__ = "role"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), unique=True)
    description: Mapped[str] = mapped_column(String(255), default="")

    users: Mapped[list["User"]] = relationship(
        "User", secondary="user_role", back_populates="roles"
    )

    def __repr__(self) -> str:
        return f"<Role(name={self.name!r})>"


class User(Base):
    """User account.

    ``password`` holds a bcrypt hash. A password reset stores only the
    SHA-256 digest of the issued token together with its expiry.
    """

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True)
    email: Mapped[str] = mapped_column(String(254), unique=True)
    password: Mapped[str] = mapped_column(String(255))
    api_key: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    github_access_token: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    reset_token_hash: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    reset_token_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role", secondary="user_role", back_populates="users"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"


# =============================================================================
# Packages
# =============================================================================


class PackageUserMaintainer(Base):
    """Association between packages and the users maintaining them."""

    __tablename__ = "package_user_maintainer"

    package_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("package.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )


class Package(Base):
    """Package metadata model."""

    __tablename__ = "package"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(50), unique=True)
    insert_date: Mapped[Optional[datetime]] = mapped_column(DateTime, default=_utc_now)

    # Relationships
    versions: Mapped[list["Version"]] = relationship(
        "Version", back_populates="package", cascade="all, delete-orphan"
    )
    builds: Mapped[list["Build"]] = relationship(
        "Build", back_populates="package", cascade="all, delete-orphan"
    )
    screenshots: Mapped[list["Screenshot"]] = relationship(
        "Screenshot", back_populates="package", cascade="all, delete-orphan"
    )
    maintainers: Mapped[list["User"]] = relationship("User", secondary="package_user_maintainer")

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, name={self.name!r})>"


class Version(Base):
    """Package version model.

    Carries the upstream version string, changelog, licensing, dependency
    and conflict strings, and the install/upgrade/start feature flags.
    """

    __tablename__ = "version"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("package.id", ondelete="CASCADE"), index=True
    )
    ver: Mapped[int] = mapped_column(Integer)
    upstream_version: Mapped[str] = mapped_column(String(20))
    changelog: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    report_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    distributor: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    distributor_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    maintainer: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    maintainer_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    dependencies: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    conf_dependencies: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    conflicts: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    conf_conflicts: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    install_wizard: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    upgrade_wizard: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    startable: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    license: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    insert_date: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    # Relationships
    package: Mapped["Package"] = relationship("Package", back_populates="versions")
    displaynames: Mapped[list["DisplayName"]] = relationship(
        "DisplayName", cascade="all, delete-orphan"
    )
    descriptions: Mapped[list["Description"]] = relationship(
        "Description", cascade="all, delete-orphan"
    )
    icons: Mapped[list["Icon"]] = relationship("Icon", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Version(package_id={self.package_id}, ver={self.ver})>"


class Build(Base):
    """Binary build of a package for one firmware.

    ``active`` marks the build currently distributed for the package.
    """

    __tablename__ = "build"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("package.id", ondelete="CASCADE"), index=True
    )
    firmware_id: Mapped[int] = mapped_column(Integer, ForeignKey("firmware.id"))
    publisher_user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    checksum: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    exec_size: Mapped[int] = mapped_column(Integer)
    path: Mapped[str] = mapped_column(String(100))
    md5: Mapped[str] = mapped_column(String(32))
    insert_date: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    active: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True, default=False)

    # Relationships
    package: Mapped["Package"] = relationship("Package", back_populates="builds")
    firmware: Mapped["Firmware"] = relationship("Firmware")
    architectures: Mapped[list["Architecture"]] = relationship(
        "Architecture", secondary="build_architecture"
    )

    def __repr__(self) -> str:
        return f"<Build(id={self.id}, path={self.path!r}, active={self.active})>"


class BuildArchitecture(Base):
    """Association between builds and the architectures they run on."""

    __tablename__ = "build_architecture"

    build_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("build.id", ondelete="CASCADE"), primary_key=True
    )
    architecture_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("architecture.id", ondelete="CASCADE"), primary_key=True
    )


class DisplayName(Base):
    """Localized display name of a version."""

    __tablename__ = "displayname"

    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("version.id", ondelete="CASCADE"), primary_key=True
    )
    language_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("language.id"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(50))


class Description(Base):
    """Localized description of a version.

    The column is named ``desc`` in the table; it is mapped to ``text``
    to stay clear of the SQL keyword.
    """

    __tablename__ = "description"

    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("version.id", ondelete="CASCADE"), primary_key=True
    )
    language_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("language.id"), primary_key=True
    )
    text: Mapped[str] = mapped_column("desc", Text)


class Icon(Base):
    """Icon image of a version at a given pixel size."""

    __tablename__ = "icon"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("version.id", ondelete="CASCADE"), index=True
    )
    size: Mapped[int] = mapped_column(Integer)
    path: Mapped[str] = mapped_column(String(100))


class Screenshot(Base):
    """Screenshot image of a package."""

    __tablename__ = "screenshot"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("package.id", ondelete="CASCADE"), index=True
    )
    path: Mapped[str] = mapped_column(String(200))

    package: Mapped["Package"] = relationship("Package", back_populates="screenshots")


class VersionServiceDependency(Base):
    """Association between versions and the services they require."""

    __tablename__ = "version_service_dependency"

    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("version.id", ondelete="CASCADE"), primary_key=True
    )
    service_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("service.id", ondelete="CASCADE"), primary_key=True
    )


# =============================================================================
# Analytics
# =============================================================================


class Download(Base):
    """Download event of a build, recorded with the requester's address."""

    __tablename__ = "download"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    build_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("build.id", ondelete="CASCADE"), index=True
    )
    architecture_id: Mapped[int] = mapped_column(Integer, ForeignKey("architecture.id"))
    firmware_build: Mapped[int] = mapped_column(Integer)
    ip_address: Mapped[str] = mapped_column(String(46))
    user_agent: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, index=True)

    def __repr__(self) -> str:
        return f"<Download(build_id={self.build_id}, ip_address={self.ip_address!r})>"
