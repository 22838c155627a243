# SPDX-License-Identifier: MIT
"""Pytest fixtures for API tests."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from spkrepo_api import APIConfig, create_app
from spkrepo_api.auth.passwords import hash_password
from spkrepo_api.db import enable_sqlite_foreign_keys, get_session
from spkrepo_api.db.models import (
    Architecture,
    Base,
    Build,
    Description,
    DisplayName,
    Firmware,
    Language,
    Package,
    Role,
    Screenshot,
    User,
    UserRole,
    Version,
)

# Lowest bcrypt cost factor keeps the suite fast
TEST_BCRYPT_ROUNDS = 4

ADMIN_API_KEY = "a" * 64
DEVELOPER_API_KEY = "d" * 64
INACTIVE_API_KEY = "i" * 64


@pytest.fixture
def test_config() -> APIConfig:
    """Create test configuration with in-memory SQLite."""
    config = APIConfig()
    config.database.url = "sqlite+aiosqlite:///:memory:"
    config.database.echo = False
    config.auth.bcrypt_rounds = TEST_BCRYPT_ROUNDS
    config.auth.expose_reset_token = True
    config.logging.level = "WARNING"
    return config


@pytest_asyncio.fixture
async def test_engine(test_config: APIConfig):
    """Create test database engine."""
    engine = create_async_engine(
        test_config.database.url,
        echo=test_config.database.echo,
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(test_config: APIConfig, test_engine):
    """Create test FastAPI application."""
    app = create_app(test_config)

    # Override database session dependency
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def languages(test_session: AsyncSession) -> dict[str, Language]:
    """Create the English and French languages."""
    langs = {
        "enu": Language(code="enu", name="English"),
        "fre": Language(code="fre", name="French"),
    }
    test_session.add_all(langs.values())
    await test_session.commit()
    return langs


@pytest_asyncio.fixture
async def roles(test_session: AsyncSession) -> dict[str, Role]:
    """Create the admin and developer roles."""
    created = {
        "admin": Role(name="admin", description="Administrator"),
        "developer": Role(name="developer", description="Developer"),
    }
    test_session.add_all(created.values())
    await test_session.commit()
    return created


@dataclass
class SampleUsers:
    """Users covering each login outcome; every password is ``password``."""

    admin: User
    developer: User
    roleless: User
    inactive: User

    password: str = "password"


@pytest_asyncio.fixture
async def sample_users(test_session: AsyncSession, roles: dict[str, Role]) -> SampleUsers:
    """Create an admin, a developer, a user without roles and an inactive user."""
    password_hash = hash_password("password", rounds=TEST_BCRYPT_ROUNDS)

    admin = User(
        username="admin",
        email="admin@example.com",
        password=password_hash,
        api_key=ADMIN_API_KEY,
        active=True,
    )
    developer = User(
        username="developer",
        email="dev@example.com",
        password=password_hash,
        api_key=DEVELOPER_API_KEY,
        active=True,
    )
    roleless = User(
        username="nobody",
        email="nobody@example.com",
        password=password_hash,
        active=True,
    )
    inactive = User(
        username="inactive",
        email="inactive@example.com",
        password=password_hash,
        api_key=INACTIVE_API_KEY,
        active=False,
    )
    test_session.add_all([admin, developer, roleless, inactive])
    await test_session.flush()

    test_session.add_all(
        [
            UserRole(user_id=admin.id, role_id=roles["admin"].id),
            UserRole(user_id=developer.id, role_id=roles["developer"].id),
            UserRole(user_id=inactive.id, role_id=roles["developer"].id),
        ]
    )
    await test_session.commit()
    return SampleUsers(admin=admin, developer=developer, roleless=roleless, inactive=inactive)


@pytest_asyncio.fixture
async def architectures(test_session: AsyncSession) -> list[Architecture]:
    """Create ten architectures."""
    codes = ["x86_64", "armv7", "aarch64", "armv5", "ppc853x", "qoriq", "evansport",
             "avoton", "braswell", "noarch"]
    created = [Architecture(code=code) for code in codes]
    test_session.add_all(created)
    await test_session.commit()
    return created


@dataclass
class SampleCatalog:
    """Packages covering each listing outcome."""

    listed: Package
    inactive_only: Package
    french_only: Package
    builds: list[Build]


@pytest_asyncio.fixture
async def sample_catalog(
    test_session: AsyncSession,
    languages: dict[str, Language],
) -> SampleCatalog:
    """Create three packages.

    - ``transmission``: active build, English text -> listed
    - ``sickbeard``: only an inactive build, English text -> not listed
    - ``mono``: active build, French text only -> not listed
    """
    firmware = Firmware(version="7.2", build=64570)
    test_session.add(firmware)

    listed = Package(name="transmission")
    inactive_only = Package(name="sickbeard")
    french_only = Package(name="mono")
    test_session.add_all([listed, inactive_only, french_only])
    await test_session.flush()

    enu = languages["enu"].id
    fre = languages["fre"].id

    def version(package: Package, ver: int, upstream: str) -> Version:
        return Version(
            package_id=package.id,
            ver=ver,
            upstream_version=upstream,
            changelog=f"{package.name} {upstream}",
            distributor="SynoCommunity",
            distributor_url="https://synocommunity.com",
            install_wizard=False,
            upgrade_wizard=False,
            startable=True,
            license="GPL",
        )

    listed_version = version(listed, 1, "4.0.5")
    inactive_version = version(inactive_only, 1, "1.0")
    french_version = version(french_only, 1, "6.12")
    test_session.add_all([listed_version, inactive_version, french_version])
    await test_session.flush()

    test_session.add_all(
        [
            DisplayName(version_id=listed_version.id, language_id=enu, name="Transmission"),
            Description(version_id=listed_version.id, language_id=enu, text="BitTorrent client"),
            DisplayName(version_id=listed_version.id, language_id=fre, name="Transmission FR"),
            Description(version_id=listed_version.id, language_id=fre, text="Client BitTorrent"),
            DisplayName(version_id=inactive_version.id, language_id=enu, name="SickBeard"),
            Description(version_id=inactive_version.id, language_id=enu, text="PVR"),
            DisplayName(version_id=french_version.id, language_id=fre, name="Mono"),
            Description(version_id=french_version.id, language_id=fre, text="Cadre .NET"),
        ]
    )

    def build(package: Package, path: str, active: bool) -> Build:
        return Build(
            package_id=package.id,
            firmware_id=firmware.id,
            exec_size=1024,
            path=path,
            md5="0" * 32,
            active=active,
        )

    builds = [
        build(listed, "transmission/transmission.v1.f64570[x86_64].spk", True),
        build(listed, "transmission/transmission.v1.f64570[armv7].spk", False),
        build(inactive_only, "sickbeard/sickbeard.v1.f64570[noarch].spk", False),
        build(french_only, "mono/mono.v1.f64570[x86_64].spk", True),
    ]
    test_session.add_all(builds)
    test_session.add(Screenshot(package_id=listed.id, path="transmission/screenshot_1.png"))
    await test_session.commit()

    return SampleCatalog(
        listed=listed,
        inactive_only=inactive_only,
        french_only=french_only,
        builds=builds,
    )
