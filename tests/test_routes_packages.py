# SPDX-License-Identifier: MIT
"""Tests for package, build, screenshot and download endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from spkrepo_api.db.models import PackageUserMaintainer


def auth(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {user.api_key}"}


@pytest.mark.asyncio
async def test_list_packages_empty(client: AsyncClient):
    response = await client.get("/api/v1/package")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_packages(client: AsyncClient, sample_catalog):
    """Only packages with an active build and English text are listed."""
    response = await client.get("/api/v1/package")
    assert response.status_code == 200

    data = response.json()
    assert data == [
        {
            "package": "transmission",
            "changelog": "transmission 4.0.5",
            "link": "transmission/transmission.v1.f64570[x86_64].spk",
            "desc": "BitTorrent client",
            "distributor": "SynoCommunity",
            "distributor_url": "https://synocommunity.com",
            "dname": "Transmission",
        }
    ]


@pytest.mark.asyncio
async def test_list_packages_configured_language(client: AsyncClient, app, sample_catalog):
    app.state.config.default_language = "fre"

    response = await client.get("/api/v1/package")
    assert response.status_code == 200
    assert sorted(p["package"] for p in response.json()) == ["mono", "transmission"]


@pytest.mark.asyncio
async def test_get_package(client: AsyncClient, sample_catalog):
    package = sample_catalog.listed
    response = await client.get(f"/api/v1/package/{package.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "transmission"


@pytest.mark.asyncio
async def test_get_package_not_found(client: AsyncClient):
    response = await client.get("/api/v1/package/9999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_list_package_versions(client: AsyncClient, sample_catalog):
    response = await client.get(f"/api/v1/package/{sample_catalog.listed.id}/version")
    assert response.status_code == 200

    versions = response.json()
    assert len(versions) == 1
    assert versions[0]["ver"] == 1
    assert versions[0]["upstream_version"] == "4.0.5"
    assert versions[0]["license"] == "GPL"


@pytest.mark.asyncio
async def test_list_versions_of_missing_package(client: AsyncClient):
    response = await client.get("/api/v1/package/9999/version")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_package_maintainers(
    client: AsyncClient, test_session: AsyncSession, sample_catalog, sample_users
):
    test_session.add(
        PackageUserMaintainer(
            package_id=sample_catalog.listed.id,
            user_id=sample_users.developer.id,
        )
    )
    await test_session.commit()

    response = await client.get(f"/api/v1/package/{sample_catalog.listed.id}/maintainer")
    assert response.status_code == 200

    maintainers = response.json()
    assert [m["username"] for m in maintainers] == ["developer"]
    assert "password" not in maintainers[0]
    assert "api_key" not in maintainers[0]


@pytest.mark.asyncio
async def test_list_builds(client: AsyncClient, sample_catalog):
    response = await client.get("/api/v1/build")
    assert response.status_code == 200

    builds = response.json()
    assert [b["path"] for b in builds] == [b.path for b in sample_catalog.builds]
    assert [b["active"] for b in builds] == [True, False, False, True]


@pytest.mark.asyncio
async def test_activate_build_requires_admin(client: AsyncClient, sample_catalog, sample_users):
    build = sample_catalog.builds[1]

    response = await client.put(f"/api/v1/build/{build.id}/active")
    assert response.status_code == 401

    response = await client.put(
        f"/api/v1/build/{build.id}/active", headers=auth(sample_users.developer)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_activate_build(client: AsyncClient, sample_catalog, sample_users):
    build = sample_catalog.builds[1]

    response = await client.put(
        f"/api/v1/build/{build.id}/active", headers=auth(sample_users.admin)
    )
    assert response.status_code == 200
    assert response.json()["active"] is True

    response = await client.get("/api/v1/package")
    assert [p["link"] for p in response.json()] == [build.path]


@pytest.mark.asyncio
async def test_activate_missing_build(client: AsyncClient, sample_users):
    response = await client.put("/api/v1/build/9999/active", headers=auth(sample_users.admin))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_screenshots(client: AsyncClient, sample_catalog):
    response = await client.get("/api/v1/screenshot")
    assert response.status_code == 200

    screenshots = response.json()
    assert len(screenshots) == 1
    assert screenshots[0]["package"] == "transmission"
    assert screenshots[0]["path"] == "transmission/screenshot_1.png"


@pytest.mark.asyncio
async def test_record_download(client: AsyncClient, sample_catalog, architectures):
    build = sample_catalog.builds[0]
    response = await client.post(
        "/api/v1/download",
        json={
            "build_id": build.id,
            "architecture_id": architectures[0].id,
            "firmware_build": 64570,
        },
        headers={"User-Agent": "synology_x86_64_ds918+ DSM7.2-64570"},
    )
    assert response.status_code == 200

    download = response.json()
    assert download["build_id"] == build.id
    assert download["user_agent"] == "synology_x86_64_ds918+ DSM7.2-64570"
    assert download["ip_address"]


@pytest.mark.asyncio
async def test_record_download_unknown_build(client: AsyncClient, architectures):
    response = await client.post(
        "/api/v1/download",
        json={"build_id": 9999, "architecture_id": architectures[0].id, "firmware_build": 1},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_record_download_unknown_architecture(
    client: AsyncClient, sample_catalog, sample_users
):
    body = {"build_id": sample_catalog.builds[0].id, "architecture_id": 9999, "firmware_build": 1}
    response = await client.post("/api/v1/download", json=body)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Architecture 9999 not found"

    response = await client.get("/api/v1/download", headers=auth(sample_users.admin))
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_downloads_admin_only(
    client: AsyncClient, sample_catalog, sample_users, architectures
):
    body = {
        "build_id": sample_catalog.builds[0].id,
        "architecture_id": architectures[0].id,
        "firmware_build": 64570,
    }
    await client.post("/api/v1/download", json=body)

    response = await client.get("/api/v1/download", headers=auth(sample_users.developer))
    assert response.status_code == 403

    response = await client.get("/api/v1/download", headers=auth(sample_users.admin))
    assert response.status_code == 200
    assert len(response.json()) == 1
