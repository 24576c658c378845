"""
tests.test_api_catalog

Admin CRUD over motorcycles and testimonials, image intake, inquiries and backup.
"""

from __future__ import annotations

import base64

import httpx
import pytest
from fastapi import FastAPI


@pytest.mark.asyncio
async def test_motorcycle_crud(client: httpx.AsyncClient, admin_headers) -> None:
    r = await client.post(
        "/api/motorcycles",
        json={"name": "Boxer BM150", "price": "KSh 75,000"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    moto = r.json()
    assert moto["name"] == "Boxer BM150"
    assert moto["location"] == "Embu"
    assert moto["featured"] is True
    assert moto["images"] == []

    r = await client.put(
        f"/api/motorcycles/{moto['id']}", json={"price": "KSh 70,000"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["price"] == "KSh 70,000"
    assert r.json()["name"] == "Boxer BM150"

    listed = (await client.get("/api/motorcycles")).json()
    assert [m["id"] for m in listed] == [moto["id"]]

    r = await client.delete(f"/api/motorcycles/{moto['id']}", headers=admin_headers)
    assert r.json() == {"success": True, "message": "Motorcycle deleted"}

    r = await client.get(f"/api/motorcycles/{moto['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_unfeatured_motorcycles_are_not_listed(client: httpx.AsyncClient, admin_headers) -> None:
    await client.post("/api/motorcycles", json={"featured": False}, headers=admin_headers)
    assert (await client.get("/api/motorcycles")).json() == []


@pytest.mark.asyncio
async def test_update_missing_motorcycle_is_404(client: httpx.AsyncClient, admin_headers) -> None:
    r = await client.put(
        "/api/motorcycles/00000000-0000-0000-0000-000000000000",
        json={"name": "x"},
        headers=admin_headers,
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_image_batch_is_best_effort(
    app: FastAPI, client: httpx.AsyncClient, admin_headers
) -> None:
    moto = (await client.post("/api/motorcycles", json={}, headers=admin_headers)).json()

    files = [
        ("images", ("front.jpg", b"abc", "image/jpeg")),
        ("images", ("notes.txt", b"hello", "text/plain")),
        ("images", ("huge.png", b"x" * 2048, "image/png")),
        ("images", ("side.png", b"png-bytes", "image/png")),
    ]
    r = await client.post(
        f"/api/motorcycles/{moto['id']}/images", files=files, headers=admin_headers
    )

    assert r.status_code == 200
    body = r.json()
    assert [i["image_name"] for i in body["images"]] == ["front.jpg", "side.png"]
    assert [i["is_primary"] for i in body["images"]] == [True, False]
    assert {f["filename"] for f in body["failures"]} == {"notes.txt", "huge.png"}

    first = body["images"][0]
    assert len(first["upload_id"]) == 32
    assert first["image_url"] == "data:image/jpeg;base64," + base64.b64encode(b"abc").decode()
    assert app.state.upload_registry.lookup(first["upload_id"]).filename == "front.jpg"

    fetched = (await client.get(f"/api/motorcycles/{moto['id']}")).json()
    assert len(fetched["images"]) == 2


@pytest.mark.asyncio
async def test_image_upload_requires_files(client: httpx.AsyncClient, admin_headers) -> None:
    moto = (await client.post("/api/motorcycles", json={}, headers=admin_headers)).json()

    r = await client.post(
        f"/api/motorcycles/{moto['id']}/images", data={"x": "y"}, headers=admin_headers
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_upload_inspection(client: httpx.AsyncClient, admin_headers) -> None:
    moto = (await client.post("/api/motorcycles", json={}, headers=admin_headers)).json()
    r = await client.post(
        f"/api/motorcycles/{moto['id']}/images",
        files=[("images", ("x.jpg", b"abc", "image/jpeg"))],
        headers=admin_headers,
    )
    upload_id = r.json()["images"][0]["upload_id"]

    meta = (await client.get(f"/api/uploads/{upload_id}", headers=admin_headers)).json()
    assert meta["filename"] == "x.jpg"
    assert meta["size"] == 3

    r = await client.get(f"/api/uploads/{upload_id}/content", headers=admin_headers)
    assert r.content == b"abc"
    assert r.headers["content-type"] == "image/jpeg"

    assert (await client.get(f"/api/uploads/{'f' * 32}", headers=admin_headers)).status_code == 404
    assert (await client.get(f"/api/uploads/{upload_id}")).status_code == 401


@pytest.mark.asyncio
async def test_testimonial_crud(client: httpx.AsyncClient, admin_headers) -> None:
    r = await client.post("/api/testimonials", json={"text": "Great bikes"}, headers=admin_headers)
    assert r.status_code == 201
    item = r.json()
    assert item["name"] == "New Customer"
    assert item["color"] == "blue"

    r = await client.put(
        f"/api/testimonials/{item['id']}", json={"color": "green"}, headers=admin_headers
    )
    assert r.json()["color"] == "green"
    assert r.json()["text"] == "Great bikes"

    r = await client.delete(f"/api/testimonials/{item['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert (await client.get("/api/testimonials")).json() == []


@pytest.mark.asyncio
async def test_inquiry_with_photos(app: FastAPI, client: httpx.AsyncClient, admin_headers) -> None:
    r = await client.post(
        "/api/inquiries",
        data={"name": "Jane", "phone": "0700000000", "model": "Suzuki 125"},
        files=[
            ("photos", ("bike.jpg", b"jpg", "image/jpeg")),
            ("photos", ("doc.pdf", b"pdf", "application/pdf")),
        ],
    )

    assert r.status_code == 201
    body = r.json()
    assert body["inquiry"]["name"] == "Jane"
    assert len(body["photo_ids"]) == 1
    assert body["photo_ids"][0] in app.state.upload_registry
    assert [f["filename"] for f in body["photo_failures"]] == ["doc.pdf"]

    listed = (await client.get("/api/inquiries", headers=admin_headers)).json()
    assert [i["phone"] for i in listed] == ["0700000000"]


@pytest.mark.asyncio
async def test_inquiry_requires_name_and_phone(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/inquiries", data={"name": "Jane"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_backup_dumps_everything(client: httpx.AsyncClient, admin_headers) -> None:
    await client.post("/api/motorcycles", json={"name": "A"}, headers=admin_headers)
    await client.post("/api/testimonials", json={"text": "t"}, headers=admin_headers)
    await client.post("/api/inquiries", data={"name": "B", "phone": "1"})

    r = await client.get("/api/backup", headers=admin_headers)

    assert r.status_code == 200
    body = r.json()
    assert [m["name"] for m in body["motorcycles"]] == ["A"]
    assert len(body["testimonials"]) == 1
    assert len(body["inquiries"]) == 1
    assert "timestamp" in body
