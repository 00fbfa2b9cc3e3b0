"""Tests that the server handles many simultaneous requests correctly.

Requests run concurrently on one event loop while the shared allocation
table serializes claims, so codes stay unique and every code has exactly
one owner.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_shorten_requests(self, client):
        """Many concurrent shorten requests with different URLs all get unique codes."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/shorten", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            data = r.json()
            assert data["original_url"] == urls[i]
            short_codes.append(data["short_code"])

        assert len(short_codes) == len(set(short_codes)), "All short_codes must be unique under concurrency"

    async def test_concurrent_custom_claims(self, client):
        """Concurrent claims of the same custom code: one 201, the rest 409."""
        concurrency = 20
        urls = [f"https://example.com/promo_{i}" for i in range(concurrency)]
        tasks = [client.post("/shorten", json={"url": url, "custom_code": "promo"}) for url in urls]
        responses = await asyncio.gather(*tasks)

        statuses = [r.status_code for r in responses]
        assert statuses.count(201) == 1
        assert statuses.count(409) == concurrency - 1

        winner = urls[statuses.index(201)]
        redirect = await client.get("/promo", follow_redirects=False)
        assert redirect.headers["location"] == winner

    async def test_concurrent_redirect_requests(self, client):
        """Create one short URL, then many concurrent redirects all succeed."""
        create_resp = await client.post(
            "/shorten",
            json={"url": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 201
        short_code = create_resp.json()["short_code"]

        tasks = [client.get(f"/{short_code}", follow_redirects=False) for _ in range(20)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 301, f"Request {i}: status {r.status_code}"
            assert r.headers["location"] == "https://example.com/redirect-target"

    async def test_concurrent_mixed_read_after_write(self, client):
        """Concurrent info and health reads after one write all agree."""
        create_resp = await client.post(
            "/shorten",
            json={"url": "https://example.com/concurrent-target"},
        )
        short_code = create_resp.json()["short_code"]

        tasks = (
            [client.get(f"/api/urls/{short_code}") for _ in range(25)]
            + [client.get("/api/health") for _ in range(25)]
        )
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            if "urls" in str(r.request.url):
                assert r.json()["original_url"] == "https://example.com/concurrent-target"
