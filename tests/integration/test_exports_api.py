"""
Integration tests for the export endpoints.

These tests verify:
1. CSV, JSON and PDF downloads of the active window
2. Attachment filenames carry the window label
3. Empty windows produce no file
"""

import json

import pytest
from httpx import AsyncClient


class TestExports:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("export_format", ["csv", "json", "pdf"])
    async def test_empty_window_returns_204(self, client: AsyncClient, export_format: str):
        response = await client.get(f"/v1/exports/{export_format}")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_csv(self, client: AsyncClient):
        await client.post(
            "/v1/transactions",
            json={"amount": 250, "category": "Food", "description": 'Pizza "XL"'},
        )

        response = await client.get("/v1/exports/csv", params={"window": "7"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="expenses_7days.csv"' in response.headers["content-disposition"]

        lines = response.text.strip().split("\n")
        assert lines[0] == "Date,Category,Description,Amount,Type,ID"
        assert '"Food","Pizza ""XL""","250","expense"' in lines[1]

    @pytest.mark.asyncio
    async def test_json(self, client: AsyncClient):
        await client.post("/v1/transactions", json={"amount": 250, "category": "Food"})
        await client.post("/v1/transactions", json={"amount": 1000, "type": "income"})

        response = await client.get("/v1/exports/json", params={"window": "all"})

        assert response.status_code == 200
        assert 'filename="expenses_all.json"' in response.headers["content-disposition"]

        records = json.loads(response.content)
        assert len(records) == 2
        assert {r["Type"] for r in records} == {"expense", "income"}
        assert list(records[0].keys()) == ["Date", "Category", "Description", "Amount", "Type", "ID"]

    @pytest.mark.asyncio
    async def test_pdf(self, client: AsyncClient):
        await client.post("/v1/transactions", json={"amount": 250, "category": "Food"})

        response = await client.get("/v1/exports/pdf", params={"window": "30"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="fintrack_report_30days.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_export_respects_window(self, client: AsyncClient):
        await client.post("/v1/transactions", json={"amount": 5, "date": "2020-01-01"})

        response = await client.get("/v1/exports/csv", params={"window": "30"})

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_unknown_format(self, client: AsyncClient):
        response = await client.get("/v1/exports/xml")

        assert response.status_code == 422
