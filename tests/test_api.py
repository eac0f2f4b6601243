"""
tests.test_api

HTTP surface used by the deployment orchestrator.
"""

from __future__ import annotations

import uuid

import httpx
import pytest


def _url(subscription_id: uuid.UUID, suffix: str = "") -> str:
    return f"/v1/subscriptions/{subscription_id}/template-parameters{suffix}"


def _values_url(subscription_id: uuid.UUID) -> str:
    return f"/v1/subscriptions/{subscription_id}/template-parameter-values"


def _body(plan_id: uuid.UUID, name: str, value: str) -> dict[str, str]:
    return {"plan_id": str(plan_id), "parameter_name": name, "parameter_value": value}


@pytest.mark.asyncio
async def test_save_and_list(client: httpx.AsyncClient) -> None:
    sub, plan, other_plan = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    r = await client.post(_url(sub), json=_body(plan, "region", "eastus"))
    assert r.status_code == 201
    region_id = r.json()["id"]

    r = await client.post(_url(sub), json=_body(plan, "sku", "standard"))
    assert r.status_code == 201
    await client.post(_url(sub), json=_body(other_plan, "rg", "my-rg"))

    r = await client.get(_url(sub))
    assert r.status_code == 200
    assert {p["parameter_name"] for p in r.json()} == {"region", "sku", "rg"}

    r = await client.get(_url(sub), params={"plan_id": str(plan)})
    items = r.json()
    assert [p["parameter_name"] for p in items] == ["region", "sku"]
    assert items[0]["id"] == region_id
    assert items[0]["subscription_id"] == str(sub)

    r = await client.get(_values_url(sub), params={"plan_id": str(other_plan)})
    assert r.json() == {"rg": "my-rg"}


@pytest.mark.asyncio
async def test_empty_subscription_lists_nothing(client: httpx.AsyncClient) -> None:
    r = await client.get(_url(uuid.uuid4()))
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_duplicate_save_conflicts(client: httpx.AsyncClient) -> None:
    sub, plan = uuid.uuid4(), uuid.uuid4()
    await client.post(_url(sub), json=_body(plan, "region", "eastus"))

    r = await client.post(_url(sub), json=_body(plan, "region", "westus"))
    assert r.status_code == 409
    assert r.json()["code"] == "constraint_violation"


@pytest.mark.asyncio
async def test_get_single_parameter(client: httpx.AsyncClient) -> None:
    sub, plan = uuid.uuid4(), uuid.uuid4()
    await client.post(_url(sub), json=_body(plan, "region", "eastus"))

    r = await client.get(_url(sub, "/region"))
    assert r.status_code == 200
    assert r.json()["parameter_value"] == "eastus"

    r = await client.get(_url(sub, "/sku"))
    assert r.status_code == 404
    body = r.json()
    assert body["code"] == "not_found"
    assert body["details"]["parameter_name"] == "sku"


@pytest.mark.asyncio
async def test_replace_all(client: httpx.AsyncClient) -> None:
    sub, plan, new_plan = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    await client.post(_url(sub), json=_body(plan, "region", "eastus"))

    r = await client.put(
        _url(sub),
        json=[_body(new_plan, "location", "westeurope"), _body(new_plan, "tier", "premium")],
    )
    assert r.status_code == 204

    r = await client.get(_values_url(sub))
    assert r.json() == {"location": "westeurope", "tier": "premium"}

    r = await client.put(_url(sub), json=[])
    assert r.status_code == 204
    assert (await client.get(_url(sub))).json() == []


@pytest.mark.asyncio
async def test_replace_with_duplicate_names_is_rejected(client: httpx.AsyncClient) -> None:
    sub, plan = uuid.uuid4(), uuid.uuid4()
    await client.post(_url(sub), json=_body(plan, "region", "eastus"))

    r = await client.put(_url(sub), json=[_body(plan, "sku", "a"), _body(plan, "sku", "b")])
    assert r.status_code == 409

    # Default policy is atomic: the previous set survives.
    assert (await client.get(_values_url(sub))).json() == {"region": "eastus"}


@pytest.mark.asyncio
async def test_blank_name_is_invalid(client: httpx.AsyncClient) -> None:
    r = await client.post(_url(uuid.uuid4()), json=_body(uuid.uuid4(), "   ", "x"))
    assert r.status_code == 422
    assert r.json()["code"] == "invalid_parameters"


@pytest.mark.asyncio
async def test_any_parameter_name_is_addressable(client: httpx.AsyncClient) -> None:
    sub, plan = uuid.uuid4(), uuid.uuid4()
    await client.post(_url(sub), json=_body(plan, "values", "literal"))
    await client.post(_url(sub), json=_body(plan, "network/subnet", "10.0.0.0/24"))

    r = await client.get(_url(sub, "/values"))
    assert r.status_code == 200
    assert r.json()["parameter_value"] == "literal"

    r = await client.get(_url(sub, "/network/subnet"))
    assert r.status_code == 200
    assert r.json()["parameter_value"] == "10.0.0.0/24"

    r = await client.get(_values_url(sub))
    assert r.json() == {"values": "literal", "network/subnet": "10.0.0.0/24"}
