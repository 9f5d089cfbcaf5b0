"""
Integration tests for the Tenant Authorization API.

Tests complete workflows across multiple endpoints and the full stack
(routes → services → store → database).
"""

import pytest


@pytest.fixture
def restaurant_setup(client, auth_headers):
    """saas -> chain -> branch with roles and two devices"""
    client.post(
        "/api/tenants/tree",
        headers=auth_headers,
        json={
            "id": "saas",
            "name": "Restaurant SaaS Platform",
            "children": [
                {
                    "id": "chain",
                    "name": "Restaurant Chain HQ",
                    "children": [{"id": "branch", "name": "Downtown Branch"}],
                }
            ],
        },
    )
    client.post(
        "/api/roles",
        headers=auth_headers,
        json={"id": "server", "name": "Server", "permissions": ["take-orders", "serve-food"]},
    )
    client.post(
        "/api/roles",
        headers=auth_headers,
        json={
            "id": "platform-admin",
            "name": "Platform Administrator",
            "permissions": ["platform-admin", "manage-all-tenants"],
        },
    )
    client.post(
        "/api/resources",
        headers=auth_headers,
        json={"id": "tablet", "type": "device", "tenant_id": "chain"},
    )
    client.post(
        "/api/resources",
        headers=auth_headers,
        json={"id": "branch-pos", "type": "device", "tenant_id": "branch"},
    )


def check(client, headers, account_id, resource_id, permission, resource_type=None) -> bool:
    payload = {"account_id": account_id, "resource_id": resource_id, "permission": permission}
    if resource_type is not None:
        payload["resource_type"] = resource_type
    response = client.post("/api/access/check", headers=headers, json=payload)
    assert response.status_code == 200
    return response.json()["allowed"]


class TestResourceGrantWorkflow:
    def test_grant_check_revoke(self, client, auth_headers, restaurant_setup):
        """Waiter gets the server role on the tablet, then loses it"""
        response = client.post(
            "/api/access/resources",
            headers=auth_headers,
            json={"account_id": "john", "resource_id": "tablet", "role_id": "server"},
        )
        assert response.status_code == 201
        assert response.json()["role"]["permissions"] == ["take-orders", "serve-food"]

        assert check(client, auth_headers, "john", "tablet", "take-orders") is True
        assert check(client, auth_headers, "john", "tablet", "manage-finances") is False

        response = client.request(
            "DELETE",
            "/api/access/resources",
            headers=auth_headers,
            json={"account_id": "john", "resource_id": "tablet"},
        )
        assert response.json() == {"revoked": True}
        assert check(client, auth_headers, "john", "tablet", "take-orders") is False

        response = client.request(
            "DELETE",
            "/api/access/resources",
            headers=auth_headers,
            json={"account_id": "john", "resource_id": "tablet"},
        )
        assert response.status_code == 200
        assert response.json() == {"revoked": False}

    def test_duplicate_grant_conflicts(self, client, auth_headers, restaurant_setup):
        grant = {"account_id": "john", "resource_id": "tablet", "role_id": "server", "resource_type": "device"}
        client.post("/api/access/resources", headers=auth_headers, json=grant)

        response = client.post(
            "/api/access/resources", headers=auth_headers, json={**grant, "role_id": "platform-admin"}
        )

        assert response.status_code == 409
        assert check(client, auth_headers, "john", "tablet", "platform-admin", "device") is False

    def test_list_account_resources(self, client, auth_headers, restaurant_setup):
        for resource_id in ("tablet", "branch-pos"):
            client.post(
                "/api/access/resources",
                headers=auth_headers,
                json={"account_id": "john", "resource_id": resource_id, "role_id": "server", "resource_type": "device"},
            )

        response = client.get(
            "/api/access/accounts/john/resources",
            headers=auth_headers,
            params={"resource_type": "device"},
        )

        assert response.status_code == 200
        assert sorted(r["id"] for r in response.json()) == ["branch-pos", "tablet"]
        untyped = client.get("/api/access/accounts/john/resources", headers=auth_headers)
        assert untyped.json() == []

    def test_empty_type_filter_is_bad_request(self, client, auth_headers, restaurant_setup):
        response = client.get(
            "/api/access/accounts/john/resources",
            headers=auth_headers,
            params={"resource_type": ""},
        )

        assert response.status_code == 400
        assert "must not be empty" in response.json()["detail"]


class TestTenantGrantWorkflow:
    def test_platform_admin_reaches_branch_device(self, client, auth_headers, restaurant_setup):
        response = client.post(
            "/api/access/tenants",
            headers=auth_headers,
            json={"account_id": "admin", "tenant_id": "saas", "role_id": "platform-admin"},
        )
        assert response.status_code == 201

        assert check(client, auth_headers, "admin", "branch-pos", "platform-admin", "device") is True
        assert check(client, auth_headers, "admin", "branch-pos", "cook-food", "device") is False
        # Tenant grants are not listed as the account's resources
        listed = client.get(
            "/api/access/accounts/admin/resources", headers=auth_headers, params={"resource_type": "device"}
        )
        assert listed.json() == []

    def test_duplicate_tenant_grant_conflicts(self, client, auth_headers, restaurant_setup):
        grant = {"account_id": "admin", "tenant_id": "saas", "role_id": "platform-admin"}
        client.post("/api/access/tenants", headers=auth_headers, json=grant)

        response = client.post("/api/access/tenants", headers=auth_headers, json=grant)

        assert response.status_code == 409

    def test_grant_on_missing_tenant_not_found(self, client, auth_headers, restaurant_setup):
        response = client.post(
            "/api/access/tenants",
            headers=auth_headers,
            json={"account_id": "alice", "tenant_id": "ghost", "role_id": "server"},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Tenant ghost not found"

    def test_ownership_move_changes_decision(self, client, auth_headers, restaurant_setup):
        client.post(
            "/api/access/tenants",
            headers=auth_headers,
            json={"account_id": "manager", "tenant_id": "branch", "role_id": "server"},
        )
        assert check(client, auth_headers, "manager", "tablet", "take-orders", "device") is False

        client.put(
            "/api/resources/tablet/owner",
            headers=auth_headers,
            json={"new_owner_id": "branch", "resource_type": "device"},
        )

        assert check(client, auth_headers, "manager", "tablet", "take-orders", "device") is True


class TestReport:
    def test_json_report(self, client, auth_headers, restaurant_setup):
        client.post(
            "/api/access/tenants",
            headers=auth_headers,
            json={"account_id": "admin", "tenant_id": "saas", "role_id": "platform-admin"},
        )

        response = client.get("/api/report", headers=auth_headers)

        assert response.status_code == 200
        report = response.json()
        saas = report["tenants"][0]
        assert saas["id"] == "saas"
        assert saas["grants"][0]["role_name"] == "Platform Administrator"
        branch = saas["children"][0]["children"][0]
        assert branch["owned_resources"] == [{"id": "branch-pos", "type": "device"}]

    def test_text_report(self, client, auth_headers, restaurant_setup):
        response = client.get("/api/report", headers=auth_headers, params={"format": "text"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "- Restaurant SaaS Platform (saas)" in response.text
