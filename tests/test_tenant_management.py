import pytest


RESTAURANT_TREE = {
    "id": "saas",
    "name": "Restaurant SaaS Platform",
    "children": [
        {
            "id": "chain",
            "name": "Restaurant Chain HQ",
            "children": [{"id": "branch", "name": "Downtown Branch"}],
        }
    ],
}


@pytest.fixture
def imported_tree(client, auth_headers):
    response = client.post("/api/tenants/tree", headers=auth_headers, json=RESTAURANT_TREE)
    assert response.status_code == 201
    return response.json()


class TestTenantTreeImport:
    """Tests for POST /api/tenants/tree"""

    def test_import_tree(self, client, auth_headers, imported_tree):
        """Nested tree is stored with parent ids"""
        assert imported_tree == {"root_id": "saas", "created": 3}

        response = client.get("/api/tenants/branch", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"id": "branch", "name": "Downtown Branch", "parent_id": "chain"}

    def test_reimport_conflicts(self, client, auth_headers, imported_tree):
        """Importing a tree with a stored id returns 409"""
        response = client.post("/api/tenants/tree", headers=auth_headers, json=RESTAURANT_TREE)

        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_cycle_conflicts(self, client, auth_headers):
        """A tenant repeated inside its own subtree is reported as a conflict"""
        tree = {"id": "x", "name": "X", "children": [{"id": "x", "name": "X again"}]}

        response = client.post("/api/tenants/tree", headers=auth_headers, json=tree)

        assert response.status_code == 409
        assert "cycle" in response.json()["detail"].lower()


class TestTenants:
    """Tests for POST/GET /api/tenants"""

    def test_create_child_tenant(self, client, auth_headers, imported_tree):
        response = client.post(
            "/api/tenants",
            headers=auth_headers,
            json={"id": "uptown", "name": "Uptown Branch", "parent_id": "chain"},
        )

        assert response.status_code == 201
        assert response.json()["parent_id"] == "chain"

    def test_create_tenant_with_missing_parent(self, client, auth_headers):
        response = client.post(
            "/api/tenants",
            headers=auth_headers,
            json={"id": "uptown", "name": "Uptown Branch", "parent_id": "nowhere"},
        )

        assert response.status_code == 409

    def test_list_tenants(self, client, auth_headers, imported_tree):
        response = client.get("/api/tenants", headers=auth_headers)

        assert response.status_code == 200
        assert sorted(t["id"] for t in response.json()) == ["branch", "chain", "saas"]

    def test_get_missing_tenant(self, client, auth_headers):
        response = client.get("/api/tenants/nope", headers=auth_headers)

        assert response.status_code == 404


class TestRolesAndAccounts:
    def test_create_and_get_role(self, client, auth_headers):
        response = client.post(
            "/api/roles",
            headers=auth_headers,
            json={"id": "server", "name": "Server", "permissions": ["take-orders", "serve-food"]},
        )
        assert response.status_code == 201

        role = client.get("/api/roles/server", headers=auth_headers).json()
        assert role["permissions"] == ["take-orders", "serve-food"]

    def test_duplicate_role_conflicts(self, client, auth_headers):
        client.post("/api/roles", headers=auth_headers, json={"id": "server"})

        response = client.post(
            "/api/roles", headers=auth_headers, json={"id": "server", "permissions": ["all"]}
        )

        assert response.status_code == 409

    def test_get_missing_role(self, client, auth_headers):
        assert client.get("/api/roles/nope", headers=auth_headers).status_code == 404

    def test_create_and_list_accounts(self, client, auth_headers):
        response = client.post(
            "/api/accounts",
            headers=auth_headers,
            json={"id": "saas-admin", "name": "SaaS Platform Admin", "email": "admin@saasplatform.com"},
        )
        assert response.status_code == 201

        accounts = client.get("/api/accounts", headers=auth_headers).json()
        assert [a["id"] for a in accounts] == ["saas-admin"]
        assert client.get("/api/accounts/saas-admin", headers=auth_headers).json()["organization"] is None

    def test_duplicate_account_conflicts(self, client, auth_headers):
        client.post("/api/accounts", headers=auth_headers, json={"id": "john"})

        response = client.post("/api/accounts", headers=auth_headers, json={"id": "john"})

        assert response.status_code == 409


class TestResources:
    def test_create_resource(self, client, auth_headers, imported_tree):
        response = client.post(
            "/api/resources",
            headers=auth_headers,
            json={"id": "tablet", "type": "device", "tenant_id": "chain"},
        )

        assert response.status_code == 201
        assert response.json() == {"id": "tablet", "type": "device"}

    def test_create_resource_for_missing_tenant(self, client, auth_headers):
        response = client.post(
            "/api/resources",
            headers=auth_headers,
            json={"id": "tablet", "type": "device", "tenant_id": "nope"},
        )

        assert response.status_code == 404
        assert client.get("/api/resources", headers=auth_headers).json() == []

    def test_change_owner(self, client, auth_headers, imported_tree):
        client.post(
            "/api/resources",
            headers=auth_headers,
            json={"id": "tablet", "type": "device", "tenant_id": "chain"},
        )

        response = client.put(
            "/api/resources/tablet/owner",
            headers=auth_headers,
            json={"new_owner_id": "branch", "resource_type": "device"},
        )

        assert response.status_code == 200
        assert response.json() == {"resource_id": "tablet", "resource_type": "device", "tenant_id": "branch"}

    def test_change_owner_to_missing_tenant(self, client, auth_headers, imported_tree):
        client.post(
            "/api/resources",
            headers=auth_headers,
            json={"id": "tablet", "type": "device", "tenant_id": "chain"},
        )

        response = client.put(
            "/api/resources/tablet/owner",
            headers=auth_headers,
            json={"new_owner_id": "nope", "resource_type": "device"},
        )

        assert response.status_code == 404
