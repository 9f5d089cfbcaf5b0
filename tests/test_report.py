import pytest

from authz.domain.records import Account, Resource, Tenant
from authz.services.report_service import build_graph_report, project_graph, render_graph_report


class TestBuildGraphReport:
    @pytest.mark.asyncio
    async def test_tenant_forest_rebuilt_from_parent_ids(self, restaurant, store):
        report = await build_graph_report(store)

        assert [root.id for root in report.tenants] == ["saas"]
        chain = report.tenants[0].children[0]
        assert chain.id == "chain"
        assert [child.id for child in chain.children] == ["branch"]
        assert chain.owned_resources == [Resource(id="tablet", type="device")]

    @pytest.mark.asyncio
    async def test_grants_attached_to_tenants_accounts_roles_and_resources(
        self, restaurant, store, service
    ):
        await restaurant.add_account(Account(id="john", name="Waiter John"))
        await service.grant_access("john", "tablet", "server", "device")
        await service.grant_tenant_access("john", "saas", "platform-admin")

        report = await build_graph_report(store)

        saas = report.tenants[0]
        assert [(g.account_id, g.role_name) for g in saas.grants] == [
            ("john", "Platform Administrator")
        ]
        john = report.accounts[0]
        assert [g.resource_id for g in john.resource_grants] == ["tablet"]
        assert [g.tenant_id for g in john.tenant_grants] == ["saas"]
        roles = {role.id: role for role in report.roles}
        assert roles["server"].resource_grant_count == 1
        assert roles["platform-admin"].tenant_grant_count == 1
        tablet = report.resources[0]
        assert tablet.owner_tenant_id == "chain"
        assert [g.account_id for g in tablet.grants] == ["john"]

    @pytest.mark.asyncio
    async def test_report_does_not_change_the_store(self, restaurant, store):
        before = await store.list_tenants()

        await build_graph_report(store)

        assert await store.list_tenants() == before


class TestProjectGraph:
    def test_tenant_with_missing_parent_listed_as_root(self):
        report = project_graph(
            tenants=[Tenant(id="lost", name="Lost", parent_id="gone")],
            accounts=[],
            roles=[],
            resources=[Resource(id="pos")],
            ownerships=[],
            resource_accesses=[],
            tenant_accesses=[],
        )

        assert [root.id for root in report.tenants] == ["lost"]
        assert report.resources[0].owner_tenant_id is None

    def test_parent_cycle_listed_under_lowest_id_root(self):
        report = project_graph(
            tenants=[
                Tenant(id="b", name="B", parent_id="a"),
                Tenant(id="a", name="A", parent_id="c"),
                Tenant(id="c", name="C", parent_id="b"),
                Tenant(id="d", name="D", parent_id="c"),
            ],
            accounts=[],
            roles=[],
            resources=[],
            ownerships=[],
            resource_accesses=[],
            tenant_accesses=[],
        )

        assert [root.id for root in report.tenants] == ["a"]
        b = report.tenants[0].children[0]
        assert b.id == "b"
        c = b.children[0]
        assert c.id == "c"
        assert [child.id for child in c.children] == ["d"]
        assert "- A (a)" in render_graph_report(report).splitlines()


class TestRenderGraphReport:
    @pytest.mark.asyncio
    async def test_renders_indented_tree(self, restaurant, store):
        text = render_graph_report(await build_graph_report(store))

        lines = text.splitlines()
        assert "- Restaurant SaaS Platform (saas)" in lines
        assert "  - Restaurant Chain HQ (chain)" in lines
        assert "    - Downtown Branch (branch)" in lines
        assert "        resource tablet (device)" in lines
        assert "- Server (server): take-orders, serve-food" in lines
        assert "- tablet (device), owner chain" in lines
