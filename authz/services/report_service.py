"""Read-only projection of the whole tenant graph for reporting and export."""

import asyncio
from dataclasses import dataclass, field

from authz.domain.records import (
    Account,
    Resource,
    ResourceAccess,
    ResourceOwnership,
    ResourceType,
    Role,
    Tenant,
    TenantAccess,
)
from authz.repositories.tenant_store import TenantStore


@dataclass
class GrantLine:
    account_id: str
    role_id: str
    role_name: str | None = None


@dataclass
class TenantReport:
    id: str
    name: str
    owned_resources: list[Resource] = field(default_factory=list)
    grants: list[GrantLine] = field(default_factory=list)
    children: list["TenantReport"] = field(default_factory=list)


@dataclass
class AccountReport:
    id: str
    name: str | None
    email: str | None
    organization: str | None
    resource_grants: list[ResourceAccess] = field(default_factory=list)
    tenant_grants: list[TenantAccess] = field(default_factory=list)


@dataclass
class RoleReport:
    id: str
    name: str | None
    permissions: list[str]
    resource_grant_count: int = 0
    tenant_grant_count: int = 0


@dataclass
class ResourceReport:
    id: str
    type: ResourceType
    owner_tenant_id: str | None
    grants: list[GrantLine] = field(default_factory=list)


@dataclass
class GraphReport:
    """
    Snapshot of tenants, accounts, roles and resources with their links.

    Tenants whose parent is missing from the snapshot are listed as roots,
    and so is the lowest-id tenant of any parent cycle, so that every
    stored tenant appears exactly once in the tree.
    """

    tenants: list[TenantReport]
    accounts: list[AccountReport]
    roles: list[RoleReport]
    resources: list[ResourceReport]


def _break_parent_cycles(parent_of: dict[str, str]) -> None:
    """Detach the lowest-id tenant of every parent cycle so it becomes a root"""
    settled: set[str] = set()
    for start in sorted(parent_of):
        path: list[str] = []
        current = start
        while current in parent_of and current not in settled and current not in path:
            path.append(current)
            current = parent_of[current]
        if current in path:
            cycle = path[path.index(current):]
            del parent_of[min(cycle)]
        settled.update(path)


async def build_graph_report(store: TenantStore) -> GraphReport:
    """
    Build a GraphReport from the store's list snapshots.

    Only list operations are used; the report never touches grants or
    ownership beyond reading them.
    """
    (
        tenants,
        accounts,
        roles,
        resources,
        ownerships,
        resource_accesses,
        tenant_accesses,
    ) = await asyncio.gather(
        store.list_tenants(),
        store.list_accounts(),
        store.list_roles(),
        store.list_resources(),
        store.list_resource_ownerships(),
        store.list_resource_accesses(),
        store.list_tenant_accesses(),
    )
    return project_graph(
        tenants, accounts, roles, resources, ownerships, resource_accesses, tenant_accesses
    )


def project_graph(
    tenants: list[Tenant],
    accounts: list[Account],
    roles: list[Role],
    resources: list[Resource],
    ownerships: list[ResourceOwnership],
    resource_accesses: list[ResourceAccess],
    tenant_accesses: list[TenantAccess],
) -> GraphReport:
    role_names = {role.id: role.name for role in roles}
    owner_of = {(o.resource_id, o.resource_type): o.tenant_id for o in ownerships}

    nodes = {tenant.id: TenantReport(id=tenant.id, name=tenant.name) for tenant in tenants}
    for ownership in ownerships:
        if ownership.tenant_id in nodes:
            nodes[ownership.tenant_id].owned_resources.append(
                Resource(ownership.resource_id, ownership.resource_type)
            )
    for access in tenant_accesses:
        if access.tenant_id in nodes:
            nodes[access.tenant_id].grants.append(
                GrantLine(access.account_id, access.role_id, role_names.get(access.role_id))
            )

    parent_of = {tenant.id: tenant.parent_id for tenant in tenants if tenant.parent_id in nodes}
    _break_parent_cycles(parent_of)

    roots = []
    for tenant in sorted(tenants, key=lambda t: t.id):
        if tenant.id in parent_of:
            nodes[parent_of[tenant.id]].children.append(nodes[tenant.id])
        else:
            roots.append(nodes[tenant.id])

    account_reports = [
        AccountReport(
            id=account.id,
            name=account.name,
            email=account.email,
            organization=account.organization,
            resource_grants=[a for a in resource_accesses if a.account_id == account.id],
            tenant_grants=[a for a in tenant_accesses if a.account_id == account.id],
        )
        for account in accounts
    ]

    role_reports = [
        RoleReport(
            id=role.id,
            name=role.name,
            permissions=list(role.permissions or []),
            resource_grant_count=sum(1 for a in resource_accesses if a.role_id == role.id),
            tenant_grant_count=sum(1 for a in tenant_accesses if a.role_id == role.id),
        )
        for role in roles
    ]

    resource_reports = [
        ResourceReport(
            id=resource.id,
            type=resource.type,
            owner_tenant_id=owner_of.get((resource.id, resource.type)),
            grants=[
                GrantLine(a.account_id, a.role_id, role_names.get(a.role_id))
                for a in resource_accesses
                if (a.resource_id, a.resource_type) == (resource.id, resource.type)
            ],
        )
        for resource in resources
    ]

    return GraphReport(
        tenants=roots, accounts=account_reports, roles=role_reports, resources=resource_reports
    )


def _type_label(resource_type: ResourceType) -> str:
    return resource_type if resource_type is not None else "untyped"


def _render_tenant(node: TenantReport, level: int, lines: list[str]) -> None:
    indent = "  " * level
    lines.append(f"{indent}- {node.name} ({node.id})")
    lines.append(f"{indent}    {len(node.grants)} account(s) with access")
    for grant in node.grants:
        lines.append(f"{indent}      account {grant.account_id}, role {grant.role_name or grant.role_id}")
    lines.append(f"{indent}    {len(node.owned_resources)} owned resource(s)")
    for resource in node.owned_resources:
        lines.append(f"{indent}      resource {resource.id} ({_type_label(resource.type)})")
    for child in node.children:
        _render_tenant(child, level + 1, lines)


def render_graph_report(report: GraphReport) -> str:
    """Render a report as an indented plain-text overview"""
    lines = ["TENANT HIERARCHY", "-" * 50]
    for root in report.tenants:
        _render_tenant(root, 0, lines)

    lines += ["", "ACCOUNTS", "-" * 50]
    for account in report.accounts:
        lines.append(f"- {account.name or account.id} ({account.id})")
        for grant in account.resource_grants:
            lines.append(
                f"    resource {grant.resource_id} ({_type_label(grant.resource_type)}): role {grant.role_id}"
            )
        for grant in account.tenant_grants:
            lines.append(f"    tenant {grant.tenant_id}: role {grant.role_id}")

    lines += ["", "ROLES", "-" * 50]
    for role in report.roles:
        lines.append(f"- {role.name or role.id} ({role.id}): {', '.join(role.permissions) or 'no permissions'}")
        lines.append(
            f"    {role.resource_grant_count} resource grant(s), {role.tenant_grant_count} tenant grant(s)"
        )

    lines += ["", "RESOURCES", "-" * 50]
    for resource in report.resources:
        owner = resource.owner_tenant_id or "unowned"
        lines.append(f"- {resource.id} ({_type_label(resource.type)}), owner {owner}")
        for grant in resource.grants:
            lines.append(f"    account {grant.account_id}, role {grant.role_name or grant.role_id}")

    return "\n".join(lines)
