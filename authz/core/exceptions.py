class AuthzException(Exception):
    """Base exception for the tenant authorization service"""

    pass


class UnauthorizedException(AuthzException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(AuthzException):
    """Raised when an entity an operation depends on does not exist"""

    pass


class ConflictException(AuthzException):
    """Raised when a create collides with an existing key"""

    pass


class ValidationException(AuthzException):
    """Raised for business logic validation errors"""

    pass


class TenantCycleOrDuplicateException(ConflictException):
    """
    Raised while building a tenant tree when a tenant id is already stored.

    A descendant reusing an ancestor's id cannot be told apart from a
    re-import of the same tenant, so both are reported through this error.
    """

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(
            f"Tenant with id {tenant_id} already exists. "
            "Either a cycle has been detected or the tenant is already added."
        )


class TenantCycleException(AuthzException):
    """Raised when a tenant's parent chain loops back on itself"""

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"Parent chain of tenant {tenant_id} contains a cycle")
