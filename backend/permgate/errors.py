# Overview: Error taxonomy for catalog, sync, grant and resolution failures.


class PermgateError(Exception):
    """Base class for permission system errors."""


class CatalogInvalid(PermgateError):
    """Validator found hard errors; nothing may be written."""

    def __init__(self, report):
        self.report = report
        count = len(report.errors)
        super().__init__(f"Permission catalog has {count} error(s)")


class NotFoundError(PermgateError, LookupError):
    """Referential lookup against storage failed."""


class PermissionNotFound(NotFoundError):
    def __init__(self, permission_name: str):
        self.permission_name = permission_name
        super().__init__(f"Permission '{permission_name}' not found")


class RoleNotFound(NotFoundError):
    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role '{role_name}' not found")


class GrantNotFound(NotFoundError):
    def __init__(self, role_name: str, permission_name: str):
        self.role_name = role_name
        self.permission_name = permission_name
        super().__init__(f"Role '{role_name}' does not have permission '{permission_name}'")


class DependencyCycle(PermgateError):
    """Permission dependencies loop back on themselves."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"Dependency cycle: {' -> '.join(self.cycle)}")


class ProtectedPermissionError(PermgateError):
    """Revocation would drop a system role below its protected minimum."""

    def __init__(self, role_name: str, permission_name: str):
        self.role_name = role_name
        self.permission_name = permission_name
        super().__init__(
            f"Permission '{permission_name}' is protected on system role '{role_name}'"
        )


class SystemRoleProtected(PermgateError):
    def __init__(self, role_name: str, action: str = "deleted"):
        self.role_name = role_name
        super().__init__(f"Role '{role_name}' is a system default role and cannot be {action}")


class RoleAlreadyExists(PermgateError):
    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role '{role_name}' already exists")


class SyncInProgress(PermgateError):
    """Another catalog sync run holds the lock."""
