from .auth import Role, Permission, RoleHasPermission
from .security import SecurityEvent
from .sync import SyncLock

__all__ = [
    'Role', 'Permission', 'RoleHasPermission',
    'SecurityEvent',
    'SyncLock',
]
