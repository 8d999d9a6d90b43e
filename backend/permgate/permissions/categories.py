# Overview: Closed vocabularies for the permission taxonomy.


class PermissionCategory:
    """Permission categories, coarsest to finest."""
    LAYOUT = "layout"      # panel entry gate
    VIEW = "view"          # read access to a page
    FUNCTION = "function"  # mutating or fine-grained operation

    ALL = ("layout", "view", "function")


class PermissionAction:
    ACCESS = "access"
    VIEW = "view"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"

    ALL = ("access", "view", "create", "read", "update", "delete", "manage")


class PermissionType:
    """Which principal population a permission applies to."""
    ADMIN = "admin"
    USER = "user"

    ALL = ("admin", "user")


# Name suffix markers tied to category
LAYOUT_SUFFIX = ".layout"
VIEW_SUFFIX = ".view"

# Every localized field must carry at least these locales
REQUIRED_LOCALES = ("tr", "en")
