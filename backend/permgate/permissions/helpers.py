# Overview: Access to the catalog loaded by the running application.

from flask import current_app

CATALOG_EXTENSION_KEY = "permgate.catalog"


def get_catalog():
    """Catalog handle created by create_app(); requires an app context."""
    return current_app.extensions[CATALOG_EXTENSION_KEY]


def resolve_catalog(catalog=None):
    return catalog if catalog is not None else get_catalog()
