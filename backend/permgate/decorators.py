# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import current_app, request, jsonify, g

from .services import permission_service
from .services.authorization_service import (
    Principal,
    authorize,
    authorize_all,
    authorize_any,
)


IDENTITY_LOADER_KEY = "permgate.identity_loader"


def set_identity_loader(app, loader) -> None:
    """
    Register the callable that turns a request into a Principal.

    The loader receives the Flask request and returns a Principal, or None
    when the request carries no valid identity. Authentication itself
    (tokens, sessions, passwords) lives in the loader, outside this package.
    """
    app.extensions[IDENTITY_LOADER_KEY] = loader


def _is_authenticated() -> bool:
    return isinstance(getattr(g, "principal", None), Principal)


def require_auth(f):
    """
    Require an authenticated principal.

    Sets g.principal from the registered identity loader.

    SECURITY: Returns 401 if:
    - No identity loader is registered
    - The loader returns no principal
    - The loader fails
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        loader = current_app.extensions.get(IDENTITY_LOADER_KEY)
        if loader is None:
            return jsonify({"error": "Authentication required"}), 401

        try:
            principal = loader(request)
        except Exception:
            current_app.logger.exception("Identity loader failed")
            return jsonify({"error": "Invalid or expired token"}), 401

        if not isinstance(principal, Principal):
            return jsonify({"error": "Authentication required"}), 401

        g.principal = principal
        return f(*args, **kwargs)

    return decorated_function


def _deny(required: str, message: str):
    principal = g.principal
    permission_service.log_security_event(
        principal_id=principal.principal_id,
        event_type="PERMISSION_DENIED",
        success=False,
        resource=request.path,
        action=required,
        reason=message,
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )
    return jsonify({
        "error": "Permission denied",
        "required_permission": required,
        "message": message,
    }), 403


def require_permission(permission_name: str):
    """Require a specific permission. Apply after @require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not authorize(g.principal, permission_name).allowed:
                return _deny(permission_name, f"Permission denied: {permission_name}")

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_any_permission(*permission_names):
    """Require any of the specified permissions."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not authorize_any(g.principal, permission_names).allowed:
                required = " OR ".join(permission_names)
                return _deny(required, f"Requires any of: {', '.join(permission_names)}")

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_all_permissions(*permission_names):
    """Require all of the specified permissions."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not authorize_all(g.principal, permission_names).allowed:
                required = " AND ".join(permission_names)
                return _deny(required, f"Requires all of: {', '.join(permission_names)}")

            return f(*args, **kwargs)

        return decorated_function
    return decorator
