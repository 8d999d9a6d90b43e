# Overview: Flask CLI command groups for catalog sync, grant inspection, and role bootstrap.

# backend/permgate/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# Catalog:
# - python -m flask perms validate-catalog
#   Print catalog errors and warnings; exit code 1 if any error.
# - python -m flask perms sync-catalog
#   Validate, then upsert every catalog entry into the permissions table.
# - python -m flask perms list-catalog [--category view]
#   Grouped catalog listing with dependencies, usage and dev notes.
# - python -m flask perms check-catalog
#   Compare the catalog with stored permission rows.
# - python -m flask perms deactivate-stale [--dry-run]
#   Soft-deactivate stored permissions that left the catalog.
#
# Grants:
# - python -m flask perms grant support_agent support.tickets.update
# - python -m flask perms revoke support_agent support.tickets.update
# - python -m flask perms grants support_agent
#   List a role's direct grants.
# - python -m flask perms effective admin support_agent
#   Effective permissions (grants plus dependencies) of one or more roles.
# - python -m flask perms check admin users.create
#   Authorization decision for roles and a permission.
#
# Roles:
# - python -m flask roles init
#   Create super_admin, admin, user and assign their default grants.
# - python -m flask roles list
# - python -m flask roles create support_agent --layout-type admin
# - python -m flask roles delete support_agent

import sys

import click
from flask.cli import with_appcontext

from .errors import (
    CatalogInvalid,
    DependencyCycle,
    NotFoundError,
    ProtectedPermissionError,
    RoleAlreadyExists,
    SyncInProgress,
    SystemRoleProtected,
)
from .extensions import db
from .models import RoleHasPermission
from .permissions import PermissionCategory, get_catalog, validate_catalog
from .services import permission_service, role_service, sync_service
from .services.authorization_service import authorize, effective_permissions


def _print_report(report) -> None:
    for error in report.errors:
        click.echo(f"FAIL {error}")
    for warning in report.warnings:
        click.echo(f"WARN  {warning}")


@click.group('perms')
def perms_group():
    """Permission catalog, sync and grant commands."""


@perms_group.command('validate-catalog')
@with_appcontext
def validate_catalog_cli():
    """Validate the permission catalog."""
    catalog = get_catalog()
    report = validate_catalog(catalog)

    click.echo(f"CHECK Validating {len(catalog)} permissions...")
    _print_report(report)

    if not report.is_valid:
        click.echo(f"\nFAIL Catalog invalid: {len(report.errors)} error(s), {len(report.warnings)} warning(s)")
        sys.exit(1)

    click.echo(f"\nPASS Catalog valid ({len(report.warnings)} warning(s))")


@perms_group.command('sync-catalog')
@with_appcontext
def sync_catalog_cli():
    """
    Sync the catalog into the permissions table.

    Safe to run multiple times (idempotent). Never deletes rows.
    """
    click.echo("SYNC Syncing permission catalog...")
    try:
        result = sync_service.sync_catalog()
    except CatalogInvalid as e:
        _print_report(e.report)
        click.echo(f"\nFAIL {e}; nothing was written")
        sys.exit(1)
    except SyncInProgress as e:
        click.echo(f"FAIL {e}")
        sys.exit(1)

    for warning in result.warnings:
        click.echo(f"WARN  {warning}")
    for failure in result.failures:
        click.echo(f"FAIL {failure.name} ({failure.operation}): {failure.error}")

    click.echo("="*60)
    click.echo(f"  Created:   {result.created}")
    click.echo(f"  Updated:   {result.updated}")
    click.echo(f"  Unchanged: {result.unchanged}")
    click.echo(f"  Failed:    {len(result.failures)}")
    click.echo("="*60)

    if not result.success:
        click.echo("\nFAIL Sync finished with failures")
        sys.exit(1)

    click.echo(f"\nPASS Sync complete in {result.duration:.2f}s")


def _echo_dependency_tree(catalog, name: str, depth: int, seen: set) -> None:
    click.echo(f"{'    ' * depth}- {name}")
    if name in seen:
        return
    seen = seen | {name}
    for dep in catalog.dependency_map().get(name, ()):
        _echo_dependency_tree(catalog, dep, depth + 1, seen)


@perms_group.command('list-catalog')
@click.option('--category', type=click.Choice(PermissionCategory.ALL), help='Only one category')
@with_appcontext
def list_catalog_cli(category):
    """List the catalog grouped by category."""
    catalog = get_catalog()

    for group, entries in catalog.groups.items():
        if category and group != category:
            continue

        click.echo(f"\n{'='*80}")
        click.echo(f"CATEGORY {group} ({len(entries)})")
        click.echo(f"{'='*80}")

        for entry in entries:
            click.echo(f"  {entry.name:<40} [{entry.permission_type}] {entry.display_name.get('en', '')}")
            if entry.dependencies:
                click.echo(f"      depends on: {', '.join(entry.dependencies)}")
            if entry.used_in:
                click.echo(f"      used in:    {', '.join(entry.used_in)}")
            if entry.dev_notes:
                click.echo(f"      notes:      {entry.dev_notes}")

    if category in (None, PermissionCategory.FUNCTION):
        click.echo(f"\n{'='*80}")
        click.echo("Dependency tree")
        click.echo(f"{'='*80}")
        for entry in catalog.by_category(PermissionCategory.FUNCTION):
            _echo_dependency_tree(catalog, entry.name, 0, set())

    stats = catalog.stats()
    click.echo(
        f"\n Total: {stats['total']} permissions "
        f"({stats['layout']} layout, {stats['view']} view, {stats['function']} function)\n"
    )


@perms_group.command('check-catalog')
@with_appcontext
def check_catalog_cli():
    """Compare the catalog with stored permissions."""
    diff = sync_service.compare_catalog_to_storage()

    for name in diff.missing_in_storage:
        click.echo(f"MISSING {name} (run sync-catalog)")
    for name in diff.inactive_in_storage:
        click.echo(f"INACTIVE {name} (run sync-catalog)")
    for name in diff.only_in_storage:
        click.echo(f"STALE {name} (not in catalog)")

    if diff.in_sync:
        click.echo("PASS Storage matches the catalog")
    else:
        click.echo(
            f"\nWARN  {len(diff.missing_in_storage)} missing, {len(diff.inactive_in_storage)} inactive, "
            f"{len(diff.only_in_storage)} stale"
        )


@perms_group.command('deactivate-stale')
@click.option('--dry-run', is_flag=True, help='Report only; do not write changes')
@with_appcontext
def deactivate_stale_cli(dry_run):
    """Soft-deactivate stored permissions that are no longer in the catalog."""
    try:
        names = sync_service.deactivate_stale_permissions(dry_run=dry_run)
    except SyncInProgress as e:
        click.echo(f"FAIL {e}")
        sys.exit(1)

    if not names:
        click.echo("PASS No stale permissions")
        return

    verb = "Would deactivate" if dry_run else "Deactivated"
    for name in names:
        click.echo(f"  {name}")
    click.echo(f"PASS {verb} {len(names)} permission(s)")


@perms_group.command('grant')
@click.argument('role_name')
@click.argument('permission_name')
@with_appcontext
def grant_permission_cli(role_name, permission_name):
    """Grant a permission to a role."""
    try:
        permission_service.grant_permission(role_name, permission_name, granted_by="cli")
        click.echo(f"PASS Granted '{permission_name}' to role '{role_name}'")
    except NotFoundError as e:
        click.echo(f"FAIL Error: {str(e)}")
        sys.exit(1)


@perms_group.command('revoke')
@click.argument('role_name')
@click.argument('permission_name')
@with_appcontext
def revoke_permission_cli(role_name, permission_name):
    """Revoke a permission from a role."""
    try:
        permission_service.revoke_permission(role_name, permission_name, revoked_by="cli")
        click.echo(f"PASS Revoked '{permission_name}' from role '{role_name}'")
    except (NotFoundError, ProtectedPermissionError) as e:
        click.echo(f"FAIL Error: {str(e)}")
        sys.exit(1)


@perms_group.command('grants')
@click.argument('role_name')
@with_appcontext
def list_grants_cli(role_name):
    """List a role's direct grants."""
    try:
        grants = permission_service.list_grants(role_name)
    except NotFoundError as e:
        click.echo(f"FAIL {e}")
        sys.exit(1)

    click.echo(f"\nGrants for role: {role_name}")
    click.echo("-"*60)
    for grant in grants:
        click.echo(f"  {grant.permission_name:<40} by {grant.granted_by or '-'}")
    click.echo(f"\n Total: {len(grants)} grants\n")


@perms_group.command('effective')
@click.argument('role_names', nargs=-1, required=True)
@with_appcontext
def effective_permissions_cli(role_names):
    """Effective permissions of one or more roles."""
    try:
        names = effective_permissions(role_names)
    except DependencyCycle as e:
        click.echo(f"FAIL {e}")
        sys.exit(1)

    for name in sorted(names):
        click.echo(f"  {name}")
    click.echo(f"\n Total: {len(names)} effective permissions")


@perms_group.command('check')
@click.argument('args', nargs=-1, required=True)
@with_appcontext
def check_permission_cli(args):
    """Check roles against a permission: check ROLE [ROLE...] PERMISSION."""
    if len(args) < 2:
        click.echo("FAIL Usage: perms check ROLE [ROLE...] PERMISSION")
        sys.exit(2)

    role_names, permission_name = args[:-1], args[-1]
    decision = authorize(role_names, permission_name)

    if decision.allowed:
        click.echo(f"PASS {', '.join(role_names)} HAS permission '{permission_name}'")
    else:
        click.echo(f"FAIL {', '.join(role_names)} DOES NOT HAVE permission '{permission_name}'")
        sys.exit(1)


@click.group('roles')
def roles_group():
    """Role bootstrap and management commands."""


@roles_group.command('init')
@with_appcontext
def init_roles_cli():
    """
    Create the system default roles and assign their default grants.

    Run sync-catalog first so the permissions exist.
    Safe to run multiple times (idempotent).
    """
    role_count = role_service.create_default_roles()
    click.echo(f"PASS Created {role_count} default roles")

    assignment_count = permission_service.assign_default_role_permissions()
    click.echo(f"PASS Created {assignment_count} new role-permission assignments")


@roles_group.command('list')
@with_appcontext
def list_roles_cli():
    """List roles with grant counts."""
    roles = role_service.list_roles(include_inactive=True)

    click.echo(f"{'Name':<20} {'Layout':<8} {'System':<8} {'Active':<8} {'Grants'}")
    click.echo("-"*60)
    for role in roles:
        grant_count = db.session.query(RoleHasPermission).filter_by(role_name=role.name).count()
        click.echo(
            f"{role.name:<20} {role.layout_type:<8} {'yes' if role.is_system_default else 'no':<8} "
            f"{'yes' if role.is_active else 'no':<8} {grant_count}"
        )


@roles_group.command('create')
@click.argument('name')
@click.option('--display-name', help='Display name')
@click.option('--description', help='Description')
@click.option('--layout-type', type=click.Choice(["admin", "user"]), default="user", show_default=True)
@with_appcontext
def create_role_cli(name, display_name, description, layout_type):
    """Create a role."""
    try:
        role = role_service.create_role(
            name=name,
            display_name=display_name,
            description=description,
            layout_type=layout_type,
            created_by="cli",
        )
    except (RoleAlreadyExists, ValueError) as e:
        click.echo(f"FAIL Error: {str(e)}")
        sys.exit(1)

    click.echo(f"PASS Created role '{role.name}'")


@roles_group.command('delete')
@click.argument('name')
@with_appcontext
def delete_role_cli(name):
    """Delete a role and its grants."""
    try:
        role_service.delete_role(name, deleted_by="cli")
    except (NotFoundError, SystemRoleProtected) as e:
        click.echo(f"FAIL Error: {str(e)}")
        sys.exit(1)

    click.echo(f"PASS Deleted role '{name}'")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(perms_group)
    app.cli.add_command(roles_group)
