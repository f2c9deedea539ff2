"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys
from uuid import UUID

from falcon.asgi import App

from workshop_rbac import __version__
from workshop_rbac.application.use_cases.seed.seed_catalog import (
    AssignBootstrapRoleUseCase,
    SeedCatalogUseCase,
)
from workshop_rbac.config import Settings, get_settings
from workshop_rbac.domain.exceptions import WorkshopRBACError
from workshop_rbac.infrastructure.auth.keycloak_provider import KeycloakProvider
from workshop_rbac.infrastructure.permission.permission_resolver import PermissionResolver
from workshop_rbac.infrastructure.persistence.postgres.connection import (
    create_pool,
    pool_from_settings,
)
from workshop_rbac.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from workshop_rbac.interfaces.api.app import create_app
from workshop_rbac.interfaces.api.middleware.auth import AuthMiddleware
from workshop_rbac.interfaces.api.middleware.cors import CORSMiddleware
from workshop_rbac.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from workshop_rbac.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_workshop_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = pool_from_settings(settings)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; every request is unauthenticated")

    return create_app(
        uow_factory,
        PermissionResolver(uow_factory),
        pool=pool,
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def run_server(settings: Settings | None = None) -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = settings or get_settings()
    uvicorn.run(
        create_workshop_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


async def seed(settings: Settings, admin_user: UUID | None = None) -> None:
    """Load catalog and baseline roles; optionally make admin_user an admin."""
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    await pool.open()
    try:
        uow_factory = create_uow_factory(pool)
        report = await SeedCatalogUseCase(uow_factory).execute()
        print(
            f"permissions created: {len(report.created_permissions)}, "
            f"roles created: {len(report.created_roles)}, "
            f"roles updated: {len(report.updated_roles)}, "
            f"links +{report.links_added}/-{report.links_removed}"
        )
        if admin_user:
            assigned = await AssignBootstrapRoleUseCase(uow_factory).execute(admin_user)
            print(f"admin role {'assigned to' if assigned else 'already held by'} {admin_user}")
    finally:
        await pool.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workshop-rbac",
        description="Workshop permission service",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", help="Run the HTTP API")
    seed_parser = sub.add_parser("seed", help="Load permission catalog and baseline roles")
    seed_parser.add_argument(
        "--admin-user",
        type=UUID,
        default=None,
        help="User id to give the admin role",
    )
    sub.add_parser("version", help="Print version")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    if args.command == "version":
        print(f"workshop-rbac v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings.log_level, debug=settings.debug)
    if args.command == "serve":
        run_server(settings)
        return 0

    try:
        asyncio.run(seed(settings, args.admin_user))
    except WorkshopRBACError as e:
        print(f"Seed failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
