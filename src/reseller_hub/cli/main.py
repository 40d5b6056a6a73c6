import asyncio
import json
import logging
import typer
from tortoise.exceptions import IntegrityError

from ..core.config import DATABASE_URL
from ..core.database import Database, build_tortoise_config
from ..features.auth.models import User as AuthUser, UserRole
from ..features.auth import service as auth_service
from ..features.auth.security import get_password_hash
from ..features.stores.models import Store
from ..features.stores.service import provision_store

logger = logging.getLogger(__name__)

app = typer.Typer(name="reseller-hub", help="CLI for managing Reseller Hub data.")

DB_URL_OPTION = typer.Option(DATABASE_URL, "--db-url", envvar="DATABASE_URL", help="Tortoise database URL.")


# Shared async context manager for database connection
class DBConnection:
    def __init__(self, db_url: str):
        self.database = Database(build_tortoise_config(db_url))

    async def __aenter__(self):
        await self.database.connect(generate_schemas=True)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.database.disconnect()


# User management commands
user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)

@user_app.command("create-reseller")
def create_reseller_user_command(
    username: str = typer.Option(..., prompt=True, help="Username for the new reseller."),
    email: str = typer.Option(..., prompt=True, help="Email for the new reseller."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new reseller."),
    db_url: str = DB_URL_OPTION,
):
    """Creates a new reseller user."""
    asyncio.run(_create_reseller_user(username, email, password, db_url))

async def _create_reseller_user(username: str, email: str, password: str, db_url: str):
    async with DBConnection(db_url):
        typer.echo(f"Attempting to create reseller user: {username} ({email})...")
        if await AuthUser.filter(username=username).exists():
            typer.secho(f"Error: User with username '{username}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if await AuthUser.filter(email=email).exists():
            typer.secho(f"Error: User with email '{email}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        try:
            user = await auth_service.create_user(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                role=UserRole.RESELLER,
            )
        except IntegrityError as e:
            typer.secho(f"Error creating reseller user: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.secho(f"Reseller user '{user.username}' created successfully with ID: {user.public_id}", fg=typer.colors.GREEN)


# Store commands
store_app = typer.Typer(name="stores", help="Provision and inspect reseller stores.")
app.add_typer(store_app)

@store_app.command("provision")
def provision_store_command(
    username: str = typer.Argument(..., help="Username of the reseller who will own the store."),
    name: str = typer.Option(..., "--name", help="Display name of the store."),
    db_url: str = DB_URL_OPTION,
):
    """Creates a store with the default settings for a reseller."""
    asyncio.run(_provision_store(username, name, db_url))

async def _provision_store(username: str, name: str, db_url: str):
    async with DBConnection(db_url):
        user = await AuthUser.get_or_none(username=username)
        if not user:
            typer.secho(f"Error: User with username '{username}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if user.role != UserRole.RESELLER:
            typer.secho(f"Error: User '{username}' is not a reseller.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if await Store.filter(reseller_id=user.id).exists():
            typer.secho(f"User '{username}' already owns a store.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)

        store = await provision_store(user.id, name)
        typer.secho(f"Store '{store.name}' provisioned for '{username}' with ID: {store.public_id}", fg=typer.colors.GREEN)

@store_app.command("show-settings")
def show_store_settings_command(
    username: str = typer.Argument(..., help="Username of the store owner."),
    db_url: str = DB_URL_OPTION,
):
    """Prints a reseller's store settings as JSON."""
    asyncio.run(_show_store_settings(username, db_url))

async def _show_store_settings(username: str, db_url: str):
    async with DBConnection(db_url):
        store = await Store.get_or_none(reseller__username=username)
        if not store:
            typer.secho(f"Error: No store found for '{username}'.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.echo(json.dumps(store.settings, indent=2, sort_keys=True))


if __name__ == "__main__":
    app()
