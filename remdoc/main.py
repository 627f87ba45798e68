# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# REMDOC - COMMAND LINE INTERFACE
# -----------------------------------------------------------------------------
# Responsibility: The operator-facing surface. Each command is glue:
# parse input -> load config -> one Backend call -> print the result.
#
# Commands:
# - login:   Exchange username/password for a JWT and save it
# - status:  List all containers on the remote host
# - deploy:  Create and start a container
# - start / stop / rm: Lifecycle of an existing container
# - compose: Deploy a docker-compose file as a stack
#
# Errors from the backend are printed and the command exits with status 1.
# -----------------------------------------------------------------------------

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from remdoc.core.auth import obtain_token
from remdoc.core.backend import Backend
from remdoc.core.errors import BackendError, InputValidationError
from remdoc.core.parsing import load_compose_file, parse_env, parse_ports
from remdoc.core.portainer import PortainerBackend
from remdoc.domain.models import DEFAULT_RESTART_POLICY, DeployOptions
from remdoc.infra.config import (
    ConfigError,
    RemdocConfig,
    default_timeout,
    load_config,
    save_config,
)

load_dotenv()

console = Console()
err_console = Console(stderr=True)

# Per-command time budgets (seconds); REMDOC_TIMEOUT overrides all of them
LOGIN_TIMEOUT = 10.0
STATUS_TIMEOUT = 15.0
REMOVE_TIMEOUT = 15.0
LIFECYCLE_TIMEOUT = 30.0
COMPOSE_TIMEOUT = 60.0

app = typer.Typer(
    name="remdoc",
    help="Deploy Docker containers remotely via Portainer",
    no_args_is_help=True,
)

_settings = {"verbose": False}


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Trace every Portainer request on stderr"
    ),
):
    """Deploy Docker containers remotely via Portainer."""
    _settings["verbose"] = verbose


@contextmanager
def command_errors(action: str):
    """Print backend/config failures and exit non-zero."""
    try:
        yield
    except (BackendError, ConfigError) as e:
        err_console.print(f"[red]✗ {action}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@contextmanager
def get_backend() -> Iterator[Backend]:
    """Build the backend from the saved config and close it afterwards."""
    config = load_config()
    with PortainerBackend(
        config.portainer_url, config.jwt, verbose=_settings["verbose"]
    ) as backend:
        yield backend


# =============================================================================
# LOGIN
# =============================================================================
@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", help="Portainer username"),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Portainer password (prompted if omitted)"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Portainer URL (prompted if omitted)"
    ),
):
    """
    Authenticate with a Portainer instance.

    The JWT is saved to ~/.remdoc/config.json with owner-only permissions.
    """
    if url is None:
        url = typer.prompt("Portainer URL (e.g., https://portainer.example.com)")
    url = url.strip().rstrip("/")

    if password is None:
        password = typer.prompt("Password", hide_input=True)

    with command_errors("login failed"):
        timeout = default_timeout(LOGIN_TIMEOUT)

        with console.status("Authenticating..."):
            jwt = obtain_token(
                url, username, password, timeout=timeout, verbose=_settings["verbose"]
            )
        console.print("[green]✓ Authenticated[/green]")

        with console.status("Validating credentials..."):
            with PortainerBackend(
                url, jwt, timeout=timeout, verbose=_settings["verbose"]
            ) as backend:
                backend.validate(timeout=timeout)

        path = save_config(RemdocConfig(portainer_url=url, jwt=jwt))

    console.print(f"[green]✓ Login successful. Config saved to {escape(str(path))}[/green]")


# =============================================================================
# STATUS
# =============================================================================
@app.command()
def status():
    """List all containers on the remote server."""
    with command_errors("failed to fetch containers"):
        with get_backend() as backend:
            containers = backend.list_containers(timeout=default_timeout(STATUS_TIMEOUT))

    if not containers:
        console.print("No containers found.")
        return

    table = Table(box=None, header_style="bold")
    for column in ("CONTAINER ID", "NAME", "IMAGE", "STATE", "STATUS"):
        table.add_column(column)

    for container in containers:
        state_style = "green" if container.state == "running" else "yellow"
        table.add_row(
            container.id,
            escape(container.name),
            escape(container.image),
            f"[{state_style}]{escape(container.state)}[/{state_style}]",
            escape(container.status),
        )

    console.print(table)


# =============================================================================
# DEPLOY
# =============================================================================
@app.command()
def deploy(
    image: str = typer.Option(..., "--image", help="Docker image to deploy"),
    name: str = typer.Option(
        "", "--name", help="Container name (Docker generates one if omitted)"
    ),
    port: Optional[List[str]] = typer.Option(
        None, "--port", "-p", help="Port mapping HOST:CONTAINER[/udp], repeatable"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Environment variable KEY=value, repeatable"
    ),
    restart: str = typer.Option(
        DEFAULT_RESTART_POLICY,
        "--restart",
        help="Restart policy (no, always, unless-stopped, on-failure)",
    ),
    auto_remove: bool = typer.Option(
        False, "--rm", help="Automatically remove the container when it stops"
    ),
):
    """
    Create and start a container on the remote server.

    Example: remdoc deploy --image nginx:latest --name web --port 8080:80
    """
    with command_errors("deployment failed"):
        if not image.strip():
            raise InputValidationError("image cannot be empty")

        opts = DeployOptions(
            name=name,
            image=image,
            ports=parse_ports(port or []),
            env=parse_env(env or []),
            restart=restart,
            auto_remove=auto_remove,
        )

        with get_backend() as backend:
            console.print(f"Deploying container from image {escape(image)}...")
            container = backend.deploy_container(
                opts, timeout=default_timeout(LIFECYCLE_TIMEOUT)
            )

    console.print("[green]✓ Container deployed successfully[/green]")
    console.print(f"  ID:    {container.id}")
    console.print(f"  Name:  {escape(container.name) or '(generated)'}")
    console.print(f"  Image: {escape(container.image)}")
    console.print(f"  State: {container.state}")


# =============================================================================
# LIFECYCLE
# =============================================================================
@app.command()
def start(container: str = typer.Argument(..., help="Container ID or name")):
    """Start a stopped container."""
    with command_errors("failed to start container"):
        with get_backend() as backend:
            console.print(f"Starting container {escape(container)}...")
            backend.start_container(container, timeout=default_timeout(LIFECYCLE_TIMEOUT))

    console.print("[green]✓ Container started successfully[/green]")


@app.command()
def stop(container: str = typer.Argument(..., help="Container ID or name")):
    """Stop a running container."""
    with command_errors("failed to stop container"):
        with get_backend() as backend:
            console.print(f"Stopping container {escape(container)}...")
            backend.stop_container(container, timeout=default_timeout(LIFECYCLE_TIMEOUT))

    console.print("[green]✓ Container stopped successfully[/green]")


@app.command()
def rm(
    container: str = typer.Argument(..., help="Container ID or name"),
    force: bool = typer.Option(False, "--force", "-f", help="Remove even if running"),
):
    """Remove a container."""
    with command_errors("failed to remove container"):
        with get_backend() as backend:
            console.print(f"Removing container {escape(container)}...")
            backend.remove_container(
                container, force=force, timeout=default_timeout(REMOVE_TIMEOUT)
            )

    console.print("[green]✓ Container removed successfully[/green]")


# =============================================================================
# COMPOSE
# =============================================================================
@app.command()
def compose(
    file: Path = typer.Option(..., "--file", "-f", help="Path to docker-compose file"),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Stack name (defaults to the file name)"
    ),
):
    """
    Deploy a docker-compose file as a stack.

    Example: remdoc compose -f ./docker-compose.yml -n my-stack
    """
    with command_errors("compose deployment failed"):
        stack_name, content = load_compose_file(file, name)

        with get_backend() as backend:
            console.print(
                f"Deploying compose stack {escape(stack_name)} from {escape(str(file))}..."
            )
            stack_id = backend.deploy_compose_stack(
                stack_name, content, timeout=default_timeout(COMPOSE_TIMEOUT)
            )

    console.print(f"[green]✓ Stack deployed successfully (ID: {stack_id})[/green]")


if __name__ == "__main__":
    app()
