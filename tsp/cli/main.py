"""Main CLI entry point for tsp."""

import click
from rich.console import Console
from rich.table import Table

from tsp.core.config import TspConfig, reload_config
from tsp.core.lib_logger import get_component_logger, setup_logging
from tsp.logic.scaffold import ScaffoldOrchestrator
from tsp.logic.scaffold.models.framework import FrameworkKind
from tsp.logic.scaffold.models.operation import OperationStatus, ScaffoldOperation
from tsp.logic.scaffold.services.frameworks import get_framework, list_frameworks
from tsp.version import __version__

EXIT_SUCCESS = 0
EXIT_CANCELLED = 1
EXIT_FAILURE = 2

EXIT_CODES = {
    OperationStatus.COMPLETED: EXIT_SUCCESS,
    OperationStatus.SKIPPED: EXIT_SUCCESS,
    OperationStatus.CANCELLED: EXIT_CANCELLED,
    OperationStatus.FAILED: EXIT_FAILURE,
}

FRAMEWORK_CHOICE = click.Choice([kind.value for kind in FrameworkKind])


def exit_code_for(operation: ScaffoldOperation) -> int:
    """Translate a finished operation into a process exit code.

    An operation that never reached a terminal state counts as failed.
    """
    if not operation.is_terminal():
        return EXIT_FAILURE
    return EXIT_CODES[operation.status]


def build_orchestrator(ctx: click.Context) -> ScaffoldOrchestrator:
    """Create the orchestrator for a command invocation."""
    return ScaffoldOrchestrator(config=ctx.obj["config"], console=ctx.obj["console"])


def finish(ctx: click.Context, operation: ScaffoldOperation) -> None:
    """Log the outcome and exit with its code."""
    logger = get_component_logger("cli")
    code = exit_code_for(operation)
    logger.debug(
        f"{operation.operation_type.value} operation finished: {operation.status.value}",
        extra={"exit_code": code, "selections": operation.user_selections}
    )
    ctx.exit(code)


@click.group(invoke_without_command=True)
@click.version_option(__version__, "--version", "-v", help="Show version and exit")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--registry-url", help="Package registry to resolve versions from")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def main(ctx: click.Context, debug: bool, registry_url: str | None, no_color: bool):
    """tsp - TypeScript Project Initializer.

    Scaffolds plain TypeScript projects and framework projects (NestJS,
    Next.js, Astro, Nuxt.js, Quasar) with a released framework version,
    then offers ESLint/Prettier and a testing framework.

    \b
    QUICK START:
      tsp                                  # Interactive menu
      tsp new nextjs --name my-app         # Set up a framework project
      tsp plain --path ./my-lib            # Set up a plain TypeScript project
      tsp versions astrojs                 # Show selectable versions

    \b
    EXIT CODES:
      0  Setup completed, skipped, or exited from the menu
      1  Setup cancelled (overwrite declined)
      2  Setup failed
    """
    config: TspConfig = reload_config()
    if debug:
        config.debug = True
        config.log_level = "DEBUG"
    if registry_url:
        config.registry_url = registry_url

    setup_logging(config)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["console"] = Console(no_color=no_color)

    if ctx.invoked_subcommand is None:
        operation = build_orchestrator(ctx).run_interactive()
        finish(ctx, operation)


@main.command()
@click.argument("framework", type=FRAMEWORK_CHOICE, required=False)
@click.option("--name", "-n", help="Project name")
@click.option("--path", "-p", "project_path", help="Project path (absolute or relative)")
@click.option("--version", "-V", "version", help="Framework version to install")
@click.pass_context
def new(ctx: click.Context, framework: str | None, name: str | None,
        project_path: str | None, version: str | None):
    """Set up a framework project.

    Values not given as options are prompted for.

    \b
    EXAMPLES:
      tsp new nextjs --name my-app --version 14.2.3
      tsp new astrojs --path ./sites/blog
    """
    orchestrator = build_orchestrator(ctx)
    if framework is None:
        choice = orchestrator.menu.choose_framework()
        if not isinstance(choice, FrameworkKind):
            ctx.exit(EXIT_SUCCESS)
        framework = choice

    operation = orchestrator.setup_framework(
        framework,
        project_name=name,
        project_path=project_path,
        version=version
    )
    finish(ctx, operation)


@main.command()
@click.option("--path", "-p", "project_path", help="Project path (absolute or relative)")
@click.option("--variant", type=click.Choice(["node", "bun-deno"]), default="node",
              show_default=True, help="TypeScript runtime variant")
@click.pass_context
def plain(ctx: click.Context, project_path: str | None, variant: str):
    """Set up a plain TypeScript project."""
    operation = build_orchestrator(ctx).setup_plain_typescript(project_path=project_path, variant=variant)
    finish(ctx, operation)


@main.command()
@click.argument("framework", type=FRAMEWORK_CHOICE)
@click.option("--all", "show_all", is_flag=True, help="List every stable version, not only the latest lines")
@click.pass_context
def versions(ctx: click.Context, framework: str, show_all: bool):
    """Show the versions offered for FRAMEWORK."""
    console: Console = ctx.obj["console"]
    descriptor = get_framework(framework)
    available = build_orchestrator(ctx).available_versions(descriptor, select=not show_all)

    if not available:
        console.print(f"[red]No versions of {descriptor.package} available[/red]")
        ctx.exit(EXIT_FAILURE)

    table = Table(title=f"[bold cyan]{descriptor.name} ({descriptor.package})[/bold cyan]")
    table.add_column("#", style="yellow", justify="right")
    table.add_column("Version", style="green")
    for i, identifier in enumerate(available, 1):
        table.add_row(str(i), identifier)
    console.print(table)


@main.command()
@click.pass_context
def frameworks(ctx: click.Context):
    """List supported frameworks."""
    console: Console = ctx.obj["console"]

    table = Table(title="[bold cyan]Supported Frameworks[/bold cyan]", header_style="bold magenta")
    table.add_column("Key", style="yellow")
    table.add_column("Name")
    table.add_column("Package", style="green")
    table.add_column("Repository", style="dim")
    for descriptor in list_frameworks():
        table.add_row(descriptor.kind.value, descriptor.name, descriptor.package, descriptor.repository_url)
    console.print(table)


# CLI alias
cli = main

if __name__ == "__main__":
    main()
