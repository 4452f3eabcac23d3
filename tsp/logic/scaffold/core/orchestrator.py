"""Scaffold orchestrator to coordinate project setup."""

from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console

from tsp.core.config import TspConfig, get_config
from tsp.core.lib_logger import get_logger
from tsp.lib.exceptions import ConfigurationGapError, ExternalFetchError, TspError, UserAbortError
from tsp.logic.scaffold.core.executor import CommandExecutor, Runner
from tsp.logic.scaffold.core.menu import BACK, EXIT, FRAMEWORK, PLAIN, MainMenu
from tsp.logic.scaffold.core.strategy import DecisionKind, StrategySelector
from tsp.logic.scaffold.models.command import CommandScript, InstallationStrategy
from tsp.logic.scaffold.models.framework import FrameworkDescriptor, FrameworkKind
from tsp.logic.scaffold.models.operation import OperationStatus, OperationType, ScaffoldOperation
from tsp.logic.scaffold.models.target import ProjectTarget
from tsp.logic.scaffold.services.config_writer import ConfigWriter
from tsp.logic.scaffold.services.frameworks import get_framework
from tsp.logic.scaffold.services.post_setup import PostSetupPipeline
from tsp.logic.scaffold.services.registry import RegistryClient
from tsp.logic.scaffold.services.version_selector import select_versions
from tsp.logic.scaffold.utils.progress import StepReporter
from tsp.logic.scaffold.utils.prompts import ConsolePrompter, Prompter

logger = get_logger(__name__)

PLAIN_TSCONFIG = {
    "compilerOptions": {
        "target": "es2020",
        "module": "commonjs",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "outDir": "./dist",
        "rootDir": "./src",
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules"],
}

PLAIN_INDEX_TS = 'console.log("Hello TypeScript!");\n'

# Errors that end a setup as failed rather than crashing the CLI
_SETUP_ERRORS = (TspError, OSError, ValueError)


class ScaffoldOrchestrator:
    """Drives version resolution, installation, configuration and post-setup.

    Every entry point returns a :class:`ScaffoldOperation`; translating its
    status into a process exit code is left to the caller.
    """

    def __init__(
        self,
        config: Optional[TspConfig] = None,
        prompter: Optional[Prompter] = None,
        registry: Optional[RegistryClient] = None,
        executor: Optional[CommandExecutor] = None,
        console: Optional[Console] = None,
        runner: Optional[Runner] = None,
        base_dir: Optional[Path] = None
    ):
        """Initialize the orchestrator.

        Args:
            config: Configuration, defaults to the global one
            prompter: Interactive capability, defaults to terminal prompts
            registry: Registry client, defaults to one built from config
            executor: Command executor, defaults to one built from config
            console: Optional Rich console
            runner: Subprocess runner handed to the default executor
            base_dir: Directory relative project paths resolve against
        """
        self.config = config or get_config()
        self.console = console or Console()
        self.prompter = prompter or ConsolePrompter(console=self.console)
        self.registry = registry or RegistryClient(
            base_url=self.config.registry_url,
            timeout=self.config.registry_timeout
        )
        self.executor = executor or CommandExecutor(
            shell=self.config.shell,
            runner=runner,
            console=self.console
        )
        self.base_dir = base_dir or Path.cwd()
        self.reporter = StepReporter(console=self.console)
        self.selector = StrategySelector(self.prompter)
        self.post_setup = PostSetupPipeline(self.executor, self.prompter, self.reporter)
        self.menu = MainMenu(self.prompter, console=self.console)

    # ------------------------------------------------------------------
    # Versions
    # ------------------------------------------------------------------

    def available_versions(self, framework: FrameworkDescriptor, select: bool = True) -> List[str]:
        """Resolve the versions offered for ``framework``.

        Args:
            framework: Framework to look up
            select: Reduce to the newest releases of the latest major lines

        Returns:
            Version identifiers, newest first; empty when the registry failed
        """
        with self.reporter.status("Fetching available versions..."):
            records = self.registry.fetch_versions(framework.package)

        if not select:
            return [record.version for record in records]
        return select_versions(
            records,
            majors=self.config.major_lines,
            per_major=self.config.versions_per_major
        )

    # ------------------------------------------------------------------
    # Framework setup
    # ------------------------------------------------------------------

    def setup_framework(
        self,
        kind: Union[FrameworkKind, str],
        project_name: Optional[str] = None,
        project_path: Optional[str] = None,
        version: Optional[str] = None
    ) -> ScaffoldOperation:
        """Install and configure a framework project.

        Args:
            kind: Framework to set up
            project_name: Project name, prompted for when missing
            project_path: Project path, prompted for when missing
            version: Framework version, chosen from the registry when missing

        Returns:
            ScaffoldOperation with results
        """
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        operation.transition_to(OperationStatus.IN_PROGRESS)

        try:
            framework = get_framework(kind)
            operation.add_selection("framework", framework.kind.value)

            target = self._prompt_target(framework, project_name, project_path)
            operation.add_selection("project_name", target.name)
            operation.add_selection("project_path", str(target.directory))

            version = version or self._choose_version(framework)
            operation.add_selection("version", version)

            self.console.print()
            self.reporter.info(f"Installing {framework.name}...")

            if framework.prerequisite_script:
                self.executor.execute(CommandScript.from_text(framework.prerequisite_script), self.base_dir)

            commands = framework.install_commands(target, version)
            if commands.is_empty():
                raise ConfigurationGapError(
                    f"{framework.name} defines no installation commands",
                    framework=framework.kind.value
                )

            decision = self.selector.decide(commands, target)
            if decision.kind == DecisionKind.SKIPPED:
                self.reporter.warn("Framework setup skipped")
                operation.add_selection("strategy", InstallationStrategy.SKIP.value)
                operation.transition_to(OperationStatus.SKIPPED, message="Framework setup skipped")
                return operation
            if decision.kind == DecisionKind.ABORTED:
                raise decision.error

            strategy = decision.strategy
            operation.add_selection("strategy", strategy.value)

            working_dir = target.directory if strategy == InstallationStrategy.MANUAL else self.base_dir
            self.console.print(f"Project path: {target.directory}\n")
            self.executor.execute(commands.get(strategy), working_dir)

            with self.reporter.status("Setting up framework..."):
                framework.configure(ConfigWriter(target.directory), strategy)
            self.reporter.succeed("Framework setup complete")

            self._run_post_setup(operation, target.directory)

            message = (
                f"{framework.name} project codename {target.name} has been setup "
                f"successfully (CLI installed {strategy.label})."
            )
            self.console.print()
            self.console.print(f"[green]🎉 {message}[/green]")
            operation.transition_to(OperationStatus.COMPLETED, message=message)

        except UserAbortError as e:
            self.reporter.warn("Setup aborted!")
            operation.transition_to(OperationStatus.CANCELLED, error=e, message=e.message)
        except _SETUP_ERRORS as e:
            self._fail(operation, "Error setting up framework", e)

        return operation

    # ------------------------------------------------------------------
    # Plain TypeScript setup
    # ------------------------------------------------------------------

    def setup_plain_typescript(
        self,
        project_path: Optional[str] = None,
        variant: str = "node"
    ) -> ScaffoldOperation:
        """Create a bare TypeScript project.

        Args:
            project_path: Project path, prompted for when missing
            variant: Runtime variant recorded on the operation

        Returns:
            ScaffoldOperation with results
        """
        operation = ScaffoldOperation(operation_type=OperationType.PLAIN)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.add_selection("variant", variant)

        try:
            project_path = project_path or self.prompter.text(
                "Enter project path:", default="./typescript-project"
            )
            target = ProjectTarget(name=Path(project_path).name, path=project_path, base_dir=self.base_dir)
            operation.add_selection("project_path", str(target.directory))

            self.reporter.info("Setting up Plain TypeScript project...")
            writer = ConfigWriter(target.directory)
            writer.ensure_directory()

            self.executor.execute(
                CommandScript.of("npm init -y", "npm install --save-dev typescript @types/node"),
                target.directory
            )

            if not writer.ensure_json("tsconfig.json", PLAIN_TSCONFIG):
                writer.fill_json("tsconfig.json", PLAIN_TSCONFIG)
            writer.write_text_if_absent("src/index.ts", PLAIN_INDEX_TS)
            self.reporter.succeed("Plain TypeScript project setup complete")

            self._run_post_setup(operation, target.directory)

            message = f"TypeScript project {target.name} has been setup successfully."
            self.console.print(f"[green]🎉 {message}[/green]")
            operation.transition_to(OperationStatus.COMPLETED, message=message)

        except _SETUP_ERRORS as e:
            self._fail(operation, "Error setting up Plain TypeScript project", e)

        return operation

    # ------------------------------------------------------------------
    # Interactive menu
    # ------------------------------------------------------------------

    def run_interactive(self) -> ScaffoldOperation:
        """Loop over the main menu until a setup finishes, fails, or the user exits.

        Skipped and cancelled setups return to the menu.

        Returns:
            The operation that ended the loop
        """
        self.console.print("[blue]TypeScript Project Initializer[/blue]")

        while True:
            choice = self.menu.choose_project_type()

            if choice == EXIT:
                return self._exit_operation()

            if choice == PLAIN:
                variant = self.menu.choose_variant()
                if variant == EXIT:
                    return self._exit_operation()
                if variant == BACK:
                    continue
                operation = self.setup_plain_typescript(variant=variant)

            elif choice == FRAMEWORK:
                framework = self.menu.choose_framework()
                if framework == EXIT:
                    return self._exit_operation()
                if framework == BACK:
                    continue
                operation = self.setup_framework(framework)

            else:
                continue

            if operation.returns_to_menu():
                logger.info(f"Returning to menu after {operation.status.value} setup")
                continue
            return operation

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _prompt_target(
        self,
        framework: FrameworkDescriptor,
        project_name: Optional[str],
        project_path: Optional[str]
    ) -> ProjectTarget:
        name = project_name or self.prompter.text(
            "Enter project name:", default=framework.default_project_name()
        )
        path = project_path or self.prompter.text("Enter project path:", default=f"./{name}")
        return ProjectTarget(name=name, path=path, base_dir=self.base_dir)

    def _choose_version(self, framework: FrameworkDescriptor) -> str:
        versions = self.available_versions(framework)
        if not versions:
            self.reporter.fail("Error fetching versions")
            raise ExternalFetchError(
                f"No versions of {framework.package} available",
                package=framework.package,
                url=self.registry.package_url(framework.package)
            )
        self.reporter.succeed("Versions fetched")

        return self.prompter.select(
            "Select version:",
            [(version, version) for version in versions],
            default=versions[0]
        )

    def _run_post_setup(self, operation: ScaffoldOperation, project_dir: Path) -> None:
        report = self.post_setup.run(project_dir)
        operation.add_selection("linting", "ok" if report.linting.succeeded else report.linting.error)
        operation.add_selection(
            "testing",
            "skipped" if report.testing.skipped else ("ok" if report.testing.succeeded else report.testing.error)
        )

    def _fail(self, operation: ScaffoldOperation, summary: str, error: BaseException) -> None:
        message = getattr(error, "message", None) or str(error)
        if isinstance(error, TspError):
            details = error.to_dict()
        else:
            details = {"error": type(error).__name__, "message": message}
        logger.error(f"{summary}: {message}", extra={"error": details})
        self.reporter.fail(summary)
        self.console.print(f"[red]{message}[/red]")
        operation.transition_to(OperationStatus.FAILED, error=error, message=summary)

    def _exit_operation(self) -> ScaffoldOperation:
        self.menu.say_goodbye()
        operation = ScaffoldOperation(operation_type=OperationType.MENU)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.transition_to(OperationStatus.COMPLETED, message="Goodbye!")
        return operation
