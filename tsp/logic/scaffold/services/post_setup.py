"""Linting and testing tool setup that runs after a project is installed."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from tsp.core.lib_logger import get_logger
from tsp.lib.exceptions import TspError
from tsp.logic.scaffold.core.executor import CommandExecutor
from tsp.logic.scaffold.services.config_writer import ConfigWriter
from tsp.logic.scaffold.utils.progress import StepReporter
from tsp.logic.scaffold.utils.prompts import Prompter

logger = get_logger(__name__)

ESLINT_CONFIG_FILES = (
    ".eslintrc.json",
    ".eslintrc.js",
    "eslint.config.js",
    "eslint.config.mjs",
)
PRETTIER_CONFIG_FILES = (".prettierrc", ".prettierrc.json")

LINT_PACKAGES = (
    "eslint",
    "@typescript-eslint/parser",
    "@typescript-eslint/eslint-plugin",
    "prettier",
    "eslint-config-prettier",
    "eslint-plugin-prettier",
)

ESLINT_CONFIG = {
    "parser": "@typescript-eslint/parser",
    "plugins": ["@typescript-eslint", "prettier"],
    "extends": [
        "eslint:recommended",
        "plugin:@typescript-eslint/recommended",
        "prettier",
    ],
    "rules": {
        "prettier/prettier": "error",
    },
}

PRETTIER_CONFIG = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": True,
    "printWidth": 80,
    "tabWidth": 2,
}

JEST_CONFIG = {
    "preset": "ts-jest",
    "testEnvironment": "node",
    "moduleFileExtensions": ["ts", "tsx", "js", "jsx", "json", "node"],
}


class TestingFramework(str, Enum):
    """Testing frameworks offered after setup."""

    __test__ = False  # not a pytest class

    JEST = "Jest"
    MOCHA = "Mocha"
    SKIP = "Skip"


TESTING_PACKAGES = {
    TestingFramework.JEST: ("jest", "@types/jest", "ts-jest"),
    TestingFramework.MOCHA: ("mocha", "@types/mocha", "chai", "@types/chai", "ts-node"),
}

TEST_SCRIPTS = {
    TestingFramework.JEST: "jest --runInBand --detectOpenHandles --forceExit",
    TestingFramework.MOCHA: "mocha --require ts-node/register \"test/**/*.spec.ts\"",
}


@dataclass
class StepOutcome:
    """Result of one post-setup step."""

    name: str
    succeeded: bool
    skipped: bool = False
    error: Optional[str] = None


@dataclass
class PostSetupReport:
    """Results of the linting and testing steps."""

    linting: StepOutcome
    testing: StepOutcome

    @property
    def succeeded(self) -> bool:
        return self.linting.succeeded and self.testing.succeeded


class PostSetupPipeline:
    """Offers linting then testing setup; neither step can fail the run."""

    def __init__(
        self,
        executor: CommandExecutor,
        prompter: Prompter,
        reporter: Optional[StepReporter] = None
    ):
        """Initialize the pipeline.

        Args:
            executor: Runs package manager commands
            prompter: Interactive capability for the testing framework choice
            reporter: Optional outcome reporter
        """
        self.executor = executor
        self.prompter = prompter
        self.reporter = reporter or StepReporter(console=executor.console)

    def run(self, project_dir: Path) -> PostSetupReport:
        """Set up linting, then testing, in ``project_dir``."""
        return PostSetupReport(
            linting=self.setup_linting(project_dir),
            testing=self.setup_testing(project_dir),
        )

    def setup_linting(self, project_dir: Path) -> StepOutcome:
        """Install ESLint and Prettier unless the project already configures them."""
        writer = ConfigWriter(project_dir)
        self.reporter.info("Setting up ESLint and Prettier...")

        try:
            existing = writer.exists(*ESLINT_CONFIG_FILES)
            if existing:
                self.reporter.warn(f"ESLint config already exists ({existing})!")
            else:
                self.executor.run_statement(
                    "npm install --save-dev --legacy-peer-deps " + " ".join(LINT_PACKAGES),
                    project_dir
                )
                writer.write_json(".eslintrc.json", ESLINT_CONFIG)

            existing = writer.exists(*PRETTIER_CONFIG_FILES)
            if existing:
                self.reporter.warn(f"Prettier config already exists ({existing})!")
            else:
                writer.write_json(".prettierrc.json", PRETTIER_CONFIG)

            self._fill_scripts(writer, {
                "lint": "eslint \"src/**/*.ts\"",
                "format": "prettier --write \"src/**/*.ts\"",
                "precommit": "npm run lint && npm run format",
            })
        except (TspError, OSError, ValueError) as e:
            logger.warning(f"Error setting up linting: {e}")
            self.reporter.fail("Error setting up linting")
            return StepOutcome("linting", succeeded=False, error=str(e))

        self.reporter.succeed("Linting and Code Formatting setup completed")
        return StepOutcome("linting", succeeded=True)

    def setup_testing(self, project_dir: Path) -> StepOutcome:
        """Ask for a testing framework and install it."""
        choice = TestingFramework(self.prompter.select(
            "Select a testing framework:",
            [(framework.value, framework.value) for framework in TestingFramework],
            default=TestingFramework.JEST.value
        ))

        if choice == TestingFramework.SKIP:
            self.reporter.warn("Testing framework setup skipped!")
            return StepOutcome("testing", succeeded=True, skipped=True)

        writer = ConfigWriter(project_dir)
        self.reporter.info(f"Setting up {choice.value}...")

        try:
            self.executor.run_statement(
                "npm install --save-dev " + " ".join(TESTING_PACKAGES[choice]),
                project_dir
            )
            if choice == TestingFramework.JEST:
                writer.ensure_json("jest.config.json", JEST_CONFIG, protect=True)
            self._fill_scripts(writer, {"test": TEST_SCRIPTS[choice]})
        except (TspError, OSError, ValueError) as e:
            logger.warning(f"Error setting up {choice.value}: {e}")
            self.reporter.fail(f"Error setting up {choice.value}")
            return StepOutcome("testing", succeeded=False, error=str(e))

        self.reporter.succeed(f"{choice.value} setup complete")
        return StepOutcome("testing", succeeded=True)

    def _fill_scripts(self, writer: ConfigWriter, scripts: dict) -> None:
        if not writer.exists("package.json"):
            self.reporter.warn("package.json not found, scripts not updated")
            return

        logger.info("Updating package.json scripts...")
        writer.fill_json("package.json", scripts, section="scripts")
