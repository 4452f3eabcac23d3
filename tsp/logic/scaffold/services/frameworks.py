"""Supported frameworks: install commands and post-install configuration.

``FRAMEWORKS`` is the single registration point. Adding a framework means
adding a :class:`FrameworkKind` member, an install-command builder, a config
setup routine and one descriptor entry below.
"""

from shlex import quote
from typing import Dict, List, Optional, Union

from tsp.core.lib_logger import get_logger
from tsp.logic.scaffold.models.command import (
    CommandScript,
    CommandStep,
    InstallCommandSet,
    InstallationStrategy,
)
from tsp.logic.scaffold.models.framework import FrameworkDescriptor, FrameworkKind
from tsp.logic.scaffold.models.target import ProjectTarget
from tsp.logic.scaffold.models.version import SemanticVersion
from tsp.logic.scaffold.services.config_writer import ConfigWriter

logger = get_logger(__name__)

NEST_STARTER_REPO = "https://github.com/nestjs/typescript-starter.git"
QUASAR_STARTER_REPO = "https://github.com/quasarframework/quasar-starter.git"

ASTRO_CONFIG = """\
import { defineConfig } from 'astro/config';

// https://astro.build/config
export default defineConfig({});
"""

ASTRO_INDEX_PAGE = """\
---
// Welcome to Astro! Everything between these triple-dash code fences
// is your "component frontmatter". It never runs in the browser.
console.log('This runs in your terminal, not the browser!');
---
<!-- Below is your "component template." It's just HTML, but with
    some magic sprinkled in to help you build great templates. -->
<html>
  <body>
    <h1>Hello, World!</h1>
  </body>
</html>
<style>
  h1 {
    color: orange;
  }
</style>
"""

ROBOTS_TXT = """\
# Example: Allow all bots to scan and index your site.
# Full syntax: https://developers.google.com/search/docs/advanced/robots/create-robots-txt
User-agent: *
Allow: /
"""

ASTRO_TSCONFIG = {
    "compilerOptions": {
        "target": "es2020",
        "module": "esnext",
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "declaration": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "dist"],
}


def _require_strategy(strategy: Optional[InstallationStrategy]) -> InstallationStrategy:
    if strategy is None:
        raise ValueError("Installation type not provided!")
    return strategy


def _major(version: str) -> int:
    try:
        return SemanticVersion(version).major
    except ValueError:
        return 0


# ============================================================================
# Install command builders
# ============================================================================

def nestjs_install_commands(target: ProjectTarget, version: str) -> InstallCommandSet:
    directory = quote(str(target.directory))
    name = quote(target.name)
    return InstallCommandSet({
        InstallationStrategy.GLOBAL: CommandScript.of(
            f"npm install -g @nestjs/cli@{version}",
            f"nest new {name} --directory={directory}",
            success_message="A NestJS project has been setup successfully (CLI installed globally).",
        ),
        InstallationStrategy.LOCAL: CommandScript.of(
            f"mkdir -p {directory}",
            CommandStep(f"npm install @nestjs/cli@{version} --save-dev", cwd=target.directory),
            CommandStep(f"npx nest new {name}", cwd=target.directory),
            success_message="A NestJS project has been setup successfully (CLI installed locally).",
        ),
        InstallationStrategy.MANUAL: CommandScript.of(
            f"git clone {NEST_STARTER_REPO} .",
            "npm install",
            success_message="A NestJS project has been setup manually (CLI installed locally).",
        ),
    })


def nextjs_install_commands(target: ProjectTarget, version: str) -> InstallCommandSet:
    flags = "--use-npm --ts --eslint --tailwind --src-dir --app"
    if _major(version) >= 15:
        flags += " --turbopack"
    return InstallCommandSet({
        InstallationStrategy.LOCAL: CommandScript.of(
            f"npx create-next-app@{version} {quote(str(target.directory))} {flags} --import-alias \"@/*\"",
            success_message="A Next.js project has been setup successfully (CLI installed locally).",
        ),
        InstallationStrategy.MANUAL: CommandScript.of(
            f"npm install next@{version} react@latest react-dom@latest",
            "npm install",
            success_message="A Next.js project has been setup manually (CLI installed locally).",
        ),
    })


def astro_install_commands(target: ProjectTarget, version: str) -> InstallCommandSet:
    directory = quote(str(target.directory))
    return InstallCommandSet({
        InstallationStrategy.LOCAL: CommandScript.of(
            f"mkdir -p {directory}",
            f"npx create-astro@latest {directory} -- --fancy --typescript=strict "
            "--skip-houston --no-git --install --yes",
            success_message="An Astro JS project has been setup successfully (CLI installed locally).",
        ),
        InstallationStrategy.MANUAL: CommandScript.of(
            f"npm install astro@{version}",
            "npm install",
            success_message="An Astro JS project has been setup manually (CLI installed locally).",
        ),
    })


def nuxtjs_install_commands(target: ProjectTarget, version: str) -> InstallCommandSet:
    return InstallCommandSet({
        InstallationStrategy.LOCAL: CommandScript.of(
            f"npx nuxi@latest init {quote(str(target.directory))}",
            success_message="A NuxtJS project has been setup successfully (CLI installed locally).",
        ),
    })


def quasar_install_commands(target: ProjectTarget, version: str) -> InstallCommandSet:
    return InstallCommandSet({
        InstallationStrategy.GLOBAL: CommandScript.of(
            f"npm install -g @quasar/cli@{version}",
            f"npm init quasar {quote(str(target.directory))}",
            success_message="A Quasar project has been setup successfully (CLI installed globally).",
        ),
        InstallationStrategy.LOCAL: CommandScript.of(
            f"npm init quasar {quote(str(target.directory))}",
            success_message="A Quasar project has been setup successfully (CLI installed locally).",
        ),
        InstallationStrategy.MANUAL: CommandScript.of(
            f"git clone {QUASAR_STARTER_REPO} .",
            "npm install",
            success_message="A Quasar project has been setup manually (CLI installed locally).",
        ),
    })


# ============================================================================
# Config setup routines
# ============================================================================

def configure_nothing(writer: ConfigWriter, strategy: Optional[InstallationStrategy]) -> None:
    """Frameworks whose scaffolders produce a complete project."""
    _require_strategy(strategy)


def configure_nextjs(writer: ConfigWriter, strategy: Optional[InstallationStrategy]) -> None:
    if _require_strategy(strategy) != InstallationStrategy.MANUAL:
        return

    logger.info("Updating package.json scripts...")
    writer.ensure_json("package.json", {
        "name": writer.project_dir.name,
        "version": "0.1.0",
        "private": True,
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
            "lint": "next lint",
        },
        "dependencies": {
            "next": "latest",
            "react": "latest",
            "react-dom": "latest",
        },
        "devDependencies": {
            "@types/node": "latest",
            "@types/react": "latest",
            "@types/react-dom": "latest",
            "autoprefixer": "^10.4.14",
            "postcss": "^8.4.21",
            "tailwindcss": "^3.2.7",
            "typescript": "latest",
            "eslint": "latest",
            "eslint-config-next": "latest",
        },
    })
    writer.fill_json("package.json", {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    }, section="scripts")


def configure_astro(writer: ConfigWriter, strategy: Optional[InstallationStrategy]) -> None:
    if _require_strategy(strategy) != InstallationStrategy.MANUAL:
        return

    logger.info("Updating package.json scripts...")
    writer.ensure_json("package.json", {
        "name": writer.project_dir.name,
        "version": "0.1.0",
        "private": True,
        "type": "module",
        "scripts": {},
    })
    writer.fill_json("package.json", {
        "dev": "astro dev",
        "build": "astro build",
        "start": "astro dev",
        "preview": "astro preview",
    }, section="scripts")

    logger.info("Updating tsconfig.json...")
    writer.ensure_json("tsconfig.json", ASTRO_TSCONFIG)
    writer.fill_json("tsconfig.json", {"extends": "astro/tsconfigs/base"})

    logger.info("Updating astro.config.mjs...")
    writer.write_text_if_absent("astro.config.mjs", ASTRO_CONFIG, protect=True)

    logger.info("Updating src/pages/index.astro")
    writer.write_text_if_absent("src/pages/index.astro", ASTRO_INDEX_PAGE)

    logger.info("Updating public/robots.txt")
    writer.write_text_if_absent("public/robots.txt", ROBOTS_TXT)


# ============================================================================
# Registry
# ============================================================================

FRAMEWORKS: Dict[FrameworkKind, FrameworkDescriptor] = {
    FrameworkKind.NESTJS: FrameworkDescriptor(
        kind=FrameworkKind.NESTJS,
        name="NestJS",
        package="@nestjs/cli",
        repository="nestjs/nest",
        install_commands=nestjs_install_commands,
        configure=configure_nothing,
    ),
    FrameworkKind.NEXTJS: FrameworkDescriptor(
        kind=FrameworkKind.NEXTJS,
        name="Next.js",
        package="next",
        repository="vercel/next.js",
        install_commands=nextjs_install_commands,
        configure=configure_nextjs,
    ),
    FrameworkKind.ASTROJS: FrameworkDescriptor(
        kind=FrameworkKind.ASTROJS,
        name="Astro",
        package="astro",
        repository="withastro/astro",
        install_commands=astro_install_commands,
        configure=configure_astro,
    ),
    FrameworkKind.NUXTJS: FrameworkDescriptor(
        kind=FrameworkKind.NUXTJS,
        name="Nuxt.js",
        package="nuxt",
        repository="nuxt/framework",
        install_commands=nuxtjs_install_commands,
        configure=configure_nothing,
    ),
    FrameworkKind.QUASAR: FrameworkDescriptor(
        kind=FrameworkKind.QUASAR,
        name="Quasar",
        package="@quasar/cli",
        repository="quasarframework/quasar",
        install_commands=quasar_install_commands,
        configure=configure_nothing,
    ),
}


def get_framework(kind: Union[FrameworkKind, str]) -> FrameworkDescriptor:
    """Look up a registered framework.

    Raises:
        ValueError: If ``kind`` names no registered framework
    """
    try:
        return FRAMEWORKS[FrameworkKind(kind)]
    except (ValueError, KeyError):
        raise ValueError(
            f"Unknown framework '{kind}'. Must be one of: {', '.join(k.value for k in FRAMEWORKS)}"
        ) from None


def list_frameworks() -> List[FrameworkDescriptor]:
    return list(FRAMEWORKS.values())
