"""Package presence checks for the presets and plugins a config declares. Never installs."""

import logging
from pathlib import Path

from lintinit.models import ConfigFragment

logger = logging.getLogger(__name__)


def required_packages(config: ConfigFragment) -> list[str]:
    """Return the npm packages needed by the config's extends target and plugins."""
    packages: list[str] = []
    if config.extends and not config.extends.startswith("eslint:"):
        packages.append(f"eslint-config-{config.extends}")
    for plugin in config.plugins:
        name = f"eslint-plugin-{plugin}"
        if name not in packages:
            packages.append(name)
    return packages


def check_installed(packages: list[str], node_modules: Path) -> dict[str, bool]:
    """Map each package to whether ``node_modules/<package>/package.json`` exists."""
    status: dict[str, bool] = {}
    for package in packages:
        status[package] = (node_modules / package / "package.json").is_file()
        logger.debug("Package %s installed: %s", package, status[package])
    return status


def install_command(missing: list[str]) -> str:
    return "npm install --save-dev " + " ".join(missing)
