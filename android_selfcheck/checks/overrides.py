"""Resolution of the linker chain for a target."""

import os
from collections.abc import Mapping
from pathlib import Path

from android_selfcheck.core.config import get_target_linker, load_cargo_config
from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.report import LinkerChain
from android_selfcheck.models.target import TargetTriple

logger = get_logger(__name__)


class OverrideResolver:
    """Reads the configured linker and the two per-target environment overrides."""

    def __init__(
        self,
        cargo_config: Path,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            cargo_config: Path to the project's cargo ``config.toml``.
            environ: Environment to read overrides from (defaults to os.environ).
        """
        self.cargo_config = cargo_config
        self.environ = os.environ if environ is None else environ

    def configured_linker(self, target: TargetTriple) -> str | None:
        config = load_cargo_config(self.cargo_config)
        return get_target_linker(config, target.value)

    def resolve(self, target: TargetTriple) -> LinkerChain:
        """Build the linker chain for ``target``.

        Empty environment values count as unset.
        """
        chain = LinkerChain(
            config_linker=self.configured_linker(target),
            cargo_linker_override=self.environ.get(target.cargo_linker_var) or None,
            cc_linker_override=self.environ.get(target.cc_linker_var) or None,
        )

        if chain.config_linker:
            logger.info(f"config linker ({target.value}): {chain.config_linker}")
        if chain.cargo_linker_override:
            logger.info(f"env override {target.cargo_linker_var}={chain.cargo_linker_override}")
        if chain.cc_linker_override:
            logger.info(f"env override {target.cc_linker_var}={chain.cc_linker_override}")
        logger.info(f"effective linker: {chain.effective_linker}")

        return chain
