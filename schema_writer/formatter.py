"""Formatters applied to generated Scala source."""

import logging
import shutil
import subprocess
from typing import Protocol

from .errors import FormattingError

logger = logging.getLogger(__name__)

SCALAFMT_EXECUTABLE = "scalafmt"


class Formatter(Protocol):
    """Anything that turns generated source into its final layout."""

    def format(self, source: str) -> str: ...


class NoopFormatter:
    """Returns the source unchanged."""

    def format(self, source: str) -> str:
        """Return `source` as is."""
        return source


class ScalafmtFormatter:
    """Pipe source through the scalafmt command line tool.

    Args:
        config_path: scalafmt configuration file naming the style to apply
        executable: Name or path of the scalafmt binary
    """

    def __init__(self, config_path: str | None = None, executable: str = SCALAFMT_EXECUTABLE):
        self.config_path = config_path
        self.executable = executable

    def command(self) -> list[str]:
        """Command line reading source from stdin, with the style config if set."""
        command = [self.executable, "--stdin", "--non-interactive", "--quiet"]
        if self.config_path:
            command += ["--config", self.config_path]
        return command

    def format(self, source: str) -> str:
        """Format Scala source.

        Args:
            source: Generated Scala text

        Returns:
            Formatted text

        Raises:
            FormattingError: If scalafmt is missing or rejects the source
        """
        if shutil.which(self.executable) is None:
            raise FormattingError(f"{self.executable} is not installed or not in PATH")

        logger.debug("Running %s", " ".join(self.command()))
        result = subprocess.run(self.command(), input=source, capture_output=True, text=True)
        if result.returncode != 0:
            raise FormattingError(result.stderr.strip() or f"{self.executable} exited with {result.returncode}")
        return result.stdout
