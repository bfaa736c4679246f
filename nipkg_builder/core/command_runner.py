"""External process execution"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

Command = Union[str, List[str]]


@dataclass
class CommandResult:
    """Outcome of a finished external command"""
    command: Command
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def display_command(self) -> str:
        if isinstance(self.command, str):
            return self.command
        return " ".join(str(part) for part in self.command)

    @property
    def error_message(self) -> str:
        """Best available description of a failure"""
        detail = (self.stderr or self.stdout or "").strip()
        message = f"Command '{self.display_command}' exited with status {self.returncode}"
        if detail:
            message += f": {detail}"
        return message


class CommandRunner(ABC):
    """Runs one external command to completion"""

    @abstractmethod
    def run(self,
            command: Command,
            cwd: Optional[Path] = None,
            stream_output: bool = False) -> CommandResult:
        """
        Run a command and block until it exits

        Args:
            command: Shell string or argument list
            cwd: Working directory
            stream_output: Let output go to the terminal instead of capturing it

        Returns:
            CommandResult
        """
        pass


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by subprocess.run

    String commands go through the shell, lists are executed directly.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self,
            command: Command,
            cwd: Optional[Path] = None,
            stream_output: bool = False) -> CommandResult:
        self.logger.debug(f"Running: {command} (cwd={cwd})")

        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd) if cwd else None,
                shell=isinstance(command, str),
                capture_output=not stream_output,
                text=True
            )
        except (FileNotFoundError, PermissionError) as e:
            # Executable missing or not runnable
            return CommandResult(command=command, returncode=127, stderr=str(e))

        return CommandResult(
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or ""
        )
