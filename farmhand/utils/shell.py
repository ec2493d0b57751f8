"""
Local Repository Helpers
========================

Small wrappers around git and shell commands used to describe the local
checkout (branch names for upload labels, build command batches) and to
stage artifacts before they are uploaded.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from farmhand.errors import DetachedHeadError

PathLike = Union[str, Path]


@dataclass
class CommandOutput:
    """
    Result of one command run by ``run_all``.

    Attributes:
        command: The command line as it was run.
        output: Stripped stdout.
        returncode: Process exit code (0 on success).
    """

    command: str
    output: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _run(directory: PathLike, command: str) -> subprocess.CompletedProcess:
    # Commands are split on spaces and never passed through a shell.
    parts = command.split(" ")
    return subprocess.run(
        parts,
        cwd=str(directory),
        capture_output=True,
        text=True,
    )


def git_branch(directory: PathLike) -> str:
    """
    Return the current git branch for the given directory.

    Raises:
        DetachedHeadError: If the repo is in a detached HEAD state.
        subprocess.CalledProcessError: If git fails (e.g. not a repository).
    """
    result = _run(directory, "git rev-parse --abbrev-ref HEAD")
    result.check_returncode()
    branch = result.stdout.strip()
    if branch == "HEAD":
        raise DetachedHeadError("Your repo looks like it is in a detached state")
    return branch


def run_all(directory: PathLike, *commands: str) -> list[CommandOutput]:
    """
    Run commands in order inside ``directory``.

    Stops after the first command that exits non-zero; its output is the
    last entry of the returned list.
    """
    outputs: list[CommandOutput] = []
    for command in commands:
        command = command.strip()
        try:
            result = _run(directory, command)
        except FileNotFoundError:
            # Same exit code a shell reports for an unknown command
            outputs.append(CommandOutput(command, "", 127))
            break
        outputs.append(CommandOutput(command, result.stdout.strip(), result.returncode))
        if result.returncode != 0:
            break
    return outputs


def copy_file(src: PathLike, dst: PathLike) -> None:
    """Copy ``src`` over ``dst`` (replacing it) and flush it to disk."""
    with open(src, "rb") as src_file, open(dst, "wb") as dst_file:
        shutil.copyfileobj(src_file, dst_file)
        dst_file.flush()
        os.fsync(dst_file.fileno())
