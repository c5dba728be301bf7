"""Subprocess execution for external tools (gpg, shred)."""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .console import print_error


class CommandError(Exception):
    """External command execution error."""

    pass


@dataclass
class CommandResult:
    """Result of a subprocess command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def check_command_exists(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None


def check_required_commands() -> None:
    """Check that gpg and shred are available."""
    if not check_command_exists("gpg"):
        print_error("gpg command not found.")
        print_error("")
        print_error("   Install GnuPG, e.g.:")
        print_error("")
        print_error("      apt-get install gnupg")
        print_error("")
        raise CommandError("gpg not found")

    if not check_command_exists("shred"):
        print_error("shred command not found (part of GNU coreutils).")
        raise CommandError("shred not found")


def run_command(
    cmd: list[str],
    env: dict[str, str] | None = None,
    cwd: Path | None = None,
    input_text: str | None = None,
) -> CommandResult:
    """Run a subprocess command, optionally feeding text on stdin."""
    full_env = {**os.environ, **(env or {})}

    result = subprocess.run(
        cmd,
        env=full_env,
        cwd=cwd,
        input=input_text,
        capture_output=True,
        text=True,
    )

    return CommandResult(
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def run_gpg_import(homedir: Path, private_key: str) -> CommandResult:
    """Import a private key into the given GnuPG home."""
    cmd = ["gpg", "--homedir", str(homedir), "--batch", "--import"]
    return run_command(cmd, input_text=private_key)


def run_gpg_detach_sign(
    homedir: Path,
    path: Path,
    key_user: str,
    passphrase: str,
) -> CommandResult:
    """Write a detached signature for ``path`` to ``path.sig``."""
    cmd = [
        "gpg",
        "--homedir",
        str(homedir),
        "--local-user",
        key_user,
        "--batch",
        "--yes",
        "--passphrase-fd",
        "0",
        "--output",
        f"{path}.sig",
        "--detach-sign",
        str(path),
    ]

    # Passphrase goes in on stdin (--passphrase-fd 0), never on the command line
    return run_command(cmd, input_text=passphrase)


def shred_directory(path: Path) -> None:
    """Overwrite every file under ``path`` with shred, then remove the directory."""
    if not path.exists():
        return

    for file in sorted(p for p in path.rglob("*") if p.is_file()):
        run_command(["shred", str(file)])

    shutil.rmtree(path, ignore_errors=True)
