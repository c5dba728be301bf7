"""Create detached GPG signatures for release artifacts."""

import tempfile
from pathlib import Path
from typing import Annotated

import typer
from botocore.exceptions import ClientError

from .lib.aws import get_secret_string, get_session
from .lib.commands import (
    CommandError,
    check_required_commands,
    run_gpg_detach_sign,
    run_gpg_import,
    shred_directory,
)
from .lib.config import ConfigurationError, SigningConfig, SigningKey, get_signing_config
from .lib.console import (
    console,
    print_config,
    print_error,
    print_final_success,
    print_header,
    print_step,
    print_success,
    print_warning,
)

app = typer.Typer(help="Create detached signatures (FILE.sig) for build artifacts")


def step_1_retrieve_key(config: SigningConfig) -> SigningKey:
    """Fetch the signing key and passphrase from Secrets Manager."""
    print_step("1/3", f"Retrieving key {config.secret_id}...")

    session = get_session(config.aws_profile)
    try:
        secret_string = get_secret_string(session, config.secret_id, config.aws_region)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        print_error(f"Could not read secret {config.secret_id}: {error_code}")
        raise typer.Exit(1)

    try:
        signing_key = SigningKey.from_secret_string(secret_string)
    except ConfigurationError as e:
        print_error(str(e))
        raise

    print_success("Key retrieved")
    return signing_key


def step_2_import_key(homedir: Path, signing_key: SigningKey) -> None:
    """Import the private key into a throw-away GnuPG home."""
    print_step("2/3", "Importing key...")

    result = run_gpg_import(homedir, signing_key.private_key)
    if not result.success:
        print_error("Key import failed")
        if result.stderr:
            console.print(result.stderr)
        raise typer.Exit(1)

    print_success("Key imported")


def step_3_sign_files(
    config: SigningConfig, homedir: Path, signing_key: SigningKey, files: list[Path]
) -> None:
    """Write FILE.sig next to every file."""
    print_step("3/3", f"Signing {len(files)} file(s)...")

    for path in files:
        console.print(f"   Signing {path}...")
        result = run_gpg_detach_sign(homedir, path, config.key_user, signing_key.passphrase)
        if not result.success:
            print_error(f"Signing {path} failed")
            if result.stderr:
                console.print(result.stderr)
            raise typer.Exit(1)
        print_success(f"{path}.sig")


@app.command()
def sign(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Files to sign; each gets a detached signature FILE.sig",
        ),
    ],
    profile: Annotated[
        str | None,
        typer.Option("--profile", help="AWS CLI profile name (for SSO users)"),
    ] = None,
) -> None:
    """
    Sign build artifacts with the key stored under SIGNING_KEY_SCOPE.

    Signing is skipped (successfully) when SIGNING_KEY_SCOPE is not set.

    1. Retrieve the key from Secrets Manager (SIGNING_KEY_SCOPE/SigningKey)

    2. Import it into a temporary GnuPG home

    3. Write a detached signature for every file
    """
    config = get_signing_config(profile)
    if config is None:
        print_warning("SIGNING_KEY_SCOPE not set; not signing artifacts.")
        raise typer.Exit(0)

    missing = [path for path in files if not path.is_file()]
    if missing:
        for path in missing:
            print_error(f"File not found: {path}")
        raise typer.Exit(1)

    try:
        check_required_commands()

        print_header("Artifact Signing")
        print_config(
            secret_id=config.secret_id,
            key_user=config.key_user,
            file_count=len(files),
            profile=config.aws_profile,
        )

        homedir = Path(tempfile.mkdtemp(prefix="signing-"))
        try:
            signing_key = step_1_retrieve_key(config)
            step_2_import_key(homedir, signing_key)
            step_3_sign_files(config, homedir, signing_key, files)
        finally:
            # Key material must not outlive the run
            shred_directory(homedir)

        print_final_success("Done!")

    except ConfigurationError:
        raise typer.Exit(1)
    except CommandError:
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Signing cancelled.[/yellow]")
        raise typer.Exit(130)


def main() -> None:
    """Entry point for the sign script."""
    app()


if __name__ == "__main__":
    main()
