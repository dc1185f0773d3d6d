"""
CLI for signing, verifying and inspecting path-signed URLs.
"""

import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pathsign.core.errors import SignedURLError
from pathsign.core.encoding import b64url_encode, epoch_seconds
from pathsign.core.types import URL
from pathsign.crypto.keys import HMACKey
from pathsign.format import PathFormatter
from pathsign.sign.signer import Signer

SECRET_ENV = "PATHSIGN_SECRET"

app = typer.Typer(
    name="pathsign",
    help="Sign, verify and inspect URLs carrying signature and expiry in their path",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def get_secret(secret_flag: Optional[str] = None) -> str:
    """Resolve the HMAC secret in this order:
    1. --secret flag
    2. PATHSIGN_SECRET environment variable
    """
    secret = secret_flag or os.environ.get(SECRET_ENV)
    if not secret:
        console.print("[red]No signing secret configured.[/]")
        console.print(f"  • Set env var: export {SECRET_ENV}=...")
        console.print("  • Or use --secret: pathsign sign URL --secret ...")
        console.print("  • Generate one with: pathsign keygen")
        raise typer.Exit(1)
    return secret


@app.command()
def sign(
    url: str = typer.Argument(..., help="URL to sign (path must begin with '/')"),
    expires_in: int = typer.Option(3600, "--expires-in", "-e", help="Seconds until the URL expires"),
    skip_query: bool = typer.Option(False, "--skip-query", help="Leave query parameters out of the signature"),
    secret: Optional[str] = typer.Option(None, "--secret", help=f"HMAC secret (overrides {SECRET_ENV})"),
):
    """Sign a URL, embedding signature and expiry in its path."""
    signer = Signer(HMACKey(get_secret(secret)), skip_query=skip_query)
    expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

    try:
        signed = signer.sign(url, expiry)
    except ValueError as e:
        console.print(f"[red]Cannot sign URL: {escape(str(e))}[/]")
        raise typer.Exit(1)

    console.print(signed, soft_wrap=True, highlight=False, markup=False)


@app.command()
def verify(
    url: str = typer.Argument(..., help="Signed URL to verify"),
    skip_query: bool = typer.Option(False, "--skip-query", help="Signature was computed without query parameters"),
    secret: Optional[str] = typer.Option(None, "--secret", help=f"HMAC secret (overrides {SECRET_ENV})"),
):
    """Verify signature and expiry of a signed URL."""
    signer = Signer(HMACKey(get_secret(secret)), skip_query=skip_query)

    try:
        unsigned, expiry = signer.verify_with_expiry(url)
    except SignedURLError as e:
        console.print(f"[red]✗ Verification failed ({e.kind}): {escape(str(e))}[/]")
        raise typer.Exit(1)

    console.print("[green]✓ URL is valid[/]")
    console.print(f"  {unsigned}", soft_wrap=True, highlight=False, markup=False)
    console.print(f"  Expires: {expiry.isoformat()} ({epoch_seconds(expiry)})", highlight=False)


@app.command()
def inspect(
    url: str = typer.Argument(..., help="Signed URL to decode"),
):
    """Decode the envelope of a signed URL without verifying it."""
    formatter = PathFormatter()

    try:
        u, sig = formatter.extract_signature(URL.parse(url))
        u, expiry = formatter.extract_expiry(u)
    except SignedURLError as e:
        console.print(f"[red]Malformed signed URL ({e.kind}): {escape(str(e))}[/]")
        raise typer.Exit(1)

    table = Table(title="Signed URL")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")

    table.add_row("Signature", b64url_encode(sig) or "—")
    table.add_row("Signature (hex)", sig.hex() or "—")
    table.add_row("Expiry", f"{expiry.isoformat()} ({epoch_seconds(expiry)})")
    table.add_row("Path", escape(u.path))
    table.add_row("Query", escape(u.query) or "—")

    console.print(table)


@app.command()
def keygen(
    nbytes: int = typer.Option(32, "--bytes", "-b", min=1, help="Secret length in bytes"),
):
    """Print a fresh random HMAC secret."""
    console.print(b64url_encode(secrets.token_bytes(nbytes)), highlight=False)


if __name__ == "__main__":
    app()
