"""CLI command to encode or decode a Secret's data map."""

from __future__ import annotations

import typer
from rich.markup import escape

from ktoolhu.cli.commands.base import err_console
from ktoolhu.utils.secret_codec import Direction, SecretCodecError, transcode_secret


def register_secret_commands(app: typer.Typer) -> None:
    """Register the secret command."""

    @app.command("secret")
    def secret(
        encode: bool = typer.Option(False, "--encode", help="Base64-encode every data value"),
        decode: bool = typer.Option(False, "--decode", help="Base64-decode every data value"),
    ) -> None:
        """Encode or decode the data of a Secret read from stdin.

        Reads YAML or JSON and writes YAML. Without a flag the values are
        decoded when all of them are valid base64 text, encoded otherwise.

        Examples:
            kubectl get secret my-secret -o yaml | ktoolhu secret
            ktoolhu secret --encode < plain-secret.yaml
        """
        if encode and decode:
            err_console.print("[red]Error:[/red] --encode and --decode are mutually exclusive")
            raise typer.Exit(1)

        direction = Direction.AUTO
        if encode:
            direction = Direction.ENCODE
        elif decode:
            direction = Direction.DECODE

        text = typer.get_text_stream("stdin").read()
        try:
            result = transcode_secret(text, direction)
        except SecretCodecError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1) from e

        typer.echo(result, nl=False)
