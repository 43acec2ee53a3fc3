"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from easytty import __version__
from easytty.core.errors import EasyTTYError
from easytty.core.service import EasyTTYService

app = typer.Typer(
    help="Persistent /dev names for USB serial adapters via udev rules",
    no_args_is_help=True,
)


def _build_service() -> EasyTTYService:
    service = EasyTTYService()
    for warning in service.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    for warning in service.runtime_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"easytty {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Bind USB serial adapters to stable device names.

    Rule changes require root; easytty falls back to sudo when needed.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("devices")
def list_devices() -> None:
    """List connected USB serial devices."""
    try:
        service = _build_service()
        devices = service.list_devices()
        if not devices:
            typer.echo("No USB serial devices found.")
            return

        typer.echo(f"Found {len(devices)} USB serial device(s):\n")
        for device in devices:
            typer.echo(f"Device: {device.dev_path}")
            typer.echo(f"  Vendor ID:    {device.vendor_id}")
            typer.echo(f"  Product ID:   {device.product_id}")
            if device.manufacturer:
                typer.echo(f"  Manufacturer: {device.manufacturer}")
            if device.product:
                typer.echo(f"  Product:      {device.product}")
            if device.serial:
                typer.echo(f"  Serial:       {device.serial}")
            else:
                typer.echo("  Serial:       (none - device has no serial)")
            if device.driver:
                typer.echo(f"  Driver:       {device.driver}")
            if device.bus_num and device.dev_num:
                typer.echo(f"  USB Location: Bus {device.bus_num} Dev {device.dev_num}")
            match_type = service.store.get_rule_match_type(device)
            typer.echo(f"  Rule:         {match_type.value}")
            typer.echo("")
    except EasyTTYError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("rules")
def list_rules() -> None:
    """List existing easytty udev rules."""
    try:
        service = _build_service()
        statuses = service.rule_status()
        if not statuses:
            typer.echo("No EasyTTY udev rules found.")
            return

        typer.echo(f"Found {len(statuses)} EasyTTY udev rule(s):\n")
        for status in statuses:
            rule = status.rule
            typer.echo(f"Symlink: {service.settings.dev_dir / rule.symlink}")
            typer.echo(f"  Vendor ID:  {rule.vendor_id}")
            typer.echo(f"  Product ID: {rule.product_id}")
            if rule.serial:
                typer.echo(f"  Serial:     {rule.serial}")
            typer.echo(f"  File:       {rule.file_path}")
            typer.echo(f"  Active:     {'Yes' if status.symlink_present else 'No'}")
            typer.echo("")
    except EasyTTYError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("create")
def create_rule(
    device: str = typer.Argument(..., help="Device path, node name, serial, or product"),
    name: str | None = typer.Argument(None, help="Symlink name to create under /dev"),
    no_apply: bool = typer.Option(False, "--no-apply", help="Write the rule without reloading udev"),
) -> None:
    """Create a persistent name rule for a device.

    If NAME is omitted, a name is suggested from the device product string.
    """
    try:
        service = _build_service()
        if name is None:
            target = service.resolve_device(device)
            typer.echo(f"Suggested name for {target.dev_path}: {service.suggest_name(target)}")
            return
        result = service.bind(device, name, apply=not no_apply)
        _report(result.success, result.message)
    except EasyTTYError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("delete")
def delete_rule(
    name: str = typer.Argument(..., help="Symlink or custom name of the rule"),
    no_apply: bool = typer.Option(False, "--no-apply", help="Remove the rule without reloading udev"),
) -> None:
    """Delete an easytty rule."""
    try:
        service = _build_service()
        result = service.unbind(name, apply=not no_apply)
        _report(result.success, result.message)
    except EasyTTYError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("apply")
def apply_rules() -> None:
    """Reload udev rules and re-trigger devices."""
    try:
        service = _build_service()
        result = service.apply()
        _report(result.success, result.message)
    except EasyTTYError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def _report(success: bool, message: str) -> None:
    if not success:
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(message)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
