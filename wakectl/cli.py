"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from wakectl.core.errors import WakectlError
from wakectl.core.model import DeliveryOutcome, Device
from wakectl.core.notify import Notifier
from wakectl.core.service import WakeService

app = typer.Typer(help="Wake network devices by broadcasting Wake-on-LAN magic packets")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config_path": config}


def _build_service(ctx: typer.Context) -> WakeService:
    config_path = ctx.obj.get("config_path") if ctx.obj else None
    return WakeService(config_path=config_path)


def _label(device: Device) -> str:
    if device.name == device.mac:
        return device.mac
    return f"{device.name} ({device.mac})"


def _report(label: str, outcome: DeliveryOutcome, *, notify: bool) -> None:
    text = Notifier(desktop=notify).notify(label, outcome)
    if not outcome.success:
        typer.echo(text, err=True)
        raise typer.Exit(code=1)
    typer.echo(text)
    typer.echo(f"  {outcome.message}")


@app.command("list")
def list_devices(ctx: typer.Context) -> None:
    """List registered devices sorted by name."""
    try:
        service = _build_service(ctx)
        devices = service.list_devices()
        if not devices:
            typer.echo("No devices registered")
            return

        width = max(len(device.name) for device in devices)
        for device in devices:
            typer.echo(f"{device.name.ljust(width)}  {device.mac}")
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("add")
def add_device(
    ctx: typer.Context,
    name: str,
    mac: str = typer.Argument(..., help="MAC address, e.g. 00:11:22:33:44:55"),
) -> None:
    """Register a device under NAME."""
    try:
        service = _build_service(ctx)
        device = service.add_device(name, mac)
        typer.echo(f"Added {device.name} ({device.mac})")
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("remove")
def remove_device(ctx: typer.Context, name: str) -> None:
    """Remove the device registered under NAME."""
    try:
        service = _build_service(ctx)
        device = service.delete_device(name)
        typer.echo(f"Removed {device.name} ({device.mac})")
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("wake")
def wake_device(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Device name, partial name, or MAC"),
    notify: bool = typer.Option(False, "--notify", help="Show a desktop notification"),
) -> None:
    """Wake a registered device.

    TARGET that matches no registered device is used as a raw MAC address.
    """
    try:
        service = _build_service(ctx)
        result = service.wake(target)
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    _report(_label(result.device), result.outcome, notify=notify)


@app.command("send")
def send_packet(
    ctx: typer.Context,
    mac: str,
    notify: bool = typer.Option(False, "--notify", help="Show a desktop notification"),
) -> None:
    """Broadcast a magic packet to MAC without consulting the registry."""
    try:
        service = _build_service(ctx)
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    _report(mac, service.send(mac), notify=notify)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
