"""CLI entry point for the object runtime."""

from __future__ import annotations

import click

from .core.context import ROOT_CONTEXT


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.option("--debug", is_flag=True, help="Type-check methods and validate classes")
@click.pass_context
def main(ctx: click.Context, config: str | None, debug: bool) -> None:
    """Axiomatic object runtime."""
    from .core.config import load_settings
    from .kernel.boot import boot, configure
    from .observability.logger import get_logger, setup_logging

    overrides = {"debug": True} if debug else None
    settings = configure(load_settings(config, overrides))
    setup_logging(settings.observability.log_level, settings.observability.log_format)
    boot()
    get_logger(__name__).debug("cli_ready", command=ctx.invoked_subcommand, debug=settings.debug)

    ctx.obj = settings


@main.command()
@click.pass_obj
def info(settings) -> None:
    """Show boot time and active settings."""
    from .kernel.boot import boot_time_ms

    elapsed = boot_time_ms()
    click.echo(f"Boot time: {elapsed:.2f} ms" if elapsed is not None else "Not booted")
    click.echo(f"Classes: {len(ROOT_CONTEXT.own_ids())} registered")
    click.echo(f"Debug: {settings.debug}")
    click.echo(f"Divergence limit: {settings.bindings.divergence_limit}")


@main.command()
@click.option("--package", default=None, help="Only list classes in this package")
def classes(package: str | None) -> None:
    """List registered classes."""
    seen = set()
    for key in ROOT_CONTEXT.visible_ids():
        cls = ROOT_CONTEXT.lookup(key)
        if cls.id in seen:
            continue
        seen.add(cls.id)
        if package and cls.package != package:
            continue
        parent = cls.parent.id if cls.parent else "-"
        click.echo(f"{cls.id:<45} extends {parent}")


@main.command()
@click.argument("class_id")
def describe(class_id: str) -> None:
    """Show the axioms of a class."""
    from .core.errors import UnresolvedReference

    try:
        cls = ROOT_CONTEXT.lookup(class_id)
    except UnresolvedReference as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"{cls.id} ({cls})")
    if cls.parent is not None:
        click.echo(f"  extends {cls.parent.id}")
    documentation = getattr(cls.model_, "documentation", None)
    if documentation:
        click.echo(f"  {documentation}")

    for axiom in cls.get_axioms():
        owner = "" if cls.has_own_axiom(axiom.name) else "  (inherited)"
        kind = getattr(getattr(axiom, "cls_", None), "name", type(axiom).__name__)
        click.echo(f"  {kind:<10} {axiom.name}{owner}")


if __name__ == "__main__":
    main()
