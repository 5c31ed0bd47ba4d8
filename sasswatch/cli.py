"""
sasswatch CLI

- build: compile every stylesheet once
- watch: compile on change until interrupted

Options fall back to SASSWATCH_* environment settings.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from sasswatch.config import SassOptions, Settings, resolve_options
from sasswatch.errors import BuildError, InvalidConfigurationError
from sasswatch.guard import SassGuard
from sasswatch.infrastructure.formatter import Formatter
from sasswatch.infrastructure.source_tree import SourceTree
from sasswatch.observability import setup_logging
from sasswatch.service import WatchHost

app = typer.Typer(name="sasswatch", help="Recompile Sass stylesheets when they change", add_completion=False)
console = Console(stderr=True)

InputOpt = typer.Option(None, "--input", "-i", help="Input directory")
OutputOpt = typer.Option(None, "--output", "-o", help="Output directory (defaults to input)")
LoadPathOpt = typer.Option(None, "--load-path", "-I", help="Extra @import directory (repeatable)")
SmartPartialsOpt = typer.Option(None, "--smart-partials/--no-smart-partials", help="Resolve partials to owners")
StyleOpt = typer.Option(None, "--style", help="Output style: expanded/compressed")
ShallowOpt = typer.Option(None, "--shallow/--no-shallow", help="Flatten the output tree")
NoopOpt = typer.Option(None, "--noop/--no-noop", help="Validate only, write nothing")
HideSuccessOpt = typer.Option(None, "--hide-success/--show-success", help="Hide success messages")
LogLevelOpt = typer.Option(None, "--log-level", help="DEBUG/INFO/WARNING/ERROR")
LogFormatOpt = typer.Option(None, "--log-format", help="console/json")


def build_options(settings: Settings, **overrides) -> SassOptions:
    try:
        return resolve_options(settings, **overrides)
    except InvalidConfigurationError as e:
        console.print(f"[red]❌ Invalid options: {escape(str(e.details.get('errors')))}[/red]")
        raise typer.Exit(2)


def make_guard(options: SassOptions) -> SassGuard:
    try:
        return SassGuard(
            options=options,
            source_tree=SourceTree(Path.cwd()),
            formatter=Formatter(console=console, hide_success=options.hide_success),
        )
    except InvalidConfigurationError as e:
        console.print(f"[red]❌ Invalid options: {escape(str(e))}[/red]")
        raise typer.Exit(2)


@app.command()
def build(
    input: Optional[str] = InputOpt,
    output: Optional[str] = OutputOpt,
    load_path: Optional[list[str]] = LoadPathOpt,
    style: Optional[str] = StyleOpt,
    shallow: Optional[bool] = ShallowOpt,
    noop: Optional[bool] = NoopOpt,
    hide_success: Optional[bool] = HideSuccessOpt,
    log_level: Optional[str] = LogLevelOpt,
    log_format: Optional[str] = LogFormatOpt,
):
    """
    Compile every non-partial stylesheet once.

    Examples:
        sasswatch build --input styles
        sasswatch build -i styles -o public/css --style compressed
    """
    settings = Settings()
    setup_logging(level=log_level or settings.log_level, format=log_format or settings.log_format)
    options = build_options(
        settings,
        input=input,
        output=output,
        load_paths=load_path or None,
        style=style,
        shallow=shallow,
        noop=noop,
        hide_success=hide_success,
    )

    guard = make_guard(options)
    try:
        written = guard.run_all()
    except BuildError as e:
        console.print(f"[red]❌ Build failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ {len(written)} file(s) written[/green]")


@app.command()
def watch(
    input: Optional[str] = InputOpt,
    output: Optional[str] = OutputOpt,
    load_path: Optional[list[str]] = LoadPathOpt,
    smart_partials: Optional[bool] = SmartPartialsOpt,
    all_on_start: Optional[bool] = typer.Option(None, "--all-on-start/--no-all-on-start", help="Build all on start"),
    style: Optional[str] = StyleOpt,
    shallow: Optional[bool] = ShallowOpt,
    noop: Optional[bool] = NoopOpt,
    hide_success: Optional[bool] = HideSuccessOpt,
    log_level: Optional[str] = LogLevelOpt,
    log_format: Optional[str] = LogFormatOpt,
):
    """
    Watch the current directory and recompile changed stylesheets.

    Examples:
        sasswatch watch --input styles --smart-partials --all-on-start
    """
    settings = Settings()
    setup_logging(level=log_level or settings.log_level, format=log_format or settings.log_format)
    options = build_options(
        settings,
        input=input,
        output=output,
        load_paths=load_path or None,
        smart_partials=smart_partials,
        all_on_start=all_on_start,
        style=style,
        shallow=shallow,
        noop=noop,
        hide_success=hide_success,
    )

    host = WatchHost(make_guard(options), settings.watcher)
    console.print(f"\n[cyan]👀 Watching {options.input or Path.cwd()} (Ctrl+C to stop)[/cyan]\n")

    async def run():
        await host.start()
        try:
            await host.wait()
        finally:
            await host.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("[dim]Stopped[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()
