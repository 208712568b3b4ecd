"""
CLI for translate-text-ai.

Provides commands for one-shot translation, an interactive session,
language listing and configuration.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from translate_text_ai.clipboard import Clipboard, SystemClipboard
from translate_text_ai.config import Settings, create_default_config, load_config
from translate_text_ai.exceptions import ConfigurationError, ExportFailed, ValidationError
from translate_text_ai.export import PDFExporter
from translate_text_ai.languages import Language, parse_language, source_languages
from translate_text_ai.llm import create_provider_from_config
from translate_text_ai.logging_setup import setup_logging
from translate_text_ai.translation import (
    SessionController,
    SessionStatus,
    TextTranslator,
    TranslationSession,
)

app = typer.Typer(
    name="translate-text",
    help="AI-powered text translation with PDF export.",
    add_completion=False,
)

console = Console()

INTERACTIVE_HELP = """\
Type text to set the input, or a command:
  :translate (:t)     translate the input
  :retry              retry after a failure
  :swap               swap languages and texts
  :clear              clear input, output and error
  :source LANG        set the source language
  :target LANG        set the target language
  :paste / :copy      paste input from / copy output to the clipboard
  :export [PATH]      export the output as PDF
  :status             show the session
  :quit (:q)          leave"""


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings from config file or defaults."""
    if config_path and config_path.exists():
        return load_config(config_path)
    return load_config()


def build_translator(settings: Settings) -> TextTranslator:
    """Construct the provider once and wrap it in a translator."""
    provider = create_provider_from_config(settings.translation)
    return TextTranslator(
        provider,
        temperature=settings.translation.temperature,
        max_tokens=settings.translation.max_tokens,
    )


def _create_controller(settings: Settings) -> tuple[SessionController, TextTranslator]:
    try:
        translator = build_translator(settings)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from None
    return SessionController.from_settings(settings, translator), translator


async def _translate_once(
    controller: SessionController, translator: TextTranslator
) -> TranslationSession:
    try:
        return await controller.translate()
    finally:
        await translator.aclose()


def _language_option(value: str, *, target: bool = False) -> Language:
    try:
        language = parse_language(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from None
    if target and language.is_auto:
        raise typer.BadParameter("Auto Detect cannot be used as a target language")
    return language


def _print_session(session: TranslationSession) -> None:
    """Show the output region for the current session state."""
    title = f"{session.source_language.label} → {session.target_language.label}"
    if session.status is SessionStatus.IN_FLIGHT:
        console.print(Panel("[dim]Translating...[/dim]", title=title, border_style="cyan"))
    elif session.status is SessionStatus.FAILED:
        console.print(
            Panel(
                f"[red]{session.error_message}[/red]\n[dim]Retry to try again[/dim]",
                title=title,
                border_style="red",
            )
        )
    elif session.has_output:
        console.print(Panel(session.output_text, title=title, border_style="green"))
    else:
        console.print(Panel("[dim]Translation will appear here[/dim]", title=title))


async def _export(exporter: PDFExporter, session: TranslationSession, path: Path | None) -> bool:
    try:
        result = await exporter.export(session, path)
    except ExportFailed as e:
        console.print(f"[yellow]⚠ {e}. Please try again.[/yellow]")
        return False
    if result is None:
        console.print("[yellow]Nothing to export[/yellow]")
        return False
    console.print(
        f"[green]✓[/green] Exported {result.pages_exported} page(s) to {result.output_path}"
    )
    return True


def _copy_output(controller: SessionController, clipboard: Clipboard) -> None:
    if controller.copy_output(clipboard):
        console.print("[dim]Copied translation to clipboard[/dim]")
    else:
        console.print("[yellow]Could not copy to clipboard[/yellow]")


@app.command()
def translate(
    text: str | None = typer.Argument(None, help="Text to translate"),
    source: str | None = typer.Option(None, "--source", "-s", help="Source language"),
    target: str | None = typer.Option(None, "--target", "-t", help="Target language"),
    paste: bool = typer.Option(False, "--paste", help="Read the text from the clipboard"),
    copy: bool = typer.Option(False, "--copy", help="Copy the translation to the clipboard"),
    export: Path | None = typer.Option(None, "--export", "-e", help="Export the result as PDF"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Translate text once and print the result."""
    settings = get_settings(config)
    setup_logging(settings.logging)

    source_lang = _language_option(source) if source else None
    target_lang = _language_option(target, target=True) if target else None

    controller, translator = _create_controller(settings)
    if source_lang is not None:
        controller.set_source_language(source_lang)
    if target_lang is not None:
        controller.set_target_language(target_lang)

    clipboard = SystemClipboard()
    if paste:
        controller.paste_from_clipboard(clipboard)
    elif text is not None:
        controller.set_input_text(text)

    if not controller.can_translate:
        console.print("[yellow]Nothing to translate[/yellow]")
        return

    with console.status("Translating..."):
        session = asyncio.run(_translate_once(controller, translator))

    _print_session(session)
    if session.status is SessionStatus.FAILED:
        raise typer.Exit(1)

    if copy:
        _copy_output(controller, clipboard)

    if export is not None:
        exporter = PDFExporter(settings.export)
        if not asyncio.run(_export(exporter, session, export)):
            raise typer.Exit(1)


async def _run_interactive(
    controller: SessionController,
    translator: TextTranslator,
    exporter: PDFExporter,
    clipboard: Clipboard,
) -> None:
    pending: set[asyncio.Task] = set()

    def report(task: asyncio.Task) -> None:
        pending.discard(task)
        if task.cancelled():
            return
        if task.exception() is not None:
            console.print(f"[yellow]{task.exception()}[/yellow]")
            return
        _print_session(controller.session)

    console.print(Panel(INTERACTIVE_HELP, title="[bold blue]translate-text[/bold blue]"))

    while True:
        try:
            line = await asyncio.to_thread(console.input, "[bold cyan]> [/bold cyan]")
        except EOFError:
            break
        if not line.startswith(":"):
            if line.strip():
                controller.set_input_text(line)
            continue

        command, *args = line[1:].split() or [""]
        command = command.lower()

        if command in ("q", "quit", "exit"):
            break
        elif command in ("t", "translate", "retry"):
            if controller.is_busy:
                console.print("[dim]A translation is already in progress[/dim]")
                continue
            if command == "retry" and not controller.can_retry:
                console.print("[dim]Nothing to retry[/dim]")
                continue
            if not controller.can_translate:
                console.print("[yellow]Nothing to translate[/yellow]")
                continue
            task = asyncio.create_task(
                controller.retry() if command == "retry" else controller.translate()
            )
            pending.add(task)
            task.add_done_callback(report)
        elif command == "swap":
            _print_session(controller.swap_languages())
        elif command == "clear":
            controller.clear()
            console.print("[dim]Cleared[/dim]")
        elif command in ("source", "target") and args:
            try:
                language = parse_language(" ".join(args))
            except ValidationError as e:
                console.print(f"[yellow]{e}[/yellow]")
                continue
            if command == "source":
                session = controller.set_source_language(language)
            elif language.is_auto:
                console.print("[yellow]Auto Detect cannot be used as a target language[/yellow]")
                continue
            else:
                session = controller.set_target_language(language)
            console.print(
                f"[dim]{session.source_language.label} → {session.target_language.label}[/dim]"
            )
        elif command == "paste":
            session = controller.paste_from_clipboard(clipboard)
            console.print(f"[dim]Input: {len(session.input_text)} chars[/dim]")
        elif command == "copy":
            _copy_output(controller, clipboard)
        elif command == "export":
            if not controller.can_export:
                console.print("[yellow]Nothing to export[/yellow]")
                continue
            await _export(exporter, controller.session, Path(args[0]) if args else None)
        elif command == "status":
            session = controller.session
            console.print(f"[dim]{session.status.value} · input {len(session.input_text)} chars[/dim]")
            _print_session(session)
        else:
            console.print(INTERACTIVE_HELP)

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    await translator.aclose()


@app.command()
def interactive(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Start an interactive translation session."""
    settings = get_settings(config)
    setup_logging(settings.logging)
    controller, translator = _create_controller(settings)
    exporter = PDFExporter(settings.export)

    try:
        asyncio.run(_run_interactive(controller, translator, exporter, SystemClipboard()))
    except (KeyboardInterrupt, EOFError):
        console.print()


@app.command()
def languages() -> None:
    """List supported languages."""
    table = Table(title="Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Usable as")

    for language in source_languages():
        table.add_row(
            language.value,
            language.label,
            "source only" if language.is_auto else "source, target",
        )

    console.print(table)


@app.command()
def init(
    output_path: Path = typer.Option(
        Path("config.yaml"),
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """Generate a default configuration file."""
    if output_path.exists():
        overwrite = typer.confirm(f"{output_path} already exists. Overwrite?")
        if not overwrite:
            raise typer.Abort()

    create_default_config(output_path)
    console.print(f"[green]Created config file: {output_path}[/green]")
    console.print("\nSet OPENROUTER_API_KEY (or GEMINI_API_KEY), then run:")
    console.print('  translate-text translate "Bonjour le monde" --config config.yaml')


@app.command(name="config")
def show_config(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show the effective configuration."""
    settings = get_settings(config)
    translation = settings.translation
    export = settings.export

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Provider", translation.provider.value)
    table.add_row("Model", translation.model)
    table.add_row(
        "API key",
        "configured" if translation.api_key() else "[red]not set[/red]",
    )
    table.add_row("Source language", translation.default_source_language.label)
    table.add_row("Target language", translation.default_target_language.label)
    table.add_row("Clear output on edit", str(translation.clear_output_on_edit))
    table.add_row("", "")
    table.add_row("Export file", str(export.output_dir / export.filename))
    table.add_row("Page format", export.page_format.value)
    table.add_row("Overflow policy", export.overflow_policy.value)
    table.add_row("Render scale", str(export.render_scale))

    console.print(
        Panel(table, title="[bold blue]translate-text-ai[/bold blue]", border_style="blue")
    )


if __name__ == "__main__":
    app()
