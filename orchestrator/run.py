# -*- coding: utf-8 -*-
import asyncio
import logging
from pathlib import Path
import typing as t

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from document_reader import UploadedDocument, load_pdf_capability
from generative_api import GenerativeClient, MalformedResponse
from orchestrator.models import WizardSnapshot, WizardState
from orchestrator.utils import expand_document_paths
from orchestrator.wizard import FlashcardWizard, ScheduleWizard
from study_planner import (ICAL_FILENAME, Flashcard, ScheduleEvent, events_by_day, flashcards_filename,
                           inspect_calendar, parse_iso_datetime, render_flashcards_txt, sorted_schedule)


console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def format_datetime_human(value: str) -> str:
    """MM/DD HH:MM for ISO datetimes; anything else is shown unchanged."""
    dt = parse_iso_datetime(value)
    return dt.strftime("%m/%d %H:%M") if dt else value


def create_schedule_table(schedule: t.Sequence[ScheduleEvent]) -> Table:
    """Create a table of schedule events ordered by start."""
    table = Table(title="📅 Your Generated Schedule", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Title", style="white", max_width=45, no_wrap=True, overflow="ellipsis")
    table.add_column("Date/Time", style="yellow")

    for idx, event in enumerate(sorted_schedule(list(schedule)), 1):
        table.add_row(
            str(idx),
            event.title,
            f"{format_datetime_human(event.start)} → {format_datetime_human(event.end)}",
        )
    return table


def create_day_tree(schedule: t.Sequence[ScheduleEvent]) -> Tree:
    """Group schedule events under the day they start on."""
    tree = Tree("🗓  Calendar overview")
    for day, events in events_by_day(list(schedule)).items():
        branch = tree.add(f"[bold]{day.strftime('%a %b %d %Y')}[/bold]")
        for event in events:
            branch.add(f"{format_datetime_human(event.start)[-5:]}  {event.title}")
    return tree


def create_flashcard_table(flashcards: t.Sequence[Flashcard]) -> Table:
    """Create a two-column question/answer table."""
    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Question", style="white")
    table.add_column("Answer", style="green")
    for card in flashcards:
        table.add_row(card.question, card.answer)
    return table


def show_error(snapshot: WizardSnapshot) -> None:
    console.print(Panel(Text(snapshot.error, style="red"), title="An Error Occurred", border_style="red"))


def make_client(model: t.Optional[str]) -> GenerativeClient:
    try:
        return GenerativeClient(model=model)
    except RuntimeError as e:
        raise click.UsageError(str(e))


def read_documents(paths: tuple[str, ...]) -> list[UploadedDocument]:
    return [UploadedDocument.from_path(p) for p in expand_document_paths(paths)]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--model", default=None, help="Model name (default: $GEMINI_MODEL or gemini-2.0-flash).")
@click.pass_context
def main(ctx: click.Context, verbose: bool, model: t.Optional[str]) -> None:
    """Study aid: schedules from syllabi, flashcards from transcripts."""
    configure_logging(verbose)
    ctx.obj = {"model": model}


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--name", prompt="What's your name?", help="Name of the student.")
@click.option("--free-time", prompt="When are you usually free to study?",
              help="Free-text description of when you can study.")
@click.option("--output", "-o", default=ICAL_FILENAME, type=click.Path(dir_okay=False),
              help=f"Where to write the calendar export (default: {ICAL_FILENAME}).")
@click.option("--by-day", is_flag=True, help="Also show the schedule grouped by day.")
@click.pass_context
def schedule(ctx: click.Context, paths: tuple[str, ...], name: str, free_time: str,
             output: str, by_day: bool) -> None:
    """Build a study schedule and .ics calendar from syllabi.

    PATHS: Syllabus files (.pdf, .txt, .md) or directories containing them.
    """
    documents = read_documents(paths)

    console.print(
        Panel.fit(
            f"[bold blue]📚 Study Schedule Builder[/bold blue]\n"
            f"Processing [bold]{len(documents)}[/bold] syllabus file(s)",
            border_style="blue"
        )
    )

    with make_client(ctx.obj["model"]) as client, console.status("Starting...") as status:
        def on_change(snapshot: WizardSnapshot) -> None:
            if snapshot.state is WizardState.LOADING and snapshot.loading_message:
                status.update(f"[bold green]{snapshot.loading_message}")

        wizard = ScheduleWizard(client, pdf=load_pdf_capability(), on_change=on_change)
        try:
            wizard.submit_profile(name, free_time)
        except ValueError as e:
            raise click.BadParameter(str(e))
        result = asyncio.run(wizard.generate(documents))

    if result.state is WizardState.ERROR:
        show_error(result)
        raise SystemExit(1)

    console.print(create_schedule_table(result.schedule))
    if by_day:
        console.print(create_day_tree(result.schedule))

    Path(output).write_text(result.ical, encoding="utf-8")
    console.print(f"\n[bold green]✅ Calendar written to {output}[/bold green]")

    try:
        entries = inspect_calendar(result.ical)
    except MalformedResponse as e:
        console.print(f"[yellow]Warning:[/yellow] {e}")
        return
    undated = sum(1 for entry in entries if entry.start is None)
    summary = f"Calendar export contains {len(entries)} event(s) for {len(result.schedule)} scheduled item(s)"
    if undated:
        summary += f", {undated} without a readable start"
    console.print(f"[dim]{summary}.[/dim]")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", default=".", type=click.Path(file_okay=False),
              help="Directory for the flashcards .txt file.")
@click.pass_context
def flashcards(ctx: click.Context, path: str, output_dir: str) -> None:
    """Generate flashcards from a lecture transcript.

    PATH: Transcript file (.pdf, .txt, .md).
    """
    document = UploadedDocument.from_path(path)

    with make_client(ctx.obj["model"]) as client, console.status("Starting...") as status:
        def on_change(snapshot: WizardSnapshot) -> None:
            if snapshot.state is WizardState.LOADING and snapshot.loading_message:
                status.update(f"[bold green]{snapshot.loading_message}")

        wizard = FlashcardWizard(client, pdf=load_pdf_capability(), on_change=on_change)
        result = asyncio.run(wizard.generate(document))

    if result.state is WizardState.ERROR:
        show_error(result)
        raise SystemExit(1)

    console.print(f"[bold]Your Flashcards for \"{result.file_name}\"[/bold]")
    console.print(create_flashcard_table(result.flashcards))

    out_path = Path(output_dir) / flashcards_filename(result.file_name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_flashcards_txt(list(result.flashcards)), encoding="utf-8")
    console.print(f"\n[bold green]✅ {len(result.flashcards)} flashcard(s) written to {out_path}[/bold green]")


if __name__ == "__main__":
    main()
