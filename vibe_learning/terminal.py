"""
VIBE LEARNING - terminal vocabulary trainer.

Create language-pair dictionaries, fill them with words and drill them
with typed-answer or flip-card training sessions. The UI is drawn with
the `rich` library; all state goes through ProfileStore.

Usage:
    vibe-learning [--data-dir DIR] [--log-level LEVEL]
    python -m vibe_learning
"""

import argparse
import random
import sys
from pathlib import Path

from rich import box
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from . import __version__, config
from .dictionaries import WordInput, last_update, recent_words, search_words, word_count_label
from .errors import NotFound, VocabError
from .languages import SUPPORTED_LANGUAGES, Language
from .log import setup_logging
from .models import Dictionary, WordEntry
from .quiz import Phase, QuizConfig, QuizMode, QuizSession, QuizSummary
from .storage import ProfileStorage, StatsStorage
from .store import ProfileStore

# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------
console = Console()

# Typed into an optional field of the edit form to empty it
CLEAR_FIELD = "-"

# ---------------------------------------------------------------------------
# Encouraging / discouraging messages
# ---------------------------------------------------------------------------
CORRECT_MESSAGES = [
    "Correct! \U0001f389",
    "Well done! ⭐",
    "Perfect! \U0001f31f",
    "Exactly! \U0001f44d",
    "Great job! \U0001f680",
]

WRONG_MESSAGES = [
    "Incorrect ❌",
    "Not quite ❌",
    "Almost! ❌",
]

# ---------------------------------------------------------------------------
# UI helpers
# ---------------------------------------------------------------------------

def clear_screen() -> None:
    console.clear()


def ask(label: str, **kwargs) -> str:
    return Prompt.ask(label, console=console, **kwargs)


def press_enter_to_continue() -> None:
    console.print()
    ask("[dim]Press Enter to continue[/dim]", default="")


def show_error(message: str) -> None:
    console.print(f"[bold red]{escape(message)}[/bold red]")


def show_title_banner(subtitle: str = "Your personal assistant for learning new languages") -> None:
    title = Text("VIBE LEARNING", style="bold black on bright_green", justify="center")
    sub = Text(subtitle, style="italic cyan", justify="center")
    panel = Panel(
        Align.center(Text.assemble(title, "\n", sub)),
        border_style="bright_green",
        box=box.DOUBLE,
        padding=(1, 4),
    )
    console.print(panel)
    console.print()


def progress_bar(fraction: float, width: int = 20) -> str:
    filled = int(round(fraction * width))
    return "[green]" + "█" * filled + "[/green]" + "[dim]░[/dim]" * (width - filled)


def dictionary_label(dictionary: Dictionary) -> str:
    return f"{dictionary.source_language.label} → {dictionary.target_language.label}"

# ---------------------------------------------------------------------------
# Onboarding
# ---------------------------------------------------------------------------

def welcome_screen(store: ProfileStore) -> None:
    clear_screen()
    show_title_banner("Welcome! Your personal assistant for learning new languages")
    while store.get() is None:
        name = ask("[bold bright_white]What should we call you?[/bold bright_white]", default="")
        try:
            store.onboard(name)
        except VocabError as e:
            show_error(e.message)

# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

def home_menu(store: ProfileStore, stats: StatsStorage) -> str | None:
    """Display the dictionary list. Returns a dictionary id, "new", None to quit."""
    profile = store.get()
    clear_screen()
    show_title_banner()
    console.print(Align.center(Text.from_markup(
        f"[bold]Hello, [bright_green]{escape(profile.name)}[/bright_green]![/bold]  "
        f"[dim]{word_count_label(profile.total_words)} across "
        f"{len(profile.dictionaries)} dictionar{'ies' if len(profile.dictionaries) != 1 else 'y'}[/dim]"
    )))
    console.print()

    if profile.dictionaries:
        table = Table(
            title="[bold]Dictionaries[/bold]",
            box=box.ROUNDED,
            border_style="bright_cyan",
            padding=(0, 1),
        )
        table.add_column("#", style="bold cyan", justify="right", width=4)
        table.add_column("Dictionary", min_width=28)
        table.add_column("Words", justify="center", width=7)
        table.add_column("Last update", min_width=20, no_wrap=True)
        table.add_column("Last training", min_width=18)
        for i, dictionary in enumerate(profile.dictionaries, 1):
            last = stats.last(dictionary.id)
            last_text = "[dim]never[/dim]"
            if last:
                last_text = f"{last['correctCount']}/{last['totalWords']} correct"
            table.add_row(
                str(i),
                dictionary_label(dictionary),
                str(len(dictionary.words)),
                last_update(dictionary) or "[dim]No words added[/dim]",
                last_text,
            )
        console.print(Align.center(table))

        recent = recent_words(profile)
        if recent:
            console.print()
            words_table = Table(
                title="[bold]Recent words[/bold]",
                box=box.ROUNDED,
                border_style="bright_magenta",
                padding=(0, 1),
            )
            words_table.add_column("Word", style="bold bright_white")
            words_table.add_column("Translation", style="green")
            words_table.add_column("Pair", no_wrap=True)
            for entry, owner in recent:
                pair = (
                    f"{owner.source_language.flag} {owner.source_language.code.upper()} → "
                    f"{owner.target_language.flag} {owner.target_language.code.upper()}"
                )
                words_table.add_row(escape(entry.word), escape(entry.translation), pair)
            console.print(Align.center(words_table))
    else:
        console.print(Align.center(Text.from_markup(
            "[dim]No dictionaries yet. Create one to start adding words.[/dim]"
        )))
    console.print()

    options = "[bold cyan][N][/bold cyan] New dictionary    [bold cyan][Q][/bold cyan] Quit"
    if profile.dictionaries:
        options = f"[bold cyan][1-{len(profile.dictionaries)}][/bold cyan] Open    " + options
    console.print(Align.center(Text.from_markup(options)))
    console.print()

    choice = ask("[bold bright_white]Choose[/bold bright_white]", default="q").strip().lower()
    if choice == "q":
        return None
    if choice == "n":
        return "new"
    try:
        idx = int(choice)
        if 1 <= idx <= len(profile.dictionaries):
            return profile.dictionaries[idx - 1].id
    except ValueError:
        pass
    return "__invalid__"

# ---------------------------------------------------------------------------
# New dictionary
# ---------------------------------------------------------------------------

def pick_language(title: str, exclude: Language | None = None) -> Language | None:
    choices = [lang for lang in SUPPORTED_LANGUAGES if lang != exclude]
    table = Table(title=f"[bold]{title}[/bold]", box=box.SIMPLE, show_header=False)
    table.add_column(style="bold cyan", justify="right", width=4)
    table.add_column()
    for i, lang in enumerate(choices, 1):
        table.add_row(str(i), lang.label)
    console.print(Align.center(table))

    while True:
        choice = ask("[bold bright_white]Language (B to cancel)[/bold bright_white]", default="b").strip().lower()
        if choice == "b":
            return None
        try:
            idx = int(choice)
            if 1 <= idx <= len(choices):
                return choices[idx - 1]
        except ValueError:
            pass
        show_error("Select a language from the list.")


def new_dictionary_screen(store: ProfileStore) -> str | None:
    """Create a dictionary; returns its id, or None if cancelled."""
    while True:
        clear_screen()
        show_title_banner("New dictionary")
        source = pick_language("Source language")
        if source is None:
            return None
        target = pick_language("Target language", exclude=source)
        if target is None:
            return None
        try:
            return store.create_dictionary(source, target).id
        except VocabError as e:
            show_error(e.message)
            press_enter_to_continue()

# ---------------------------------------------------------------------------
# Dictionary dashboard
# ---------------------------------------------------------------------------

def render_dictionary(dictionary: Dictionary, words: tuple[WordEntry, ...], term: str) -> None:
    count = len(dictionary.words)
    if count == 0:
        status = "You haven't added anything yet, how about starting? \U0001f680"
    else:
        status = f"You've already added [bold bright_green]{word_count_label(count)}[/bold bright_green] so far! Keep going! \U0001f389"
    console.print(Panel(
        Align.center(Text.from_markup(status)),
        title=f"[bold]{escape(dictionary.title.upper())}[/bold]",
        border_style="bright_green",
        box=box.ROUNDED,
    ))

    if term:
        console.print(f"[dim]Search:[/dim] [bold]{escape(term)}[/bold] [dim]({len(words)} found)[/dim]")

    if words:
        table = Table(box=box.ROUNDED, border_style="cyan", show_lines=False)
        table.add_column("#", style="bold cyan", justify="right", width=4)
        table.add_column("Word", style="bold bright_white")
        table.add_column("Translation", style="green")
        table.add_column("Meaning", style="dim")
        table.add_column("Phonetics", style="magenta")
        table.add_column("Added", style="dim", no_wrap=True)
        for i, w in enumerate(words, 1):
            table.add_row(
                str(i),
                escape(w.word),
                escape(w.translation),
                escape(w.meaning or ""),
                f"/{escape(w.phonetics)}/" if w.phonetics else "",
                w.timestamp,
            )
        console.print(table)
    console.print()
    console.print(Text.from_markup(
        "[bold cyan][A][/bold cyan] Add  "
        "[bold cyan][E][/bold cyan] Edit  "
        "[bold cyan][D][/bold cyan] Delete word  "
        "[bold cyan][S][/bold cyan] Search  "
        "[bold cyan][C][/bold cyan] Clear search  "
        "[bold cyan][T][/bold cyan] Train  "
        "[bold cyan][X][/bold cyan] Delete dictionary  "
        "[bold cyan][B][/bold cyan] Back"
    ))
    console.print()


def word_form(existing: WordEntry | None = None) -> WordInput:
    """Ask for the word fields.

    When editing, a blank answer keeps the current value and ``-`` clears
    an optional field.
    """
    console.print(f"[bold]{'Edit word' if existing else 'New word'}[/bold]")

    def field(label: str, current: str | None) -> str:
        if current:
            return ask(label, default=current)
        return ask(label, default="")

    def optional_field(label: str, current: str | None) -> str:
        if not current:
            return ask(f"{label} (optional)", default="")
        answer = ask(f"{label} (optional, - to clear)", default=current)
        return "" if answer.strip() == CLEAR_FIELD else answer

    return WordInput(
        word=field("Word", existing.word if existing else None),
        translation=field("Translation", existing.translation if existing else None),
        meaning=optional_field("Meaning", existing.meaning if existing else None),
        phonetics=optional_field("Phonetics", existing.phonetics if existing else None),
    )


def pick_word(words: tuple[WordEntry, ...]) -> WordEntry | None:
    if not words:
        show_error("There are no words to pick from.")
        return None
    choice = ask(f"[bold]Word number (1-{len(words)})[/bold]", default="").strip()
    try:
        idx = int(choice)
        if 1 <= idx <= len(words):
            return words[idx - 1]
    except ValueError:
        pass
    show_error("Invalid word number.")
    return None


def dictionary_screen(store: ProfileStore, stats: StatsStorage, dictionary_id: str) -> None:
    term = ""
    while True:
        try:
            dictionary = store.dictionary(dictionary_id)
        except NotFound:
            return
        words = search_words(dictionary.words, term)

        clear_screen()
        render_dictionary(dictionary, words, term)
        action = ask("[bold bright_white]Action[/bold bright_white]", default="b").strip().lower()

        try:
            if action == "b":
                return
            elif action == "a":
                store.upsert_word(dictionary.id, word_form())
            elif action == "e":
                word = pick_word(words)
                if word:
                    store.upsert_word(dictionary.id, word_form(word), editing_id=word.id)
            elif action == "d":
                word = pick_word(words)
                if word and Confirm.ask(f"Delete [bold]{escape(word.word)}[/bold]?", console=console, default=False):
                    store.delete_word(dictionary.id, word.id)
            elif action == "s":
                term = ask("Search word", default="")
            elif action == "c":
                term = ""
            elif action == "t":
                training_screen(stats, dictionary)
            elif action == "x":
                if confirm_delete_dictionary(dictionary):
                    store.delete_dictionary(dictionary.id)
                    stats.forget(dictionary.id)
                    return
        except VocabError as e:
            show_error(e.message)
            press_enter_to_continue()


def confirm_delete_dictionary(dictionary: Dictionary) -> bool:
    console.print(Panel(
        Text.from_markup(
            f"Are you sure you want to delete the dictionary "
            f"[bold]{escape(dictionary.title)}[/bold]? This will permanently remove "
            f"{word_count_label(len(dictionary.words))}."
        ),
        title="[bold red]Delete dictionary[/bold red]",
        border_style="red",
    ))
    return Confirm.ask("Delete", console=console, default=False)

# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def choose_session(dictionary: Dictionary) -> tuple[int, QuizMode] | None:
    total = len(dictionary.words)
    console.print(f"[bold]How many words do you want to train?[/bold] [dim](maximum: {total})[/dim]")
    count = IntPrompt.ask("Words", console=console, default=total)
    console.print(Text.from_markup(
        "[bold cyan][1][/bold cyan] Type it    "
        "[bold cyan][2][/bold cyan] Flip cards    "
        "[bold cyan][B][/bold cyan] Back"
    ))
    mode_map = {"1": QuizMode.TYPED, "2": QuizMode.FLIP, "b": None}
    while True:
        choice = ask("[bold]Mode[/bold]", default="1").strip().lower()
        if choice in mode_map:
            break
        show_error("Choose 1, 2 or B.")
    if mode_map[choice] is None:
        return None
    return count, mode_map[choice]


def render_card(session: QuizSession) -> None:
    word = session.current
    console.print(
        f"[dim]{session.position}[/dim]   {progress_bar(session.progress)}   "
        f"[dim]{round(session.progress * 100)}%[/dim]"
    )
    console.print()
    body = f"[bold bright_white]{escape(word.word)}[/bold bright_white]"
    if word.phonetics:
        body += f"\n[dim]/{escape(word.phonetics)}/[/dim]"
    console.print(Align.center(Panel(
        Align.center(Text.from_markup(body)),
        border_style="bright_yellow",
        box=box.DOUBLE,
        padding=(1, 6),
    )))
    console.print()


def show_feedback(session: QuizSession) -> None:
    result = session.result
    if result.is_correct:
        console.print(f"  [bold green]{random.choice(CORRECT_MESSAGES)}[/bold green]")
        console.print("  [green]Congratulations! You got the translation right.[/green]")
    else:
        console.print(f"  [bold red]{random.choice(WRONG_MESSAGES)}[/bold red]")
        console.print(f"  [yellow]The correct translation is: {escape(result.correct_translation)}[/yellow]")
    if session.current.meaning:
        console.print(f"  [dim italic]Meaning: {escape(session.current.meaning)}[/dim italic]")
    console.print()


def summary_panel(summary: QuizSummary) -> Panel:
    pct = summary.percentage
    if pct == 100:
        grade_msg, grade_style = "Perfect! \U0001f3c6", "bold bright_green"
    elif pct >= 70:
        grade_msg, grade_style = "Very good! Keep it up! \U0001f31f", "bold green"
    elif pct >= 50:
        grade_msg, grade_style = "Good job! Room to grow. \U0001f4aa", "bold yellow"
    else:
        grade_msg, grade_style = "Keep practicing! \U0001f4da", "bold red"
    fraction = summary.correct_count / summary.total_words if summary.total_words else 0.0
    return Panel(
        Align.center(Text.from_markup(
            "[bold white]Training summary[/bold white]\n\n"
            f"[green]Correct:[/green] [bold]{summary.correct_count}[/bold]   "
            f"[red]Incorrect:[/red] [bold]{summary.incorrect_count}[/bold]   "
            f"[dim]Total: {summary.total_words}[/dim]\n"
            f"{progress_bar(fraction)}  [bold]{pct}%[/bold]\n\n"
            f"[{grade_style}]{grade_msg}[/{grade_style}]"
        )),
        border_style="bright_cyan",
        box=box.DOUBLE,
        padding=(1, 4),
    )


def training_screen(stats: StatsStorage, dictionary: Dictionary) -> QuizSummary | None:
    """Run one training session; returns its summary, or None if abandoned."""
    if not dictionary.words:
        show_error("Add some words before training.")
        press_enter_to_continue()
        return None

    clear_screen()
    show_title_banner(f"Training: {dictionary.title}")
    picked = choose_session(dictionary)
    if picked is None:
        return None
    count, mode = picked

    session = QuizSession(QuizConfig(mode=mode, sample_size=count))
    session.start(dictionary.words, count, dictionary_id=dictionary.id)
    if session.warning:
        console.print(f"[yellow]{escape(session.warning)}[/yellow]")
        press_enter_to_continue()

    while session.phase != Phase.SUMMARY:
        clear_screen()
        render_card(session)

        if session.phase == Phase.AWAITING_ANSWER:
            if session.mode == QuizMode.TYPED:
                answer = ask("[bold bright_white]Type the translation (Q to quit)[/bold bright_white]", default="")
                if answer.strip().lower() == "q":
                    return None
                try:
                    session.submit(answer)
                except VocabError as e:
                    show_error(e.message)
                    press_enter_to_continue()
                    continue
            else:
                action = ask("[bold cyan][Enter][/bold cyan] Reveal  [bold cyan][Q][/bold cyan] Quit", default="").strip().lower()
                if action == "q":
                    return None
                translation = session.reveal()
                console.print(Align.center(Panel(
                    Align.center(Text(translation, style="bold green")),
                    border_style="green",
                    box=box.ROUNDED,
                )))
                session.grade(Confirm.ask("Did you get it right?", console=console, default=True))

        clear_screen()
        render_card(session)
        show_feedback(session)
        next_label = "See results" if session.is_last else "Next word"
        action = ask(
            f"[bold cyan][Enter][/bold cyan] {next_label}  "
            "[bold cyan][S][/bold cyan] Shuffle and restart  "
            "[bold cyan][Q][/bold cyan] Quit",
            default="",
        ).strip().lower()
        if action == "q":
            return None
        if action == "s":
            session.shuffle()
            continue
        session.advance()

    clear_screen()
    console.print(Align.center(summary_panel(session.summary)))
    stats.record(dictionary.id, session.summary)
    press_enter_to_continue()
    return session.summary

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(store: ProfileStore, stats: StatsStorage) -> None:
    if store.get() is None:
        welcome_screen(store)

    while True:
        choice = home_menu(store, stats)

        if choice is None:
            clear_screen()
            console.print(Align.center(Panel(
                Align.center(Text.from_markup(
                    f"[bold bright_white]See you soon, {escape(store.get().name)}! \U0001f44b[/bold bright_white]"
                )),
                border_style="bright_green",
                box=box.DOUBLE,
                padding=(1, 4),
            )))
            console.print()
            break

        if choice == "__invalid__":
            continue
        if choice == "new":
            choice = new_dictionary_screen(store)
            if choice is None:
                continue
        dictionary_screen(store, stats, choice)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vibe-learning", description="Terminal vocabulary trainer")
    p.add_argument("--data-dir", default=None, help=f"Data directory (default: {config.DATA_DIR})")
    p.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING or ERROR")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    data_dir = Path(args.data_dir) if args.data_dir else None
    store = ProfileStore(ProfileStorage(config.profile_file(data_dir)))
    stats = StatsStorage(config.stats_file(data_dir))
    try:
        main(store, stats)
    except KeyboardInterrupt:
        console.print("\n[dim]See you soon! \U0001f44b[/dim]")
    return 0


if __name__ == "__main__":
    sys.exit(run())
