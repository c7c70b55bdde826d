"""Interactive command line for DocTalk.

Usage:
    doctalk
    python -m doctalk

Configuration is read from ./configs (base.yaml, then $DOCTALK_ENV.yaml),
an optional $DOCTALK_CONFIG file and DOCTALK__SECTION__KEY variables.
"""

import os

import httpx
from rich.console import Console

from doctalk.config import DocTalkConfig, load_config
from doctalk.core import (
    DocTalkError,
    DirectoryNotFoundError,
    EmptyResultError,
)
from doctalk.engine import RetrievalKnowledgeEngine
from doctalk.models import ModelStore
from doctalk.pipeline import Answer, KnowledgeSession, TranscriptionPipeline
from doctalk.workspace import (
    ClassifiedFiles,
    WorkingDirectory,
    acquire_working_directory,
    supported_extensions,
)
from doctalk.utils import get_logger, setup_logging, style
from doctalk.utils.console import ACCENT, TITLE, WARNING

logger = get_logger(__name__)

SPLASH = r"""
  ____             _____     _ _
 |  _ \  ___   ___|_   _|_ _| | | __
 | | | |/ _ \ / __| | |/ _` | | |/ /
 | |_| | (_) | (__  | | (_| | |   <
 |____/ \___/ \___| |_|\__,_|_|_|\_\

 Ask questions about the documents, recordings and videos of a folder.
"""

ACCEPT_ANSWERS = ("", "y", "yes")
UNKNOWN_ANSWER_MARK = "(??)"


def _read(console: Console, label: str) -> str | None:
    """Prompt for a line of input, None on end of input."""
    try:
        return console.input(f"{style(label, ACCENT)} ")
    except EOFError:
        console.print()
        return None


def _config_from_env() -> DocTalkConfig:
    return load_config(
        config_path=os.environ.get("DOCTALK_CONFIG"),
        env=os.environ.get("DOCTALK_ENV"),
        config_dir=os.environ.get("DOCTALK_CONFIG_DIR", "configs"),
    )


def print_files(console: Console, classified: ClassifiedFiles) -> None:
    """List the usable files, flagging the ones that need transcription."""
    transcribable = set(classified.transcribable)
    for path in classified.supported:
        line = f"  {style(path.name)}"
        if path in transcribable:
            line += f" {style('(Whisper)', WARNING)}"
        console.print(line)


def choose_directory(console: Console) -> tuple[WorkingDirectory, ClassifiedFiles] | None:
    """Ask for a directory until one with usable files is confirmed.

    Returns:
        Working directory and its classification, None if input ended
    """
    while True:
        directory = _read(console, "Directory:")
        if directory is None:
            return None
        directory = directory.strip()
        if not directory:
            continue

        try:
            working_dir, classified = acquire_working_directory(directory)
        except DirectoryNotFoundError as e:
            console.print(style(str(e), WARNING))
            console.print(f"Supported files: {', '.join(supported_extensions())}")
            continue
        except EmptyResultError as e:
            console.print(style(str(e), WARNING))
            continue

        print_files(console, classified)

        confirm = _read(console, "Confirm this directory? (Y/N)")
        if confirm is None:
            return None
        if confirm.strip().lower() in ACCEPT_ANSWERS:
            return working_dir, classified


def transcribe(console: Console, config: DocTalkConfig, classified: ClassifiedFiles) -> None:
    """Write a transcript next to every audio/video file."""
    if not classified.transcribable:
        return

    pipeline = TranscriptionPipeline(config)
    try:
        if not pipeline.asr.is_model_available:
            with console.status("Downloading speech recognition model..."):
                pipeline.asr.download_model()

        for media in classified.transcribable:
            console.print(f"Whisper for {style(media.name, ACCENT)}")
            pipeline.ensure_transcript(media)
    finally:
        pipeline.asr.unload()


def print_answer(console: Console, answer: Answer) -> None:
    text = answer.answer_text or ""
    if answer.is_empty:
        console.print(f"{style('A:', ACCENT)} {style(UNKNOWN_ANSWER_MARK, WARNING)} {style(text)}")
        return

    console.print(f"{style('A:', ACCENT)} {style(text.strip())}")
    for source in answer.sources:
        console.print(f"    * {style(source)}")


def chat(console: Console, config: DocTalkConfig, working_dir: WorkingDirectory) -> None:
    """Build the knowledge base of the directory and answer questions."""
    if config.generation.backend == "llama-cpp":
        store = ModelStore(config.models, config.generation)
        if not store.llm_path.is_file():
            with console.status(f"Downloading {config.generation.model_file}..."):
                store.ensure_llm()

    engine = RetrievalKnowledgeEngine(config)
    session = KnowledgeSession(engine)
    try:
        with console.status("Reading documents..."):
            session_id = session.initialize(working_dir.path)
        console.print(f"Starting chat session: {style(session_id, ACCENT)}")

        while True:
            question = _read(console, "Q:")
            if question is None or not question.strip():
                break
            print_answer(console, session.ask(question.strip()))
    finally:
        engine.unload()


def main() -> int:
    console = Console(highlight=False)
    console.print(style(SPLASH, TITLE))

    try:
        config = _config_from_env()
    except DocTalkError as e:
        console.print(style(f"{type(e).__name__}: {e}", WARNING))
        return 1

    setup_logging(config.log_level, config.log_format)

    try:
        selection = choose_directory(console)
        if selection is None:
            return 0
        working_dir, classified = selection

        transcribe(console, config, classified)
        chat(console, config, working_dir)
    except (DocTalkError, httpx.HTTPError) as e:
        logger.debug("Run terminated", exc_info=True)
        console.print(style(f"{type(e).__name__}: {e}", WARNING))
        return 1
    except KeyboardInterrupt:
        console.print()
        return 130

    return 0
