"""Main entry point for the terminal to-do list."""
import logging
from pathlib import Path
from typing import Optional

import click

from app import TodoApp
from cli import CLI
from config import load_settings
from logging_setup import setup_logging
from storage import Storage
from view import Notifier

logger = logging.getLogger(__name__)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Directory holding tasks.json and the theme flag (env: TODO_DATA_DIR).')
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Use the terminal alternate screen (env: TODO_ALT_SCREEN).')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='File log level (env: TODO_LOG_LEVEL).')
def main(data_dir: Optional[Path], alt_screen: Optional[bool], log_level: Optional[str]) -> None:
    """Priority-sorted to-do list in your terminal."""
    settings = load_settings()
    log_file = setup_logging(log_dir=settings.log_dir, file_level=(log_level or settings.log_level).upper())
    storage = Storage(data_dir or settings.data_dir)
    logger.info("Starting; data=%s log=%s", storage.data_dir, log_file)
    app = TodoApp(storage, notifier=Notifier(delay=settings.toast_seconds))
    CLI(app, alt_screen=settings.alt_screen if alt_screen is None else alt_screen).run()


if __name__ == "__main__":
    main()
