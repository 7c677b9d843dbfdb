#!/usr/bin/env python3
"""
Main entry point for the Pokémon Quiz.

This module provides the CLI interface for playing the quiz and inspecting
the roster.
"""

import os
import sys
import click


@click.group()
@click.version_option()
@click.option('--log-level', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Set logging level (logs go to stderr)')
def cli(log_level):
    """ Pokémon Quiz - Can you name all 151 original Pokémon?

    Type names one at a time; each correct guess is revealed in the Pokédex
    grid. The game ends when every Pokémon has been found.

    Commands:
    - play: start a quiz session
    - roster: list every accepted name
    """
    # Modules read LOG_LEVEL when their loggers are created
    os.environ['LOG_LEVEL'] = log_level.upper()


@cli.command()
@click.option('--timer/--no-timer', default=True, help='Show a live elapsed-time header')
@click.option('--banner/--no-banner', default=True, help='Show an ASCII banner on completion')
@click.option('--columns', type=click.IntRange(1, 10), default=None,
              help='Fixed number of grid columns (default: fit the terminal width)')
@click.option('--delay', type=click.FloatRange(min=0), default=0.6,
              help='Seconds to pause after each guess before redrawing')
@click.option('--roster', 'roster_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Roster JSON file to play with instead of the built-in Pokédex')
def play(timer, banner, columns, delay, roster_path):
    """ Play the quiz until every Pokémon has been named."""
    from .game_loop import GameConfig, game_main
    from .roster import RosterError

    config = GameConfig(
        timer=timer,
        banner=banner,
        columns=columns,
        delay=delay,
        watch_resize=sys.stdout.isatty(),
    )
    try:
        status = game_main(config, roster_path)
    except RosterError as e:
        raise click.ClickException(f"Invalid roster: {e}")
    sys.exit(status)


@cli.command()
@click.option('--roster', 'roster_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Roster JSON file to list instead of the built-in Pokédex')
def roster(roster_path):
    """ List every name the quiz accepts, in Pokédex order."""
    from .roster import RosterError, load_roster

    try:
        entries = load_roster(roster_path)
    except RosterError as e:
        raise click.ClickException(f"Invalid roster: {e}")
    for entry in entries:
        click.echo(f"{entry.id}: {entry.name}")


if __name__ == '__main__':
    cli()
