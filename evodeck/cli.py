"""
Evodeck CLI - Command-line interface for the engine.

Usage:
    evodeck cards [--level N]        Show the card catalog
    evodeck validate [--data-dir D]  Validate the catalog and saved decks
    evodeck simulate [--games N]     Run bot games and print a summary
    evodeck serve [--port P]         Serve the HTTP API
"""

import argparse
import logging
import statistics
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Evodeck - Single-player deck-building card game engine",
        prog="evodeck",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="Show the card catalog")
    cards_parser.add_argument("--level", type=int, default=None, help="Only show this level (0-based)")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate the catalog and saved decks")
    validate_parser.add_argument("--data-dir", default=None, help="Directory holding decks.json")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run bot games")
    simulate_parser.add_argument("--games", type=int, default=10, help="Number of games")
    simulate_parser.add_argument(
        "--policy", choices=["greedy", "random", "first"], default="greedy", help="Bot policy",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Base random seed")
    simulate_parser.add_argument("--max-stages", type=int, default=10, help="Stop after this many stages")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "cards":
        cmd_cards(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_cards(args):
    """Print every card with its text at each level."""
    from .catalog import render_card_text
    from .content import create_standard_catalog
    from .engine_core import resolve_effects

    catalog = create_standard_catalog()
    for definition in catalog:
        max_level = catalog.max_level(definition)
        print(f"{definition.name} [{definition.id}] ({definition.category.value}, max Lv.{max_level + 1})")
        levels = range(max_level + 1) if args.level is None else [catalog.clamp_level(definition, args.level)]
        for level in levels:
            effects = resolve_effects(catalog, definition, level)
            print(f"  Lv.{level + 1}: {render_card_text(effects)}")


def cmd_validate(args):
    """Validate the catalog and every saved deck."""
    from .catalog import validate_catalog, validate_deck_configuration
    from .config import DEFAULT_RULES
    from .content import create_standard_catalog
    from .storage import open_stores

    catalog = create_standard_catalog()
    result = validate_catalog(catalog)
    failed = not result.valid
    _print_result("Catalog", result)

    deck_store, _ = open_stores(args.data_dir)
    for index, deck in enumerate(deck_store.list_decks()):
        deck_result = validate_deck_configuration(deck, catalog, expected_size=DEFAULT_RULES.deck_size)
        failed = failed or not deck_result.valid
        _print_result(f"Deck {index} ({deck.name})", deck_result)

    if failed:
        sys.exit(1)


def _print_result(label, result):
    print(f"{label}: {'OK' if result.valid else 'INVALID'}")
    for e in result.errors:
        print(f"  error: {e}")
    for w in result.warnings:
        print(f"  warning: {w}")


def cmd_simulate(args):
    """Play bot games with the starter deck and summarize them."""
    from .bots import create_policy, run_bot_game
    from .content import STARTER_DECK, create_standard_catalog
    from .engine_core import Reducer

    reducer = Reducer(catalog=create_standard_catalog())
    summaries = []
    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        policy = create_policy(args.policy, seed=seed)
        summary = run_bot_game(reducer, policy, STARTER_DECK, seed=seed, max_stages=args.max_stages)
        summaries.append(summary)
        print(
            f"Game {i + 1}: stage {summary.stage_reached}, score {summary.final_score}, "
            f"{summary.actions_taken} actions, {summary.cards_purged} purged"
            f"{' (game over)' if summary.game_over else ''}"
        )

    if summaries:
        stages = [s.stages_cleared for s in summaries]
        print(f"\nPolicy: {summaries[0].policy}")
        print(f"Stages cleared: mean {statistics.mean(stages):.2f}, best {max(stages)}")
        print(f"Best score: {max(s.high_score for s in summaries)}")


def cmd_serve(args):
    """Serve the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        raise ImportError("uvicorn not installed. Install with: pip install uvicorn")

    from .api.app import app

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
