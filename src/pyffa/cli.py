"""Command-line interface for searching players and ranking weekly starts."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from pyffa.analysis import MatchupAnalyzer
from pyffa.config import ColumnProfile, load_settings
from pyffa.export import export_recommendations_to_csv
from pyffa.ingest import load_players_csv, load_samples_csv
from pyffa.persistence import PlayerStore, SearchHistoryStore
from pyffa.search import generate_suggestions, search_players
from pyffa.sources import SourceError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fantasy football player search and matchup analysis")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (default PYFFA_DB_PATH)")
    parser.add_argument("--season", type=int, default=None, help="Reference season for projections")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    import_cmd = sub.add_parser("import", help="Load players and game samples from CSV")
    import_cmd.add_argument("--players", type=Path, default=None, help="Players CSV")
    import_cmd.add_argument("--samples", type=Path, default=None, help="Game samples CSV")
    import_cmd.add_argument(
        "--players-column",
        action="append",
        default=[],
        help="Mapping for players CSV columns (e.g., name=First Name|Last Name)",
    )
    import_cmd.add_argument(
        "--samples-column",
        action="append",
        default=[],
        help="Mapping for samples CSV columns (e.g., opponent_team=opp)",
    )
    import_cmd.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    import_cmd.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)

    search_cmd = sub.add_parser("search", help="Fuzzy search players")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--limit", type=int, default=10, help="Maximum results to print")

    suggest_cmd = sub.add_parser("suggest", help="Autocomplete suggestions for a partial query")
    suggest_cmd.add_argument("query")
    suggest_cmd.add_argument("--limit", type=int, default=None)

    matchup_cmd = sub.add_parser("matchup", help="Historical analysis against an opponent")
    matchup_cmd.add_argument("player_id")
    matchup_cmd.add_argument("opponent")

    project_cmd = sub.add_parser("project", help="Projected points against an opponent")
    project_cmd.add_argument("player_id")
    project_cmd.add_argument("opponent")

    average_cmd = sub.add_parser("season-average", help="Season average fantasy points")
    average_cmd.add_argument("player_id")
    average_cmd.add_argument("season", type=int)

    recommend_cmd = sub.add_parser("recommend", help="Rank roster players for the week")
    recommend_cmd.add_argument("player_ids", nargs="+")
    recommend_cmd.add_argument("--output", type=Path, default=None, help="Optional CSV output path")

    history_cmd = sub.add_parser("history", help="Show or clear recent searches")
    history_cmd.add_argument("--clear", action="store_true")
    history_cmd.add_argument("--popular", action="store_true", help="Order by frequency")
    return parser


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _run_import(args: argparse.Namespace, store: PlayerStore) -> None:
    players_mapping = _parse_mapping(args.players_column)
    samples_mapping = _parse_mapping(args.samples_column)
    if args.load_profile:
        profile = ColumnProfile.load(args.load_profile)
        players_mapping = profile.players_mapping | players_mapping
        samples_mapping = profile.samples_mapping | samples_mapping
    if args.save_profile:
        ColumnProfile(players_mapping, samples_mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    if args.players:
        players = load_players_csv(args.players, mapping=players_mapping or None)
        print(f"Imported {store.upsert_players(players)} players")
    if args.samples:
        samples = load_samples_csv(args.samples, mapping=samples_mapping or None)
        print(f"Imported {store.upsert_samples(samples)} game samples")


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    store = PlayerStore(args.db or settings.db_path)
    history = SearchHistoryStore(
        store.db_path,
        max_history=settings.history_size,
        max_recent=settings.recent_size,
    )
    analyzer = MatchupAnalyzer(store, current_season=args.season, settings=settings)

    try:
        if args.command == "import":
            _run_import(args, store)
        elif args.command == "search":
            results = search_players(store.list_players(), args.query)
            history.add_to_history(args.query, len(results))
            for result in results[: max(args.limit, 0)]:
                player = result.player
                print(
                    f"{result.relevance_score:>3}  {player.name} ({player.position}, {player.team})"
                    f"  [{result.match_type.value}]"
                )
            if not results:
                print("No players matched")
        elif args.command == "suggest":
            limit = args.limit or settings.max_suggestions
            suggestions = generate_suggestions(store.list_players(), args.query, limit)
            if not suggestions:
                suggestions = history.suggestions(args.query, limit)
            for suggestion in suggestions:
                print(suggestion)
        elif args.command == "matchup":
            analysis = analyzer.analyze_matchup(args.player_id, args.opponent)
            payload = asdict(analysis)
            payload["historical_games"] = [
                sample.model_dump(mode="json") for sample in analysis.historical_games
            ]
            print(json.dumps(payload, indent=2, default=str))
        elif args.command == "project":
            points = analyzer.calculate_projected_points(args.player_id, args.opponent)
            print(f"{points:.2f}")
        elif args.command == "season-average":
            average = analyzer.calculate_season_average(args.player_id, args.season)
            print(f"{average:.2f}")
        elif args.command == "recommend":
            ranked = analyzer.generate_weekly_recommendations(args.player_ids)
            if args.output:
                args.output.write_text(export_recommendations_to_csv(ranked), encoding="utf-8")
                print(f"Wrote {len(ranked)} recommendations to {args.output}")
            else:
                for rec in ranked:
                    print(
                        f"{rec.rank:>2}. {rec.player.name:<24} {rec.projected_points:6.2f} pts"
                        f"  {rec.matchup_rating.value:<9} {rec.reasoning}"
                    )
            dropped = len(args.player_ids) - len(ranked)
            if dropped:
                print(f"Skipped {dropped} player(s) that could not be loaded")
        elif args.command == "history":
            if args.clear:
                history.clear()
                print("Search history cleared")
            elif args.popular:
                for item in history.popular_searches():
                    print(f"{item.frequency:>3}  {item.query}")
            else:
                for query in history.recent_searches():
                    print(query)
    except SourceError as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
