"""Lightweight REST client for the pyffa API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pyffa REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--search", metavar="QUERY", help="Fuzzy search players")
    parser.add_argument("--suggest", metavar="PARTIAL", help="Autocomplete suggestions")
    parser.add_argument("--matchup", nargs=2, metavar=("PLAYER_ID", "OPPONENT"), help="Matchup analysis")
    parser.add_argument("--recommend", nargs="+", metavar="PLAYER_ID", help="Rank roster players")
    parser.add_argument("--export-path", type=Path, help="Write recommendations CSV instead of JSON")
    args = parser.parse_args()

    if not (args.search or args.suggest or args.matchup or args.recommend):
        raise SystemExit("one of --search, --suggest, --matchup or --recommend is required")

    with httpx.Client(base_url=args.base_url) as client:
        if args.search:
            resp = client.get("/players/search", params={"q": args.search})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.suggest:
            resp = client.get("/players/suggest", params={"q": args.suggest})
            resp.raise_for_status()
            print("\n".join(resp.json()["suggestions"]))
        if args.matchup:
            player_id, opponent = args.matchup
            resp = client.get(f"/players/{player_id}/matchups/{opponent}")
            if resp.status_code == 404:
                raise SystemExit(f"player {player_id} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.recommend:
            payload = {"player_ids": args.recommend}
            if args.export_path:
                resp = client.post("/recommendations/export.csv", json=payload)
                resp.raise_for_status()
                args.export_path.write_text(resp.text)
                print(f"CSV export saved to {args.export_path}")
            else:
                resp = client.post("/recommendations", json=payload)
                resp.raise_for_status()
                body = resp.json()
                print(f"Ranked {len(body['recommendations'])}/{body['requested']} players")
                print(json.dumps(body["recommendations"], indent=2))


if __name__ == "__main__":
    main()
