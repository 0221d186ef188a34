"""
Command-line entry point for the content curator.

Usage:
    content-curator status
    content-curator seed items.json
    content-curator like ITEM_ID
    content-curator train
    content-curator feed --limit 20 --filter
    content-curator search "cooking pasta" --limit 10

Output is JSON on stdout.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from curation.models.feedback import ItemMetadata, Sentiment
from curation.models.item import Item

from .config import configure_logging, get_config
from .state import AppState, get_state


def _item_card(item: Item) -> Dict[str, Any]:
    return item.model_dump()


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _load_items(path: Path) -> List[Item]:
    """Items from a JSON file: a list of item dicts, or {"items": [...]}."""
    with open(path) as f:
        data = json.load(f)
    raw = data.get("items", []) if isinstance(data, dict) else data
    return [Item.from_api(d) for d in raw if isinstance(d, dict) and d.get("id")]


def _label(state: AppState, item_id: str, sentiment: Sentiment) -> Dict[str, Any]:
    entry = state.content_pool.get(item_id)
    metadata = ItemMetadata.from_item(entry.item) if entry else None
    record = state.feedback_store.upsert(item_id, sentiment, metadata)
    return {"id": record.id, "sentiment": record.sentiment.value}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-curator",
        description="Pool-backed content feed with feedback-driven filtering and ranking",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Pool and feedback counts, model availability")

    seed = sub.add_parser("seed", help="Add items from a JSON file to the pool")
    seed.add_argument("path", type=Path)

    for name, help_text in (
        ("like", "Record positive feedback"),
        ("dislike", "Record negative feedback"),
        ("unlabel", "Remove feedback for an item"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("item_id")

    sub.add_parser("train", help="Train the recommendation model on current feedback")

    for name, help_text in (
        ("feed", "Random recommendations from the pool"),
        ("search", "Search the pool, then filter and rank"),
    ):
        p = sub.add_parser(name, help=help_text)
        if name == "search":
            p.add_argument("query")
        p.add_argument("--limit", type=int, default=20)
        p.add_argument(
            "--filter",
            action="store_true",
            help="Apply the heuristic authenticity filter",
        )
        p.add_argument(
            "--threshold",
            type=float,
            default=None,
            help="Authenticity threshold (default from config)",
        )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config.log_level)
    ok, errors = config.validate()
    if not ok:
        for err in errors:
            print(f"config error: {err}", file=sys.stderr)
        return 2
    state = get_state()

    if args.command == "status":
        _print({
            "pool": state.content_pool.status(),
            "feedback": state.feedback_store.counts(),
            "model_available": state.model.is_available(),
        })
    elif args.command == "seed":
        _print(state.feed.add_to_pool(_load_items(args.path)))
    elif args.command == "like":
        _print(_label(state, args.item_id, Sentiment.POSITIVE))
    elif args.command == "dislike":
        _print(_label(state, args.item_id, Sentiment.NEGATIVE))
    elif args.command == "unlabel":
        _print({"id": args.item_id, "removed": state.feedback_store.remove(args.item_id)})
    elif args.command == "train":
        result = state.model.train()
        _print(result.model_dump())
        return 0 if result.success else 1
    elif args.command == "feed":
        items = state.feed.random_recommendations(
            args.limit, use_heuristic_filter=args.filter, threshold=args.threshold
        )
        _print({"items": [_item_card(i) for i in items], "empty": not items})
    elif args.command == "search":
        items = state.feed.search_recommendations(
            args.query, args.limit, use_heuristic_filter=args.filter, threshold=args.threshold
        )
        _print({"items": [_item_card(i) for i in items], "empty": not items})
    return 0


if __name__ == "__main__":
    sys.exit(main())
