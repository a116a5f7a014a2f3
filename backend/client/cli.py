"""
Command-line front end for the photo editor.

Examples:
    python client/cli.py edit photo.png "add a hat" --x 120 --y 80 -o out.png
    python client/cli.py filter photo.png "vintage film look" -o out.png
    python client/cli.py history list
    python client/cli.py token admin
"""
import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from client.edit_client import (
    EditClient,
    generate_adjusted_image,
    generate_edited_image,
    generate_filtered_image,
)
from client.local_history import LocalHistoryStore
from core.auth import issue_history_token
from core.errors import AppError
from models.image_edit import EditMode, EditResult, Hotspot
from services.image_encoder import decode_data_url


def _save_result(data_url: str, output: str) -> None:
    _, raw = decode_data_url(data_url)
    Path(output).write_bytes(raw)
    print(f"✅ Saved result to {output}")


async def run_edit(args: argparse.Namespace) -> int:
    client = EditClient(base_url=args.base_url)
    mode = EditMode(args.command)

    if mode == EditMode.EDIT:
        if args.x is None or args.y is None:
            print("❌ edit requires --x and --y")
            return 2
        result: EditResult = await generate_edited_image(args.image, args.prompt, Hotspot(x=args.x, y=args.y), client=client)
    elif mode == EditMode.FILTER:
        result = await generate_filtered_image(args.image, args.prompt, client=client)
    else:
        result = await generate_adjusted_image(args.image, args.prompt, client=client)

    if not result.success:
        print(f"❌ {result.error}")
        return 1

    if args.output:
        _save_result(result.data_url, args.output)
    else:
        print(result.data_url)

    if not args.no_history:
        try:
            LocalHistoryStore(args.history_file).append(args.prompt, result.data_url)
        except AppError as e:
            print(f"⚠️ {e.message}")
    return 0


def run_history(args: argparse.Namespace) -> int:
    store = LocalHistoryStore(args.history_file)

    if args.action == "list":
        entries = store.list()
        if not entries:
            print("No edit history.")
        for entry in entries:
            print(f"{entry.id}  {entry.timestamp}  {entry.prompt}")
    elif args.action == "delete":
        if not args.id:
            print("❌ history delete requires an entry id")
            return 2
        if not store.delete(args.id):
            print(f"Entry {args.id} not found")
            return 1
        print(f"🗑️ Deleted {args.id}")
    else:
        count = store.clear()
        print(f"🗑️ Cleared {count} entries")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI photo editor client")
    parser.add_argument("--history-file", default=None, help="Local history file (default: LOCAL_HISTORY_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)

    for mode, help_text in (
        ("edit", "Localized edit around a point"),
        ("filter", "Apply a stylistic filter to the whole image"),
        ("adjust", "Global photorealistic adjustment"),
    ):
        p = sub.add_parser(mode, help=help_text)
        p.add_argument("image", help="Path to the source image")
        p.add_argument("prompt", help="What to change")
        if mode == "edit":
            p.add_argument("--x", type=int, help="Hotspot x pixel coordinate")
            p.add_argument("--y", type=int, help="Hotspot y pixel coordinate")
        p.add_argument("-o", "--output", help="Write the resulting image here instead of printing the data URL")
        p.add_argument("--base-url", default=None, help="Edit API base URL (default: EDIT_API_BASE_URL)")
        p.add_argument("--no-history", action="store_true", help="Do not record the result in local history")

    h = sub.add_parser("history", help="Manage local edit history")
    h.add_argument("action", choices=["list", "delete", "clear"])
    h.add_argument("id", nargs="?", help="Entry id for delete")

    t = sub.add_parser("token", help="Issue a signed token for the history API")
    t.add_argument("subject", help="Who the token is for")
    t.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.command == "history":
            return run_history(args)
        if args.command == "token":
            print(issue_history_token(args.subject, args.minutes))
            return 0
        return asyncio.run(run_edit(args))
    except AppError as e:
        print(f"❌ {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
