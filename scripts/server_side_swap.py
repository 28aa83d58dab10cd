"""Server-side Bitflow swap on Stacks (explicit execution only).

Usage examples:
  python scripts/server_side_swap.py --dry-run
  python scripts/server_side_swap.py --token-x token-aeusdc --token-y-index 11 --amount 0.01 --dry-run
  python scripts/server_side_swap.py --token-x token-aeusdc --token-y token-stx --amount 0.01 --confirm
  python scripts/server_side_swap.py --list-token-y --token-x token-aeusdc
  python scripts/server_side_swap.py --list-routes --token-x token-aeusdc --token-y token-stx
  python scripts/server_side_swap.py --token-x token-aeusdc --token-y token-stx --route-index 1 --amount 0.01 --dry-run
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from stxswap.clients.base_client import HTTPClientError  # noqa: E402
from stxswap.logging import log  # noqa: E402
from stxswap.services import SwapPlan, SwapRequest, SwapService  # noqa: E402
from stxswap.settings.config import ConfigurationError, settings  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bitflow swap on Stacks, signed remotely and broadcast")
    parser.add_argument("--token-x", default=settings.swap_token_x, help="Input token id")
    parser.add_argument("--token-y", default=settings.swap_token_y, help="Output token id")
    parser.add_argument(
        "--token-y-index",
        type=int,
        default=settings.swap_token_y_index,
        help="Index into the possible output tokens when --token-y is omitted",
    )
    parser.add_argument(
        "--route-index",
        type=int,
        default=None,
        help="Swap along this entry of --list-routes instead of the best route",
    )
    parser.add_argument("--amount", type=float, default=settings.swap_amount, help="Amount of token X")
    parser.add_argument(
        "--slippage",
        type=float,
        default=settings.swap_slippage_tolerance,
        help="Slippage tolerance as a fraction (0.01 = 1%%)",
    )
    parser.add_argument("--sender", default=settings.sender_address, help="Sender Stacks address")
    parser.add_argument("--list-token-y", action="store_true", help="List possible output tokens and exit")
    parser.add_argument("--list-routes", action="store_true", help="List candidate routes for --token-x -> --token-y and exit")
    parser.add_argument("--dry-run", action="store_true", help="Print the planned contract call without signing")
    parser.add_argument("--confirm", action="store_true", help="Sign and broadcast (must be set to swap)")
    return parser


async def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    listing = args.list_token_y or args.list_routes
    if not listing and not args.confirm and not args.dry_run:
        raise SystemExit("Refusing to swap without --confirm or --dry-run")

    if args.sender:
        settings.sender_address = args.sender

    try:
        service = SwapService.from_settings(settings)
    except ConfigurationError as e:
        log.error(str(e))
        return 2

    try:
        if args.list_token_y:
            tokens = await service.bitflow.get_all_possible_token_y(args.token_x)
            for index, token in enumerate(tokens):
                print(f"{index:>3}  {token}")
            return 0

        if args.list_routes:
            if not args.token_y:
                raise SystemExit("--list-routes needs --token-y")
            routes = await service.bitflow.get_all_possible_token_y_routes(args.token_x, args.token_y)
            print(json.dumps(routes, indent=2))
            return 0

        request = SwapRequest(
            token_x_id=args.token_x,
            token_y_id=args.token_y,
            token_y_index=None if args.token_y else args.token_y_index,
            route_index=args.route_index,
            amount=args.amount,
            sender_address=args.sender,
            slippage_tolerance=args.slippage,
        )
        outcome = await service.run(request, dry_run=args.dry_run)
    # TranslationError, SwapConfigurationError and ClaritySerializationError are ValueErrors
    except (HTTPClientError, ValueError) as e:
        print(f"Swap failed: {e}", file=sys.stderr)
        return 1
    finally:
        await service.close()

    if isinstance(outcome, SwapPlan):
        print(json.dumps(outcome.summary(), indent=2))
    else:
        print(f"Broadcast result: txid={outcome.txid}")
        explorer = service.network.explorer_tx_url(outcome.txid)
        if explorer:
            print(explorer)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
