"""Command line entry point: query one public endpoint and print the JSON envelope."""

import argparse
import asyncio
import json
import logging
import os
import sys
import time
from typing import List, Optional

from .client import PublicRestClient
from .config.settings import MarketDataSettings, load_settings
from .exceptions import UnexpectedStatusError
from .models import KlineTimeframe
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

ENDPOINTS = ['orderbook', 'kline', 'trades', 'pairs', 'pair', 'tickers', 'ticker']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lcx-market-data",
        description="Query the LCX public market-data API"
    )
    parser.add_argument('endpoint', choices=ENDPOINTS)
    parser.add_argument(
        '--config',
        default=os.getenv("CONFIG_FILE"),
        help="YAML configuration file (default: $CONFIG_FILE)"
    )
    parser.add_argument('--pair', default="LCX/USDC", help="Pair name (default: LCX/USDC)")
    parser.add_argument(
        '--resolution',
        default=KlineTimeframe.MINUTE_1.value,
        choices=[tf.value for tf in KlineTimeframe],
        help="Kline timeframe (default: 1)"
    )
    parser.add_argument('--from', dest='from_', type=int, help="Kline start, UTC seconds (default: one hour ago)")
    parser.add_argument('--to', type=int, help="Kline end, UTC seconds (default: now)")
    parser.add_argument('--offset', type=int, default=1, help="Trades page index (default: 1)")
    return parser


async def run(args: argparse.Namespace, settings: MarketDataSettings) -> dict:
    async with PublicRestClient(settings.client) as client:
        if args.endpoint == 'orderbook':
            response = await client.get_orderbook({'pair': args.pair})
        elif args.endpoint == 'kline':
            to = args.to if args.to is not None else int(time.time())
            from_ = args.from_ if args.from_ is not None else to - 60 * 60
            response = await client.get_kline({
                'pair': args.pair,
                'resolution': args.resolution,
                'from': from_,
                'to': to,
            })
        elif args.endpoint == 'trades':
            response = await client.get_trades({'pair': args.pair, 'offset': args.offset})
        elif args.endpoint == 'pairs':
            response = await client.get_pairs()
        elif args.endpoint == 'pair':
            response = await client.get_pair({'pair': args.pair})
        elif args.endpoint == 'tickers':
            response = await client.get_tickers()
        else:
            response = await client.get_ticker({'pair': args.pair})

    if isinstance(response, dict):
        return response
    return response.model_dump(mode="json", by_alias=True)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    setup_logging(settings.logging, settings.service_name)

    try:
        payload = asyncio.run(run(args, settings))
    except UnexpectedStatusError as e:
        logger.error(f"{args.endpoint} request rejected with HTTP {e.status}: {e.body}")
        return 1

    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
