"""
Command line entry point

    jupiter-flows swap
    jupiter-flows trigger --amount 30000000
    python -m jupiter_flows recurring --input USDC --output SOL

Exit codes: 0 success, 1 flow error, 2 confirmation timeout.
"""

import argparse
import dataclasses
import logging
import sys

from .client import JupiterClient
from .config import setup_logging
from .errors import JupiterFlowError
from .modules import FLOW_MODULES
from .types import resolve_token_mint

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_TIMEOUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jupiter-flows",
        description="Run one Jupiter flow end to end: fetch, sign locally, submit",
    )
    parser.add_argument("flow", choices=list(FLOW_MODULES), help="Flow to run")
    parser.add_argument("--amount", type=int, help="Input amount in raw base units")
    parser.add_argument("--input", dest="input_mint", help="Input token symbol or mint")
    parser.add_argument("--output", dest="output_mint", help="Output token symbol or mint")
    parser.add_argument("--slippage-bps", type=int, help="Slippage in basis points")
    parser.add_argument("--no-wait", action="store_true", help="Do not wait for RPC confirmation")
    return parser


def build_request(args: argparse.Namespace):
    """Default request of the flow with command line overrides applied"""
    request = FLOW_MODULES[args.flow].default_request
    overrides = {}
    if args.amount is not None:
        overrides["amount"] = args.amount
    if args.input_mint:
        overrides["input_mint"] = resolve_token_mint(args.input_mint)
    if args.output_mint:
        overrides["output_mint"] = resolve_token_mint(args.output_mint)
    if args.slippage_bps is not None:
        overrides["slippage_bps"] = args.slippage_bps
    return dataclasses.replace(request, **overrides) if overrides else request


def run_flow(args: argparse.Namespace, client_factory=JupiterClient) -> int:
    try:
        request = build_request(args)
        with client_factory() as client:
            logger.info(f"Running {args.flow} for {client.pubkey}: {request}")
            module = client.flow(args.flow)
            if args.no_wait and args.flow in ("swap", "swap-instructions"):
                result = module.run(request, wait_confirmation=False)
            else:
                result = module.run(request)
    except JupiterFlowError as e:
        logger.error(f"{args.flow} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(result)
    if result.is_timeout:
        print(f"not confirmed in time, check signature {result.signature}", file=sys.stderr)
        return EXIT_TIMEOUT
    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return run_flow(args)


if __name__ == "__main__":
    sys.exit(main())
