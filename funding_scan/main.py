"""Entry point for funding scan application."""

import asyncio
import json
import logging
import sys

from funding_scan.aggregation import AggregatedFunding, get_aggregated_funding
from funding_scan.bootstrap import FundingPoller, bootstrap
from funding_scan.cli import build_parser
from funding_scan.exceptions import InvalidRequestError
from funding_scan.exchanges import build_registry
from funding_scan.logging_setup import configure_exchange_debug_logging, configure_logging
from funding_scan.rendering import console, render_funding, render_value_context
from funding_scan.runtime import RuntimeConfig, build_runtime_config
from funding_scan.settings import Settings
from funding_scan.value_context import (
    WAGE_PRESETS,
    compare,
    generate_one_line_summary,
    load_catalog,
    recalculate_wage_presets_with_fx,
    select_smart_context_items,
    wage_equivalents,
)
from funding_scan.value_context.wages import DEFAULT_FX_EUR_USD, DEFAULT_FX_JPY_USD

logger = logging.getLogger(__name__)


async def run_fetch(config: RuntimeConfig, as_json: bool) -> None:
    adapters = build_registry(apr_mode=config.apr_mode, request_timeout=config.request_timeout)
    result = await get_aggregated_funding(
        config.assets, config.exchanges, adapters=adapters, timeout=config.venue_timeout
    )
    if as_json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(render_funding(result))


async def run_watch(config: RuntimeConfig) -> None:
    """Bootstrap and run the polling scheduler."""
    adapters = build_registry(apr_mode=config.apr_mode, request_timeout=config.request_timeout)

    def show(result: AggregatedFunding) -> None:
        console.print(render_funding(result))

    poller = FundingPoller(
        assets=config.assets,
        exchanges=config.exchanges,
        adapters=adapters,
        on_snapshot=show,
        venue_timeout=config.venue_timeout,
    )
    scheduler = bootstrap(poller, config.poll_interval)
    scheduler.start()
    logger.info("Scheduler started, polling funding rates...")

    # Block forever, keeping the scheduler running
    await asyncio.Event().wait()


def run_value(args, config: RuntimeConfig) -> None:
    presets = WAGE_PRESETS
    if args.fx_eur_usd is not None or args.fx_jpy_usd is not None:
        presets = recalculate_wage_presets_with_fx(
            presets,
            fx_eur_usd=args.fx_eur_usd if args.fx_eur_usd is not None else DEFAULT_FX_EUR_USD,
            fx_jpy_usd=args.fx_jpy_usd if args.fx_jpy_usd is not None else DEFAULT_FX_JPY_USD,
        )

    catalog = load_catalog(config.costs_file)
    items = select_smart_context_items(catalog, args.amount)
    comparisons = [compare(args.amount, item) for item in items]
    equivalents = wage_equivalents(args.amount, presets[args.region])

    console.print(render_value_context(args.amount, comparisons, equivalents, args.region))
    summary = generate_one_line_summary(args.amount, comparisons)
    if summary:
        console.print(summary)


def run_serve(args, settings: Settings) -> None:
    import uvicorn

    from funding_scan.api import create_app

    logger.info(f"Starting API server on {args.host}:{args.port}")
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for funding scan."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        config = build_runtime_config(args, settings)
    except Exception as e:
        sys.exit(f"Configuration error: {e}")

    configure_logging(config.log_level)
    configure_exchange_debug_logging(config.debug_exchanges)

    try:
        if args.command == "fetch":
            asyncio.run(run_fetch(config, as_json=args.json))
        elif args.command == "watch":
            asyncio.run(run_watch(config))
        elif args.command == "value":
            run_value(args, config)
        elif args.command == "serve":
            run_serve(args, settings)
    except InvalidRequestError as e:
        logger.error(f"{e}: assets={config.assets} exchanges={config.exchanges}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        return 1
    return 0


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
