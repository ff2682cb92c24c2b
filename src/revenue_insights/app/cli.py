from __future__ import annotations

import argparse
import asyncio
import json
from typing import Optional

from revenue_insights.app.api.repositories.customers_repo import CustomersRepository
from revenue_insights.app.factory import create_config_provider, create_customer_source
from revenue_insights.application.errors import NotFound, TransportError, UnknownSegmentError
from revenue_insights.observability.logging import configure_logging


async def _customers(args: argparse.Namespace) -> dict:
    repository = CustomersRepository(create_customer_source(args.correlation_id), create_config_provider())
    response = await repository.get_customer_table(
        segment=args.segment,
        page=args.page,
        page_size=args.page_size,
        sort_by=args.sort_by,
        descending=args.descending,
    )
    return response.model_dump(mode="json")


async def _report(args: argparse.Namespace) -> dict:
    repository = CustomersRepository(create_customer_source(args.correlation_id), create_config_provider())
    response = await repository.get_customer_report(args.customer_id)
    return response.model_dump(mode="json")


def main(argv: Optional[list[str]] = None) -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Revenue Insights CLI")
    parser.add_argument("--correlation-id", dest="correlation_id")
    subparsers = parser.add_subparsers(dest="command")

    customers_parser = subparsers.add_parser("customers", help="Print one page of the customer table")
    customers_parser.add_argument("--segment")
    customers_parser.add_argument("--page", type=int, default=1)
    customers_parser.add_argument("--page-size", type=int, dest="page_size")
    customers_parser.add_argument("--sort-by", dest="sort_by")
    customers_parser.add_argument("--descending", action="store_true")

    report_parser = subparsers.add_parser("report", help="Print the detail report for one customer")
    report_parser.add_argument("--customer", required=True, dest="customer_id")

    args = parser.parse_args(argv)
    if args.command not in ("customers", "report"):
        parser.print_help()
        return

    handler = _customers if args.command == "customers" else _report
    try:
        result = asyncio.run(handler(args))
    except (NotFound, TransportError, UnknownSegmentError, ValueError) as e:
        parser.exit(1, f"error: {e}\n")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
