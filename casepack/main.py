"""
Casepack Optimizer command line.

Examples:
  # Optimize a request file and print the JSON response
  casepack optimize request.json

  # Save the response and an Excel report
  casepack optimize request.json --output response.json --report allocation.xlsx

  # Run the HTTP API
  casepack serve --port 8080
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from casepack.config import get_settings, configure_logging
from casepack.logic.exceptions import CasepackError
from casepack.logic.optimizer import CasepackOptimizer
from casepack.api.schemas import OptimizeRequest, OptimizeResponse
from casepack.reporting.excel_report import write_excel_report

logger = logging.getLogger("CasepackCLI")

EXIT_CALLER_ERROR = 2


def run_optimize(args) -> int:
    try:
        with open(args.request, 'r', encoding='utf-8') as f:
            payload = OptimizeRequest.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Could not read request {args.request}: {e}")
        return EXIT_CALLER_ERROR

    try:
        result = CasepackOptimizer().optimize(
            payload.domain_case_packs(),
            payload.need_per_store,
            payload.warehouse_available_qty,
        )
    except CasepackError as e:
        logger.error(f"Invalid request: {e}")
        return EXIT_CALLER_ERROR

    response = OptimizeResponse.from_result(result).model_dump(by_alias=True)
    text = json.dumps(response, indent=2)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text + "\n")
        logger.info(f"Response written to {args.output}")
    else:
        print(text)

    if args.report:
        write_excel_report(result, args.report)

    return 0


def run_serve(args) -> int:
    import uvicorn
    from casepack.api.server import app

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="casepack",
        description="Allocate casepacks to stores and draw them from warehouses.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    opt = sub.add_parser("optimize", help="Run the optimizer on a JSON request file")
    opt.add_argument("request", help="Path to request JSON (casePacks, needPerStore, warehouseAvailableQty)")
    opt.add_argument("--output", "-o", help="Write the JSON response here instead of stdout")
    opt.add_argument("--report", help="Also write an Excel allocation report to this path")
    opt.set_defaults(func=run_optimize)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.set_defaults(func=run_serve)

    return parser


def main(argv=None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
