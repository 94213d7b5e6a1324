"""Main entry point for Flood Risk Scanner."""

import asyncio
import sys
from loguru import logger


def main():
    """Run the application."""
    if len(sys.argv) < 2:
        print("Usage: python main.py [api|assess <assets.csv> [results.csv]|check]")
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd == "api":
        import uvicorn
        from flood_risk.utils.config import settings
        logger.info("Starting API server...")
        uvicorn.run(
            "flood_risk.api.main:app",
            host=settings.api.host,
            port=settings.api.port,
            reload=settings.api.reload,
        )

    elif cmd == "assess":
        if len(sys.argv) < 3:
            print("Usage: python main.py assess <assets.csv> [results.csv]")
            sys.exit(1)

        from flood_risk.core import RiskPipeline, format_output
        from flood_risk.core.csv_io import read_assets_csv, write_results_csv
        from flood_risk.data_sources import gee_client
        from flood_risk.utils.logger import setup_logging

        setup_logging()
        if not gee_client.authenticate():
            sys.exit(2)

        rows = read_assets_csv(sys.argv[2])
        result = asyncio.run(RiskPipeline(gee_client).run({"factories": rows}))
        print(format_output(result, "markdown"))
        if len(sys.argv) > 3:
            write_results_csv(result, rows, sys.argv[3])

    elif cmd == "check":
        from flood_risk.data_sources import gee_client
        ok = gee_client.authenticate()
        print("Earth Engine: OK" if ok else "Earth Engine: FAILED")
        sys.exit(0 if ok else 2)

    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
