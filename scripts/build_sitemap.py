"""Generate sitemap files and a sitemap index from a file of URL records."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _add_generator_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "generator"))


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate sitemap.xml files and a sitemap index.")
    parser.add_argument(
        "--records",
        type=Path,
        required=True,
        help="CSV or NDJSON file with loc/lastmod/changefreq/priority columns.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("site"),
        help="Directory the sitemap files are written to.",
    )
    parser.add_argument(
        "--base-url",
        required=True,
        help="Public URL of --out-dir (e.g. https://www.example.com/).",
    )
    parser.add_argument("--index-file-name", default=None, help="Sitemap index file name.")
    parser.add_argument("--base-name", default=None, help="Sitemap file base name.")
    parser.add_argument(
        "--gzip",
        action="store_true",
        default=None,
        help="Gzip-compress the sitemap files.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings).")
    args = parser.parse_args()

    _add_generator_to_path()
    from scrapy.utils.log import configure_logging
    from sitemap_generator.builder import SitemapBuilder, SitemapPath
    from sitemap_generator.config import get_sitemap_settings
    from sitemap_generator.records import load_url_records

    settings = get_sitemap_settings(
        {
            "SITEMAP_INDEX_FILE_NAME": args.index_file_name,
            "SITEMAP_FILE_BASE_NAME": args.base_name,
            "SITEMAP_GZIP": args.gzip,
            "LOG_LEVEL": args.log_level,
        }
    )
    configure_logging(settings)
    logger = logging.getLogger("build_sitemap")

    records = load_url_records(args.records)
    logger.info("Loaded %d URL record(s) from %s", len(records), args.records)

    builder = SitemapBuilder.from_settings(settings, SitemapPath(args.out_dir, args.base_url))
    builder.add_urls(records)
    result = builder.write()
    logger.info("Sitemap index written to %s", result.index_file)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
