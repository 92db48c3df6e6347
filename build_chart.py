"""Render the vaccine pace chart from a series file to standalone HTML."""

import argparse
import json
import logging

from pace_charts import write_html
from vaxpace import (
    FigureTarget,
    JsonMetadataClient,
    load_series,
    print_series_summary,
    render,
)
from vaxpace.logging_config import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('series', help="JSON (code -> newest-first samples) or long-format CSV")
    parser.add_argument('-o', '--output', default='vaccine_pace.html', help="Output HTML path")
    parser.add_argument('-w', '--width', type=float, default=800, help="Container width in pixels")
    parser.add_argument('--countries', help="JSON file of code -> {name, population} overriding the bundled table")
    parser.add_argument('--config', help="JSON file of chart option overrides")
    parser.add_argument('--cdn', action='store_true', help="Load plotly.js from the CDN instead of inlining it")
    parser.add_argument('-q', '--quiet', action='store_true', help="Skip the series summary")
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    metadata = None
    if args.countries:
        with open(args.countries, 'r') as f:
            metadata = JsonMetadataClient(json.load(f))

    overrides = None
    if args.config:
        with open(args.config, 'r') as f:
            overrides = json.load(f)

    data = load_series(args.series)
    rendered = render(data, overrides, FigureTarget(args.width), metadata)

    if not args.quiet:
        print_series_summary(rendered.scene.records)

    write_html(rendered.figure, args.output, include_plotlyjs='cdn' if args.cdn else True)
    print(f"\nWrote {args.output}")


if __name__ == '__main__':
    main()
