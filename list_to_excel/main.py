#!/usr/bin/env python
"""
List-to-Excel – CLI entry point.

Usage:
    # Write the sample quotation template
    python -m list_to_excel.main init-template [--output templates/quotation.xlsx]

    # Range mode: items replicated down the "row" block, suppliers across the "col" block
    python -m list_to_excel.main ranges <template.xlsx> [--output report.xlsx] [--rows 30] [--cols 20] [--overwrite]

    # Sheet mode: one copy of the template sheet per item
    python -m list_to_excel.main sheets <template.xlsx> [--output report.xlsx] [--rows 30]
"""

import argparse
import logging
import os
import sys

from .binding import bind_horizontal, bind_vertical
from .config import load_config
from .exceptions import ListToExcelError
from .samples import (
    create_sample_template,
    fill_item,
    fill_item_sheet,
    fill_supplier,
    make_items,
    make_suppliers,
)
from .sheets import copy_sheet
from .template import render_template

logger = logging.getLogger(__name__)


def setup_logging(level_str="INFO"):
    """Configure logging."""
    level = getattr(logging, str(level_str).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Fill an Excel template with repeating blocks of records"
    )
    parser.add_argument("--config", default="config.yaml",
                        help="Path to config YAML file (default: config.yaml)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level: DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    # ---- init-template ----
    p_init = sub.add_parser("init-template", help="Write the sample quotation template")
    p_init.add_argument("--output", default=None,
                        help="Template path (default: <template_dir>/quotation.xlsx)")

    # ---- ranges ----
    p_ranges = sub.add_parser(
        "ranges", help="Replicate the item and supplier blocks once per record")
    p_ranges.add_argument("template", help="Path to the template (.xlsx/.xlsm)")
    p_ranges.add_argument("--output", default=None,
                          help="Report path (default: <output_dir>/ranges_<template>)")
    p_ranges.add_argument("--rows", type=int, default=None, help="Number of item records")
    p_ranges.add_argument("--cols", type=int, default=None, help="Number of supplier records")
    p_ranges.add_argument("--overwrite", action="store_true",
                          help="Overwrite rows below the item block instead of inserting")

    # ---- sheets ----
    p_sheets = sub.add_parser("sheets", help="Clone the template sheet once per record")
    p_sheets.add_argument("template", help="Path to the template (.xlsx/.xlsm)")
    p_sheets.add_argument("--output", default=None,
                          help="Report path (default: <output_dir>/sheets_<template>)")
    p_sheets.add_argument("--rows", type=int, default=None, help="Number of item records")

    return parser


def _default_output(config, prefix, template):
    return os.path.join(config["output_dir"], f"{prefix}_{os.path.basename(template)}")


def run_ranges(args, config):
    items = make_items(args.rows if args.rows is not None else config["sample_rows"])
    suppliers = make_suppliers(args.cols if args.cols is not None else config["sample_cols"])
    insert = config["insert_mode"] and not args.overwrite

    def fill(workbook):
        sheet = workbook.worksheets[0]
        bind_vertical(sheet, config["row_range"], 0, fill_item, items, insert=insert)
        bind_horizontal(sheet, config["col_range"], 0, fill_supplier, suppliers)

    output = args.output or _default_output(config, "ranges", args.template)
    return render_template(args.template, output, fill,
                           response_name=os.path.basename(output))


def run_sheets(args, config):
    items = make_items(args.rows if args.rows is not None else config["sample_rows"])

    def fill(workbook):
        copy_sheet(workbook.worksheets[0], fill_item_sheet, items,
                   title=lambda item, index: f"Item {index + 1}")

    output = args.output or _default_output(config, "sheets", args.template)
    return render_template(args.template, output, fill,
                           response_name=os.path.basename(output))


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level or config.get("log_level", "INFO"))

    if args.command == "init-template":
        out = args.output or os.path.join(config["template_dir"], "quotation.xlsx")
        create_sample_template(out)
        logger.info(f"Generated sample template: {out}")
        return 0

    if not os.path.exists(args.template):
        logger.error(f"Template file not found: {args.template}")
        return 1

    try:
        if args.command == "ranges":
            result = run_ranges(args, config)
        else:
            result = run_sheets(args, config)
    except ListToExcelError as err:
        logger.error(str(err))
        return 1

    logger.info(f"Generated {result.filename} ({result.media_type}, {result.size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
