#!/usr/bin/env python3
"""PC Build Advisor — main entry point."""
import logging
import sys
import os
from datetime import datetime

from config import Config
from catalog import load_build, load_catalog
from compatibility.engine import CheckOptions, check_compatibility
from models import ComponentDataError
from output.html import render_html_report, update_index
from output.terminal import render_report
from planner.auto_fix import STRATEGIES, generate_auto_fix_plan
from planner.recommendations import get_recommendations
from planner.upgrade_path import generate_upgrade_path
from power import calculate_tco, estimate_load
from scoring.engine import calculate_scores

# Set up logging
os.makedirs("logs", exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(
            os.path.join("logs", f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"),
        ),
    ],
)
logger = logging.getLogger(__name__)


def _arg_value(name: str) -> str | None:
    """Value of a --name=value flag, or None."""
    prefix = f"--{name}="
    for arg in sys.argv[1:]:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def parse_args(config: Config) -> Config:
    if "--debug" in sys.argv:
        logging.getLogger().setLevel(logging.DEBUG)
    if "--html" in sys.argv:
        config.html_report = True
    config.build_path = _arg_value("build") or config.build_path
    config.catalog_path = _arg_value("catalog") or config.catalog_path
    config.preset = _arg_value("preset") or config.preset
    config.target_id = _arg_value("target") or config.target_id
    strategy = _arg_value("strategy")
    if strategy:
        if strategy not in STRATEGIES:
            logger.warning(f"Unknown strategy {strategy!r}, using {config.strategy}")
        else:
            config.strategy = strategy
    budget = _arg_value("budget")
    if budget:
        try:
            config.budget = float(budget)
        except ValueError:
            logger.warning(f"Invalid budget {budget!r}, using ${config.budget:,.0f}")
    return config


def main() -> int:
    config = parse_args(Config())
    os.makedirs(config.results_dir, exist_ok=True)
    os.makedirs(config.logs_dir, exist_ok=True)

    logger.info("=" * 60)
    logger.info("PC Build Advisor — Starting")
    logger.info(f"Build: {config.build_path}  Catalog: {config.catalog_path}")
    logger.info(f"Preset: {config.preset}  Target: {config.target_id or '-'}  Budget: ${config.budget:,.0f}")
    logger.info("=" * 60)

    try:
        build = load_build(config.build_path)
    except ComponentDataError as e:
        logger.error(f"Invalid build file: {e}")
        return 1
    if build is None:
        logger.error(f"No build to evaluate at {config.build_path}")
        return 1

    catalog = load_catalog(config.catalog_path)

    compat = check_compatibility(build, CheckOptions(preset=config.preset))
    scores = calculate_scores(build, compat, preset=config.preset, target_id=config.target_id)
    logger.info(
        f"Compatible: {compat.is_compatible}  Overall score: {scores.overall}  "
        f"Confidence: {compat.confidence}%"
    )

    upgrades = generate_upgrade_path(
        build, scores, config.budget, catalog,
        preset=config.preset,
        target_id=config.target_id,
        tolerance=config.budget_tolerance,
        limit=config.max_upgrades,
    )
    plan = None
    if compat.hard_fails or compat.warnings:
        plan = generate_auto_fix_plan(build, compat.issues, config.strategy, catalog, preset=config.preset)

    recommendations = get_recommendations(
        build, compat, catalog, preset=config.preset, target_id=config.target_id,
    )

    print(render_report(build, compat, scores, upgrades, plan, recommendations))

    tco = calculate_tco(
        estimate_load(build), config.efficiency_multiplier, config.energy_rate_per_kwh, config.hours_per_day,
    )
    print(f"Estimated wall draw: {tco['wall_draw_w']}W  Yearly energy cost: ${tco['yearly_cost']:,.2f}")

    if config.html_report:
        html_path = render_html_report(
            build, compat, scores, upgrades, plan, recommendations,
            preset=config.preset,
            output_dir=config.results_dir,
        )
        update_index(config.results_dir)
        logger.info(f"HTML report saved to: {html_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
