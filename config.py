"""Configuration for the PC build advisor."""
from dataclasses import dataclass


@dataclass
class Config:
    # Inputs
    build_path: str = "build.json"
    catalog_path: str = "catalog.json"

    # Evaluation
    preset: str = "custom"
    target_id: str | None = None

    # Planner
    budget: float = 500.0
    strategy: str = "cheapest"  # "cheapest" | "performance"
    budget_tolerance: float = 1.2  # upgrades may overrun the budget by 20%
    max_upgrades: int = 10

    # Energy cost estimate
    energy_rate_per_kwh: float = 0.15
    hours_per_day: float = 4.0
    efficiency_multiplier: float = 1.1  # wall draw over DC load, ~80+ Gold at 120V

    # Output
    results_dir: str = "results"
    logs_dir: str = "logs"
    html_report: bool = False
