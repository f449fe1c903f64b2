# app/config.py
"""
Application configuration and defaults.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass
class AppConfig:
    """Global application configuration."""

    # App metadata
    app_name: str = "RodCraft"
    app_subtitle: str = "Rod Structure Postprocessor"
    version: str = "0.1.0"

    # Step table
    default_step: float = 0.5  # m
    step_range: Tuple[float, float] = (0.01, 10.0)

    # Diagram sampling
    samples_per_rod: int = 30
    epure_samples_per_rod: int = 50

    # Default rod for the editor (steel)
    default_length: float = 1.0  # m
    default_area: float = 0.01  # m^2
    default_E: float = 2.0e11  # Pa
    default_allowable_stress: float = 1.6e8  # Pa

    # Field colours
    epure_colors: Dict[str, str] = None
    report_sections: List[str] = None

    def __post_init__(self):
        if self.epure_colors is None:
            self.epure_colors = {'N': '#e53935', 'sigma': '#1e88e5', 'u': '#43a047'}
        if self.report_sections is None:
            self.report_sections = [
                'displacements', 'construction', 'epure_n', 'epure_sigma',
                'epure_u', 'summary_table', 'section_queries', 'step_table',
            ]


# Global config instance
CONFIG = AppConfig()
