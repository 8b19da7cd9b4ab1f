"""The single-page-app pages and the table that wires them up."""

from roost.spa.table import spa_controllers

__all__ = ["spa_controllers"]
