"""Utility modules for Spin Odds."""

from spin_odds.utils.logging import setup_logging, get_logger

__all__ = ["setup_logging", "get_logger"]
