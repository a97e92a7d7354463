"""Git executable integration."""

from .integration import GitIntegration, parse_porcelain_status

__all__ = ["GitIntegration", "parse_porcelain_status"]
