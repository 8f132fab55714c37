"""Scripted traffic simulator."""

from .sim import SCENARIOS, ISim, Sim, webhook_payload

__all__ = ["ISim", "SCENARIOS", "Sim", "webhook_payload"]
