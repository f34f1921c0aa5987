"""Exact draw-outcome distributions for manabase analysis."""
