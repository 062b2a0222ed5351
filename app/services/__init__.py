"""
Services module for business logic.

This module organizes services into:
- analytics: odds-line resolution, outcome classification and the team
  stats, odds distribution and matchup aggregators
"""
