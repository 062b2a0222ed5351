"""
API routes.

This module organizes routes into:
- leagues: league listing for filter panels
- analytics: team stats, odds distribution and matchup analysis
"""
