"""
Analytics API routes.

This module contains the analytics endpoints:
- stats: per-team home/away halftime stats (+ optional odds distribution)
- odds: halftime odds distribution and team recurrence
- matchup: two-team matchup analysis and team search
"""
