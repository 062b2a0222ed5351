"""
Halftime analytics engine.

- records: immutable GameRecord / OddsLineRecord inputs
- odds_resolver: qualifying half-point line selection (fallback cascade)
- outcome: below / equal / above classification and per-game evaluation
- team_stats: per-team home/away halftime statistics
- odds_distribution: league-wide distribution and team recurrence
- matchup: two-team comparison with head-to-head history
- errors: analytics error types and request validation helpers
"""
