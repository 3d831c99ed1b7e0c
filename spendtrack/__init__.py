"""Spending tracker: transaction queries, spending summaries and a dashboard."""
