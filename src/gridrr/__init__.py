"""Gridrr API: social content backend with a post feed and engagement ledger."""
