"""Membership queries and the list views derived from them."""
