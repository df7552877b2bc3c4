"""Buffer list integration: the workspace adapter and a rich list host."""
