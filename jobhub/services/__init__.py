"""Business operations on accounts, jobs and applications."""
