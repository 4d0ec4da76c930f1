"""Discord job-id relay service."""
