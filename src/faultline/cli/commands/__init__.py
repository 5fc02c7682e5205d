"""Sub-commands of the faultline CLI."""
