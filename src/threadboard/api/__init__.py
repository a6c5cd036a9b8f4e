"""HTTP transport for the Threadboard services."""
