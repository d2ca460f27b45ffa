"""AWS Lambda entrypoints."""
