"""HTTP API for Study SNS."""
