"""Build and delta-deploy orchestration."""
