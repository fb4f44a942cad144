"""Source discovery and loading for SuiteBuild pipelines."""
