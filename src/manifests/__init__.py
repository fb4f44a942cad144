"""SDF object manifest generation."""
