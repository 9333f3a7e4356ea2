"""HTTP-facing features built on the analysis core."""
