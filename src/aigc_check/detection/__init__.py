"""Rule engine and the ten heuristic signal detectors."""
