"""Shot-by-shot round tracking with per-shot strokes gained."""
