"""Session log engine: session identity, file layout, sinks and retention."""
